"""
Unit tests for table_dumper.py
"""

from unittest import mock

import pytest

from superdump.errors import RowScanError, SchemaIntrospectionError
from superdump.models import DumpConfig
from superdump.table_dumper import TableDumper


class TestTableDumper:
    """Tests for TableDumper class."""

    @pytest.fixture
    def mock_connection(self):
        """Create a mock database connection."""
        conn = mock.MagicMock()
        conn.get_column_names.return_value = ["id", "name"]
        return conn

    def test_init(self, mock_connection, writer):
        """Test TableDumper initialization."""
        config = DumpConfig(extended_insert_rows=50)
        dumper = TableDumper(mock_connection, writer, config)
        assert dumper.connection == mock_connection
        assert dumper.writer == writer
        assert dumper.batcher.max_rows == 50


class TestBuildSelectQuery:
    """Tests for build_select_query method."""

    @pytest.fixture
    def mock_connection(self):
        conn = mock.MagicMock()
        conn.get_column_names.return_value = ["id", "name"]
        return conn

    def test_basic_query(self, mock_connection, writer):
        """Test basic SELECT query."""
        dumper = TableDumper(mock_connection, writer, DumpConfig())
        assert dumper.build_select_query("users") == "SELECT `id`, `name` FROM `users`"

    def test_query_with_where(self, mock_connection, writer):
        """Test query with WHERE clause."""
        config = DumpConfig(where_clauses={"users": "status = 'active'"})
        dumper = TableDumper(mock_connection, writer, config)
        query = dumper.build_select_query("users")
        assert query.endswith("WHERE status = 'active'")

    def test_query_with_override(self, mock_connection, writer):
        """Test query with column replacement."""
        config = DumpConfig(column_overrides={"users": {"name": "'anonymous'"}})
        dumper = TableDumper(mock_connection, writer, config)
        query = dumper.build_select_query("users")
        assert query == "SELECT `id`, 'anonymous' AS `name` FROM `users`"

    def test_column_quoting(self, mock_connection, writer):
        """Test that column names are properly quoted."""
        mock_connection.get_column_names.return_value = ["user-id", "first name"]
        dumper = TableDumper(mock_connection, writer, DumpConfig())
        query = dumper.build_select_query("users")
        assert "`user-id`" in query
        assert "`first name`" in query


class TestDumpStructure:
    """Tests for dump_structure method."""

    def test_structure_section(self, writer, buffer):
        """Test the DROP and CREATE statements written for a table."""
        conn = mock.MagicMock()
        conn.query_row.return_value = ("users", "CREATE TABLE `users` (`id` int)")
        dumper = TableDumper(conn, writer, DumpConfig())

        dumper.dump_structure("users")

        assert buffer.getvalue().decode() == (
            "\n--\n-- Structure for table `users`\n--\n\n"
            "DROP TABLE IF EXISTS `users`;\n"
            "CREATE TABLE `users` (`id` int);\n"
        )
        conn.query_row.assert_called_once_with("SHOW CREATE TABLE `users`")

    def test_bytes_ddl_decoded(self, writer, buffer):
        conn = mock.MagicMock()
        conn.query_row.return_value = ("users", bytearray(b"CREATE TABLE `users` ()"))
        TableDumper(conn, writer, DumpConfig()).dump_structure("users")
        assert b"CREATE TABLE `users` ();\n" in buffer.getvalue()

    def test_missing_ddl_raises(self, writer):
        conn = mock.MagicMock()
        conn.query_row.return_value = None
        with pytest.raises(SchemaIntrospectionError):
            TableDumper(conn, writer, DumpConfig()).dump_structure("users")


class TestDumpHeader:
    """Tests for dump_header method."""

    def test_header_with_count(self, writer, buffer):
        conn = mock.MagicMock()
        conn.query_row.return_value = (3,)
        config = DumpConfig(where_clauses={"users": "id > 10"})
        dumper = TableDumper(conn, writer, config)

        assert dumper.dump_header("users") == 3
        assert buffer.getvalue() == b"\n--\n-- Data for table `users` -- 3 rows\n--\n\n"
        conn.query_row.assert_called_once_with("SELECT COUNT(*) FROM `users` WHERE id > 10")

    def test_header_zero_rows(self, writer, buffer):
        conn = mock.MagicMock()
        conn.query_row.return_value = (0,)
        assert TableDumper(conn, writer, DumpConfig()).dump_header("users") == 0
        assert b"-- 0 rows" in buffer.getvalue()


class TestDumpData:
    """Tests for dump_data method."""

    def test_dump_data(self, writer, buffer):
        """Test rows streamed from the projected query."""
        conn = mock.MagicMock()
        conn.get_column_names.return_value = ["id", "name"]
        conn.stream_rows.return_value = iter([(b"1", b"a"), (b"2", None)])
        dumper = TableDumper(conn, writer, DumpConfig())

        result = dumper.dump_data("users")

        conn.stream_rows.assert_called_once_with("SELECT `id`, `name` FROM `users`")
        assert result.rows == 2
        assert result.statements == 1
        assert buffer.getvalue() == (
            b"INSERT INTO `users` VALUES\n( '1', 'a' ),\n( '2', NULL );\n"
        )

    def test_scan_error_propagates(self, writer):
        """Test that errors while reading rows abort the table."""
        def rows():
            yield (b"1", b"a")
            raise RowScanError("SELECT ...")

        conn = mock.MagicMock()
        conn.get_column_names.return_value = ["id", "name"]
        conn.stream_rows.return_value = rows()

        with pytest.raises(RowScanError):
            TableDumper(conn, writer, DumpConfig()).dump_data("users")
