"""
Table dumping functionality for superdump.
"""

import logging

from . import queries
from .connection import DatabaseConnection
from .errors import SchemaIntrospectionError
from .models import DumpConfig
from .output import SqlWriter
from .projector import ColumnProjector
from .row_batcher import BatchResult, RowBatcher


class TableDumper:
    """Writes the structure and data sections of individual tables."""

    def __init__(self, connection: DatabaseConnection, writer: SqlWriter, config: DumpConfig):
        self.connection = connection
        self.writer = writer
        self.config = config
        self.projector = ColumnProjector(connection, config.column_overrides)
        self.batcher = RowBatcher(writer, config.extended_insert_rows)

    def get_create_table(self, table: str) -> str:
        """Get CREATE TABLE statement."""
        row = self.connection.query_row(queries.show_create_table(table))
        if row is None or len(row) < 2 or row[1] is None:
            raise SchemaIntrospectionError(table, "SHOW CREATE TABLE returned no definition")
        ddl = row[1]
        if isinstance(ddl, (bytes, bytearray)):
            ddl = bytes(ddl).decode('utf-8')
        return ddl

    def get_row_count(self, table: str) -> int:
        """Get the number of rows the data query will return."""
        query = queries.count_query(table, self.config.where_for(table))
        row = self.connection.query_row(query)
        return int(row[0]) if row else 0

    def build_select_query(self, table: str) -> str:
        """Build the data query with projected columns and WHERE filter."""
        columns = self.projector.columns_for_select(table)
        return queries.select_query(table, columns, self.config.where_for(table))

    def dump_structure(self, table: str) -> None:
        """Write the DROP/CREATE section for ``table``."""
        logging.info(f"Dumping structure for table '{table}'")
        ddl = self.get_create_table(table)

        self.writer.writeln()
        self.writer.writeln("--")
        self.writer.writeln(f"-- Structure for table {queries.quote_identifier(table)}")
        self.writer.writeln("--")
        self.writer.writeln()
        self.writer.writeln(queries.drop_table(table))
        self.writer.writeln(f"{ddl};")

    def dump_header(self, table: str) -> int:
        """Write the data section header and return the row count."""
        count = self.get_row_count(table)

        self.writer.writeln()
        self.writer.writeln("--")
        self.writer.writeln(
            f"-- Data for table {queries.quote_identifier(table)} -- {count} rows"
        )
        self.writer.writeln("--")
        self.writer.writeln()
        return count

    def dump_data(self, table: str) -> BatchResult:
        """Write the table rows as extended INSERT statements."""
        query = self.build_select_query(table)
        logging.info(f"Dumping data for table '{table}' with query: {query[:200]}")
        return self.batcher.write_rows(table, self.connection.stream_rows(query))
