"""
Shared fixtures for the superdump test suite.
"""

import io
import re
from typing import Optional

import pytest

from superdump.output import SqlWriter

FROM_TABLE = re.compile(r"FROM `([^`]*)`")
FIRST_IDENTIFIER = re.compile(r"`([^`]*)`")


class FakeConnection:
    """In-memory stand-in for DatabaseConnection.

    Answers the statements the engine issues from a table description and
    records every statement it receives, in order.
    """

    def __init__(
        self,
        tables: list[tuple[str, str]],
        rows: Optional[dict[str, list[tuple]]] = None,
        columns: Optional[dict[str, list[str]]] = None,
        counts: Optional[dict[str, int]] = None,
    ):
        self.tables = tables
        self.rows = rows or {}
        self.columns = columns or {}
        self.counts = counts or {}
        self.failures: dict[str, Exception] = {}
        self.statements: list[str] = []

    def _check_failure(self, query: str) -> None:
        for prefix, error in self.failures.items():
            if query.startswith(prefix):
                raise error

    def execute_query(self, query: str, params=None) -> list[tuple]:
        self.statements.append(query)
        self._check_failure(query)
        if query == "SHOW FULL TABLES":
            return list(self.tables)
        if query.startswith("SHOW CREATE TABLE"):
            name = FIRST_IDENTIFIER.search(query).group(1)
            return [(name, f"CREATE TABLE `{name}` (`id` int)")]
        if query.startswith("SELECT COUNT(*)"):
            name = FROM_TABLE.search(query).group(1)
            return [(self.counts.get(name, len(self.rows.get(name, []))),)]
        raise AssertionError(f"Unexpected query: {query}")

    def query_row(self, query: str) -> Optional[tuple]:
        rows = self.execute_query(query)
        return rows[0] if rows else None

    def execute(self, query: str) -> int:
        self.statements.append(query)
        self._check_failure(query)
        return 0

    def get_column_names(self, query: str) -> list[str]:
        self.statements.append(query)
        self._check_failure(query)
        name = FROM_TABLE.search(query).group(1)
        return list(self.columns.get(name, ["id", "name"]))

    def stream_rows(self, query: str):
        self.statements.append(query)
        self._check_failure(query)
        name = FROM_TABLE.search(query).group(1)
        for row in self.rows.get(name, []):
            yield row


@pytest.fixture
def buffer():
    """Byte buffer receiving the dump."""
    return io.BytesIO()


@pytest.fixture
def writer(buffer):
    """SqlWriter over the byte buffer."""
    return SqlWriter(buffer)


@pytest.fixture
def fake_connection_factory():
    """Build FakeConnection instances."""
    return FakeConnection
