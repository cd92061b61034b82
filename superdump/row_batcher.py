"""
Rendering of result rows into extended INSERT statements.
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterable

from . import queries
from .escape import escape
from .output import SqlWriter

NULL_LITERAL = b'NULL'


def render_value(value: Any) -> bytes:
    """Render one column value as a SQL literal."""
    if value is None:
        return NULL_LITERAL
    if isinstance(value, (bytes, bytearray, memoryview)):
        raw = bytes(value)
    elif isinstance(value, str):
        raw = value.encode('utf-8')
    else:
        raw = str(value).encode('utf-8')
    return b"'" + escape(raw) + b"'"


def render_row(row: Iterable[Any]) -> bytes:
    """Render a row as ``( v1, v2, ... )``."""
    return b'( ' + b', '.join(render_value(value) for value in row) + b' )'


@dataclass
class BatchResult:
    """Counters for one table's data section."""
    rows: int = 0
    statements: int = 0


class RowBatcher:
    """Groups rendered rows into INSERT statements of at most ``max_rows`` tuples."""

    DEFAULT_MAX_ROWS = 100

    def __init__(self, writer: SqlWriter, max_rows: int = DEFAULT_MAX_ROWS):
        if max_rows < 1:
            raise ValueError("max_rows must be a positive integer")
        self.writer = writer
        self.max_rows = max_rows

    def write_rows(self, table: str, rows: Iterable[Iterable[Any]]) -> BatchResult:
        """Consume ``rows`` in order and write them as extended inserts.

        A full batch is written as soon as it reaches ``max_rows``; the
        remaining partial batch is written once the rows are exhausted. If
        iterating ``rows`` raises, the pending partial batch is dropped and the
        exception propagates.
        """
        prefix = queries.insert_prefix(table).encode('utf-8')
        result = BatchResult()
        batch: list[bytes] = []

        for row in rows:
            batch.append(render_row(row))
            result.rows += 1

            if len(batch) >= self.max_rows:
                self._write_batch(prefix, batch)
                result.statements += 1
                batch = []

        if batch:
            self._write_batch(prefix, batch)
            result.statements += 1

        logging.debug(
            f"Table '{table}': {result.rows} rows in {result.statements} INSERT statement(s)"
        )
        return result

    def _write_batch(self, prefix: bytes, batch: list[bytes]) -> None:
        self.writer.writeln(prefix)
        self.writer.write(b',\n'.join(batch))
        self.writer.writeln(b';')
