"""
Exception hierarchy for superdump.

Every error ends the run. The dump written up to that point is incomplete and
must be discarded by the caller.
"""

from typing import Optional


class DumpError(Exception):
    """Base class for all superdump errors."""


class ConfigError(DumpError):
    """Configuration file is missing required values or holds invalid ones."""


class DatabaseConnectionError(DumpError):
    """The database connection could not be established."""


class QueryExecutionError(DumpError):
    """A statement was rejected by the server."""

    def __init__(self, query: str, cause: Optional[BaseException] = None):
        self.query = query
        self.cause = cause
        message = f"Query failed: {query}"
        if cause is not None:
            message += f" ({cause})"
        super().__init__(message)


class RowScanError(DumpError):
    """Fetching a row from an open result set failed."""

    def __init__(self, query: str, cause: Optional[BaseException] = None):
        self.query = query
        self.cause = cause
        message = f"Failed reading rows of: {query}"
        if cause is not None:
            message += f" ({cause})"
        super().__init__(message)


class TableListError(DumpError):
    """The table list of the source database could not be read."""


class SchemaIntrospectionError(DumpError):
    """The columns of a table could not be determined."""

    def __init__(self, table: str, reason: str):
        self.table = table
        super().__init__(f"Cannot determine columns of table '{table}': {reason}")
