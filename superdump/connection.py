"""
Database connection management for superdump.
"""

import logging
from typing import Any, Iterator, Optional

import mysql.connector
from mysql.connector import Error as MySQLError

from .errors import DatabaseConnectionError, QueryExecutionError, RowScanError
from .models import ConnectionSettings


class DatabaseConnection:
    """Manages a MySQL connection with context manager support.

    All statements of a run go through one connection, one at a time.
    """

    DEFAULT_PORT = 3306
    DEFAULT_CHARSET = 'utf8'

    def __init__(
        self,
        host: str,
        port: int,
        user: str,
        password: str,
        database: Optional[str] = None,
        charset: str = DEFAULT_CHARSET
    ):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.database = database
        self.charset = charset
        self.connection = None

    @classmethod
    def from_settings(cls, settings: ConnectionSettings) -> "DatabaseConnection":
        return cls(
            host=settings.host,
            port=settings.port,
            user=settings.user,
            password=settings.password,
            database=settings.database,
            charset=settings.charset
        )

    def __enter__(self) -> "DatabaseConnection":
        """Context manager entry - establish connection."""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit - close connection."""
        self.disconnect()

    def connect(self) -> None:
        """Establish database connection."""
        try:
            self.connection = mysql.connector.connect(
                host=self.host,
                port=self.port,
                user=self.user,
                password=self.password,
                database=self.database,
                charset=self.charset,
                use_unicode=True,
                consume_results=True
            )
            logging.info(f"Connected to {self.host}:{self.port}/{self.database or 'N/A'}")
        except MySQLError as e:
            logging.error(f"Failed to connect to database: {e}")
            raise DatabaseConnectionError(
                f"Cannot connect to {self.host}:{self.port}: {e}"
            ) from e

    def disconnect(self) -> None:
        """Close database connection."""
        if self.connection and self.connection.is_connected():
            self.connection.close()
            logging.debug("Database connection closed")

    def execute_query(self, query: str, params: Optional[tuple] = None) -> list[tuple]:
        """Execute a query and return all result rows."""
        logging.debug(f"Query: {query}")
        cursor = self.connection.cursor()
        try:
            cursor.execute(query, params)
            return cursor.fetchall()
        except MySQLError as e:
            raise QueryExecutionError(query, e) from e
        finally:
            cursor.close()

    def query_row(self, query: str) -> Optional[tuple]:
        """Execute a query and return its first row, or None."""
        rows = self.execute_query(query)
        return rows[0] if rows else None

    def execute(self, query: str) -> int:
        """Execute a statement that returns no result set."""
        logging.debug(f"Exec: {query}")
        cursor = self.connection.cursor()
        try:
            cursor.execute(query)
            return cursor.rowcount
        except MySQLError as e:
            raise QueryExecutionError(query, e) from e
        finally:
            cursor.close()

    def get_column_names(self, query: str) -> list[str]:
        """Execute a query and return the names of its result columns."""
        logging.debug(f"Columns of: {query}")
        cursor = self.connection.cursor(buffered=True)
        try:
            cursor.execute(query)
            return list(cursor.column_names)
        except MySQLError as e:
            raise QueryExecutionError(query, e) from e
        finally:
            cursor.close()

    def get_cursor(self, buffered: bool = False, raw: bool = False):
        """Get a cursor for streaming large results.

        Args:
            buffered: If False (default), uses server-side cursor for memory-efficient
                     streaming of large result sets. If True, uses buffered cursor.
            raw: If True, values are returned as undecoded bytes.
        """
        return self.connection.cursor(buffered=buffered, raw=raw)

    def stream_rows(self, query: str) -> Iterator[tuple[Any, ...]]:
        """Lazily yield the rows of ``query`` as raw byte values.

        The result set is read one row at a time from an unbuffered cursor and
        can only be iterated once. NULL values are yielded as None.
        """
        logging.debug(f"Query: {query}")
        cursor = self.get_cursor(buffered=False, raw=True)
        try:
            try:
                cursor.execute(query)
            except MySQLError as e:
                raise QueryExecutionError(query, e) from e

            while True:
                try:
                    row = cursor.fetchone()
                except MySQLError as e:
                    raise RowScanError(query, e) from e
                if row is None:
                    break
                yield row
        finally:
            cursor.close()
