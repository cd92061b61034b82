"""
Table lock sequencing.

Two different lock scopes are handled here: a READ lock held on the live
database while a table is being read, and WRITE lock statements written into
the generated script for the time it is replayed.
"""

import logging

from . import queries
from .connection import DatabaseConnection
from .errors import QueryExecutionError
from .output import SqlWriter


class LockCoordinator:
    """Takes and releases live table locks, and writes replay locks."""

    def __init__(self, connection: DatabaseConnection, enabled: bool = True):
        self.connection = connection
        self.enabled = enabled
        self.locked_table = None

    def acquire(self, table: str) -> bool:
        """Lock ``table`` for reading and flush it.

        Returns False without touching the database when locking is disabled.
        The flush is best-effort: its failure is logged and ignored.
        """
        if not self.enabled:
            return False

        logging.debug(f"Locking table '{table}' for reading")
        self.connection.execute(queries.lock_read(table))
        self.locked_table = table

        try:
            self.connection.execute(queries.flush_table(table))
        except QueryExecutionError as e:
            logging.warning(f"Flushing table '{table}' failed, continuing: {e.cause or e}")

        return True

    def release(self) -> None:
        """Release the live lock taken by acquire(), if any."""
        if self.locked_table is None:
            return
        logging.debug(f"Unlocking table '{self.locked_table}'")
        self.connection.execute(queries.unlock_tables())
        self.locked_table = None

    @staticmethod
    def write_lock_statement(writer: SqlWriter, table: str) -> None:
        """Write the replay-time WRITE lock for ``table`` into the script."""
        writer.writeln(f"{queries.lock_write(table)};")

    @staticmethod
    def write_unlock_statement(writer: SqlWriter) -> None:
        writer.writeln(f"{queries.unlock_tables()};")
