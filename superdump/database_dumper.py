"""
Main database dumping orchestration for superdump.
"""

import fnmatch
import logging
import re
from typing import Optional

from . import queries
from .connection import DatabaseConnection
from .locks import LockCoordinator
from .models import DumpConfig, DumpStats, FilterPolicy, TableStats
from .output import SqlWriter
from .table_dumper import TableDumper
from .tables import list_base_tables

GLOB_CHARS = re.compile(r'[*?\[]')


class DatabaseDumper:
    """Drives one export of a whole database into a single script."""

    def __init__(self, connection: DatabaseConnection, config: DumpConfig):
        self.connection = connection
        self.config = config
        self.stats = DumpStats()

        self._exact_filters = {
            name: policy for name, policy in config.filters.items()
            if not GLOB_CHARS.search(name)
        }
        self._pattern_filters = [
            (pattern, policy) for pattern, policy in config.filters.items()
            if GLOB_CHARS.search(pattern)
        ]
        self._compiled_patterns = self._compile_filter_patterns(
            [pattern for pattern, _ in self._pattern_filters]
        )

    def _compile_filter_patterns(self, patterns: list[str]) -> list[re.Pattern]:
        """
        Pre-compile filter patterns to regex for faster matching.

        Converts fnmatch patterns to compiled regex patterns.
        """
        return [re.compile(fnmatch.translate(pattern)) for pattern in patterns]

    def resolve_policy(self, table: str) -> FilterPolicy:
        """
        Find the filter policy of a table.

        Supports:
        - Exact names: 'audit_log'
        - Wildcard patterns: '*_old', 'tmp_*', '*_backup_*'

        An exact name always wins; otherwise the first matching pattern in
        configuration order applies. Tables matching nothing are dumped fully.
        """
        if table in self._exact_filters:
            return self._exact_filters[table]

        for (pattern, policy), compiled in zip(self._pattern_filters, self._compiled_patterns):
            if compiled.match(table):
                logging.debug(f"Table '{table}' matched filter pattern '{pattern}' ({policy.value})")
                return policy

        return FilterPolicy.FULL

    def run(self, writer: SqlWriter) -> DumpStats:
        """Dump every base table of the database into ``writer``.

        The first error aborts the run and propagates to the caller.
        """
        writer.writeln(queries.set_names(self.config.connection.charset))
        writer.writeln(queries.SESSION_PREAMBLE_FOREIGN_KEYS)

        logging.info("Getting table list...")
        tables = list_base_tables(self.connection)
        logging.info(f"Found {len(tables)} table(s)")

        table_dumper = TableDumper(self.connection, writer, self.config)
        locks = LockCoordinator(self.connection, enabled=self.config.use_table_lock)

        for table in tables:
            table_stats = self._dump_table(table.name, table_dumper, locks, writer)
            self.stats.add(table_stats)
            self._log_table_result(table_stats)

        writer.writeln(queries.SESSION_TRAILER)
        return self.stats

    def _dump_table(
        self,
        table: str,
        table_dumper: TableDumper,
        locks: LockCoordinator,
        writer: SqlWriter
    ) -> TableStats:
        """Export one table according to its filter policy."""
        policy = self.resolve_policy(table)
        table_stats = TableStats(table=table, policy=policy)

        if not policy.exports_structure:
            return table_stats

        skip_data = not policy.exports_data
        locked = False
        if not skip_data:
            locked = locks.acquire(table)

        table_dumper.dump_structure(table)

        if skip_data:
            return table_stats

        table_stats.row_count = table_dumper.dump_header(table)
        if table_stats.row_count > 0:
            locks.write_lock_statement(writer, table)
            result = table_dumper.dump_data(table)
            writer.writeln()
            locks.write_unlock_statement(writer)

            table_stats.rows_dumped = result.rows
            table_stats.statements = result.statements
            if result.rows != table_stats.row_count:
                logging.warning(
                    f"Table '{table}': counted {table_stats.row_count} rows "
                    f"but dumped {result.rows}"
                )

        if locked:
            locks.release()

        return table_stats

    def _log_table_result(self, table_stats: TableStats) -> None:
        """Log the result of a table dump."""
        if table_stats.policy is FilterPolicy.IGNORE:
            logging.info(f"  - {table_stats.table}: ignored")
        elif table_stats.policy is FilterPolicy.NODATA:
            logging.info(f"  ✓ {table_stats.table}: structure only")
        else:
            logging.info(f"  ✓ {table_stats.table}: {table_stats.rows_dumped} rows")


def dump_database(
    config: DumpConfig,
    writer: SqlWriter,
    connection: Optional[DatabaseConnection] = None
) -> DumpStats:
    """Connect with ``config`` and run a full dump into ``writer``."""
    if connection is not None:
        return DatabaseDumper(connection, config).run(writer)

    logging.info(f"Using table locks: {config.use_table_lock}")
    with DatabaseConnection.from_settings(config.connection) as conn:
        return DatabaseDumper(conn, config).run(writer)
