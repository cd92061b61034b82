"""
superdump
=========
A MySQL dump tool producing replayable SQL scripts with support for:
- Column value replacement (data redaction)
- Per-table WHERE clauses
- Per-table filters (full, nodata, ignore)
- Table locking while reading
- Extended INSERT statements
"""

from .config import ConfigLoader
from .connection import DatabaseConnection
from .database_dumper import DatabaseDumper, dump_database
from .errors import (
    ConfigError,
    DatabaseConnectionError,
    DumpError,
    QueryExecutionError,
    RowScanError,
    SchemaIntrospectionError,
    TableListError,
)
from .escape import escape
from .locks import LockCoordinator
from .models import (
    ConnectionSettings,
    DumpConfig,
    DumpStats,
    FilterPolicy,
    Table,
    TableKind,
    TableStats,
)
from .output import SqlWriter, open_output
from .projector import ColumnProjector, project_columns
from .row_batcher import RowBatcher
from .table_dumper import TableDumper
from .tables import list_base_tables
from .utils import print_dry_run_info, setup_logging

__version__ = "1.0.0"

__all__ = [
    # Entry point
    "dump_database",
    # Core classes
    "ColumnProjector",
    "ConfigLoader",
    "DatabaseConnection",
    "DatabaseDumper",
    "LockCoordinator",
    "RowBatcher",
    "SqlWriter",
    "TableDumper",
    # Functions
    "escape",
    "list_base_tables",
    "open_output",
    "project_columns",
    # Models
    "ConnectionSettings",
    "DumpConfig",
    "DumpStats",
    "FilterPolicy",
    "Table",
    "TableKind",
    "TableStats",
    # Errors
    "ConfigError",
    "DatabaseConnectionError",
    "DumpError",
    "QueryExecutionError",
    "RowScanError",
    "SchemaIntrospectionError",
    "TableListError",
    # Utilities
    "print_dry_run_info",
    "setup_logging",
]
