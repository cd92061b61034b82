"""
Data models and enums for superdump.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class TableKind(Enum):
    """Table type as reported by SHOW FULL TABLES."""
    BASE_TABLE = "BASE TABLE"
    VIEW = "VIEW"
    SYSTEM_VIEW = "SYSTEM VIEW"


class FilterPolicy(Enum):
    """Per-table export policy."""
    FULL = "full"
    NODATA = "nodata"
    IGNORE = "ignore"

    @property
    def exports_structure(self) -> bool:
        return self is not FilterPolicy.IGNORE

    @property
    def exports_data(self) -> bool:
        return self is FilterPolicy.FULL


@dataclass(frozen=True)
class Table:
    """A table discovered in the source database."""
    name: str
    kind: TableKind = TableKind.BASE_TABLE

    @property
    def is_base_table(self) -> bool:
        return self.kind is TableKind.BASE_TABLE


@dataclass(frozen=True)
class ConnectionSettings:
    """Parameters used to open the source connection."""
    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = ""
    database: str = ""
    charset: str = "utf8"


@dataclass(frozen=True)
class DumpConfig:
    """Immutable settings for one dump run.

    ``column_overrides`` maps table -> column -> SQL expression, ``where_clauses``
    maps table -> WHERE fragment and ``filters`` maps table name or glob pattern
    -> FilterPolicy. All SQL held here is trusted and used verbatim.
    """
    connection: ConnectionSettings = field(default_factory=ConnectionSettings)
    column_overrides: dict[str, dict[str, str]] = field(default_factory=dict)
    where_clauses: dict[str, str] = field(default_factory=dict)
    filters: dict[str, FilterPolicy] = field(default_factory=dict)
    use_table_lock: bool = True
    extended_insert_rows: int = 100

    def overrides_for(self, table: str) -> dict[str, str]:
        return self.column_overrides.get(table, {})

    def where_for(self, table: str) -> Optional[str]:
        return self.where_clauses.get(table)


@dataclass
class TableStats:
    """Statistics for a single table dump."""
    table: str
    policy: FilterPolicy = FilterPolicy.FULL
    row_count: int = 0
    rows_dumped: int = 0
    statements: int = 0


@dataclass
class DumpStats:
    """Overall dump statistics."""
    tables: list[TableStats] = field(default_factory=list)
    total_rows: int = 0
    total_statements: int = 0

    @property
    def tables_dumped(self) -> int:
        return sum(1 for t in self.tables if t.policy is not FilterPolicy.IGNORE)

    def add(self, table_stats: TableStats) -> None:
        self.tables.append(table_stats)
        self.total_rows += table_stats.rows_dumped
        self.total_statements += table_stats.statements
