"""
SQL statement builders.

Identifiers are always backtick-quoted. WHERE fragments and column
replacement expressions come from the operator's configuration and are
inserted verbatim.
"""

from typing import Iterable, Optional

SESSION_PREAMBLE_FOREIGN_KEYS = "SET FOREIGN_KEY_CHECKS = 0;"
SESSION_TRAILER = "SET FOREIGN_KEY_CHECKS = 1;"


def quote_identifier(name: str) -> str:
    """Quote a table or column name with backticks."""
    return "`" + name.replace("`", "``") + "`"


def set_names(charset: str) -> str:
    return f"SET NAMES {charset};"


def show_full_tables() -> str:
    return "SHOW FULL TABLES"


def show_create_table(table: str) -> str:
    return f"SHOW CREATE TABLE {quote_identifier(table)}"


def drop_table(table: str) -> str:
    return f"DROP TABLE IF EXISTS {quote_identifier(table)};"


def select_probe(table: str) -> str:
    """Query used only to read a table's column names."""
    return f"SELECT * FROM {quote_identifier(table)} LIMIT 1"


def _with_where(query: str, where: Optional[str]) -> str:
    if where:
        return f"{query} WHERE {where}"
    return query


def count_query(table: str, where: Optional[str] = None) -> str:
    """Build the row-count query, sharing the data query's WHERE filter."""
    return _with_where(f"SELECT COUNT(*) FROM {quote_identifier(table)}", where)


def select_query(table: str, columns: Iterable[str], where: Optional[str] = None) -> str:
    """Build the data query from already projected column terms."""
    return _with_where(
        f"SELECT {', '.join(columns)} FROM {quote_identifier(table)}",
        where
    )


def insert_prefix(table: str) -> str:
    return f"INSERT INTO {quote_identifier(table)} VALUES"


def lock_read(table: str) -> str:
    return f"LOCK TABLES {quote_identifier(table)} READ"


def lock_write(table: str) -> str:
    return f"LOCK TABLES {quote_identifier(table)} WRITE"


def flush_table(table: str) -> str:
    return f"FLUSH TABLES {quote_identifier(table)}"


def unlock_tables() -> str:
    return "UNLOCK TABLES"
