"""
Discovery of the tables to export.
"""

import logging

from . import queries
from .connection import DatabaseConnection
from .errors import DumpError, TableListError
from .models import Table, TableKind


def _as_text(value) -> str:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode('utf-8')
    return str(value)


def list_tables(connection: DatabaseConnection) -> list[Table]:
    """List every table and view of the current database in server order."""
    try:
        rows = connection.execute_query(queries.show_full_tables())
    except DumpError as e:
        raise TableListError(f"Cannot list tables: {e}") from e

    tables = []
    for row in rows:
        if len(row) < 2:
            raise TableListError(f"Unexpected SHOW FULL TABLES row: {row!r}")
        name, kind = _as_text(row[0]), _as_text(row[1])
        try:
            table_kind = TableKind(kind)
        except ValueError:
            logging.warning(f"Skipping '{name}': unknown table type '{kind}'")
            continue
        tables.append(Table(name=name, kind=table_kind))
    return tables


def list_base_tables(connection: DatabaseConnection) -> list[Table]:
    """List the base tables of the current database, views excluded."""
    tables = list_tables(connection)
    base_tables = [t for t in tables if t.is_base_table]

    skipped = len(tables) - len(base_tables)
    if skipped:
        logging.info(f"Skipping {skipped} view(s)")
    return base_tables
