"""
Column projection: the SELECT list used to read a table's data.
"""

import logging

from . import queries
from .connection import DatabaseConnection
from .errors import QueryExecutionError, SchemaIntrospectionError


def project_columns(columns: list[str], overrides: dict[str, str]) -> list[str]:
    """Render one SELECT term per column, keeping the column order.

    A column with an override becomes ``<expression> AS `column```, with the
    expression inserted verbatim. Any other column is selected as is.
    """
    terms = []
    for column in columns:
        replacement = overrides.get(column)
        if replacement is not None:
            terms.append(f"{replacement} AS {queries.quote_identifier(column)}")
        else:
            terms.append(queries.quote_identifier(column))
    return terms


class ColumnProjector:
    """Reads live column lists and applies configured replacements."""

    def __init__(self, connection: DatabaseConnection, column_overrides: dict[str, dict[str, str]]):
        self.connection = connection
        self.column_overrides = column_overrides

    def get_columns(self, table: str) -> list[str]:
        """Introspect the column names of ``table``."""
        try:
            columns = self.connection.get_column_names(queries.select_probe(table))
        except QueryExecutionError as e:
            raise SchemaIntrospectionError(table, str(e.cause or e)) from e
        if not columns:
            raise SchemaIntrospectionError(table, "no columns reported")
        return columns

    def columns_for_select(self, table: str) -> list[str]:
        """Return the projected SELECT terms for ``table``."""
        columns = self.get_columns(table)
        overrides = self.column_overrides.get(table, {})

        unknown = set(overrides) - set(columns)
        if unknown:
            logging.warning(
                f"Table '{table}': replacement configured for unknown column(s): "
                f"{', '.join(sorted(unknown))}"
            )

        return project_columns(columns, overrides)
