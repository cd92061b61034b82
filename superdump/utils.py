"""
Utility functions for superdump.
"""

import logging
import sys
from pathlib import Path
from typing import Any

from .models import DumpConfig, FilterPolicy


def setup_logging(log_settings: dict[str, Any]) -> None:
    """Setup logging configuration.

    Console output goes to stderr so that a dump written to stdout stays clean.
    """
    log_level = getattr(logging, str(log_settings.get('level', 'INFO')).upper())
    log_file = log_settings.get('file')

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=handlers
    )


def configured_tables(config: DumpConfig) -> list[str]:
    """Names (or patterns) of every table that has some configuration."""
    names = set(config.column_overrides) | set(config.where_clauses) | set(config.filters)
    return sorted(names)


def format_table_settings(table: str, config: DumpConfig) -> list[str]:
    """Format the settings of one table for display in dry-run mode."""
    parts = []
    policy = config.filters.get(table)
    if policy is not None and policy is not FilterPolicy.FULL:
        parts.append(f"filter={policy.value}")
    where = config.where_for(table)
    if where:
        parts.append(f"where='{where}'")
    for column, expression in config.overrides_for(table).items():
        parts.append(f"{column}={expression}")
    return parts


def print_dry_run_info(config: DumpConfig) -> None:
    """Log what a dump with ``config`` would do, without connecting."""
    conn = config.connection
    logging.info(f"Would dump database: {conn.database} from {conn.host}:{conn.port}")
    logging.info(f"  Table locks: {'enabled' if config.use_table_lock else 'disabled'}")
    logging.info(f"  Rows per INSERT: {config.extended_insert_rows}")

    tables = configured_tables(config)
    if not tables:
        logging.info("  - All tables (no per-table settings)")
        return

    for table in tables:
        logging.info(f"  - {table} ({', '.join(format_table_settings(table, config))})")
