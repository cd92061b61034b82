"""
Configuration loading and validation for superdump.
"""

import logging
import os
import re
from typing import Any

import yaml

from .errors import ConfigError
from .models import ConnectionSettings, DumpConfig, FilterPolicy


class ConfigLoader:
    """Loads and validates configuration from YAML file."""

    ENV_VAR_PATTERN = re.compile(r'\$\{([^}]+)\}')
    DEFAULT_EXTENDED_INSERT_ROWS = 100
    TRUE_STRINGS = {'true', 'yes', 'on', '1'}
    FALSE_STRINGS = {'false', 'no', 'off', '0'}

    def __init__(self, config_path: str):
        self.config_path = config_path
        self.config = self._load_config()

    def _load_config(self) -> dict[str, Any]:
        """Load configuration from YAML file."""
        with open(self.config_path, 'r') as f:
            config = yaml.safe_load(f)

        if config is None:
            config = {}
        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file '{self.config_path}' must contain a mapping")

        return self._resolve_env_vars(config)

    def _resolve_env_vars(self, obj: Any) -> Any:
        """Recursively resolve environment variables in config."""
        if isinstance(obj, str):
            matches = self.ENV_VAR_PATTERN.findall(obj)
            for match in matches:
                env_value = os.environ.get(match, '')
                obj = obj.replace(f'${{{match}}}', env_value)
            return obj
        elif isinstance(obj, dict):
            return {k: self._resolve_env_vars(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [self._resolve_env_vars(item) for item in obj]
        return obj

    def _section(self, name: str) -> dict[str, Any]:
        section = self.config.get(name) or {}
        if not isinstance(section, dict):
            raise ConfigError(f"Section '{name}' must be a mapping")
        return section

    def get_mysql_settings(self) -> dict[str, Any]:
        """Get connection and engine settings."""
        return self._section('mysql')

    def get_select_overrides(self) -> dict[str, dict[str, str]]:
        """Get column replacement expressions as table -> column -> expression.

        Accepts both ``table.column: expr`` keys and nested
        ``table: {column: expr}`` mappings.
        """
        overrides: dict[str, dict[str, str]] = {}
        for key, value in self._section('select').items():
            if isinstance(value, dict):
                for column, expression in value.items():
                    overrides.setdefault(str(key), {})[str(column)] = self._expression(expression)
                continue
            table, column = self._split_table_column(str(key))
            overrides.setdefault(table, {})[column] = self._expression(value)
        return overrides

    @staticmethod
    def _expression(value: Any) -> str:
        # YAML null redacts the column to SQL NULL
        if value is None:
            return 'NULL'
        return str(value)

    def get_where_clauses(self) -> dict[str, str]:
        """Get per-table WHERE fragments."""
        clauses = {}
        for table, condition in self._section('where').items():
            if condition is None or not str(condition).strip():
                raise ConfigError(f"Empty WHERE condition for table '{table}'")
            clauses[str(table)] = str(condition)
        return clauses

    def get_filters(self) -> dict[str, FilterPolicy]:
        """Get per-table filter policies."""
        filters = {}
        for table, value in self._section('filter').items():
            try:
                filters[str(table)] = FilterPolicy(str(value).strip().lower())
            except ValueError:
                allowed = ', '.join(p.value for p in FilterPolicy)
                raise ConfigError(
                    f"Invalid filter '{value}' for table '{table}' (expected one of: {allowed})"
                ) from None
        return filters

    def get_output_settings(self) -> dict[str, Any]:
        """Get output settings."""
        return self._section('output')

    def get_compress(self) -> bool:
        """Whether the output file should be gzipped."""
        return self._parse_bool(self.get_output_settings().get('compress'), default=False)

    def get_logging_settings(self) -> dict[str, Any]:
        """Get logging settings."""
        return self._section('logging')

    def get_connection_settings(self) -> ConnectionSettings:
        """Build connection parameters from the mysql section."""
        mysql = self.get_mysql_settings()
        database = mysql.get('database')
        if not database:
            raise ConfigError("Missing required setting 'mysql.database'")

        defaults = ConnectionSettings()
        try:
            port = int(mysql.get('port', defaults.port))
        except (TypeError, ValueError):
            raise ConfigError(f"Invalid port '{mysql.get('port')}'") from None

        return ConnectionSettings(
            host=str(mysql.get('host', defaults.host)),
            port=port,
            user=str(mysql.get('user', defaults.user)),
            password=str(mysql.get('password') or ''),
            database=str(database),
            charset=str(mysql.get('charset', defaults.charset)),
        )

    def build_dump_config(self) -> DumpConfig:
        """Resolve the whole file into an immutable DumpConfig."""
        mysql = self.get_mysql_settings()
        return DumpConfig(
            connection=self.get_connection_settings(),
            column_overrides=self.get_select_overrides(),
            where_clauses=self.get_where_clauses(),
            filters=self.get_filters(),
            use_table_lock=self._parse_bool(mysql.get('use_table_lock'), default=True),
            extended_insert_rows=self._parse_extended_insert_rows(
                mysql.get('extended_insert_rows')
            ),
        )

    @staticmethod
    def _split_table_column(key: str) -> tuple[str, str]:
        parts = key.split('.')
        if len(parts) != 2 or not all(parts):
            raise ConfigError(f"Expected 'table.column' format in select section, got: '{key}'")
        return parts[0], parts[1]

    def _parse_bool(self, value: Any, default: bool) -> bool:
        if value is None:
            return default
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in self.TRUE_STRINGS:
            return True
        if text in self.FALSE_STRINGS:
            return False
        logging.warning(f"Invalid boolean value '{value}', using {default}")
        return default

    def _parse_extended_insert_rows(self, value: Any) -> int:
        if value is None:
            return self.DEFAULT_EXTENDED_INSERT_ROWS
        try:
            rows = int(value)
        except (TypeError, ValueError):
            rows = 0
        if isinstance(value, bool) or rows < 1:
            logging.warning(
                f"Invalid extended_insert_rows '{value}', "
                f"using {self.DEFAULT_EXTENDED_INSERT_ROWS}"
            )
            return self.DEFAULT_EXTENDED_INSERT_ROWS
        return rows
