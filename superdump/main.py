#!/usr/bin/env python3
"""
superdump - CLI Entry Point
===========================
Dumps a MySQL database into a replayable SQL script with support for:
- Column value replacement (data redaction)
- Per-table WHERE clauses
- Per-table filters (full, nodata, ignore)
- Table locking while reading
- Extended INSERT statements
"""

import argparse
import logging
import sys

import yaml

from .config import ConfigLoader
from .database_dumper import dump_database
from .errors import ConfigError, DumpError
from .output import USE_STDOUT, open_output
from .utils import print_dry_run_info, setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='superdump',
        description='superdump - Partial and redacted MySQL dumps'
    )
    parser.add_argument(
        '-c', '--config',
        default='config.yaml',
        help='Path to configuration file (default: config.yaml)'
    )
    parser.add_argument(
        '-o', '--output',
        help="Output path, '-' for stdout (default: output.file from config, else stdout)"
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose output'
    )
    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Show what would be dumped without connecting to the database'
    )
    parser.add_argument(
        '--compress',
        action='store_true',
        help='Gzip the output file'
    )
    return parser


def main(argv=None):
    """Main entry point."""
    args = build_parser().parse_args(argv)

    # Load configuration
    try:
        config = ConfigLoader(args.config)
        dump_config = config.build_dump_config()
        log_settings = config.get_logging_settings()
        output_settings = config.get_output_settings()
        compress = args.compress or config.get_compress()
    except FileNotFoundError:
        print(f"Error: Configuration file '{args.config}' not found", file=sys.stderr)
        sys.exit(1)
    except yaml.YAMLError as e:
        print(f"Error: Invalid YAML in configuration file: {e}", file=sys.stderr)
        sys.exit(1)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    # Setup logging
    log_settings = dict(log_settings)
    if args.verbose:
        log_settings['level'] = 'DEBUG'
    setup_logging(log_settings)

    # Dry run mode
    if args.dry_run:
        logging.info("DRY RUN MODE - No data will be dumped")
        print_dry_run_info(dump_config)
        sys.exit(0)

    output = args.output or output_settings.get('file') or USE_STDOUT

    # Run dump
    try:
        with open_output(output, compress) as writer:
            stats = dump_database(dump_config, writer)
    except DumpError as e:
        logging.error(f"Dump failed, output is incomplete: {e}")
        sys.exit(1)
    except Exception as e:
        logging.error(f"Fatal error: {e}")
        sys.exit(1)

    # Print summary
    logging.info("=" * 50)
    logging.info("DUMP COMPLETE")
    logging.info(f"Tables: {stats.tables_dumped}")
    logging.info(f"Total Rows: {stats.total_rows}")
    logging.info(f"INSERT statements: {stats.total_statements}")


if __name__ == '__main__':
    main()
