"""Command-line interface for movieapp-db.

This module provides the ``movieapp-db`` entry point used to inspect the
resolved database configuration and to run schema migrations.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import structlog

from movieapp_db import __version__
from movieapp_db.config import LoggingSettings
from movieapp_db.database import mask_connection_uri
from movieapp_db.descriptor import ConnectionDescriptor, build_descriptor
from movieapp_db.environment import EnvironmentSnapshot, load_environment
from movieapp_db.exceptions import ConfigurationError, MigrationError
from movieapp_db.migrations import MigrationRunner
from movieapp_db.utils import configure_logging

logger = structlog.get_logger()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="movieapp-db", description="Movie app database tooling")
    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Path to the environment file (default: ./.env)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    config_parser = subparsers.add_parser("config", help="Inspect the resolved configuration")
    config_sub = config_parser.add_subparsers(dest="config_command", required=True)
    config_sub.add_parser("show", help="Print the connection descriptor (password masked)")

    migration_parser = subparsers.add_parser("migration", help="Manage schema migrations")
    migration_sub = migration_parser.add_subparsers(dest="migration_command", required=True)
    migration_sub.add_parser("show", help="List migrations and whether they are applied")
    migration_sub.add_parser("run", help="Apply all pending migrations")
    migration_sub.add_parser("revert", help="Revert the most recently applied migration")

    return parser


def _cmd_config_show(descriptor: ConnectionDescriptor) -> int:
    print(f"Engine: {descriptor.engine_kind.value}")
    print(f"Connection URI: {mask_connection_uri(descriptor.connection_uri)}")
    print(f"Entities: {', '.join(descriptor.entity_names)}")
    print(f"Migrations: {descriptor.migration_locator}")
    print(f"Auto-synchronize: {descriptor.auto_synchronize}")
    print(f"Verbose logging: {descriptor.verbose_logging}")
    return 0


def _cmd_migration_show(runner: MigrationRunner) -> int:
    done = {m.timestamp for m in runner.applied()}
    for unit in runner.discover():
        mark = "X" if unit.timestamp in done else " "
        print(f"[{mark}] {unit.label}")
    return 0


def _cmd_migration_run(runner: MigrationRunner) -> int:
    applied = runner.run()
    if not applied:
        print("No pending migrations.")
        return 0

    for unit in applied:
        print(f"Applied {unit.label}")
    print(f"{len(applied)} migration(s) applied.")
    return 0


def _cmd_migration_revert(runner: MigrationRunner) -> int:
    unit = runner.revert()
    if unit is None:
        print("No migrations to revert.")
    else:
        print(f"Reverted {unit.label}")
    return 0


def _dispatch(parsed: argparse.Namespace, environment: EnvironmentSnapshot) -> int:
    descriptor = build_descriptor(environment)

    if parsed.command == "config":
        return _cmd_config_show(descriptor)

    runner = MigrationRunner.from_descriptor(descriptor)
    if parsed.migration_command == "show":
        return _cmd_migration_show(runner)
    if parsed.migration_command == "run":
        return _cmd_migration_run(runner)
    return _cmd_migration_revert(runner)


def main(args: list[str] | None = None) -> int:
    """Main entry point for the movieapp-db CLI.

    Args:
        args: Command-line arguments. If None, uses sys.argv.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    if args is None:
        args = sys.argv[1:]

    parser = _build_parser()
    parsed = parser.parse_args(args)

    # Defaults until LOG_LEVEL / LOG_JSON are known.
    configure_logging()
    environment = load_environment(parsed.env_file)
    settings = LoggingSettings.from_environment(environment)
    configure_logging(settings.log_level, json_output=settings.log_json)
    logger.debug("movieapp_db_started", version=__version__, command=parsed.command)

    try:
        return _dispatch(parsed, environment)
    except (ConfigurationError, MigrationError) as e:
        logger.error("command_failed", command=parsed.command, error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
