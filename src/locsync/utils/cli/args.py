"""
Command-line argument parsing for locsync.

This module defines the ``locsync`` command line: the global options that
locate the configuration file and control logging, and the sub-commands
that scan sources, report translation progress and publish client files.
"""

import argparse
import sys
from pathlib import Path
from typing import NamedTuple

from ..core.version import get_version


class PathValidationError(Exception):
    """Raised when a path validation fails."""

    pass


class ParsedArgs(NamedTuple):
    """Container for parsed command-line arguments."""

    config_file: Path
    command: str
    verbose: bool
    log_file: Path | None
    source: str | None
    locale: str | None
    force: bool


class DefaultPaths:
    """Default paths for locsync."""

    CONFIG_FILE: Path = Path("localization.yml")


COMMANDS: tuple[str, ...] = ("scan", "status", "publish", "untranslated")


def validate_config_file_path(config_file_str: str) -> Path:
    """
    Validate configuration file path.

    Args:
        config_file_str: String path to configuration file

    Returns:
        Resolved Path object for the configuration file

    Raises:
        PathValidationError: If the configuration file path is invalid
    """
    try:
        config_file = Path(config_file_str).expanduser().resolve()
    except (OSError, ValueError) as e:
        raise PathValidationError(f"Invalid config file path: {e}") from e

    if config_file.exists() and config_file.is_dir():
        raise PathValidationError(f"Config file path exists but is not a file: {config_file}")

    return config_file


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create the argument parser for locsync.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="locsync",
        description="locsync - extract translatable strings and keep translation files in sync",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  locsync scan
    Scan every source and update registries, translation and client files

  locsync --config /srv/app/localization.yml status
    Show the number of untranslated strings per source and locale

  locsync untranslated --source main --locale de_DE
    List the untranslated strings of one source

  locsync publish --force
    Rewrite the client library files
""",
    )

    defaults = DefaultPaths()

    _ = parser.add_argument(
        "--config",
        dest="config_file",
        type=str,
        default=str(defaults.CONFIG_FILE),
        help="Path to the configuration file (default: %(default)s).",
        metavar="PATH",
    )
    _ = parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    _ = parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Also write logs to this file, rotated at 5MB.",
        metavar="PATH",
    )
    _ = parser.add_argument("--version", action="version", version=f"%(prog)s {get_version()}")

    subparsers = parser.add_subparsers(dest="command", required=True, metavar="COMMAND")

    scan = subparsers.add_parser("scan", help="Scan sources for translatable strings")
    _ = scan.add_argument("--source", default=None, help="Only scan this source (ID or alias)")

    _ = subparsers.add_parser("status", help="Show untranslated counts per source and locale")

    publish = subparsers.add_parser("publish", help="Write the client library files")
    _ = publish.add_argument(
        "--force", action="store_true", help="Write even if the files are up to date"
    )

    untranslated = subparsers.add_parser("untranslated", help="List untranslated strings")
    _ = untranslated.add_argument("--source", required=True, help="Source ID or alias")
    _ = untranslated.add_argument("--locale", required=True, help="Application locale name")

    return parser


def parse_arguments(args: list[str] | None = None) -> ParsedArgs:
    """
    Parse command-line arguments.

    Args:
        args: List of arguments to parse (defaults to sys.argv[1:])

    Returns:
        ParsedArgs containing validated and resolved paths

    Raises:
        SystemExit: If argument parsing fails, a path is invalid or --help is requested
    """
    parser = create_argument_parser()
    parsed = parser.parse_args(args)

    config_file_str: str = getattr(parsed, "config_file", "")
    log_file_str: str | None = getattr(parsed, "log_file", None)

    try:
        config_file = validate_config_file_path(config_file_str)
    except PathValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    return ParsedArgs(
        config_file=config_file,
        command=getattr(parsed, "command"),
        verbose=bool(getattr(parsed, "verbose", False)),
        log_file=Path(log_file_str).expanduser() if log_file_str else None,
        source=getattr(parsed, "source", None),
        locale=getattr(parsed, "locale", None),
        force=bool(getattr(parsed, "force", False)),
    )
