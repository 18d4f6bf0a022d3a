"""
Main entry point for locsync.

This module sets up logging, loads the configuration, builds the
localization context and runs the requested command.
"""

import logging
import logging.handlers
import sys
from pathlib import Path

import yaml
from pydantic import ValidationError

from .config.manager import ConfigManager
from .service import LocalizationService, StatusFilter
from .utils.cli.args import ParsedArgs, parse_arguments
from .utils.core.exceptions import LocSyncError

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(verbose: bool = False, log_file: Path | None = None) -> None:
    """
    Configure logging for command line use.

    Args:
        verbose: Log DEBUG messages instead of INFO and above
        log_file: Optional file that receives the log too, rotated at 5MB
            with 5 backups
    """
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        _ = log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=5 * 1024 * 1024,  # 5MB
                backupCount=5,
                encoding="utf-8",
            )
        )

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )


def run_command(service: LocalizationService, args: ParsedArgs) -> int:
    """
    Run one command against a configured service.

    Args:
        service: Service wrapping the configured context
        args: Parsed command line

    Returns:
        Process exit code
    """
    match args.command:
        case "scan":
            reports = service.scan(args.source)
            for report in reports:
                print(
                    f"{report.source.alias}: {report.strings} strings in {report.files_scanned} files"
                    + (f", {len(report.failed_files)} failed" if report.failed_files else "")
                )
                for failed in report.failed_files:
                    print(f"  ! {failed.path}: {failed.reason}")
            return 0

        case "status":
            for alias, counts in service.untranslated_summary().items():
                if not counts:
                    print(f"{alias}: no target locales")
                    continue
                details = ", ".join(f"{name}: {count}" for name, count in counts.items())
                print(f"{alias}: {details}")
            return 0

        case "publish":
            written = service.publish(force=args.force)
            print(f"{len(written)} files written")
            return 0

        case "untranslated":
            if args.source is None or args.locale is None:
                logger.error("The untranslated command needs --source and --locale")
                return 2
            for entry in service.get_entries(args.source, args.locale, StatusFilter.UNTRANSLATED):
                print(f"{entry.hash}  {entry.text}")
            return 0

        case _:
            logger.error(f"Unknown command: {args.command}")
            return 2


def main(argv: list[str] | None = None) -> int:
    """
    Run the locsync command line.

    Args:
        argv: Arguments without the program name (defaults to sys.argv[1:])

    Returns:
        Process exit code
    """
    args = parse_arguments(argv)
    setup_logging(args.verbose, args.log_file)

    try:
        config = ConfigManager.load_config(args.config_file)
    except FileNotFoundError as e:
        logger.error(str(e))
        return 1
    except (yaml.YAMLError, ValueError, ValidationError) as e:
        logger.error(f"Failed to load configuration: {e}")
        return 1

    try:
        context = ConfigManager.build_context(config)
        return run_command(LocalizationService(context), args)
    except LocSyncError as e:
        logger.error(f"[{e.code}] {e}")
        return 1
    except OSError as e:
        logger.error(f"File operation failed: {e}")
        return 1
