"""
locsync - extraction and synchronization of translatable strings.

Scans server-side (PHP, Python) and client-side (JavaScript) source trees
for calls to the translation markers, keeps a content-addressed registry
of the discovered strings, and maintains per-locale translation files and
client libraries.
"""

import sys

from .context import LocalizationContext
from .main import main as cli_main
from .service import LocalizationService


def main() -> None:
    """Console script entry point."""
    try:
        sys.exit(cli_main())
    except KeyboardInterrupt:
        import logging

        logger = logging.getLogger(__name__)
        logger.info("Interrupted by user")
        sys.exit(130)


__all__ = ["LocalizationContext", "LocalizationService", "main"]
