"""
Version utilities for locsync.

The version is read from the installed distribution metadata.
"""

import logging
from functools import lru_cache
from importlib.metadata import PackageNotFoundError, version

logger = logging.getLogger(__name__)

UNKNOWN_VERSION = "0.0.0+unknown"


@lru_cache(maxsize=1)
def get_version() -> str:
    """
    Get the installed version of locsync.

    Returns:
        Version string, or a placeholder when running from a source tree
        that has not been installed
    """
    try:
        return version("locsync")
    except PackageNotFoundError:
        logger.debug("locsync is not installed, version unknown")
        return UNKNOWN_VERSION
