"""
Atomic file writing helpers.

Readers of a generated file must never observe a partially written
version of it: content is written to a temporary file next to the target
and moved into place in a single rename.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


def atomic_write_text(path: Path, content: str, encoding: str = "utf-8") -> None:
    """
    Write text to a file with an atomic replace.

    The content is written with ``\\n`` line endings regardless of the
    platform, and without a byte order mark.

    Args:
        path: Target file path; parent directories are created as needed
        content: Text content to write
        encoding: Text encoding to use

    Raises:
        OSError: If the file cannot be written
    """
    _ = path.parent.mkdir(parents=True, exist_ok=True)

    temp_file = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding=encoding,
            newline="\n",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as temp_file:
            _ = temp_file.write(content)
            temp_file.flush()
            temp_path = Path(temp_file.name)

        # Atomic move
        _ = temp_path.replace(path)
        logger.debug(f"Wrote {path}")

    except Exception as e:
        # Clean up temporary file if it exists
        if temp_file and Path(temp_file.name).exists():
            Path(temp_file.name).unlink(missing_ok=True)
        raise OSError(f"Failed to write {path}: {e}") from e
