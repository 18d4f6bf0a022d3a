"""
Placeholder formatting for translated texts.

Translatable texts use printf-style placeholders so that translators can
reorder arguments: ``%1$s`` refers to the first argument explicitly,
``%s`` and ``%d`` consume arguments in sequence, ``%%`` is a literal
percent sign.
"""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

_PLACEHOLDER_PATTERN = re.compile(r"%(?:(\d+)\$)?(?:\.(\d+))?([sdf%])")


def format_placeholders(text: str, *args: object) -> str:
    """
    Fill printf-style placeholders in a text.

    Placeholders that refer to missing arguments are left untouched.

    Args:
        text: Text containing placeholders
        *args: Values to insert

    Returns:
        The formatted text
    """
    if not args:
        return text

    sequence = 0

    def replace(match: re.Match[str]) -> str:
        nonlocal sequence
        position, precision, conversion = match.groups()

        if conversion == "%":
            return "%"

        if position is not None:
            index = int(position) - 1
        else:
            index = sequence
            sequence += 1

        if index < 0 or index >= len(args):
            logger.debug(f"Placeholder {match.group(0)!r} has no matching argument")
            return match.group(0)

        value = args[index]
        match conversion:
            case "d":
                try:
                    return str(int(value))  # pyright: ignore[reportArgumentType]
                except (TypeError, ValueError):
                    return str(value)
            case "f":
                digits = int(precision) if precision is not None else 6
                try:
                    return f"{float(value):.{digits}f}"  # pyright: ignore[reportArgumentType]
                except (TypeError, ValueError):
                    return str(value)
            case _:
                return str(value)

    return _PLACEHOLDER_PATTERN.sub(replace, text)
