"""printf-style interpolation used by every lookup.

Both translated strings and untranslated fallbacks pass through sprintf(), so
a lookup always returns text: a formatting mistake in a catalog (or in the
caller's arguments) produces the unformatted string and a warning rather than
an exception.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

__all__ = ["format_count", "sprintf"]

logger = logging.getLogger(__name__)


def sprintf(fmt: str, args: tuple[object, ...]) -> str:
    """Interpolate args into a %-style format string.

    With no arguments the string is returned untouched, so literal ``%``
    characters in plain messages are safe. A single Mapping argument is used
    for named placeholders (``%(name)s``); anything else is positional.

    Args:
        fmt: Format string
        args: Interpolation arguments

    Returns:
        Formatted string, or fmt unchanged if formatting fails

    Example:
        >>> sprintf("%d files", (5,))
        '5 files'
        >>> sprintf("Hello %(name)s", ({"name": "Anna"},))
        'Hello Anna'
        >>> sprintf("100%", ())
        '100%'
    """
    if not args:
        return fmt
    values: object = args[0] if len(args) == 1 and isinstance(args[0], Mapping) else args
    try:
        return fmt % values
    except (TypeError, ValueError, KeyError) as e:
        logger.warning("Could not format %r with %d argument(s): %s", fmt, len(args), e)
        return fmt


def format_count(fmt: str, n: int, args: tuple[object, ...]) -> str:
    """Format a plural message, defaulting the arguments to the count.

    Explicit args are used as given. Without args, the count itself is offered
    as the only positional argument; messages that do not consume it (such as
    a singular form "one file") come back unchanged and nothing is logged.

    Example:
        >>> format_count("%d files", 5, ())
        '5 files'
        >>> format_count("one file", 1, ())
        'one file'
    """
    if args:
        return sprintf(fmt, args)
    if "%" not in fmt:
        return fmt
    try:
        return fmt % (n,)
    except (TypeError, ValueError, KeyError):
        return fmt
