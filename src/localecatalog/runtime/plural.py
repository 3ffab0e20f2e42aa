"""gettext plural-form selection.

Catalog headers declare plural rules as C expressions, for example
``nplurals=3; plural=(n%10==1 && n%100!=11 ? 0 : ...);``. The expression is
compiled once with the standard library's gettext.c2py and cached.

When a catalog has no Plural-Forms header Babel supplies the CLDR-derived
default for the catalog's language, so an expression is always available.

Python 3.13+.
"""

from __future__ import annotations

import functools
import gettext
import logging
from collections.abc import Callable

__all__ = ["DEFAULT_PLURAL_EXPR", "compile_plural", "select_plural_form"]

logger = logging.getLogger(__name__)

DEFAULT_PLURAL_EXPR: str = "(n != 1)"
"""Germanic rule used when a header expression cannot be compiled."""


@functools.lru_cache(maxsize=256)
def compile_plural(expression: str) -> Callable[[int], int]:
    """Compile a gettext plural expression to a Python callable.

    Invalid or overly complex expressions are logged and replaced by
    DEFAULT_PLURAL_EXPR.

    Args:
        expression: C plural expression, without the ``plural=`` prefix

    Returns:
        Function mapping a count to a plural form index
    """
    try:
        return gettext.c2py(expression)
    except ValueError as e:
        logger.warning("Invalid plural expression %r (%s); using %s", expression, e, DEFAULT_PLURAL_EXPR)
        return gettext.c2py(DEFAULT_PLURAL_EXPR)


def select_plural_form(expression: str, nplurals: int, n: int) -> int:
    """Select the plural form index for count n.

    Indices outside ``range(nplurals)`` (a catalog whose expression and
    nplurals disagree) fall back to form 0.

    Example:
        >>> select_plural_form("(n != 1)", 2, 1)
        0
        >>> select_plural_form("(n != 1)", 2, 5)
        1
    """
    try:
        index = compile_plural(expression)(int(n))
    except (ZeroDivisionError, TypeError, ValueError) as e:
        logger.warning("Plural expression %r failed for n=%r: %s", expression, n, e)
        return 0
    if 0 <= index < max(nplurals, 1):
        return index
    return 0
