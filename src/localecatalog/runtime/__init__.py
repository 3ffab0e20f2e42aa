"""Runtime helpers shared by every lookup.

Provides printf-style formatting with graceful failure, gettext plural-form
selection, and the reader-writer lock guarding each Locale.

Python 3.13+.
"""

from .formatting import format_count, sprintf
from .plural import DEFAULT_PLURAL_EXPR, compile_plural, select_plural_form
from .rwlock import RWLock

__all__ = [
    "DEFAULT_PLURAL_EXPR",
    "RWLock",
    "compile_plural",
    "format_count",
    "select_plural_form",
    "sprintf",
]
