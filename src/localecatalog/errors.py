"""Catalog loading and persistence exceptions.

These exceptions report failures of the operations that change or persist a
Locale: resolving a catalog file, reading and parsing it, decoding a stored
blob, and exporting a catalog. Lookups never raise; they degrade to direct
string formatting instead.

Design:
    - One base class (CatalogError) so callers can catch every failure at once
    - Carry a structured ErrorContext for diagnostics
    - Immutable after construction
    - @final decorator prevents subclassing of concrete kinds

Hierarchy:
    CatalogError (base)
    ├─ CatalogNotFoundError (no .po/.mo candidate exists)
    ├─ CatalogIsDirectoryError (resolved path is a directory)
    ├─ UnsupportedFormatError (extension is neither .po nor .mo)
    ├─ CatalogIOError (reading the file failed)
    ├─ CatalogParseError (parser rejected the file content)
    ├─ CatalogDecodeError (malformed persisted blob)
    └─ TagMismatchError (export requested for another language tag)

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import final

__all__ = [
    "CatalogDecodeError",
    "CatalogError",
    "CatalogIOError",
    "CatalogIsDirectoryError",
    "CatalogNotFoundError",
    "CatalogParseError",
    "ErrorContext",
    "TagMismatchError",
    "UnsupportedFormatError",
]


@dataclass(frozen=True, slots=True)
class ErrorContext:
    """Context for catalog error diagnosis.

    Attributes:
        operation: Operation being performed (resolve, parse, decode, export)
        path: Filesystem path involved (optional)
        domain: Domain name involved (optional)
        detail: Free-form detail such as the offending tag or byte offset
    """

    operation: str
    path: str | None = None
    domain: str | None = None
    detail: str | None = None


class CatalogError(Exception):
    """Base exception for all catalog failures.

    Immutable after construction.

    Attributes:
        context: Structured diagnostic context
    """

    __slots__ = ("_context", "_frozen")

    _context: ErrorContext | None
    _frozen: bool

    # Python's exception machinery sets these while propagating.
    _PYTHON_EXCEPTION_ATTRS: frozenset[str] = frozenset(
        ("__traceback__", "__context__", "__cause__", "__suppress_context__", "__notes__")
    )

    def __init__(self, message: str, context: ErrorContext | None = None) -> None:
        """Initialize CatalogError.

        Args:
            message: Human-readable error description
            context: Structured diagnostic context (optional)
        """
        super().__init__(message)
        object.__setattr__(self, "_context", context)
        object.__setattr__(self, "_frozen", True)

    def __setattr__(self, name: str, value: object) -> None:
        """Reject attribute mutations after initialization.

        Raises:
            AttributeError: If attempting to modify after construction
        """
        if name in self._PYTHON_EXCEPTION_ATTRS:
            object.__setattr__(self, name, value)
            return
        if getattr(self, "_frozen", False):
            msg = f"Cannot modify catalog error attribute: {name}"
            raise AttributeError(msg)
        object.__setattr__(self, name, value)

    @property
    def context(self) -> ErrorContext | None:
        """Structured diagnostic context."""
        return self._context

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return f"{self.__class__.__name__}({self.args[0]!r}, context={self._context!r})"


@final
class CatalogNotFoundError(CatalogError):
    """No .po or .mo file exists for the requested domain."""


@final
class CatalogIsDirectoryError(CatalogError):
    """The path handed to the parser is a directory."""


@final
class UnsupportedFormatError(CatalogError):
    """The file extension does not map to a known catalog parser."""


@final
class CatalogIOError(CatalogError):
    """Reading a catalog file failed at the operating-system level.

    The originating OSError is chained as ``__cause__``.
    """


@final
class CatalogParseError(CatalogError):
    """The parser rejected the file content (corrupt .mo, undecodable .po)."""


@final
class CatalogDecodeError(CatalogError):
    """A persisted catalog blob is malformed, truncated, or of unknown version.

    Decoding aborts on the first error; a partially decoded Locale is never
    returned.
    """


@final
class TagMismatchError(CatalogError):
    """Export was requested for a language tag other than the Locale's own."""
