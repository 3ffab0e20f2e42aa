"""Enumerations for localecatalog type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.

Python 3.13+.
"""

from enum import StrEnum

from localecatalog.constants import MO_EXTENSION, PO_EXTENSION


class CatalogFormat(StrEnum):
    """On-disk gettext catalog format.

    StrEnum provides automatic string conversion: str(CatalogFormat.PO) == "po"
    """

    PO = "po"
    """Editable translation-entry source: messages.po"""

    MO = "mo"
    """Compiled binary dictionary: messages.mo"""

    @property
    def extension(self) -> str:
        """File extension including the leading dot."""
        return PO_EXTENSION if self is CatalogFormat.PO else MO_EXTENSION


class WireTag(StrEnum):
    """Logical type of a value in the binary wire format.

    The single-byte code written to the stream is WIRE_TAG_CODES[tag].
    """

    NONE = "none"
    FALSE = "false"
    TRUE = "true"
    INT = "int"
    STR = "str"
    BYTES = "bytes"
    LIST = "list"
    MAP = "map"


WIRE_TAG_CODES: dict[WireTag, int] = {tag: code for code, tag in enumerate(WireTag)}
"""Stable byte code for each wire tag (declaration order)."""

WIRE_CODE_TAGS: dict[int, WireTag] = {code: tag for tag, code in WIRE_TAG_CODES.items()}


__all__ = [
    "WIRE_CODE_TAGS",
    "WIRE_TAG_CODES",
    "CatalogFormat",
    "WireTag",
]
