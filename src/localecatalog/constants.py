"""Shared constants for localecatalog.

Centralizes file-layout names, wire-format identifiers, and decode limits so
that the resolver, parsers, and codec agree on a single source of truth.

Constants are grouped by domain:
- File layout: directory and extension names used by the resolver
- Wire format: magic numbers and version of persisted catalogs
- Limits: bounds applied while decoding untrusted blobs

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # File layout
    "LC_MESSAGES",
    "PO_EXTENSION",
    "MO_EXTENSION",
    "UNDETERMINED_LANGUAGE_TAG",
    # Wire format
    "LOCALE_MAGIC",
    "DOMAIN_MAGIC",
    "FORMAT_VERSION",
    # Limits
    "MAX_DECODE_DEPTH",
]

# ============================================================================
# FILE LAYOUT
# ============================================================================

LC_MESSAGES: str = "LC_MESSAGES"
"""Subdirectory conventionally holding gettext catalogs inside a language dir."""

PO_EXTENSION: str = ".po"
"""Editable (human-readable) catalog extension."""

MO_EXTENSION: str = ".mo"
"""Compiled (binary) catalog extension."""

UNDETERMINED_LANGUAGE_TAG: str = "und"
"""BCP-47 tag used when a language identifier cannot be parsed."""

# ============================================================================
# WIRE FORMAT
# ============================================================================
#
# Every persisted blob starts with a 4-byte magic identifying the layer
# (locale envelope or domain payload) followed by a single version byte.
# Decoders reject any version they do not know instead of guessing.

LOCALE_MAGIC: bytes = b"LCLE"
"""Magic prefix of an encoded LocaleSnapshot envelope."""

DOMAIN_MAGIC: bytes = b"LCDP"
"""Magic prefix of an encoded DomainSnapshot payload."""

FORMAT_VERSION: int = 1
"""Current wire format version written by the encoder."""

# ============================================================================
# DECODE LIMITS
# ============================================================================

MAX_DECODE_DEPTH: int = 32
"""Maximum container nesting accepted while decoding a blob."""
