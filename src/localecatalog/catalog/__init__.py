"""gettext catalog package.

Turns .po and .mo files into immutable Domains and locates them on disk.

Submodules:
    translation - Translation (one msgid with its plural forms)
    domain      - Domain (message tables and plural rules of one catalog)
    parsers     - CatalogParser protocol, PoParser, MoParser, parse_file
    resolver    - FileResolver (language directory and mtime resolution)

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from .domain import CONTEXT_SEPARATOR, Domain
from .parsers import PARSERS, CatalogParser, MoParser, PoParser, domain_from_catalog, parse_file
from .resolver import FileResolver, modification_time
from .translation import Translation

__all__ = [
    # Data model
    "Translation",
    "Domain",
    "CONTEXT_SEPARATOR",
    # Parsing
    "CatalogParser",
    "PoParser",
    "MoParser",
    "PARSERS",
    "parse_file",
    "domain_from_catalog",
    # Resolution
    "FileResolver",
    "modification_time",
]
