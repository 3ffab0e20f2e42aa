"""localecatalog - gettext catalog management with locale fallback.

Loads .po and .mo translation catalogs from a locale directory tree, answers
singular, plural and context lookups that never raise, exports a flat catalog
per language, and persists whole Locales to a versioned binary format.

Public API:
    Locale - All translation domains of one language
    Domain - Message tables and plural rules of one catalog
    FileResolver - Locate <domain>.po / <domain>.mo for a language
    PoParser, MoParser, parse_file - Catalog parsers
    encode_locale, decode_locale - Binary persistence
    LocaleConfig, ResolverConfig - Configuration

Exceptions:
    CatalogError - Base exception class
    CatalogNotFoundError, CatalogIsDirectoryError, UnsupportedFormatError,
    CatalogIOError, CatalogParseError, CatalogDecodeError, TagMismatchError

Submodules:
    localecatalog.catalog - Parsing and file resolution
    localecatalog.localization - Locale, registry, export types
    localecatalog.serialization - Wire format, snapshots, codec
    localecatalog.runtime - Formatting, plural rules, RWLock
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

# The catalog package must load before serialization (snapshot -> translation).
from .catalog import Domain, FileResolver, MoParser, PoParser, Translation, parse_file
from .config import LocaleConfig, ResolverConfig
from .errors import (
    CatalogDecodeError,
    CatalogError,
    CatalogIOError,
    CatalogIsDirectoryError,
    CatalogNotFoundError,
    CatalogParseError,
    ErrorContext,
    TagMismatchError,
    UnsupportedFormatError,
)
from .localization import Locale, LocaleCatalog
from .serialization.codec import decode_domain, decode_locale, encode_domain, encode_locale

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
try:
    __version__ = _get_version("localecatalog")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "CatalogDecodeError",
    "CatalogError",
    "CatalogIOError",
    "CatalogIsDirectoryError",
    "CatalogNotFoundError",
    "CatalogParseError",
    "Domain",
    "ErrorContext",
    "FileResolver",
    "Locale",
    "LocaleCatalog",
    "LocaleConfig",
    "MoParser",
    "PoParser",
    "ResolverConfig",
    "TagMismatchError",
    "Translation",
    "UnsupportedFormatError",
    "__version__",
    "decode_domain",
    "decode_locale",
    "encode_domain",
    "encode_locale",
    "parse_file",
]
