"""Per-language localization package.

Submodules:
    types    - PEP 695 type aliases and the LocaleCatalog export record
    registry - DomainRegistry (copy-on-write name -> Domain map)
    locale   - Locale (domain loading, lookups, export, persistence)

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from localecatalog.localization.locale import Locale
from localecatalog.localization.registry import DomainRegistry, RegistryState
from localecatalog.localization.types import DomainName, LanguageTag, LocaleCatalog, MessageId

__all__ = [
    # Main entry point
    "Locale",
    # Registry
    "DomainRegistry",
    "RegistryState",
    # Export
    "LocaleCatalog",
    # Type aliases for user code type annotations
    "DomainName",
    "LanguageTag",
    "MessageId",
]
