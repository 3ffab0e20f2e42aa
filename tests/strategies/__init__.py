"""Hypothesis strategies for localecatalog property-based testing.

Strategies are organized by domain:

- catalog: message ids, Translation entries, Domains, and wire values

Usage:
    from tests.strategies import domains, wire_values
    from tests.strategies.catalog import translations, LANGUAGE_POOL
"""

from .catalog import (
    LANGUAGE_POOL,
    domains,
    message_ids,
    message_texts,
    translation_tables,
    translations,
    wire_values,
)

__all__ = [
    "LANGUAGE_POOL",
    "domains",
    "message_ids",
    "message_texts",
    "translation_tables",
    "translations",
    "wire_values",
]
