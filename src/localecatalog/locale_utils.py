"""Locale utilities for identifier simplification and BCP-47 tags.

Centralizes the locale string handling used by the resolver and the Locale
façade: stripping charset/modifier suffixes, converting between POSIX and
BCP-47 spellings, and detecting the system locale.

Python 3.13+.
"""

from __future__ import annotations

import functools
import os
from typing import TYPE_CHECKING

from babel.core import get_locale_identifier, parse_locale

from localecatalog.constants import UNDETERMINED_LANGUAGE_TAG

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "clear_locale_cache",
    "get_babel_locale",
    "get_system_locale",
    "normalize_locale",
    "simplify_locale",
    "to_language_tag",
]


def simplify_locale(identifier: str) -> str:
    """Strip charset, modifier, and LANGUAGE-list suffixes from a locale.

    Accepts the spellings found in environment variables and returns the bare
    language/territory part used to name catalog directories.

    Args:
        identifier: Raw locale string (e.g., "de_DE.UTF-8", "el_GR@euro")

    Returns:
        Simplified identifier (e.g., "de_DE", "el_GR")

    Example:
        >>> simplify_locale("en_US.UTF-8")
        'en_US'
        >>> simplify_locale("sr_RS@latin")
        'sr_RS'
        >>> simplify_locale("pt_BR:pt:en")
        'pt_BR'
    """
    for separator in (":", "@", "."):
        identifier = identifier.split(separator, 1)[0]
    return identifier.strip()


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format for Babel.

    Args:
        locale_code: BCP-47 locale code (e.g., "en-US", "pt-BR")

    Returns:
        POSIX-formatted locale code (e.g., "en_US", "pt_BR")

    Example:
        >>> normalize_locale("en-US")
        'en_US'
    """
    return locale_code.replace("-", "_")


@functools.lru_cache(maxsize=128)
def to_language_tag(identifier: str) -> str:
    """Parse a locale identifier into its canonical BCP-47 tag string.

    Both POSIX ("pt_BR") and BCP-47 ("pt-br") spellings are accepted. Case is
    canonicalized by Babel's parser: language lowercase, script titlecase,
    territory uppercase. Charset and modifier suffixes are dropped.

    Args:
        identifier: Locale identifier in any common spelling

    Returns:
        Tag string such as "pt-BR" or "zh-Hant-TW"; "und" if unparseable

    Example:
        >>> to_language_tag("en_us")
        'en-US'
        >>> to_language_tag("not a locale")
        'und'
    """
    simplified = normalize_locale(simplify_locale(identifier))
    try:
        parts = parse_locale(simplified)
    except ValueError:
        return UNDETERMINED_LANGUAGE_TAG
    # Modifier never takes part in the tag.
    return get_locale_identifier(parts[:4], sep="-")


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(simplify_locale(locale_code)))


def clear_locale_cache() -> None:
    """Clear the cached tag and Babel locale lookups."""
    to_language_tag.cache_clear()
    get_babel_locale.cache_clear()


def get_system_locale(*, raise_on_failure: bool = False) -> str:
    """Detect system locale from OS and environment variables.

    Detection order:
    1. Python locale.getlocale() (OS-level locale)
    2. LC_ALL environment variable (overrides all)
    3. LC_MESSAGES environment variable (for message catalogs)
    4. LANG environment variable (default locale)

    Filters out "C" and "POSIX" pseudo-locales.

    Args:
        raise_on_failure: If True, raise RuntimeError when locale cannot be
            determined. If False (default), return "en_US" as fallback.

    Returns:
        Detected locale code in simplified POSIX format.

    Raises:
        RuntimeError: If raise_on_failure is True and locale cannot be determined.
    """
    import locale as locale_module  # noqa: PLC0415

    try:
        system_locale, _ = locale_module.getlocale()
        if system_locale and system_locale not in ("C", "POSIX"):
            return normalize_locale(simplify_locale(system_locale))
    except (ValueError, AttributeError):
        pass

    for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        value = os.environ.get(var)
        if value and value not in ("C", "POSIX", ""):
            return normalize_locale(simplify_locale(value))

    if raise_on_failure:
        msg = (
            "Could not determine system locale. "
            "Set LC_ALL, LC_MESSAGES, or LANG environment variable."
        )
        raise RuntimeError(msg)

    return "en_US"
