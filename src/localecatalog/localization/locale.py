"""Per-language catalog manager.

Locale is the entry point of the package: it owns the base path and language,
loads domains through FileResolver and the catalog parsers, and answers
lookups with a graceful fallback.

Key behaviors:
- add_domain() does all file I/O and parsing before taking the write lock,
  so a slow or failing load never blocks concurrent lookups
- The first domain added becomes the default domain
- Re-adding a domain replaces it whole
- Lookups never raise: a missing domain formats the source string, and
  plural lookups apply ``n == 1 -> singular, else plural``

Example:
    >>> locale = Locale("/usr/share/locale", "de_DE")
    >>> locale.add_domain("messages")  # doctest: +SKIP
    >>> locale.get("Open file")  # doctest: +SKIP
    'Datei öffnen'
    >>> locale.get_plural("one file", "%d files", 5)
    '5 files'

Python 3.13+.
"""

from __future__ import annotations

import logging
import os
from contextlib import AbstractContextManager
from typing import TYPE_CHECKING

from localecatalog.catalog.domain import Domain
from localecatalog.catalog.parsers import CatalogParser, parse_file
from localecatalog.catalog.resolver import FileResolver
from localecatalog.config import LocaleConfig
from localecatalog.constants import UNDETERMINED_LANGUAGE_TAG
from localecatalog.errors import CatalogNotFoundError, ErrorContext, TagMismatchError
from localecatalog.locale_utils import (
    get_system_locale,
    normalize_locale,
    simplify_locale,
    to_language_tag,
)
from localecatalog.localization.registry import DomainRegistry, RegistryState
from localecatalog.localization.types import DomainName, LanguageTag, LocaleCatalog, MessageId
from localecatalog.runtime.formatting import format_count, sprintf
from localecatalog.runtime.rwlock import RWLock

if TYPE_CHECKING:
    from pathlib import Path

__all__ = ["Locale"]

logger = logging.getLogger(__name__)


def _spelling(identifier: str) -> str:
    return normalize_locale(simplify_locale(identifier)).lower()


class Locale:
    """All translation domains of one language.

    Thread Safety:
        One RWLock guards the registry and the default domain name. Lookups
        share the read side; add_domain, add_parsed_domain and
        set_default_domain_name take the write side only for the final
        registry update.

    Attributes:
        path: Base directory for locale files
        language: Language identifier (charset and modifier stripped)
        language_tag: BCP-47 tag parsed from language ("und" if unparseable)
    """

    __slots__ = ("_config", "_lock", "_registry", "_resolver")

    def __init__(
        self,
        path: str | os.PathLike[str],
        language: str | None = None,
        *,
        config: LocaleConfig | None = None,
    ) -> None:
        """Create a Locale with no domains loaded.

        Args:
            path: Base directory for locale files
            language: Language identifier such as "de_DE" or "pt-BR".
                None uses the system locale.
            config: Locale settings (default: LocaleConfig())
        """
        self._config = config or LocaleConfig()
        self._resolver = FileResolver(
            path,
            language if language is not None else get_system_locale(),
            config=self._config.resolver,
        )
        self._registry = DomainRegistry()
        self._lock = RWLock()

    def __repr__(self) -> str:
        return f"Locale(path={str(self.path)!r}, language={self.language!r})"

    @property
    def path(self) -> Path:
        return self._resolver.path

    @property
    def language(self) -> str:
        return self._resolver.language

    @property
    def language_tag(self) -> LanguageTag:
        return self._resolver.language_tag

    @property
    def config(self) -> LocaleConfig:
        return self._config

    @property
    def resolver(self) -> FileResolver:
        return self._resolver

    def _read(self) -> AbstractContextManager[None]:
        return self._lock.read(timeout=self._config.lock_timeout)

    def _write(self) -> AbstractContextManager[None]:
        return self._lock.write(timeout=self._config.lock_timeout)

    # ------------------------------------------------------------------
    # Registry mutation
    # ------------------------------------------------------------------

    def add_domain(self, name: DomainName) -> None:
        """Load the catalog for domain name and register it.

        If the domain is already registered it is reloaded and replaced.

        Raises:
            CatalogNotFoundError: If no .po or .mo file exists for name
            CatalogIsDirectoryError: If the resolved path is a directory
            UnsupportedFormatError: If the resolved file has another extension
            CatalogIOError: If the file cannot be read
            CatalogParseError: If the file content cannot be parsed
        """
        file = self._resolver.resolve(name)
        if file is None:
            msg = f"No .mo or .po file found for domain {name!r} in {self.path} ({self.language})"
            raise CatalogNotFoundError(
                msg,
                ErrorContext(operation="resolve", path=str(self.path), domain=name),
            )

        parser = parse_file(file, locale=self.language)
        self._store(name, parser.domain())
        logger.info("Loaded domain %r for %s from %s", name, self.language, file)

    def add_parsed_domain(self, name: DomainName, parsed: CatalogParser | Domain) -> None:
        """Register an already parsed catalog under name.

        Args:
            name: Domain name
            parsed: A parser whose parse() has run, or a Domain
        """
        domain = parsed if isinstance(parsed, Domain) else parsed.domain()
        self._store(name, domain)

    def _store(self, name: DomainName, domain: Domain) -> None:
        with self._write():
            self._registry.put(name, domain)

    def get_default_domain_name(self) -> DomainName:
        """Name of the domain used by lookups without an explicit domain."""
        with self._read():
            return self._registry.default_domain

    def set_default_domain_name(self, name: DomainName) -> None:
        """Set the default domain; the domain need not be loaded yet."""
        with self._write():
            self._registry.default_domain = name

    @property
    def default_domain(self) -> DomainName:
        return self.get_default_domain_name()

    @default_domain.setter
    def default_domain(self, name: DomainName) -> None:
        self.set_default_domain_name(name)

    # ------------------------------------------------------------------
    # Registry inspection
    # ------------------------------------------------------------------

    @property
    def domain_names(self) -> tuple[DomainName, ...]:
        with self._read():
            return self._registry.names()

    def has_domain(self, name: DomainName) -> bool:
        with self._read():
            return name in self._registry

    def get_domain(self, name: DomainName) -> Domain | None:
        """Return the registered Domain for name, or None."""
        with self._read():
            return self._registry.get(name)

    def registry_state(self) -> RegistryState:
        """Consistent view of the default name and all domains."""
        with self._read():
            return self._registry.state()

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get(self, key: MessageId, *args: object) -> str:
        """Translate key in the default domain."""
        with self._read():
            return self._get_in_domain(self._registry.default_domain, key, args)

    def get_in_domain(self, domain: DomainName, key: MessageId, *args: object) -> str:
        """Translate key in domain; format key itself if domain is absent."""
        with self._read():
            return self._get_in_domain(domain, key, args)

    def _get_in_domain(self, domain: DomainName, key: MessageId, args: tuple[object, ...]) -> str:
        found = self._registry.get(domain)
        if found is not None:
            return found.get(key, *args)
        return sprintf(key, args)

    def get_plural(self, key: MessageId, plural_key: MessageId, n: int, *args: object) -> str:
        """Translate the plural form of key selected by n in the default domain."""
        with self._read():
            return self._get_plural_in_domain(
                self._registry.default_domain, key, plural_key, n, args
            )

    def get_plural_in_domain(
        self, domain: DomainName, key: MessageId, plural_key: MessageId, n: int, *args: object
    ) -> str:
        """Translate the plural form of key selected by n in domain.

        Without the domain, ``n == 1`` formats key and any other n formats
        plural_key.
        """
        with self._read():
            return self._get_plural_in_domain(domain, key, plural_key, n, args)

    def _get_plural_in_domain(
        self,
        domain: DomainName,
        key: MessageId,
        plural_key: MessageId,
        n: int,
        args: tuple[object, ...],
    ) -> str:
        found = self._registry.get(domain)
        if found is not None:
            return found.get_plural(key, plural_key, n, *args)
        return format_count(key if n == 1 else plural_key, n, args)

    def get_context(self, key: MessageId, context: str, *args: object) -> str:
        """Translate key within context in the default domain."""
        with self._read():
            return self._get_context_in_domain(self._registry.default_domain, key, context, args)

    def get_context_in_domain(
        self, domain: DomainName, key: MessageId, context: str, *args: object
    ) -> str:
        """Translate key within context in domain."""
        with self._read():
            return self._get_context_in_domain(domain, key, context, args)

    def _get_context_in_domain(
        self, domain: DomainName, key: MessageId, context: str, args: tuple[object, ...]
    ) -> str:
        found = self._registry.get(domain)
        if found is not None:
            return found.get_context(key, context, *args)
        return sprintf(key, args)

    def get_plural_context(
        self, key: MessageId, plural_key: MessageId, n: int, context: str, *args: object
    ) -> str:
        """Translate the plural form of key within context in the default domain."""
        with self._read():
            return self._get_plural_context_in_domain(
                self._registry.default_domain, key, plural_key, n, context, args
            )

    def get_plural_context_in_domain(
        self,
        domain: DomainName,
        key: MessageId,
        plural_key: MessageId,
        n: int,
        context: str,
        *args: object,
    ) -> str:
        """Translate the plural form of key within context in domain."""
        with self._read():
            return self._get_plural_context_in_domain(domain, key, plural_key, n, context, args)

    def _get_plural_context_in_domain(
        self,
        domain: DomainName,
        key: MessageId,
        plural_key: MessageId,
        n: int,
        context: str,
        args: tuple[object, ...],
    ) -> str:
        found = self._registry.get(domain)
        if found is not None:
            return found.get_plural_context(key, plural_key, n, context, *args)
        return format_count(key if n == 1 else plural_key, n, args)

    def is_translated(
        self,
        key: MessageId,
        *,
        domain: DomainName | None = None,
        n: int | None = None,
        context: str | None = None,
    ) -> bool:
        """Check whether key has a translation.

        Args:
            key: msgid to check
            domain: Domain to look in (default domain if None)
            n: If given, check the plural form selected for n
            context: msgctxt to look in
        """
        with self._read():
            name = self._registry.default_domain if domain is None else domain
            found = self._registry.get(name)
            return found is not None and found.is_translated(key, n=n, context=context)

    # ------------------------------------------------------------------
    # Export and persistence
    # ------------------------------------------------------------------

    def export_catalog(self, tag: LanguageTag) -> LocaleCatalog:
        """Merge every domain into one flat catalog.

        Domains are merged in lexicographic name order; on a key defined by
        several domains the lexicographically last domain wins.

        Identifiers that do not parse map to the tag "und". Two such
        identifiers match only when their spellings agree, so "!!!" does not
        match "???".

        Args:
            tag: Expected language tag, in any spelling ("en_US" or "en-US")

        Raises:
            TagMismatchError: If tag does not match this Locale's tag
        """
        requested = to_language_tag(tag)
        if requested != self.language_tag or (
            requested == UNDETERMINED_LANGUAGE_TAG
            and _spelling(tag) != _spelling(self.language)
        ):
            if requested == self.language_tag:
                msg = f"Tags do not match: {self.language!r} != {tag!r} (both unparseable)"
            else:
                msg = f"Tags do not match: {self.language_tag} != {requested}"
            raise TagMismatchError(
                msg,
                ErrorContext(operation="export", path=str(self.path), detail=requested),
            )

        translations: dict[MessageId, str] = {}
        with self._read():
            state = self._registry.state()
        for name in sorted(state.domains):
            translations.update(state.domains[name].get_all())
        return LocaleCatalog(tag=self.language_tag, path=str(self.path), translations=translations)

    get_translations = export_catalog

    def to_bytes(self) -> bytes:
        """Encode this Locale and all its domains to a binary blob."""
        from localecatalog.serialization.codec import encode_locale  # noqa: PLC0415

        return encode_locale(self)

    @classmethod
    def from_bytes(cls, data: bytes, *, config: LocaleConfig | None = None) -> Locale:
        """Rebuild a Locale from a blob produced by to_bytes().

        Raises:
            CatalogDecodeError: If data is malformed
        """
        from localecatalog.serialization.codec import decode_locale  # noqa: PLC0415

        return decode_locale(data, config=config)

    @classmethod
    def from_registry(
        cls,
        path: str | os.PathLike[str],
        language: str,
        registry: DomainRegistry,
        *,
        config: LocaleConfig | None = None,
    ) -> Locale:
        """Create a Locale that takes ownership of a populated registry."""
        locale = cls(path, language, config=config)
        locale._registry = registry
        return locale
