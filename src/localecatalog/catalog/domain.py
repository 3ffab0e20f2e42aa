"""Translation store for one gettext domain.

A Domain holds the plural metadata and message tables parsed from a single
.po or .mo file. It is immutable after construction: reloading a domain builds
a new Domain and the registry swaps it in whole, so readers never observe a
half-populated table.

Lookups never raise. A missing entry formats the source string instead, and
plural lookups without a translation apply the ``n == 1`` rule.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from localecatalog.catalog.translation import Translation
from localecatalog.runtime.formatting import format_count, sprintf
from localecatalog.runtime.plural import DEFAULT_PLURAL_EXPR, select_plural_form
from localecatalog.serialization.snapshot import DomainSnapshot

__all__ = ["CONTEXT_SEPARATOR", "Domain"]

CONTEXT_SEPARATOR: str = "\x04"
"""gettext separator between msgctxt and msgid in flattened keys."""


class Domain:
    """Message tables and plural rules for one domain.

    Example:
        >>> domain = Domain(
        ...     language="de",
        ...     translations={"Hello": Translation("Hello", forms=("Hallo",))},
        ... )
        >>> domain.get("Hello")
        'Hallo'
        >>> domain.get("Missing %s", "key")
        'Missing key'
    """

    __slots__ = (
        "_contexts",
        "_headers",
        "_language",
        "_nplurals",
        "_plural",
        "_plural_forms",
        "_translations",
    )

    def __init__(
        self,
        *,
        headers: Mapping[str, str] | None = None,
        language: str = "",
        plural_forms: str = "",
        nplurals: int = 2,
        plural: str = DEFAULT_PLURAL_EXPR,
        translations: Mapping[str, Translation] | None = None,
        contexts: Mapping[str, Mapping[str, Translation]] | None = None,
    ) -> None:
        self._headers: Mapping[str, str] = MappingProxyType(dict(headers or {}))
        self._language = language
        self._plural_forms = plural_forms
        self._nplurals = nplurals
        self._plural = plural or DEFAULT_PLURAL_EXPR
        self._translations: Mapping[str, Translation] = MappingProxyType(dict(translations or {}))
        self._contexts: Mapping[str, Mapping[str, Translation]] = MappingProxyType(
            {ctx: MappingProxyType(dict(table)) for ctx, table in (contexts or {}).items()}
        )

    @property
    def headers(self) -> Mapping[str, str]:
        return self._headers

    @property
    def language(self) -> str:
        return self._language

    @property
    def plural_forms(self) -> str:
        """Raw Plural-Forms header text."""
        return self._plural_forms

    @property
    def nplurals(self) -> int:
        return self._nplurals

    @property
    def plural(self) -> str:
        """Plural selector expression (C syntax)."""
        return self._plural

    @property
    def translations(self) -> Mapping[str, Translation]:
        """Read-only msgid -> Translation table (no context)."""
        return self._translations

    @property
    def contexts(self) -> Mapping[str, Mapping[str, Translation]]:
        """Read-only msgctxt -> msgid -> Translation tables."""
        return self._contexts

    def __len__(self) -> int:
        return len(self._translations) + sum(len(t) for t in self._contexts.values())

    def __bool__(self) -> bool:
        # An empty catalog is still a loaded domain.
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Domain):
            return NotImplemented
        return self.to_snapshot() == other.to_snapshot()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"Domain(language={self._language!r}, nplurals={self._nplurals}, "
            f"translations={len(self._translations)}, contexts={len(self._contexts)})"
        )

    def plural_form(self, n: int) -> int:
        """Index of the plural form this domain's rule selects for n."""
        return select_plural_form(self._plural, self._nplurals, n)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get(self, key: str, *args: object) -> str:
        """Translate key, formatting the result with args."""
        translation = self._translations.get(key)
        text = translation.get() if translation is not None else key
        return sprintf(text, args)

    def get_plural(self, key: str, plural_key: str, n: int, *args: object) -> str:
        """Translate the plural form of key selected by n.

        Without args the count n is offered as the format argument, so
        ``get_plural("one file", "%d files", 5)`` gives "5 files".
        """
        translation = self._translations.get(key)
        return format_count(self._select(translation, key, plural_key, n), n, args)

    def get_context(self, key: str, context: str, *args: object) -> str:
        """Translate key within msgctxt context."""
        translation = self._contexts.get(context, {}).get(key)
        text = translation.get() if translation is not None else key
        return sprintf(text, args)

    def get_plural_context(
        self, key: str, plural_key: str, n: int, context: str, *args: object
    ) -> str:
        """Translate the plural form of key within msgctxt context."""
        translation = self._contexts.get(context, {}).get(key)
        return format_count(self._select(translation, key, plural_key, n), n, args)

    def _select(
        self, translation: Translation | None, key: str, plural_key: str, n: int
    ) -> str:
        if translation is None:
            return key if n == 1 else plural_key
        return translation.get_plural(self.plural_form(n))

    def is_translated(
        self, key: str, *, n: int | None = None, context: str | None = None
    ) -> bool:
        """Check whether key has a translation.

        Args:
            key: msgid to check
            n: If given, check the plural form selected for n
            context: msgctxt to look in; None means no context
        """
        table = self._translations if context is None else self._contexts.get(context, {})
        translation = table.get(key)
        if translation is None:
            return False
        if n is None:
            return translation.is_translated
        index = self.plural_form(n)
        return index < len(translation.forms) and bool(translation.forms[index])

    def get_all(self) -> dict[str, str]:
        """Enumerate every entry as key -> resolved singular string.

        Context entries use the gettext flattened key ``ctx + "\\x04" + id``.
        """
        result = {key: t.get() for key, t in self._translations.items()}
        for context, table in self._contexts.items():
            for key, translation in table.items():
                result[f"{context}{CONTEXT_SEPARATOR}{key}"] = translation.get()
        return result

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def to_snapshot(self) -> DomainSnapshot:
        """Capture this domain as a format-agnostic DomainSnapshot."""
        return DomainSnapshot(
            headers=dict(self._headers),
            language=self._language,
            plural_forms=self._plural_forms,
            nplurals=self._nplurals,
            plural=self._plural,
            translations=dict(self._translations),
            contexts={ctx: dict(table) for ctx, table in self._contexts.items()},
        )

    @classmethod
    def from_snapshot(cls, snapshot: DomainSnapshot) -> Domain:
        """Rebuild a Domain from a snapshot."""
        return cls(
            headers=snapshot.headers,
            language=snapshot.language,
            plural_forms=snapshot.plural_forms,
            nplurals=snapshot.nplurals,
            plural=snapshot.plural,
            translations=snapshot.translations,
            contexts=snapshot.contexts,
        )
