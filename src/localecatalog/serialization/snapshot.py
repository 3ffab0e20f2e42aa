"""Snapshot records exchanged between the registry and the binary codec.

A DomainSnapshot is the flat, format-agnostic image of one Domain; a
LocaleSnapshot is the envelope holding Locale configuration plus one
independently encoded DomainSnapshot blob per domain. Both exist only while
encoding or decoding.

The to_wire()/from_wire() methods convert between these records and plain
values (dict, list, str, int, bytes) understood by the wire layer. from_wire()
validates the shape of untrusted input and raises ValueError on mismatch; the
codec turns that into CatalogDecodeError.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from localecatalog.catalog.translation import Translation

__all__ = ["DomainSnapshot", "LocaleSnapshot"]


def _expect(value: Any, kind: type | tuple[type, ...], what: str) -> Any:
    if not isinstance(value, kind) or isinstance(value, bool) and kind is int:
        msg = f"{what}: expected {getattr(kind, '__name__', kind)}, got {type(value).__name__}"
        raise ValueError(msg)
    return value


def _expect_field(payload: Mapping[str, Any], key: str, kind: type, what: str) -> Any:
    if key not in payload:
        msg = f"{what}: missing field {key!r}"
        raise ValueError(msg)
    return _expect(payload[key], kind, f"{what}.{key}")


def _str_map(value: Any, what: str) -> dict[str, str]:
    _expect(value, dict, what)
    return {
        _expect(k, str, f"{what} key"): _expect(v, str, f"{what}[{k!r}]")
        for k, v in value.items()
    }


def _translation_to_wire(translation: Translation) -> dict[str, Any]:
    return {
        "id": translation.id,
        "plural_id": translation.plural_id,
        "forms": list(translation.forms),
    }


def _translation_from_wire(value: Any, what: str) -> Translation:
    _expect(value, dict, what)
    forms = _expect_field(value, "forms", list, what)
    return Translation(
        id=_expect_field(value, "id", str, what),
        plural_id=_expect_field(value, "plural_id", str, what),
        forms=tuple(_expect(form, str, f"{what}.forms[]") for form in forms),
    )


def _table_to_wire(table: Mapping[str, Translation]) -> dict[str, Any]:
    return {key: _translation_to_wire(t) for key, t in table.items()}


def _table_from_wire(value: Any, what: str) -> dict[str, Translation]:
    _expect(value, dict, what)
    return {
        _expect(key, str, f"{what} key"): _translation_from_wire(item, f"{what}[{key!r}]")
        for key, item in value.items()
    }


@dataclass(frozen=True, slots=True)
class DomainSnapshot:
    """Self-contained image of one Domain.

    Attributes:
        headers: Catalog header name -> value
        language: Language header value
        plural_forms: Plural-Forms header text
        nplurals: Number of plural forms
        plural: Plural selector expression
        translations: msgid -> Translation
        contexts: msgctxt -> msgid -> Translation
    """

    headers: Mapping[str, str] = field(default_factory=dict)
    language: str = ""
    plural_forms: str = ""
    nplurals: int = 2
    plural: str = "(n != 1)"
    translations: Mapping[str, Translation] = field(default_factory=dict)
    contexts: Mapping[str, Mapping[str, Translation]] = field(default_factory=dict)

    def to_wire(self) -> dict[str, Any]:
        """Convert to plain values for the wire layer."""
        return {
            "headers": dict(self.headers),
            "language": self.language,
            "plural_forms": self.plural_forms,
            "nplurals": self.nplurals,
            "plural": self.plural,
            "translations": _table_to_wire(self.translations),
            "contexts": {ctx: _table_to_wire(table) for ctx, table in self.contexts.items()},
        }

    @classmethod
    def from_wire(cls, payload: Any) -> DomainSnapshot:
        """Rebuild from plain values.

        Raises:
            ValueError: If payload does not have the DomainSnapshot shape
        """
        what = "DomainSnapshot"
        _expect(payload, dict, what)
        contexts = _expect_field(payload, "contexts", dict, what)
        return cls(
            headers=_str_map(payload.get("headers"), f"{what}.headers"),
            language=_expect_field(payload, "language", str, what),
            plural_forms=_expect_field(payload, "plural_forms", str, what),
            nplurals=_expect_field(payload, "nplurals", int, what),
            plural=_expect_field(payload, "plural", str, what),
            translations=_table_from_wire(payload.get("translations"), f"{what}.translations"),
            contexts={
                _expect(ctx, str, f"{what}.contexts key"): _table_from_wire(
                    table, f"{what}.contexts[{ctx!r}]"
                )
                for ctx, table in contexts.items()
            },
        )


@dataclass(frozen=True, slots=True)
class LocaleSnapshot:
    """Envelope for a whole Locale.

    Domains are stored as already-encoded blobs so each can be decoded in
    isolation.

    Attributes:
        path: Base directory of the locale files
        language: Language identifier
        default_domain: Default domain name ("" if none)
        domains: Domain name -> encoded DomainSnapshot
    """

    path: str
    language: str
    default_domain: str = ""
    domains: Mapping[str, bytes] = field(default_factory=dict)

    def to_wire(self) -> dict[str, Any]:
        """Convert to plain values for the wire layer."""
        return {
            "path": self.path,
            "language": self.language,
            "default_domain": self.default_domain,
            "domains": dict(self.domains),
        }

    @classmethod
    def from_wire(cls, payload: Any) -> LocaleSnapshot:
        """Rebuild from plain values.

        Raises:
            ValueError: If payload does not have the LocaleSnapshot shape
        """
        what = "LocaleSnapshot"
        _expect(payload, dict, what)
        domains = _expect_field(payload, "domains", dict, what)
        return cls(
            path=_expect_field(payload, "path", str, what),
            language=_expect_field(payload, "language", str, what),
            default_domain=_expect_field(payload, "default_domain", str, what),
            domains={
                _expect(name, str, f"{what}.domains key"): _expect(
                    blob, bytes, f"{what}.domains[{name!r}]"
                )
                for name, blob in domains.items()
            },
        )
