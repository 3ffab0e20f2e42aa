"""Type aliases and export records for the localization layer.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TypeAlias

__all__ = [
    "DomainName",
    "LanguageTag",
    "LocaleCatalog",
    "MessageId",
]

MessageId: TypeAlias = str
"""Source message identifier (msgid), e.g. 'Open file'."""

DomainName: TypeAlias = str
"""gettext domain name, e.g. 'messages' or 'errors'."""

LanguageTag: TypeAlias = str
"""BCP-47 language tag string, e.g. 'en-US'."""


@dataclass(frozen=True, slots=True)
class LocaleCatalog:
    """Flat export of every translation a Locale holds.

    Handed to external translation-store consumers.

    Attributes:
        tag: Language tag of the exporting Locale
        path: Base directory the catalogs were loaded from
        translations: msgid (or ctx + "\\x04" + msgid) -> translated string
    """

    tag: LanguageTag
    path: str
    translations: Mapping[MessageId, str] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.translations)
