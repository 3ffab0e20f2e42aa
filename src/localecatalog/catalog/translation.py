"""Immutable record of one catalog entry.

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["Translation"]


@dataclass(frozen=True, slots=True)
class Translation:
    """A message id with its translated forms.

    Attributes:
        id: Source message (msgid)
        plural_id: Source plural message (msgid_plural); empty if not plural
        forms: Translated strings indexed by plural form; empty strings mark
            untranslated forms
    """

    id: str
    plural_id: str = ""
    forms: tuple[str, ...] = ()

    @property
    def is_plural(self) -> bool:
        """True if the entry declares a plural source form."""
        return bool(self.plural_id)

    @property
    def is_translated(self) -> bool:
        """True if at least one form carries a translation."""
        return any(self.forms)

    def get(self) -> str:
        """Return the singular translation, or the id if untranslated."""
        if self.forms and self.forms[0]:
            return self.forms[0]
        return self.id

    def get_plural(self, index: int) -> str:
        """Return plural form ``index``.

        Untranslated forms fall back to the source text: the id for form 0,
        the plural id for every other form.
        """
        if 0 <= index < len(self.forms) and self.forms[index]:
            return self.forms[index]
        if index == 0:
            return self.id
        return self.plural_id or self.id
