"""Catalog file resolution for a domain.

Locates ``<domain>.po`` and ``<domain>.mo`` under a base directory by trying
several spellings of the language directory, then picks between the two
formats by modification time:

- the .po file wins only when it is strictly newer than the .mo file
- otherwise the .mo file wins if it exists
- otherwise the .po file, if only it exists
- otherwise nothing is found

Directory spellings for language "pt_BR" (tag "pt-BR") are tried in this
order, first inside the messages subdirectory, then directly:

    pt_BR, pt-BR, pt_BR (tag with underscores), pt

Python 3.13+.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from localecatalog.config import ResolverConfig
from localecatalog.enums import CatalogFormat
from localecatalog.locale_utils import simplify_locale, to_language_tag

if TYPE_CHECKING:
    import os

__all__ = ["FileResolver", "modification_time"]

logger = logging.getLogger(__name__)


def modification_time(path: Path | None) -> float:
    """Return the mtime of path, or 0.0 if path is None or unreadable."""
    if path is None:
        return 0.0
    try:
        return path.stat().st_mtime
    except OSError:
        return 0.0


class FileResolver:
    """Find the catalog file for a domain of one language.

    Example:
        >>> resolver = FileResolver("/usr/share/locale", "de_DE")
        >>> resolver.resolve("messages")  # doctest: +SKIP
        PosixPath('/usr/share/locale/de_DE/LC_MESSAGES/messages.mo')
    """

    __slots__ = ("_config", "_language", "_path", "_tag")

    def __init__(
        self,
        path: str | os.PathLike[str],
        language: str,
        *,
        config: ResolverConfig | None = None,
    ) -> None:
        """Create a resolver.

        Args:
            path: Base directory holding one directory per language
            language: Language identifier (charset/modifier suffixes are dropped)
            config: Resolution settings (default: ResolverConfig())
        """
        self._path = Path(path)
        self._language = simplify_locale(language)
        self._tag = to_language_tag(self._language)
        self._config = config or ResolverConfig()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def language(self) -> str:
        return self._language

    @property
    def language_tag(self) -> str:
        return self._tag

    def language_directories(self) -> tuple[str, ...]:
        """Language directory spellings in probe order, without duplicates."""
        variants = [self._language, self._tag, self._tag.replace("-", "_")]
        if self._config.include_language_prefix and len(self._language) > 2:
            variants.append(self._language[:2])
        return tuple(dict.fromkeys(v for v in variants if v))

    def candidates(self, domain: str, fmt: CatalogFormat) -> tuple[Path, ...]:
        """Candidate paths for one domain and format, in probe order."""
        filename = f"{domain}{fmt.extension}"
        directories = self.language_directories()
        nested = [self._path / d / self._config.messages_dir / filename for d in directories]
        direct = [self._path / d / filename for d in directories]
        return tuple(nested + direct)

    def find(self, domain: str, fmt: CatalogFormat) -> Path | None:
        """First existing candidate for one format, or None."""
        for candidate in self.candidates(domain, fmt):
            if candidate.exists():
                return candidate
        return None

    def resolve(self, domain: str) -> Path | None:
        """Select the catalog file to load for domain.

        Returns:
            Path of the .po or .mo file to load, or None if neither exists
        """
        po_file = self.find(domain, CatalogFormat.PO)
        mo_file = self.find(domain, CatalogFormat.MO)
        po_time = modification_time(po_file)
        mo_time = modification_time(mo_file)

        if po_file is not None and po_time > mo_time:
            selected: Path | None = po_file
        elif mo_file is not None:
            selected = mo_file
        else:
            selected = po_file

        logger.debug(
            "Resolved domain %r for %s: po=%s (%.3f) mo=%s (%.3f) -> %s",
            domain,
            self._language,
            po_file,
            po_time,
            mo_file,
            mo_time,
            selected,
        )
        return selected
