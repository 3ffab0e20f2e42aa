"""Tests for the Translation entry record."""

from __future__ import annotations

import dataclasses

import pytest

from localecatalog.catalog.translation import Translation


class TestTranslation:
    def test_singular(self) -> None:
        entry = Translation("Hello", forms=("Hallo",))
        assert entry.get() == "Hallo"
        assert not entry.is_plural
        assert entry.is_translated

    def test_untranslated_returns_id(self) -> None:
        entry = Translation("Hello", forms=("",))
        assert entry.get() == "Hello"
        assert not entry.is_translated

    def test_no_forms(self) -> None:
        assert Translation("Hello").get() == "Hello"

    def test_plural_forms(self) -> None:
        entry = Translation("one file", "%d files", ("eine Datei", "%d Dateien"))
        assert entry.is_plural
        assert entry.get_plural(0) == "eine Datei"
        assert entry.get_plural(1) == "%d Dateien"

    @pytest.mark.parametrize(("index", "expected"), [(0, "one file"), (1, "%d files"), (5, "%d files")])
    def test_plural_fallback_to_source(self, index: int, expected: str) -> None:
        entry = Translation("one file", "%d files", ("", ""))
        assert entry.get_plural(index) == expected

    def test_plural_fallback_without_plural_id(self) -> None:
        assert Translation("sheep").get_plural(1) == "sheep"

    def test_immutable(self) -> None:
        entry = Translation("Hello")
        with pytest.raises(dataclasses.FrozenInstanceError):
            entry.id = "Bye"  # type: ignore[misc]
