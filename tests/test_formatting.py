"""Tests for printf-style lookup formatting.

Lookups must always return text: a format failure yields the unformatted
string plus a warning, never an exception.
"""

from __future__ import annotations

import logging

import pytest
from hypothesis import given

from localecatalog.runtime.formatting import format_count, sprintf
from tests.strategies import message_texts


class TestSprintf:
    """Test positional and named interpolation."""

    def test_positional(self) -> None:
        assert sprintf("%s has %d files", ("Anna", 3)) == "Anna has 3 files"

    def test_named_mapping(self) -> None:
        assert sprintf("Hello %(name)s", ({"name": "Anna"},)) == "Hello Anna"

    def test_no_args_returns_input(self) -> None:
        assert sprintf("100% sure", ()) == "100% sure"

    def test_too_few_args(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="localecatalog.runtime.formatting"):
            assert sprintf("%s and %s", ("one",)) == "%s and %s"
        assert "Could not format" in caplog.text

    def test_wrong_type(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            assert sprintf("%d files", ("many",)) == "%d files"

    def test_missing_named_key(self) -> None:
        assert sprintf("Hello %(name)s", ({"other": 1},)) == "Hello %(name)s"

    def test_extra_args(self) -> None:
        assert sprintf("plain", ("unused",)) == "plain"

    @given(message_texts())
    def test_never_raises_without_args(self, text: str) -> None:
        """Property: with no args the text comes back unchanged."""
        assert sprintf(text, ()) == text


class TestFormatCount:
    """Test implicit count formatting for plural lookups."""

    def test_count_fills_placeholder(self) -> None:
        assert format_count("%d files", 5, ()) == "5 files"

    def test_singular_without_placeholder(self) -> None:
        assert format_count("one file", 1, ()) == "one file"

    def test_explicit_args_take_precedence(self) -> None:
        assert format_count("%s files in %s", 5, ("five", "home")) == "five files in home"

    def test_unconsumable_count_is_silent(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            assert format_count("%s and %s", 2, ()) == "%s and %s"
        assert caplog.records == []

    def test_escaped_percent(self) -> None:
        assert format_count("100%% of %d", 3, ()) == "100% of 3"
