"""Tests for gettext plural-form selection."""

from __future__ import annotations

import logging

import pytest
from hypothesis import given
from hypothesis import strategies as st

from localecatalog.runtime.plural import (
    DEFAULT_PLURAL_EXPR,
    compile_plural,
    select_plural_form,
)

_SLAVIC = "(n%10==1 && n%100!=11 ? 0 : n%10>=2 && n%10<=4 && (n%100<10 || n%100>=20) ? 1 : 2)"


class TestSelectPluralForm:
    @pytest.mark.parametrize(("n", "expected"), [(0, 1), (1, 0), (2, 1), (100, 1)])
    def test_germanic(self, n: int, expected: int) -> None:
        assert select_plural_form(DEFAULT_PLURAL_EXPR, 2, n) == expected

    @pytest.mark.parametrize(("n", "expected"), [(0, 0), (1, 0), (2, 1)])
    def test_french(self, n: int, expected: int) -> None:
        assert select_plural_form("(n > 1)", 2, n) == expected

    @pytest.mark.parametrize(
        ("n", "expected"), [(1, 0), (21, 0), (11, 2), (2, 1), (24, 1), (12, 2), (5, 2)]
    )
    def test_slavic(self, n: int, expected: int) -> None:
        assert select_plural_form(_SLAVIC, 3, n) == expected

    def test_single_form_language(self) -> None:
        assert select_plural_form("0", 1, 42) == 0

    def test_out_of_range_index_falls_back(self) -> None:
        # Expression yields 1 but only one form is declared.
        assert select_plural_form("(n != 1)", 1, 5) == 0

    def test_division_by_zero(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="localecatalog.runtime.plural"):
            assert select_plural_form("(1 / n)", 2, 0) == 0
        assert "failed for n=0" in caplog.text

    @given(st.integers(min_value=0, max_value=10**6))
    def test_index_in_range(self, n: int) -> None:
        """Property: the selected index is always a valid form index."""
        assert 0 <= select_plural_form(_SLAVIC, 3, n) < 3


class TestCompilePlural:
    def test_invalid_expression_uses_default(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="localecatalog.runtime.plural"):
            rule = compile_plural("n ==== 1; import os")
        assert rule(1) == 0
        assert rule(2) == 1
        assert "Invalid plural expression" in caplog.text

    def test_cached(self) -> None:
        assert compile_plural("(n > 1)") is compile_plural("(n > 1)")
