"""Tests for Locale and resolver configuration."""

from __future__ import annotations

import dataclasses

import pytest

from localecatalog.config import LocaleConfig, ResolverConfig


class TestResolverConfig:
    def test_defaults(self) -> None:
        config = ResolverConfig()
        assert config.messages_dir == "LC_MESSAGES"
        assert config.include_language_prefix is True

    @pytest.mark.parametrize("bad", ["", "a/b", "a\\b", "..", "../up"])
    def test_invalid_messages_dir(self, bad: str) -> None:
        with pytest.raises(ValueError, match="messages_dir"):
            ResolverConfig(messages_dir=bad)

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            ResolverConfig().messages_dir = "x"  # type: ignore[misc]


class TestLocaleConfig:
    def test_defaults(self) -> None:
        config = LocaleConfig()
        assert config.resolver == ResolverConfig()
        assert config.lock_timeout is None

    def test_zero_timeout_allowed(self) -> None:
        assert LocaleConfig(lock_timeout=0.0).lock_timeout == 0.0

    def test_negative_timeout(self) -> None:
        with pytest.raises(ValueError, match="lock_timeout"):
            LocaleConfig(lock_timeout=-1.0)
