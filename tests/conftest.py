"""Pytest configuration for the localecatalog test suite.

Single Source of Truth for Hypothesis max_examples:
- dev: Local development with 200 examples (thorough property testing)
- ci: CI runs with 50 examples (fast feedback)
- verbose: Debug mode with progress output (100 examples)

Profile auto-detection:
- CI=true environment variable -> "ci" profile
- HYPOTHESIS_PROFILE env var -> explicit override
- Otherwise -> "dev" profile (local development)

Override manually: HYPOTHESIS_PROFILE=verbose pytest tests/

Fuzzing Test Separation:
Tests marked with @pytest.mark.fuzz are excluded from normal test runs.
Run them via: pytest -m fuzz

Shared fixtures build a locale directory tree under tmp_path with real .po
files and Babel-compiled .mo files (see tests/helpers/catalogs.py).
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from hypothesis import HealthCheck, Phase, Verbosity, settings

from localecatalog.locale_utils import clear_locale_cache
from tests.helpers.catalogs import GERMAN_BODY, set_mtime, write_mo_file, write_po

# =============================================================================
# HYPOTHESIS PROFILES - SINGLE SOURCE OF TRUTH
# =============================================================================

# Development profile: thorough local testing (200 examples, silent)
settings.register_profile(
    "dev",
    max_examples=200,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)

# CI profile: fast feedback (50 examples)
settings.register_profile(
    "ci",
    max_examples=50,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=True,
    print_blob=True,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)

# Verbose profile: debug mode with progress visibility (100 examples)
settings.register_profile(
    "verbose",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
    verbosity=Verbosity.verbose,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)


# =============================================================================
# AUTO-DETECT EXECUTION CONTEXT
# =============================================================================


def _detect_profile() -> str:
    """Detect appropriate Hypothesis profile based on execution context.

    Priority:
    1. HYPOTHESIS_PROFILE env var (explicit override)
    2. CI=true env var
    3. Default to "dev" (local development)
    """
    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit in ("dev", "ci", "verbose"):
        return explicit

    if os.environ.get("CI") == "true":
        return "ci"

    return "dev"


settings.load_profile(_detect_profile())


# =============================================================================
# FUZZING TEST SEPARATION
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register the 'fuzz' marker for intensive property tests."""
    config.addinivalue_line(
        "markers",
        "fuzz: Intensive property tests for fuzzing (excluded from normal test runs)",
    )


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Skip fuzz-marked tests unless explicitly requested.

    Behavior:
    - Normal test run (pytest tests/): Fuzz tests are SKIPPED
    - Explicit fuzz run (pytest -m fuzz): Fuzz tests run, others skipped
    """
    marker_expr = config.getoption("-m", default="")
    if "fuzz" in str(marker_expr):
        return

    skip_fuzz = pytest.mark.skip(reason="Fuzzing test - run with: pytest -m fuzz")
    for item in items:
        if "fuzz" in item.keywords:
            item.add_marker(skip_fuzz)


# =============================================================================
# SHARED FIXTURES
# =============================================================================


@pytest.fixture(autouse=True)
def _clear_caches() -> None:
    """Start every test with empty locale caches."""
    clear_locale_cache()


@pytest.fixture
def locale_dir(tmp_path: Path) -> Path:
    """Locale tree with German catalogs.

    Layout:
        de/LC_MESSAGES/messages.po      (GERMAN_BODY)
        de/LC_MESSAGES/messages.mo      (older than the .po)
        de/errors.mo                    (direct layout, no LC_MESSAGES)
    """
    base = tmp_path / "locale"
    po = write_po(base / "de" / "LC_MESSAGES" / "messages.po")
    mo = write_mo_file(base / "de" / "LC_MESSAGES" / "messages.mo")
    set_mtime(mo, 1_000_000)
    set_mtime(po, 2_000_000)
    write_mo_file(
        base / "de" / "errors.mo",
        'msgid "Not found"\nmsgstr "Nicht gefunden"\n\nmsgid "Hello"\nmsgstr "Servus"\n',
    )
    return base


@pytest.fixture
def german_po(tmp_path: Path) -> Path:
    """A single German .po file."""
    return write_po(tmp_path / "messages.po", GERMAN_BODY)


@pytest.fixture
def german_mo(tmp_path: Path) -> Path:
    """The German catalog compiled to .mo."""
    return write_mo_file(tmp_path / "messages.mo", GERMAN_BODY)
