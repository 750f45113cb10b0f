"""Pytest configuration for the ftlcatalog test suite.

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

Shared fixtures build catalog roots under pytest's tmp_path.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from pathlib import Path

import pytest
from hypothesis import HealthCheck, Phase, Verbosity, settings

from ftlcatalog import CatalogConfig
from tests.helpers.tree import write_tree

# =============================================================================
# HYPOTHESIS PROFILES - SINGLE SOURCE OF TRUTH
# =============================================================================

# Property tests write a fresh tree per example.
_SUPPRESSED = [HealthCheck.function_scoped_fixture, HealthCheck.too_slow]

# Development profile: thorough local testing (200 examples, silent)
settings.register_profile(
    "dev",
    max_examples=200,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
    deadline=None,
    suppress_health_check=_SUPPRESSED,
)

# CI profile: fast feedback (50 examples)
settings.register_profile(
    "ci",
    max_examples=50,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=True,
    print_blob=True,
    deadline=None,
    suppress_health_check=_SUPPRESSED,
)

# Verbose profile: debug mode with progress visibility (100 examples)
settings.register_profile(
    "verbose",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
    verbosity=Verbosity.verbose,
    deadline=None,
    suppress_health_check=_SUPPRESSED,
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
    - Explicit fuzz run (pytest -m fuzz): Fuzz tests run
    """
    marker_expr = config.getoption("-m", default="")
    if "fuzz" in str(marker_expr):
        return

    skip_fuzz = pytest.mark.skip(reason="Fuzzing test - run with: pytest -m fuzz")
    for item in items:
        if "fuzz" in item.keywords:
            item.add_marker(skip_fuzz)


# =============================================================================
# CATALOG ROOT FIXTURES
# =============================================================================

type TreeWriter = Callable[[Mapping[str, str]], Path]


@pytest.fixture
def make_tree(tmp_path: Path) -> TreeWriter:
    """Factory fixture: build a catalog root under a fresh directory."""
    counter = 0

    def _make(files: Mapping[str, str]) -> Path:
        nonlocal counter
        counter += 1
        return write_tree(tmp_path / f"root{counter}", files)

    return _make


@pytest.fixture
def plain_config() -> CatalogConfig:
    """Configuration without bidi isolation marks, for exact string asserts."""
    return CatalogConfig(use_isolating=False)


@pytest.fixture
def sample_root(make_tree: TreeWriter) -> Path:
    """A small multi-language catalog root.

    en-US is a directory (two files, one nested); fr is a single file;
    README.md and _partials/ are not languages.
    """
    return make_tree(
        {
            "en-US/main.ftl": (
                "hello = Hello, { $name }!\n"
                "-brand = Catalog\n"
                "about = About { -brand }\n"
                "login = Log in\n"
                "    .placeholder = Email address\n"
                "only-attrs =\n"
                "    .title = Title only\n"
            ),
            "en-US/settings/prefs.ftl": (
                "items = { $count ->\n"
                "    [one] One item\n"
                "   *[other] { $count } items\n"
                "}\n"
                "english-only = Only in English\n"
            ),
            "fr.ftl": "hello = Bonjour, { $name } !\nabout = À propos\n",
            "README.md": "# Translations\n",
            "_partials/shared.ftl": "shared = Shared\n",
        }
    )
