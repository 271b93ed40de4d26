"""Pytest configuration for the langcache test suite.

Hypothesis profiles:
- dev: Local development with 200 examples
- ci: CI runs with 50 examples, derandomized
- verbose: Debug mode with progress output (100 examples)

Profile auto-detection:
- HYPOTHESIS_PROFILE env var -> explicit override
- CI=true environment variable -> "ci" profile
- Otherwise -> "dev" profile

Override manually: HYPOTHESIS_PROFILE=verbose pytest tests/
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

from langcache.locale_utils import clear_locale_cache

FIXTURES = Path(__file__).parent / "fixtures"

# =============================================================================
# HYPOTHESIS PROFILES
# =============================================================================

settings.register_profile(
    "dev",
    max_examples=200,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
)

settings.register_profile(
    "ci",
    max_examples=50,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=True,
    print_blob=True,
)

settings.register_profile(
    "verbose",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
    verbosity=Verbosity.verbose,
)


def _detect_profile() -> str:
    """Pick the Hypothesis profile from the environment.

    Priority:
    1. HYPOTHESIS_PROFILE env var (explicit override)
    2. CI=true env var
    3. Default to "dev"
    """
    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit in ("dev", "ci", "verbose"):
        return explicit
    if os.environ.get("CI") == "true":
        return "ci"
    return "dev"


settings.load_profile(_detect_profile())


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def lang_dir(tmp_path: Path) -> Path:
    """Writable copy of tests/fixtures/lang (en-US.ini, zh-CN.ini).

    Files get fresh modification times so staleness tests do not depend on
    when the fixtures were checked out.
    """
    target = tmp_path / "lang"
    shutil.copytree(FIXTURES / "lang", target, copy_function=shutil.copy)
    return target


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    """Cache root that does not exist yet."""
    return tmp_path / "cache" / "nested"


@pytest.fixture(autouse=True)
def _fresh_locale_cache() -> None:
    clear_locale_cache()
