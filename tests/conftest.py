"""Pytest configuration for the localetables test suite.

Single Source of Truth for Hypothesis max_examples:
- dev: Local development with 500 examples (thorough property testing)
- ci: GitHub Actions with 50 examples (fast CI feedback)
- verbose: Debug mode with progress output (100 examples)

Profile auto-detection:
- CI=true environment variable -> "ci" profile (GitHub Actions sets this)
- HYPOTHESIS_PROFILE env var -> explicit override
- Otherwise -> "dev" profile (local development)

Override manually: HYPOTHESIS_PROFILE=verbose pytest tests/
"""

from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

from localetables import TableRegistry
from localetables.enums import ResourceDomain

# =============================================================================
# HYPOTHESIS PROFILES - SINGLE SOURCE OF TRUTH
# =============================================================================

# Development profile: thorough local testing (500 examples, silent)
settings.register_profile(
    "dev",
    max_examples=500,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
)

# CI profile: fast feedback for GitHub Actions (50 examples)
settings.register_profile(
    "ci",
    max_examples=50,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=True,
    print_blob=True,
)

# Verbose profile: debug mode with progress visibility (100 examples)
settings.register_profile(
    "verbose",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
    verbosity=Verbosity.verbose,
)


# =============================================================================
# AUTO-DETECT EXECUTION CONTEXT
# =============================================================================


def _detect_profile() -> str:
    """Detect appropriate Hypothesis profile based on execution context.

    Priority:
    1. HYPOTHESIS_PROFILE env var (explicit override)
    2. CI=true env var (GitHub Actions auto-detection)
    3. Default to "dev" (local development)
    """
    import os

    # Explicit override via env var
    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit in ("dev", "ci", "verbose"):
        return explicit

    # GitHub Actions sets CI=true automatically
    if os.environ.get("CI") == "true":
        return "ci"

    # Local development
    return "dev"


# Load appropriate profile automatically
settings.load_profile(_detect_profile())


# =============================================================================
# SHARED FIXTURES
# =============================================================================


MINIMAL_TABLE_JSON = """\
{
  "format": 1,
  "domain": "FormatData",
  "locale": "xx",
  "shared": {
    "MonthNames": ["m1","m2","m3","m4","m5","m6","m7","m8","m9","m10","m11","m12",""]
  },
  "entries": [
    ["MonthNames",{"$ref":"MonthNames"}],
    ["roc.MonthNames",{"$ref":"MonthNames"}],
    ["AmPmMarkers",["am","pm"]],
    ["field.year","yr"]
  ]
}
"""

MINIMAL_CATALOG_PO = """\
msgid ""
msgstr ""
"Content-Type: text/plain; charset=UTF-8\\n"

msgid "greeting"
msgstr "Hello {0}"

msgid "farewell"
msgstr "Goodbye"
"""


@pytest.fixture
def registry() -> TableRegistry:
    """Fresh registry over the packaged data (isolated from the process-wide one)."""
    return TableRegistry()


@pytest.fixture
def data_root(tmp_path: Path) -> Path:
    """Minimal on-disk resource tree with one table and one catalog."""
    format_dir = tmp_path / str(ResourceDomain.FORMAT_DATA)
    format_dir.mkdir()
    (format_dir / "xx.json").write_text(MINIMAL_TABLE_JSON, encoding="utf-8")
    agent_dir = tmp_path / str(ResourceDomain.AGENT)
    agent_dir.mkdir()
    (agent_dir / "root.po").write_text(MINIMAL_CATALOG_PO, encoding="utf-8")
    return tmp_path
