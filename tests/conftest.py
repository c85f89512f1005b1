"""
Pytest configuration and shared fixtures for merkle-airdrop tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_common = importlib.import_module("fixtures.common")

make_entries = _common.make_entries
write_entries_json = _common.write_entries_json


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def sha256_hasher():
    """Provide the default sha256 hasher."""
    from airdrop_core.crypto.hashing import get_hasher
    return get_hasher("sha256")


@pytest.fixture
def entries():
    """Provide the two reference airdrop entries plus three more."""
    return make_entries()


@pytest.fixture
def entries_file(tmp_path, entries):
    """Provide a JSON entries file on disk."""
    return write_entries_json(tmp_path / "entries.json", entries)


@pytest.fixture(autouse=True)
def _clean_airdrop_env(monkeypatch):
    """Keep AIRDROP_* variables from the developer's shell out of tests."""
    for var in (
        "AIRDROP_HASH_ALGORITHM",
        "AIRDROP_LEAF_ENCODING",
        "AIRDROP_LOG_LEVEL",
        "AIRDROP_LOG_FILE",
        "AIRDROP_OUTPUT_FORMAT",
    ):
        monkeypatch.delenv(var, raising=False)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
