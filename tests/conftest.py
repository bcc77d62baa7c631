"""
Pytest configuration and shared fixtures for flatmerkle tests.

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

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_trees = importlib.import_module("fixtures.trees")

FIVE_BYTE_PAYLOADS = _trees.FIVE_BYTE_PAYLOADS
make_payloads = _trees.make_payloads
make_tree = _trees.make_tree

from flatmerkle.config.runtime import set_default_config
from flatmerkle.crypto.hashing import Hasher


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def hasher():
    """Provide the default hashing parameters (sha256, N=32, ND=64)."""
    return Hasher()


@pytest.fixture
def empty_tree():
    """Provide an empty tree with default parameters."""
    return make_tree([])


@pytest.fixture
def five_leaf_tree():
    """Provide a tree holding the single-byte payloads 0x01 .. 0x05."""
    return make_tree(FIVE_BYTE_PAYLOADS)


@pytest.fixture
def payloads():
    """Provide eleven distinct payloads (an unbalanced leaf count)."""
    return make_payloads(11)


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch):
    """Keep FLATMERKLE_* variables and the cached default config out of tests."""
    for name in [
        "FLATMERKLE_ALGORITHM",
        "FLATMERKLE_HASH_SIZE",
        "FLATMERKLE_CONCAT_SIZE",
        "FLATMERKLE_LOG_LEVEL",
        "FLATMERKLE_LOG_FILE",
    ]:
        monkeypatch.delenv(name, raising=False)
    set_default_config(None)
    yield
    set_default_config(None)


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
