"""
Pytest configuration and shared fixtures for merkletree tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers
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

import importlib

_common = importlib.import_module("fixtures.common")

make_leaves = _common.make_leaves
make_numbered_leaves = _common.make_numbered_leaves


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def greeting_leaves():
    """Nine unhashed greeting leaves (odd count)."""
    return make_leaves()


@pytest.fixture
def short_greeting_leaves():
    """Four unhashed leaves: Hello, Hi, Hey, Hola."""
    return make_leaves(_common.SHORT_GREETINGS)


@pytest.fixture
def sha256_tree():
    """(leaves, table, root) for the greeting set built with SHA-256."""
    from merkletree.crypto import sha256
    from merkletree.merkle import build_tree

    leaves = make_leaves()
    table, root = build_tree(leaves, hash_func=sha256)
    return leaves, table, root


@pytest.fixture
def six_leaf_tree():
    """(leaves, table, root) for six leaves: level widths 6, 3, 2, 1."""
    from merkletree.crypto import sha256
    from merkletree.merkle import build_tree

    leaves = make_numbered_leaves(6)
    table, root = build_tree(leaves, hash_func=sha256)
    return leaves, table, root


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
