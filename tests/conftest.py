"""Pytest configuration and shared fixtures for pfcore tests.

This module provides:
- A deterministic numpy RNG fixture
- Restoration of the global debug flag and seed override after each test
"""

import os

import numpy as np
import pytest

from pfcore import config
from pfcore.diagnostics import is_debug_enabled, set_debug_enabled


def _test_seed() -> int:
    return int(os.environ.get("TEST_RNG_SEED", "0"))


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).

    Returns:
        A seeded numpy.random.Generator instance.
    """
    return np.random.default_rng(_test_seed())


@pytest.fixture(scope="function", autouse=True)
def restore_debug_mode():
    """Auto-use fixture so tests toggling debug mode cannot leak it."""
    original = is_debug_enabled()
    yield
    set_debug_enabled(original)


@pytest.fixture(scope="function", autouse=True)
def reset_seed_override():
    """Clear any default-seed override a test installs."""
    yield
    config.set_default_seed(None)
