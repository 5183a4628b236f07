"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def correlated_pair(rng):
    """Positively dependent pair, n = 200."""
    n = 200
    x = rng.standard_normal(n)
    y = 0.6 * x + 0.8 * rng.standard_normal(n)
    return x, y


@pytest.fixture
def independent_pair(rng):
    """Independent pair, n = 200."""
    n = 200
    return rng.standard_normal(n), rng.standard_normal(n)
