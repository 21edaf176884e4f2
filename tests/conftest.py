"""Pytest fixtures for morphofit tests."""

import pytest

import numpy as np

from morphofit.core.models import two_domain


@pytest.fixture
def positions():
    """Sample positions 0:0.02:3."""
    return np.arange(0, 3 + 1e-9, 0.02)


@pytest.fixture
def rng():
    """Seeded random generator."""
    return np.random.default_rng(42)


@pytest.fixture
def exponential_profile(positions):
    """Noise-free decaying exponential with amplitude 1 and decay length 0.5."""
    return positions, np.exp(-positions / 0.5), (1.0, 0.5)


@pytest.fixture
def noisy_exponential_profile(positions, rng):
    """Decaying exponential on a 0.2 background with 1% noise."""
    y = np.exp(-positions / 0.5) + 0.2
    y = y + rng.normal(0, 0.01, positions.size)
    return positions, y, (1.0, 0.5, 0.2)


@pytest.fixture
def two_domain_profile(positions):
    """Noise-free two-domain profile with boundary at 1."""
    true_params = (1.0, 0.5, 0.1)
    y = two_domain(positions, *true_params, offset=0.0, interface_boundary=1.0)
    return positions, y, true_params
