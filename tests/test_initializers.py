"""Tests for initial parameter guesses."""

import numpy as np
import pytest

from morphofit.core.exceptions import DegenerateDataError
from morphofit.core.fitting.defaults import GRADUAL_SINK_SLOPE_GUESS
from morphofit.core.fitting.initializers import (
    init_log_linear,
    project_to_bounds,
    seed_from_exponential,
)
from morphofit.core.options import OffsetPolicy


class TestLogLinear:
    """Log-linear regression guess."""

    def test_exact_for_noise_free_exponential(self, exponential_profile):
        x, y, (amplitude, decay_length) = exponential_profile
        guess = init_log_linear(x, y, OffsetPolicy.fixed(0))
        np.testing.assert_allclose(guess, [amplitude, decay_length], rtol=1e-8)

    def test_free_offset_appends_seed(self, positions):
        y = np.exp(-positions / 0.5) + 0.2
        guess = init_log_linear(positions, y, OffsetPolicy.free(seed=0.2))
        np.testing.assert_allclose(guess, [1.0, 0.5, 0.2], rtol=1e-8)

    def test_min_offset_guess_same_decade(self, noisy_exponential_profile):
        x, y, (_, decay_length, _) = noisy_exponential_profile
        guess = init_log_linear(x, y, OffsetPolicy.free())
        assert guess.size == 3
        assert decay_length / 10 < guess[1] < decay_length * 10
        assert guess[2] == pytest.approx(np.min(y))

    def test_constant_profile_is_degenerate(self, positions):
        y = np.full(positions.size, 0.7)
        with pytest.raises(DegenerateDataError):
            init_log_linear(positions, y, OffsetPolicy.free())

    def test_spike_then_flat_tail_is_degenerate(self, positions):
        y = np.zeros(positions.size)
        y[0] = 1.0
        with pytest.raises(DegenerateDataError):
            init_log_linear(positions, y, OffsetPolicy.free())

    def test_profile_below_fixed_offset_is_degenerate(self, exponential_profile):
        x, y, _ = exponential_profile
        with pytest.raises(DegenerateDataError):
            init_log_linear(x, y, OffsetPolicy.fixed(10.0))


class TestSeeds:
    """Seeds of the two-domain models."""

    def test_two_domain_repeats_decay_length(self):
        seed = seed_from_exponential('twoDomain', np.array([2.0, 0.5, 0.1]), OffsetPolicy.free())
        np.testing.assert_array_equal(seed, [2.0, 0.5, 0.5, 0.1])

    def test_gradual_sink_uses_slope_guess(self):
        seed = seed_from_exponential('twoDomainGradualSink', np.array([2.0, 0.5]),
                                     OffsetPolicy.fixed(0))
        np.testing.assert_array_equal(seed, [2.0, 0.5, GRADUAL_SINK_SLOPE_GUESS])

    def test_exponential_has_no_seed(self):
        with pytest.raises(ValueError):
            seed_from_exponential('exponential', np.array([2.0, 0.5]), OffsetPolicy.fixed(0))

    def test_project_to_bounds(self):
        seed = project_to_bounds([1.5, -0.4, 0.0, -0.1], 0.0)
        np.testing.assert_allclose(seed, [1.5, 0.4, 1.0, 0.1])
        assert np.all(seed >= 0)
