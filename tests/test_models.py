"""Tests for the gradient model functions and the model registry."""

import numpy as np
import pytest

from morphofit.core.exceptions import MissingLandmarkError, PreconditionError
from morphofit.core.models import (
    ModelKind,
    decaying_exponential,
    evaluate_model,
    get_model,
    list_models,
    two_domain,
    two_domain_gradual_sink,
    unit_step,
)
from morphofit.core.options import Landmarks, OffsetPolicy


class TestUnitStep:
    def test_step_at_zero_is_one(self):
        np.testing.assert_array_equal(unit_step(np.array([-1.0, 0.0, 2.0])), [0.0, 1.0, 1.0])


class TestDecayingExponential:
    def test_value_at_origin(self):
        assert decaying_exponential(0.0, 2.0, 0.5, 0.1) == pytest.approx(2.1)

    def test_decays_by_e_over_one_length(self):
        assert decaying_exponential(0.5, 1.0, 0.5) == pytest.approx(np.exp(-1))


class TestTwoDomain:
    """Two-domain profile."""

    params = (1.0, 0.5, 0.1)
    boundary = 1.0

    def _denominator(self):
        _, lam_p, lam_d = self.params
        return lam_d * np.cosh(self.boundary / lam_p) + lam_p * np.sinh(self.boundary / lam_p)

    def test_value_at_origin_is_amplitude_plus_offset(self):
        y = two_domain(0.0, *self.params, offset=0.2, interface_boundary=self.boundary)
        assert y == pytest.approx(1.2)

    def test_branches_add_at_boundary(self):
        y = two_domain(np.array([self.boundary]), *self.params, interface_boundary=self.boundary)
        single_branch = self.params[2] / self._denominator()
        assert y[0] == pytest.approx(2 * single_branch)

    def test_continuous_across_boundary(self):
        eps = 1e-9
        x = np.array([self.boundary - eps, self.boundary + eps])
        y = two_domain(x, *self.params, interface_boundary=self.boundary)
        assert y[0] == pytest.approx(y[1], rel=1e-6)
        assert y[0] == pytest.approx(self.params[2] / self._denominator(), rel=1e-6)

    def test_no_nan_from_overflowing_branch(self):
        x = np.array([0.0, 1.0, 200.0])
        y = two_domain(x, 1.0, 0.01, 0.1, interface_boundary=1.0)
        assert np.all(np.isfinite(y))

    def test_preserves_shape(self):
        x = np.linspace(0, 2, 12).reshape(3, 4)
        assert two_domain(x, *self.params, interface_boundary=1.0).shape == (3, 4)

    def test_missing_boundary(self):
        with pytest.raises(MissingLandmarkError):
            two_domain(np.array([0.0]), *self.params)


class TestTwoDomainGradualSink:
    """Two-domain-gradual-sink profile."""

    params = (1.0, 0.5, 50.0)
    boundary = 1.0

    def test_value_at_origin_is_amplitude_plus_offset(self):
        y = two_domain_gradual_sink(np.array([0.0]), *self.params, offset=0.1,
                                    interface_boundary=self.boundary)
        assert y[0] == pytest.approx(1.1)

    def test_continuous_across_boundary(self):
        eps = 1e-9
        x = np.array([self.boundary - eps, self.boundary + eps])
        y = two_domain_gradual_sink(x, *self.params, interface_boundary=self.boundary)
        assert y[0] == pytest.approx(y[1], rel=1e-6)

    def test_branches_add_at_boundary(self):
        eps = 1e-9
        y_tie = two_domain_gradual_sink(np.array([self.boundary]), *self.params,
                                        interface_boundary=self.boundary)
        y_near = two_domain_gradual_sink(np.array([self.boundary + eps]), *self.params,
                                         interface_boundary=self.boundary)
        assert y_tie[0] == pytest.approx(2 * y_near[0], rel=1e-6)

    def test_decreasing_and_positive(self):
        x = np.linspace(0, 3, 61)
        y = two_domain_gradual_sink(x, *self.params, interface_boundary=self.boundary)
        x_b = np.flatnonzero(x == self.boundary)
        y = np.delete(y, x_b)
        assert np.all(y > 0)
        assert np.all(np.diff(y) < 0)


class TestRegistry:
    """Model registry and vector evaluation."""

    def test_list_models(self):
        assert list_models() == ['exponential', 'twoDomain', 'twoDomainGradualSink']

    def test_get_model_by_name(self):
        spec = get_model('twoDomain')
        assert spec.kind is ModelKind.TWO_DOMAIN
        assert spec.requires_boundary

    def test_unknown_model(self):
        with pytest.raises(KeyError, match="Available"):
            get_model('gaussian')

    def test_param_names_follow_offset_policy(self):
        spec = get_model(ModelKind.EXPONENTIAL)
        assert spec.param_names(OffsetPolicy.free()) == ('amplitude', 'decay_length', 'offset')
        assert spec.param_names(OffsetPolicy.fixed(0)) == ('amplitude', 'decay_length')

    def test_evaluate_free_offset(self, positions):
        y = evaluate_model('exponential', [2.0, 0.5, 0.1], positions)
        np.testing.assert_allclose(y, 2.0 * np.exp(-positions / 0.5) + 0.1)

    def test_evaluate_fixed_offset(self, positions):
        y = evaluate_model('exponential', [2.0, 0.5], positions, offset=OffsetPolicy.fixed(0.3))
        np.testing.assert_allclose(y, 2.0 * np.exp(-positions / 0.5) + 0.3)

    def test_evaluate_wrong_length(self, positions):
        with pytest.raises(ValueError, match="takes 2 parameters"):
            evaluate_model('exponential', [2.0, 0.5, 0.1], positions, offset=OffsetPolicy.fixed(0))

    def test_evaluate_missing_boundary(self, positions):
        with pytest.raises(MissingLandmarkError):
            evaluate_model('twoDomain', [1.0, 0.5, 0.1, 0.0], positions)

    def test_missing_landmark_is_precondition_error(self):
        assert issubclass(MissingLandmarkError, PreconditionError)
        assert issubclass(PreconditionError, ValueError)

    def test_evaluate_subtracts_zero_location(self, positions):
        shifted = evaluate_model('twoDomain', [1.0, 0.5, 0.1], positions + 0.5,
                                 Landmarks(interface_boundary_location=1.5, zero_location=0.5),
                                 OffsetPolicy.fixed(0))
        direct = evaluate_model('twoDomain', [1.0, 0.5, 0.1], positions,
                                Landmarks(interface_boundary_location=1.0),
                                OffsetPolicy.fixed(0))
        np.testing.assert_allclose(shifted, direct, rtol=1e-10, atol=1e-12)
