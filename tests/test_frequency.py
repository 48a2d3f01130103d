"""
Tests de l'échantillonnage fréquentiel (Nyquist et Bode)
"""

import numpy as np
import pytest

from stabilitylab.core import complex_ops
from stabilitylab.core.frequency import evaluate_polynomial, sample_bode, sample_nyquist
from stabilitylab.core.polynomial import TransferFunction
from stabilitylab.core.spaces import to_control_tf


def tf(num, den):
    return TransferFunction.from_coefficients(num, den)


def reference_response(num, den, omega):
    s = 1j * np.asarray(omega)
    return np.polyval(num, s) / np.polyval(den, s)


# ============================================================================
# Arithmétique complexe
# ============================================================================


class TestComplexOps:

    def test_power_zero_is_one(self):
        np.testing.assert_array_equal(complex_ops.power(np.array([0j, 2 + 1j]), 0), [1, 1])

    def test_divide_by_zero_is_not_finite(self):
        assert not np.isfinite(complex_ops.divide(1 + 0j, 0j))

    def test_sqrt_of_negative_real(self):
        assert complex(complex_ops.sqrt(-4.0)) == pytest.approx(2j)
        assert complex(complex_ops.sqrt(3 + 4j)) == pytest.approx(2 + 1j)

    def test_modulus_and_argument(self):
        assert complex_ops.modulus(3 + 4j) == pytest.approx(5.0)
        assert complex_ops.argument(1j) == pytest.approx(np.pi / 2)


@pytest.mark.parametrize("coeffs", [[1, 3, 2], [2, -1, 0, 4], [7]])
def test_evaluate_polynomial_matches_polyval(coeffs):
    s = np.array([0j, 1j, -0.5 + 2j, 3 - 1j])
    np.testing.assert_allclose(evaluate_polynomial(coeffs, s), np.polyval(coeffs, s))


# ============================================================================
# Nyquist
# ============================================================================


class TestNyquist:

    def test_grid(self):
        samples = sample_nyquist(tf([1], [1, 1]))
        assert len(samples.frequencies) == 100
        assert samples.frequencies[0] == 0.0
        assert samples.frequencies[-1] < 2 * np.pi
        assert len(samples.points()) == 100

    @pytest.mark.parametrize("num, den", [
        ([1], [1, 1]),
        ([1], [1, 3, 2]),
        ([1, -1], [1, 1]),
        ([2, 0, 1], [1, 2, 2, 1]),
    ])
    def test_matches_reference(self, num, den):
        samples = sample_nyquist(tf(num, den))
        expected = reference_response(num, den, samples.frequencies)
        np.testing.assert_allclose(samples.real, expected.real, atol=1e-12)
        np.testing.assert_allclose(samples.imag, expected.imag, atol=1e-12)
        assert samples.negative_real_count == np.count_nonzero(expected.real < 0)

    def test_matches_python_control(self, second_order_tf):
        samples = sample_nyquist(second_order_tf)
        expected = np.ravel(to_control_tf(second_order_tf)(1j * samples.frequencies))
        np.testing.assert_allclose(samples.real + 1j * samples.imag, expected, atol=1e-12)

    def test_first_order_never_crosses(self):
        assert sample_nyquist(tf([1], [1, 1])).negative_real_count == 0

    def test_custom_point_count(self):
        assert len(sample_nyquist(tf([1], [1, 1]), points=16).real) == 16

    def test_pole_at_origin_is_unbounded(self):
        samples = sample_nyquist(tf([1], [1, 0]))
        assert not np.isfinite(samples.real[0] + 1j * samples.imag[0])
        assert np.all(np.isfinite(samples.real[1:]))


# ============================================================================
# Bode
# ============================================================================


class TestBode:

    def test_grid(self):
        samples = sample_bode(tf([1], [1, 1]))
        assert len(samples.frequencies) == 100
        assert samples.frequencies[0] == pytest.approx(0.01)
        assert samples.frequencies[-1] == pytest.approx(100.0)

    def test_first_order(self):
        samples = sample_bode(tf([1], [1, 1]))
        w = samples.frequencies
        np.testing.assert_allclose(samples.magnitude_db, -10 * np.log10(1 + w ** 2), atol=1e-10)
        np.testing.assert_allclose(samples.phase_deg, -np.degrees(np.arctan(w)), atol=1e-10)

    def test_magnitude_matches_reference(self):
        num, den = [1, -1], [1, 4, 6, 4]
        samples = sample_bode(tf(num, den))
        expected = reference_response(num, den, samples.frequencies)
        np.testing.assert_allclose(samples.magnitude_db, 20 * np.log10(np.abs(expected)), atol=1e-10)

    def test_phase_is_difference_of_arguments(self):
        samples = sample_bode(tf([1, -1], [1, 1]))
        w = samples.frequencies
        expected = np.degrees(np.angle(1j * w - 1) - np.angle(1j * w + 1))
        np.testing.assert_allclose(samples.phase_deg, expected, atol=1e-10)

    def test_custom_decades(self):
        samples = sample_bode(tf([1], [1, 1]), points=5, decades=(0, 4))
        np.testing.assert_allclose(samples.frequencies, [1, 10, 100, 1000, 10000])
