"""
Tests de la recherche des racines (formules fermées et matrice compagne)
"""

import numpy as np
import pytest

from stabilitylab.core.complex_ops import ComplexRoot
from stabilitylab.core.polynomial import Polynomial
from stabilitylab.core.roots import (
    EIGEN_BACKENDS,
    DegreeClass,
    companion_matrix,
    find_roots,
    get_eigen_backend,
)
from stabilitylab.core.utils import InvalidPolynomial


def residuals(coeffs, roots):
    values = np.array([root.to_complex() for root in roots])
    return np.abs(np.polyval(coeffs, values))


def sorted_complex(roots):
    return sorted((root.to_complex() for root in roots), key=lambda z: (round(z.real, 8), round(z.imag, 8)))


# ============================================================================
# Dispatch par degré
# ============================================================================


@pytest.mark.parametrize("degree, expected", [
    (0, DegreeClass.CONSTANT),
    (1, DegreeClass.LINEAR),
    (2, DegreeClass.QUADRATIC),
    (3, DegreeClass.GENERAL),
    (7, DegreeClass.GENERAL),
])
def test_degree_class(degree, expected):
    assert DegreeClass.of(degree) is expected


def test_companion_matrix():
    matrix = companion_matrix([2, 12, 22, 12])
    np.testing.assert_allclose(matrix, [[-6, -11, -6], [1, 0, 0], [0, 1, 0]])


# ============================================================================
# Formules fermées
# ============================================================================


class TestClosedForms:

    def test_constant_has_no_roots(self):
        assert find_roots([5]) == ()

    def test_linear(self):
        assert find_roots([2, -4]) == (ComplexRoot(2.0, 0.0),)

    def test_real_quadratic(self):
        roots = find_roots([1, 3, 2])
        assert roots == (ComplexRoot(-1.0, 0.0), ComplexRoot(-2.0, 0.0))

    def test_complex_quadratic_gives_conjugate_pair(self):
        first, second = find_roots([1, 2, 5])
        assert first.real == pytest.approx(-1.0)
        assert second.real == pytest.approx(-1.0)
        assert first.imag == pytest.approx(2.0)
        assert second.imag == pytest.approx(-2.0)

    def test_conjugate_pair_is_exactly_symmetric(self):
        first, second = find_roots([3, 1.7, 2.9])
        assert first.real == second.real
        assert first.imag == -second.imag > 0

    def test_negative_leading_coefficient(self):
        first, second = find_roots([-1, 0, -4])
        assert {first.imag, second.imag} == {2.0, -2.0}
        assert first.real == pytest.approx(0.0)

    @pytest.mark.parametrize("coeffs", [[3, -7], [1, 3, 2], [1, 2, 5], [2, 0.5, -8], [1, 0, 1]])
    def test_closed_form_residuals(self, coeffs):
        assert np.all(residuals(coeffs, find_roots(coeffs)) < 1e-10)

    def test_leading_zeros_are_ignored(self):
        assert find_roots([0, 0, 1, 1]) == (ComplexRoot(-1.0, 0.0),)

    def test_accepts_polynomial(self):
        assert find_roots(Polynomial.from_coefficients([1, 1])) == (ComplexRoot(-1.0, 0.0),)

    @pytest.mark.parametrize("raw", [[0], [0, 0, 0], []])
    def test_zero_polynomial_rejected(self, raw):
        with pytest.raises(InvalidPolynomial):
            find_roots(raw)


# ============================================================================
# Degré >= 3 (valeurs propres)
# ============================================================================


GENERAL_POLYNOMIALS = [
    [1, 6, 11, 6],
    [1, 0, 0, 0, -1],
    [2, 3, -1, 5, 7],
    [1, 1, 1, 1],
    [0.5, -2, 3, 0.25, -1, 4],
]


class TestGeneralDegree:

    @pytest.mark.parametrize("backend", sorted(EIGEN_BACKENDS))
    @pytest.mark.parametrize("coeffs", GENERAL_POLYNOMIALS)
    def test_root_count_and_residuals(self, coeffs, backend):
        roots = find_roots(coeffs, backend=backend)
        assert len(roots) == len(coeffs) - 1
        scale = max(abs(c) for c in coeffs)
        assert np.all(residuals(coeffs, roots) < 1e-8 * scale)

    def test_known_roots(self):
        roots = sorted_complex(find_roots([1, 6, 11, 6]))
        np.testing.assert_allclose(roots, [-3, -2, -1], atol=1e-9)

    @pytest.mark.parametrize("coeffs", GENERAL_POLYNOMIALS)
    def test_backends_agree(self, coeffs):
        np.testing.assert_allclose(
            sorted_complex(find_roots(coeffs, backend='numpy')),
            sorted_complex(find_roots(coeffs, backend='scipy')),
            atol=1e-9,
        )

    def test_custom_backend(self):
        calls = []

        def backend(matrix):
            calls.append(matrix.shape)
            return np.linalg.eigvals(matrix)

        find_roots([1, 6, 11, 6], backend=backend)
        assert calls == [(3, 3)]

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            get_eigen_backend('lapack')
