"""
Tests des polynômes, des fonctions de transfert et de la lecture des coefficients
"""

import math

import numpy as np
import pytest

from stabilitylab.core.polynomial import Polynomial, TransferFunction, strip_leading_zeros
from stabilitylab.core.utils import (
    CoefficientParseError,
    EmptyOrZeroPolynomial,
    ImproperTransferFunction,
    InvalidPolynomial,
    PolynomialError,
    StabilityLabError,
    ZeroLeadingDenominatorCoefficient,
    coefficients_to_text,
    parse_coefficients,
    polynomial_to_string,
)


# ============================================================================
# Polynomial
# ============================================================================


class TestPolynomial:

    def test_leading_zeros_are_stripped(self):
        assert strip_leading_zeros([0, 0, 1, 2]) == (1.0, 2.0)
        assert strip_leading_zeros([0, 0]) == ()

    def test_construction_normalizes_coefficients(self):
        p = Polynomial.from_coefficients([0, 1, 3, 2])
        assert p.coefficients == (1.0, 3.0, 2.0)
        assert p.degree == 2
        assert p.leading == 1.0
        assert len(p) == 3

    @pytest.mark.parametrize("raw", [[], [0], [0, 0, 0]])
    def test_empty_or_zero_rejected(self, raw):
        with pytest.raises(EmptyOrZeroPolynomial):
            Polynomial.from_coefficients(raw)

    @pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
    def test_non_finite_rejected(self, bad):
        with pytest.raises(InvalidPolynomial):
            Polynomial.from_coefficients([1, bad])

    def test_normalized(self):
        np.testing.assert_allclose(Polynomial.from_coefficients([2, 4]).normalized(), [1, 2])
        np.testing.assert_allclose(Polynomial.from_coefficients([2, 4]).normalized(4), [0.5, 1])
        with pytest.raises(InvalidPolynomial):
            Polynomial.from_coefficients([2, 4]).normalized(0.0)

    def test_polynomial_is_immutable(self):
        p = Polynomial.from_coefficients([1, 2])
        with pytest.raises(AttributeError):
            p.coefficients = (3.0,)


class TestTransferFunction:

    def test_order_and_properness(self, second_order_tf):
        assert second_order_tf.order == 2
        assert second_order_tf.is_proper

    def test_improper(self):
        tf = TransferFunction.from_coefficients([1, 0, 0], [1, 1])
        assert not tf.is_proper

    def test_equality_by_value(self):
        assert (TransferFunction.from_coefficients([1], [0, 1, 3, 2])
                == TransferFunction.from_coefficients([1.0], [1, 3, 2]))


def test_error_hierarchy():
    for error in (EmptyOrZeroPolynomial, InvalidPolynomial,
                  ZeroLeadingDenominatorCoefficient, ImproperTransferFunction):
        assert issubclass(error, PolynomialError)
    assert issubclass(PolynomialError, StabilityLabError)
    assert issubclass(CoefficientParseError, StabilityLabError)


# ============================================================================
# Lecture et rendu des coefficients
# ============================================================================


class TestParseCoefficients:

    def test_comma_separated(self):
        assert parse_coefficients("1, 3, 2") == [1.0, 3.0, 2.0]
        assert parse_coefficients(" -0.5,2e-1 ,4 ") == [-0.5, 0.2, 4.0]

    @pytest.mark.parametrize("text", ["", "   ", None])
    def test_empty_text(self, text):
        with pytest.raises(CoefficientParseError):
            parse_coefficients(text)

    @pytest.mark.parametrize("text", ["1,,2", "1, 2,", "1, a", "1; 2", "1, inf", "nan"])
    def test_invalid_items(self, text):
        with pytest.raises(CoefficientParseError):
            parse_coefficients(text)

    def test_text_round_trip(self):
        assert coefficients_to_text([1.0, 0.5, -3.0]) == "1, 0.5, -3"
        assert parse_coefficients(coefficients_to_text([1.0, 0.5, -3.0])) == [1.0, 0.5, -3.0]


@pytest.mark.parametrize("coeffs, expected", [
    ([1, 3, 2], "s^2 + 3*s + 2"),
    ([1, -1], "s - 1"),
    ([-1, 2], "-s + 2"),
    ([2, 0, -3.5], "2*s^2 - 3.5"),
    ([5], "5"),
])
def test_polynomial_to_string(coeffs, expected):
    assert polynomial_to_string(coeffs) == expected
