"""Fixtures partagées par les tests StabilityLab"""

import matplotlib

matplotlib.use("Agg")

import pytest

from stabilitylab.core.analysis import analyze
from stabilitylab.core.polynomial import TransferFunction


@pytest.fixture
def second_order_tf():
    """H(s) = 1 / (s^2 + 3s + 2), pôles -1 et -2"""
    return TransferFunction.from_coefficients([1], [1, 3, 2])


@pytest.fixture
def stable_result():
    return analyze([1], [1, 3, 2])


@pytest.fixture
def non_minimum_phase_result():
    return analyze([1, -1], [1, 1])


@pytest.fixture
def unstable_result():
    return analyze([1], [1, -1])
