"""
Tests de la simulation temporelle (Runge-Kutta 4, bloqueur d'ordre zéro)
"""

import math

import numpy as np
import pytest

from stabilitylab.core.polynomial import TransferFunction
from stabilitylab.core.simulation import (
    SimulationConfig,
    impulse_input,
    impulse_response,
    simulate,
    step_characteristics,
    step_response,
    time_grid,
)
from stabilitylab.core.spaces import build_state_space
from stabilitylab.core.utils import SimulationConfigError


def model_of(num, den):
    return build_state_space(TransferFunction.from_coefficients(num, den))


# ============================================================================
# Configuration
# ============================================================================


class TestSimulationConfig:

    def test_defaults(self):
        config = SimulationConfig()
        assert config.horizon == 10.0
        assert config.step_size == 0.01

    def test_time_grid(self):
        t = time_grid(SimulationConfig())
        assert len(t) == 1001
        assert t[0] == 0.0
        assert t[-1] == pytest.approx(10.0)
        assert t[1] - t[0] == pytest.approx(0.01)

    @pytest.mark.parametrize("horizon, step_size", [
        (0.0, 0.01),
        (-1.0, 0.01),
        (10.0, 0.0),
        (10.0, -0.1),
        (1.0, 2.0),
        (5000.0, 0.1),
        (10.0, 1e-9),
        (math.nan, 0.01),
        (10.0, math.inf),
    ])
    def test_invalid(self, horizon, step_size):
        with pytest.raises(SimulationConfigError):
            SimulationConfig(horizon=horizon, step_size=step_size)


# ============================================================================
# Intégration
# ============================================================================


class TestSimulate:

    def test_first_order_step_matches_analytic(self):
        series = step_response(model_of([1], [1, 1]))
        dt = 0.01
        # La sortie est lue sur l'état mis à jour, donc avec un pas d'avance
        np.testing.assert_allclose(series.response, 1 - np.exp(-(series.time + dt)), atol=1e-8)

    def test_first_order_step_settles_to_one(self):
        series = step_response(model_of([1], [1, 1]))
        assert series.response[-1] == pytest.approx(1.0, abs=1e-3)

    def test_first_order_impulse_decays(self):
        series = impulse_response(model_of([1], [1, 1]))
        assert abs(series.response[-1]) < 1e-3
        assert series.response[0] > 0.9

    def test_dc_gain(self):
        assert step_response(model_of([1], [1, 3, 2])).response[-1] == pytest.approx(0.5, abs=1e-3)

    def test_biproper_feedthrough(self):
        assert step_response(model_of([1, 2], [1, 1])).response[-1] == pytest.approx(2.0, abs=1e-3)

    def test_static_gain(self):
        series = step_response(model_of([5], [2]))
        np.testing.assert_allclose(series.response, 2.5)

    def test_custom_config(self):
        series = step_response(model_of([1], [1, 1]), SimulationConfig(horizon=2.0, step_size=0.1))
        assert len(series.time) == 21
        assert len(series.response) == 21

    def test_impulse_input(self):
        u = impulse_input(np.linspace(0, 1, 11))
        assert u[0] == pytest.approx(10.0)
        assert np.all(u[1:] == 0)

    def test_length_mismatch(self):
        with pytest.raises(ValueError):
            simulate(model_of([1], [1, 1]), [1, 1, 1], [0.0, 0.1])

    def test_grid_too_short(self):
        with pytest.raises(ValueError):
            simulate(model_of([1], [1, 1]), [1], [0.0])


# ============================================================================
# Caractéristiques de la réponse indicielle
# ============================================================================


class TestStepCharacteristics:

    def test_first_order(self):
        info = step_characteristics(step_response(model_of([1], [1, 1])))
        assert info['overshoot'] == 0.0
        assert info['steady_state_value'] == pytest.approx(1.0, abs=1e-3)
        assert info['rise_time'] == pytest.approx(math.log(9), abs=0.03)
        assert info['settling_time'] == pytest.approx(math.log(50), abs=0.03)

    def test_underdamped_overshoot(self):
        series = step_response(model_of([1], [1, 0.4, 1]), SimulationConfig(horizon=60.0))
        info = step_characteristics(series)
        # zeta = 0.2 : dépassement théorique exp(-pi*zeta/sqrt(1-zeta^2)) = 52.7 %
        assert info['overshoot'] == pytest.approx(52.7, abs=1.0)
        assert info['peak_time'] == pytest.approx(math.pi / math.sqrt(1 - 0.04), abs=0.05)

    def test_zero_final_value(self):
        info = step_characteristics(impulse_response(model_of([1], [1, 1])))
        assert info['overshoot'] >= 0.0
        assert set(info) == {'rise_time', 'overshoot', 'peak_time', 'peak_value',
                             'settling_time', 'steady_state_value'}
