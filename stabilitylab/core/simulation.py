#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Simulation temporelle par Runge-Kutta d'ordre 4 à pas fixe
Réponses indicielle et impulsionnelle, caractéristiques de la réponse indicielle
"""

from dataclasses import dataclass
from typing import Dict, NamedTuple, Sequence

import numpy as np

from .spaces import StateSpaceModel
from .utils import DEFAULT_TOLERANCES, SYSTEM_LIMITS, SimulationConfigError


@dataclass(frozen=True)
class SimulationConfig:
    """Horizon de simulation et pas d'intégration"""

    horizon: float = 10.0
    step_size: float = 0.01

    def __post_init__(self):
        if not (np.isfinite(self.horizon) and np.isfinite(self.step_size)):
            raise SimulationConfigError("L'horizon et le pas doivent être finis")
        if self.horizon <= 0:
            raise SimulationConfigError("L'horizon de simulation doit être positif")
        if self.step_size <= 0:
            raise SimulationConfigError("Le pas d'intégration doit être positif")
        if self.step_size > self.horizon:
            raise SimulationConfigError("Le pas d'intégration est plus grand que l'horizon")
        if self.horizon > SYSTEM_LIMITS['max_simulation_time']:
            raise SimulationConfigError(
                f"Horizon trop long (> {SYSTEM_LIMITS['max_simulation_time']})"
            )
        if not SYSTEM_LIMITS['min_time_step'] <= self.step_size <= SYSTEM_LIMITS['max_time_step']:
            raise SimulationConfigError(
                f"Le pas doit être compris entre {SYSTEM_LIMITS['min_time_step']} "
                f"et {SYSTEM_LIMITS['max_time_step']}"
            )


class TimeSeries(NamedTuple):
    """Réponse temporelle échantillonnée sur une grille uniforme"""
    time: np.ndarray
    response: np.ndarray


def time_grid(config: SimulationConfig) -> np.ndarray:
    """Grille temporelle uniforme [0, horizon]"""
    n_points = int(round(config.horizon / config.step_size)) + 1
    return np.linspace(0.0, config.horizon, n_points)


def simulate(model: StateSpaceModel, input_signal: Sequence[float], time: Sequence[float]) -> np.ndarray:
    """
    Intégrer dx/dt = A·x + B·u et calculer y = C·x + D·u

    L'entrée est maintenue constante pendant chaque pas (bloqueur d'ordre zéro) et
    la sortie est calculée à partir de l'état mis à jour. État initial nul.

    Args:
        model: Représentation d'état
        input_signal: Entrée u à chaque point de la grille
        time: Grille temporelle uniforme

    Returns:
        Sortie y à chaque point de la grille
    """
    u = np.asarray(input_signal, dtype=float)
    time = np.asarray(time, dtype=float)
    if len(u) != len(time):
        raise ValueError("L'entrée et la grille temporelle doivent avoir la même longueur")
    if len(time) < 2:
        raise ValueError("La grille temporelle doit contenir au moins deux points")

    dt = time[1] - time[0]
    A = model.A
    b = model.B[:, 0]
    c = model.C[0]
    D = model.D

    x = np.zeros(model.order)
    y = np.empty(len(u))

    for i, u_i in enumerate(u):
        k1 = A @ x + b * u_i
        k2 = A @ (x + k1 * dt / 2) + b * u_i
        k3 = A @ (x + k2 * dt / 2) + b * u_i
        k4 = A @ (x + k3 * dt) + b * u_i

        x = x + dt / 6 * (k1 + 2 * k2 + 2 * k3 + k4)
        y[i] = c @ x + D * u_i

    return y


def step_input(time: np.ndarray) -> np.ndarray:
    return np.ones_like(time)


def impulse_input(time: np.ndarray) -> np.ndarray:
    """Impulsion approximée : 1/dt au premier point, zéro ailleurs"""
    u = np.zeros_like(time)
    u[0] = 1.0 / (time[1] - time[0])
    return u


def step_response(model: StateSpaceModel, config: SimulationConfig = SimulationConfig()) -> TimeSeries:
    time = time_grid(config)
    return TimeSeries(time=time, response=simulate(model, step_input(time), time))


def impulse_response(model: StateSpaceModel, config: SimulationConfig = SimulationConfig()) -> TimeSeries:
    time = time_grid(config)
    return TimeSeries(time=time, response=simulate(model, impulse_input(time), time))


def step_characteristics(series: TimeSeries) -> Dict[str, float]:
    """
    Calculer les informations sur la réponse indicielle

    Args:
        series: Réponse indicielle

    Returns:
        Dictionnaire avec temps de montée (10 % à 90 %), dépassement (%),
        temps et valeur de pic, temps d'établissement (±2 %) et valeur finale
    """
    t, y = series.time, series.response
    steady_state = float(y[-1])

    peak_idx = int(np.argmax(y))
    max_value = float(y[peak_idx])
    peak_time = float(t[peak_idx])

    if steady_state != 0 and np.isfinite(steady_state):
        idx_10 = np.where(y >= 0.1 * steady_state)[0] if steady_state > 0 else np.where(y <= 0.1 * steady_state)[0]
        idx_90 = np.where(y >= 0.9 * steady_state)[0] if steady_state > 0 else np.where(y <= 0.9 * steady_state)[0]
        rise_time = float(t[idx_90[0]] - t[idx_10[0]]) if len(idx_10) > 0 and len(idx_90) > 0 else 0.0

        if steady_state > 0:
            overshoot = max(0.0, (max_value - steady_state) / steady_state * 100)
        else:
            overshoot = max(0.0, (steady_state - float(np.min(y))) / abs(steady_state) * 100)

        # Dernier instant hors de la bande de tolérance
        tolerance = DEFAULT_TOLERANCES['settling_band'] * abs(steady_state)
        outside = np.where(np.abs(y - steady_state) > tolerance)[0]
        if len(outside) == 0:
            settling_time = float(t[0])
        elif outside[-1] + 1 < len(t):
            settling_time = float(t[outside[-1] + 1])
        else:
            settling_time = float(t[-1])
    else:
        rise_time = 0.0
        overshoot = 0.0
        settling_time = float(t[-1])

    return {
        'rise_time': rise_time,
        'overshoot': overshoot,
        'peak_time': peak_time,
        'peak_value': max_value,
        'settling_time': settling_time,
        'steady_state_value': steady_state,
    }
