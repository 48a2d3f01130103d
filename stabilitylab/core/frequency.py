#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Réponse fréquentielle d'une fonction de transfert
Échantillonnage de Nyquist (plan complexe) et de Bode (module/phase)
"""

from typing import NamedTuple, Sequence, Tuple, Union

import numpy as np

from . import complex_ops
from .polynomial import Polynomial, TransferFunction
from .utils import FREQUENCY_DEFAULTS


class NyquistSamples(NamedTuple):
    """Points du lieu de Nyquist H(jω)"""
    frequencies: np.ndarray
    real: np.ndarray
    imag: np.ndarray
    negative_real_count: int

    def points(self) -> Tuple[Tuple[float, float], ...]:
        """Couples (réel, imaginaire) pour le tracé"""
        return tuple(zip(self.real.tolist(), self.imag.tolist()))


class BodeSamples(NamedTuple):
    """Données du diagramme de Bode"""
    frequencies: np.ndarray
    magnitude_db: np.ndarray
    phase_deg: np.ndarray


def evaluate_polynomial(coeffs: Union[Polynomial, Sequence[float]], s) -> np.ndarray:
    """
    Évaluer un polynôme en un ou plusieurs points complexes

    Calcule Σ coeff[i]·s^(degré−i) avec la puissance complexe.

    Args:
        coeffs: Polynôme ou coefficients (puissance la plus élevée en premier)
        s: Point(s) complexe(s)

    Returns:
        Valeur(s) complexe(s) du polynôme
    """
    if isinstance(coeffs, Polynomial):
        coeffs = coeffs.coefficients
    s = np.asarray(s, dtype=complex)
    degree = len(coeffs) - 1
    total = np.zeros_like(s)
    for i, coeff in enumerate(coeffs):
        total = complex_ops.add(total, complex_ops.multiply(coeff, complex_ops.power(s, degree - i)))
    return total


def _response_on_axis(tf: TransferFunction, omega: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    s = 1j * omega
    return evaluate_polynomial(tf.numerator, s), evaluate_polynomial(tf.denominator, s)


def sample_nyquist(tf: TransferFunction, points: int = FREQUENCY_DEFAULTS['nyquist_points']) -> NyquistSamples:
    """
    Échantillonner le lieu de Nyquist

    Les pulsations sont uniformément réparties sur [0, 2π). Le nombre de points à
    partie réelle négative est une approximation grossière des encerclements du
    point critique, pas un calcul d'indice.

    Args:
        tf: Fonction de transfert
        points: Nombre d'échantillons

    Returns:
        NyquistSamples
    """
    omega = np.linspace(0.0, 2 * np.pi, points, endpoint=False)
    numerator, denominator = _response_on_axis(tf, omega)
    response = complex_ops.divide(numerator, denominator)
    real = np.real(response)
    imag = np.imag(response)
    return NyquistSamples(
        frequencies=omega,
        real=real,
        imag=imag,
        negative_real_count=int(np.count_nonzero(real < 0)),
    )


def sample_bode(tf: TransferFunction,
                points: int = FREQUENCY_DEFAULTS['bode_points'],
                decades: Tuple[float, float] = FREQUENCY_DEFAULTS['bode_decades']) -> BodeSamples:
    """
    Échantillonner le diagramme de Bode

    Args:
        tf: Fonction de transfert
        points: Nombre de pulsations (réparties logarithmiquement)
        decades: Bornes en puissances de 10 (rad/s)

    Returns:
        BodeSamples (pulsations, module en dB, phase en degrés)
    """
    omega = np.logspace(decades[0], decades[1], points)
    numerator, denominator = _response_on_axis(tf, omega)

    with np.errstate(divide='ignore', invalid='ignore'):
        ratio = complex_ops.modulus(numerator) / complex_ops.modulus(denominator)
        magnitude_db = 20 * np.log10(ratio)

    phase_deg = np.degrees(complex_ops.argument(numerator) - complex_ops.argument(denominator))

    return BodeSamples(frequencies=omega, magnitude_db=magnitude_db, phase_deg=phase_deg)
