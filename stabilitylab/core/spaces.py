#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Conversion fonction de transfert -> représentation d'état
Forme canonique commandable et conversions vers python-control
"""

from dataclasses import dataclass

import control
import numpy as np

from .polynomial import TransferFunction
from .utils import ImproperTransferFunction, ZeroLeadingDenominatorCoefficient


def _read_only(matrix: np.ndarray) -> np.ndarray:
    matrix = np.array(matrix, dtype=float)
    matrix.setflags(write=False)
    return matrix


@dataclass(frozen=True, eq=False)
class StateSpaceModel:
    """Matrices A (n×n), B (n×1), C (1×n) et D (scalaire) d'un système SISO"""

    A: np.ndarray
    B: np.ndarray
    C: np.ndarray
    D: float

    def __post_init__(self):
        for name in ('A', 'B', 'C'):
            object.__setattr__(self, name, _read_only(getattr(self, name)))
        object.__setattr__(self, 'D', float(self.D))

    @property
    def order(self) -> int:
        return self.A.shape[0]


def build_state_space(tf: TransferFunction) -> StateSpaceModel:
    """
    Construire la forme canonique commandable d'une fonction de transfert

    Args:
        tf: Fonction de transfert propre

    Returns:
        StateSpaceModel (A compagne, B = e1, C numérateur aligné, D transmission directe)
    """
    den = tf.denominator.as_array()
    num = tf.numerator.as_array()

    if den[0] == 0:
        raise ZeroLeadingDenominatorCoefficient("Le premier coefficient du dénominateur ne peut pas être nul")

    n = len(den) - 1
    m = len(num) - 1
    if m > n:
        raise ImproperTransferFunction(
            f"Fonction de transfert impropre (degré {m} > {n}) : pas de représentation d'état"
        )

    # Normalisation par le coefficient dominant du dénominateur
    a = den / den[0]
    b = num / den[0]

    A = np.zeros((n, n))
    if n > 0:
        A[0, :] = -a[1:]
    if n > 1:
        A[1:, :-1] = np.eye(n - 1)

    B = np.zeros((n, 1))
    if n > 0:
        B[0, 0] = 1.0

    C = np.zeros((1, n))
    if m < n:
        D = 0.0
        if n > 0:
            C[0, n - 1 - m:] = b
    else:
        D = b[0]
        C[0, :] = b[1:] - D * a[1:]

    return StateSpaceModel(A=A, B=B, C=C, D=D)


def frequency_response_at(model: StateSpaceModel, s: complex) -> complex:
    """
    Évaluer C·(sI − A)⁻¹·B + D en un point complexe

    Args:
        model: Représentation d'état
        s: Point du plan complexe

    Returns:
        Valeur de la fonction de transfert
    """
    n = model.order
    if n == 0:
        return complex(model.D)
    resolvent = np.linalg.solve(s * np.eye(n) - model.A, model.B.astype(complex))
    return complex((model.C @ resolvent)[0, 0] + model.D)


def to_control_tf(tf: TransferFunction) -> control.TransferFunction:
    """Convertir en fonction de transfert python-control"""
    return control.tf(tf.numerator.as_array(), tf.denominator.as_array())


def to_control_ss(model: StateSpaceModel) -> control.StateSpace:
    """Convertir en représentation d'état python-control"""
    return control.ss(model.A, model.B, model.C, np.array([[model.D]]))
