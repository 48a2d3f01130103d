#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Recherche des racines d'un polynôme réel
Formules fermées pour les degrés 1 et 2, valeurs propres de la matrice compagne
pour les degrés supérieurs
"""

from enum import Enum
from typing import Callable, Dict, Sequence, Tuple, Union

import numpy as np
import scipy.linalg

from .complex_ops import ComplexRoot
from .polynomial import Polynomial, strip_leading_zeros
from .utils import InvalidPolynomial

EigenBackend = Callable[[np.ndarray], np.ndarray]

EIGEN_BACKENDS: Dict[str, EigenBackend] = {
    'numpy': np.linalg.eigvals,
    'scipy': scipy.linalg.eigvals,
}


class DegreeClass(Enum):
    """Classe de degré d'un polynôme, détermine la méthode de résolution"""
    CONSTANT = "constant"
    LINEAR = "linear"
    QUADRATIC = "quadratic"
    GENERAL = "general"

    @classmethod
    def of(cls, degree: int) -> "DegreeClass":
        if degree <= 0:
            return cls.CONSTANT
        if degree == 1:
            return cls.LINEAR
        if degree == 2:
            return cls.QUADRATIC
        return cls.GENERAL


def companion_matrix(coeffs: Sequence[float]) -> np.ndarray:
    """
    Construire la matrice compagne d'un polynôme

    Args:
        coeffs: Coefficients (coefficient dominant non nul en premier)

    Returns:
        Matrice n×n : coefficients normalisés opposés sur la première ligne,
        uns sur la sous-diagonale
    """
    coeffs = np.asarray(coeffs, dtype=float)
    n = len(coeffs) - 1
    matrix = np.zeros((n, n))
    matrix[0, :] = -coeffs[1:] / coeffs[0]
    if n > 1:
        matrix[1:, :-1] = np.eye(n - 1)
    return matrix


def _constant_roots(coeffs: Tuple[float, ...], backend: EigenBackend) -> Tuple[ComplexRoot, ...]:
    return ()


def _linear_roots(coeffs: Tuple[float, ...], backend: EigenBackend) -> Tuple[ComplexRoot, ...]:
    a, b = coeffs
    return (ComplexRoot(-b / a, 0.0),)


def _quadratic_roots(coeffs: Tuple[float, ...], backend: EigenBackend) -> Tuple[ComplexRoot, ...]:
    a, b, c = coeffs
    discriminant = b * b - 4 * a * c
    if discriminant >= 0:
        sqrt_d = np.sqrt(discriminant)
        return (
            ComplexRoot(float((-b + sqrt_d) / (2 * a)), 0.0),
            ComplexRoot(float((-b - sqrt_d) / (2 * a)), 0.0),
        )
    # Paire conjuguée calculée à partir des parties réelle et imaginaire
    real_part = -b / (2 * a)
    imag_part = np.sqrt(-discriminant) / (2 * a)
    return (
        ComplexRoot(float(real_part), float(imag_part)),
        ComplexRoot(float(real_part), float(-imag_part)),
    )


def _general_roots(coeffs: Tuple[float, ...], backend: EigenBackend) -> Tuple[ComplexRoot, ...]:
    eigenvalues = backend(companion_matrix(coeffs))
    return tuple(ComplexRoot.from_complex(value) for value in eigenvalues)


_SOLVERS = {
    DegreeClass.CONSTANT: _constant_roots,
    DegreeClass.LINEAR: _linear_roots,
    DegreeClass.QUADRATIC: _quadratic_roots,
    DegreeClass.GENERAL: _general_roots,
}


def get_eigen_backend(backend: Union[str, EigenBackend]) -> EigenBackend:
    """
    Résoudre le backend de décomposition en valeurs propres

    Args:
        backend: Nom ('numpy', 'scipy') ou fonction matrice -> valeurs propres

    Returns:
        Fonction de calcul des valeurs propres
    """
    if callable(backend):
        return backend
    try:
        return EIGEN_BACKENDS[backend]
    except KeyError:
        raise ValueError(f"Backend de valeurs propres inconnu: {backend!r}")


def find_roots(coeffs: Union[Polynomial, Sequence[float]],
               backend: Union[str, EigenBackend] = 'numpy') -> Tuple[ComplexRoot, ...]:
    """
    Calculer les racines d'un polynôme réel

    Args:
        coeffs: Polynôme ou coefficients bruts (puissance la plus élevée en premier)
        backend: Backend utilisé pour les degrés >= 3

    Returns:
        Racines du polynôme (tuple vide pour un polynôme constant)
    """
    eigen_backend = get_eigen_backend(backend)

    if isinstance(coeffs, Polynomial):
        values = coeffs.coefficients
    else:
        values = strip_leading_zeros(coeffs)
        if not values:
            raise InvalidPolynomial("Polynôme nul : aucune racine définie")

    if values[0] == 0.0:
        raise InvalidPolynomial("Le premier coefficient ne peut pas être nul")

    degree = len(values) - 1
    return _SOLVERS[DegreeClass.of(degree)](values, eigen_backend)

