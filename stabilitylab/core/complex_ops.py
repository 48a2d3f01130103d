#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Arithmétique complexe minimale
Racines complexes et opérations élémentaires (somme, produit, quotient,
racine carrée, puissance, module, argument) partagées par les autres modules
"""

from typing import NamedTuple, Union

import numpy as np

Number = Union[complex, np.ndarray]


class ComplexRoot(NamedTuple):
    """Racine d'un polynôme réel (partie réelle, partie imaginaire)"""

    real: float
    imag: float

    @classmethod
    def from_complex(cls, value: complex) -> "ComplexRoot":
        return cls(float(np.real(value)), float(np.imag(value)))

    def to_complex(self) -> complex:
        return complex(self.real, self.imag)

    @property
    def modulus(self) -> float:
        return modulus(self.to_complex())


def add(a: Number, b: Number) -> Number:
    return a + b


def multiply(a: Number, b: Number) -> Number:
    return a * b


def divide(a: Number, b: Number) -> Number:
    """
    Quotient complexe

    Une division par zéro donne inf/nan (via numpy) au lieu de lever une exception,
    ce qui correspond à une réponse fréquentielle non bornée sur un pôle imaginaire.
    """
    with np.errstate(divide='ignore', invalid='ignore'):
        return np.divide(np.asarray(a, dtype=complex), np.asarray(b, dtype=complex))


def sqrt(a: Number) -> Number:
    """Racine carrée principale (partie réelle >= 0), y compris pour un réel négatif"""
    return np.sqrt(np.asarray(a, dtype=complex))


def power(a: Number, exponent: int) -> Number:
    """Puissance entière positive ou nulle (s^0 = 1, y compris en s = 0)"""
    a = np.asarray(a, dtype=complex)
    if exponent == 0:
        return np.ones_like(a)
    return np.power(a, exponent)


def modulus(a: Number):
    return np.abs(a)


def argument(a: Number):
    """Argument en radians dans ]-pi, pi]"""
    return np.angle(a)
