#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Polynômes et fonctions de transfert
Validation et normalisation des coefficients (puissance la plus élevée en premier)
"""

from dataclasses import dataclass
from typing import Iterable, Tuple

import numpy as np

from .utils import EmptyOrZeroPolynomial, InvalidPolynomial


def strip_leading_zeros(coefficients: Iterable[float]) -> Tuple[float, ...]:
    """
    Supprimer les coefficients nuls de tête

    Args:
        coefficients: Coefficients bruts

    Returns:
        Coefficients sans zéros de tête (tuple vide si tous nuls)
    """
    values = tuple(float(c) for c in coefficients)
    for index, value in enumerate(values):
        if value != 0.0:
            return values[index:]
    return ()


@dataclass(frozen=True)
class Polynomial:
    """Polynôme réel à coefficients ordonnés, puissance la plus élevée en premier"""

    coefficients: Tuple[float, ...]

    def __post_init__(self):
        if not all(np.isfinite(c) for c in self.coefficients):
            raise InvalidPolynomial("Le polynôme contient des coefficients non finis")
        stripped = strip_leading_zeros(self.coefficients)
        if not stripped:
            raise EmptyOrZeroPolynomial("Le polynôme ne peut pas être vide ou composé uniquement de zéros")
        object.__setattr__(self, 'coefficients', stripped)

    @classmethod
    def from_coefficients(cls, raw: Iterable[float]) -> "Polynomial":
        """Construire un polynôme à partir d'une séquence numérique quelconque"""
        return cls(tuple(float(c) for c in raw))

    @property
    def degree(self) -> int:
        return len(self.coefficients) - 1

    @property
    def leading(self) -> float:
        return self.coefficients[0]

    def as_array(self) -> np.ndarray:
        return np.array(self.coefficients, dtype=float)

    def normalized(self, divisor: float = None) -> np.ndarray:
        """
        Coefficients divisés par un diviseur (par défaut le coefficient dominant)

        Args:
            divisor: Diviseur commun

        Returns:
            Coefficients normalisés
        """
        if divisor is None:
            divisor = self.leading
        if divisor == 0.0:
            raise InvalidPolynomial("Normalisation par un coefficient nul")
        return self.as_array() / divisor

    def __len__(self) -> int:
        return len(self.coefficients)


@dataclass(frozen=True)
class TransferFunction:
    """Fonction de transfert N(s)/D(s) d'un système SISO"""

    numerator: Polynomial
    denominator: Polynomial

    @classmethod
    def from_coefficients(cls, numerator: Iterable[float], denominator: Iterable[float]) -> "TransferFunction":
        return cls(Polynomial.from_coefficients(numerator), Polynomial.from_coefficients(denominator))

    @property
    def order(self) -> int:
        """Ordre du système (degré du dénominateur)"""
        return self.denominator.degree

    @property
    def is_proper(self) -> bool:
        return self.numerator.degree <= self.denominator.degree
