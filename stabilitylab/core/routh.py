#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Critère de Routh-Hurwitz
Construction du tableau de Routh et verdict de stabilité sans calcul des racines
"""

from typing import NamedTuple, Tuple

import numpy as np

from .polynomial import Polynomial
from .utils import DEFAULT_TOLERANCES, DegenerateRouthRow

RouthArray = Tuple[Tuple[float, ...], ...]


class RouthResult(NamedTuple):
    """Tableau de Routh et verdict associé"""
    array: RouthArray
    stable: bool

    @property
    def first_column(self) -> Tuple[float, ...]:
        return tuple(row[0] for row in self.array)

    @property
    def sign_changes(self) -> int:
        """Nombre de changements de signe dans la première colonne"""
        signs = np.sign(self.first_column)
        return int(np.count_nonzero(signs[1:] != signs[:-1]))


def _next_row(above: Tuple[float, ...], previous: Tuple[float, ...], tolerance: float) -> Tuple[float, ...]:
    pivot = previous[0]
    if abs(pivot) <= tolerance:
        raise DegenerateRouthRow(
            "Pivot nul dans le tableau de Routh : cas singulier non traité "
            "(ligne de zéros ou premier élément nul)"
        )

    def at(row, i):
        return row[i] if i < len(row) else 0.0

    length = max(len(above) - 1, 1)
    return tuple(
        (pivot * at(above, i + 1) - above[0] * at(previous, i + 1)) / pivot
        for i in range(length)
    )


def routh_array(denominator: Polynomial) -> RouthArray:
    """
    Construire le tableau de Routh d'un polynôme

    Args:
        denominator: Polynôme caractéristique

    Returns:
        Lignes du tableau (n + 1 lignes pour un polynôme de degré n)
    """
    coeffs = denominator.coefficients
    scale = max(abs(c) for c in coeffs)
    tolerance = DEFAULT_TOLERANCES['routh_pivot'] * scale

    rows = [tuple(coeffs[0::2])]
    odd = tuple(coeffs[1::2])
    if odd:
        rows.append(odd)

    while len(rows) < denominator.degree + 1:
        rows.append(_next_row(rows[-2], rows[-1], tolerance))

    return tuple(rows)


def analyze_routh(denominator: Polynomial) -> RouthResult:
    """
    Appliquer le critère de Routh-Hurwitz

    Le système est déclaré stable si tous les éléments du tableau ont
    strictement le même signe.

    Args:
        denominator: Polynôme caractéristique

    Returns:
        RouthResult (tableau, stable)
    """
    array = routh_array(denominator)
    entries = np.concatenate([np.asarray(row, dtype=float) for row in array])
    stable = bool(np.all(entries > 0) or np.all(entries < 0))
    return RouthResult(array=array, stable=stable)
