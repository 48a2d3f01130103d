#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Classification de stabilité et de phase minimale
"""

from enum import Enum
from typing import NamedTuple, Sequence

from .complex_ops import ComplexRoot
from .utils import DEFAULT_TOLERANCES


class Stability(Enum):
    """Verdict de stabilité"""
    STABLE = "stable"
    UNSTABLE = "unstable"


class StabilityVerdict(NamedTuple):
    stability: Stability
    non_minimum_phase: bool

    @property
    def is_stable(self) -> bool:
        return self.stability is Stability.STABLE


def all_in_left_half_plane(roots: Sequence[ComplexRoot]) -> bool:
    """
    Toutes les racines ont une partie réelle strictement négative

    Une partie réelle de l'ordre de l'erreur d'arrondi (racine sur l'axe
    imaginaire obtenue par valeurs propres) ne compte pas comme négative.
    """
    tolerance = DEFAULT_TOLERANCES['root_real']
    return all(root.real < -tolerance * max(1.0, root.modulus) for root in roots)


def classify(poles: Sequence[ComplexRoot], zeros: Sequence[ComplexRoot]) -> StabilityVerdict:
    """
    Déterminer la stabilité et le caractère à phase minimale

    Args:
        poles: Racines du dénominateur
        zeros: Racines du numérateur

    Returns:
        StabilityVerdict (stable si tous les pôles sont à gauche, phase minimale si
        le système est stable et tous les zéros sont à gauche)
    """
    is_stable = all_in_left_half_plane(poles)
    is_minimum_phase = is_stable and all_in_left_half_plane(zeros)
    return StabilityVerdict(
        stability=Stability.STABLE if is_stable else Stability.UNSTABLE,
        non_minimum_phase=not is_minimum_phase,
    )
