#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Analyse complète d'une fonction de transfert
Point d'entrée unique : pôles, zéros, Routh-Hurwitz, réponses fréquentielles et
temporelles, verdict de stabilité
"""

from dataclasses import dataclass
from typing import NamedTuple, Optional, Sequence, Tuple, Union

from .classifier import Stability, classify
from .complex_ops import ComplexRoot
from .frequency import BodeSamples, NyquistSamples, sample_bode, sample_nyquist
from .polynomial import Polynomial, TransferFunction
from .roots import EigenBackend, find_roots
from .routh import RouthResult, analyze_routh
from .simulation import SimulationConfig, TimeSeries, impulse_response, step_response
from .spaces import StateSpaceModel, build_state_space
from .utils import DegenerateRouthRow, EmptyOrZeroPolynomial


class RouthOutcome(NamedTuple):
    """Résultat du critère de Routh-Hurwitz, ou raison de son échec"""
    completed: bool
    result: Optional[RouthResult] = None
    reason: str = ""

    @property
    def stable(self) -> Optional[bool]:
        return self.result.stable if self.completed else None


@dataclass(frozen=True, eq=False)
class AnalysisResult:
    """Résultat agrégé d'une analyse (données uniquement, sans texte)"""

    transfer_function: TransferFunction
    stability: Stability
    zeros: Tuple[ComplexRoot, ...]
    poles: Tuple[ComplexRoot, ...]
    non_minimum_phase: bool
    step_response: TimeSeries
    impulse_response: TimeSeries
    nyquist: NyquistSamples
    bode: BodeSamples
    state_space: StateSpaceModel
    routh: RouthOutcome

    @property
    def is_stable(self) -> bool:
        return self.stability is Stability.STABLE


def _validate_raw(coefficients: Sequence[float], label: str) -> Polynomial:
    values = [float(c) for c in coefficients]
    if not values or all(c == 0 for c in values):
        raise EmptyOrZeroPolynomial(f"Le {label} ne peut pas être vide ou composé uniquement de zéros.")
    return Polynomial.from_coefficients(values)


def _routh_outcome(denominator: Polynomial) -> RouthOutcome:
    try:
        return RouthOutcome(completed=True, result=analyze_routh(denominator))
    except DegenerateRouthRow as e:
        return RouthOutcome(completed=False, reason=str(e))


def analyze(numerator: Sequence[float], denominator: Sequence[float],
            config: Optional[SimulationConfig] = None,
            backend: Union[str, EigenBackend] = 'numpy') -> AnalysisResult:
    """
    Analyser la stabilité d'une fonction de transfert N(s)/D(s)

    Args:
        numerator: Coefficients du numérateur (puissance la plus élevée en premier)
        denominator: Coefficients du dénominateur
        config: Horizon et pas de simulation (10 s, 0.01 s par défaut)
        backend: Backend de valeurs propres pour les degrés >= 3

    Returns:
        AnalysisResult
    """
    if config is None:
        config = SimulationConfig()

    num = _validate_raw(numerator, "numérateur")
    den = _validate_raw(denominator, "dénominateur")
    tf = TransferFunction(num, den)

    zeros = find_roots(num, backend=backend)
    poles = find_roots(den, backend=backend)

    model = build_state_space(tf)
    verdict = classify(poles, zeros)

    return AnalysisResult(
        transfer_function=tf,
        stability=verdict.stability,
        zeros=zeros,
        poles=poles,
        non_minimum_phase=verdict.non_minimum_phase,
        step_response=step_response(model, config),
        impulse_response=impulse_response(model, config),
        nyquist=sample_nyquist(tf),
        bode=sample_bode(tf),
        state_space=model,
        routh=_routh_outcome(den),
    )

