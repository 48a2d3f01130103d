#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Textes de résultats
Résumé, explication et conclusion d'une analyse de stabilité, rendu LaTeX
de la fonction de transfert et données sérialisables pour les exports
"""

from typing import Any, Dict, NamedTuple, Sequence

import sympy as sp

from .analysis import AnalysisResult
from .classifier import all_in_left_half_plane
from .complex_ops import ComplexRoot
from .polynomial import Polynomial, TransferFunction
from .simulation import step_characteristics
from .utils import convert_for_json, polynomial_to_string

S = sp.Symbol('s')


class Explanation(NamedTuple):
    """Textes affichés et exportés pour une analyse"""
    summary: str
    explanation: str
    conclusion: str
    payload: Dict[str, Any]


def format_root(root: ComplexRoot) -> str:
    """
    Formater une racine avec deux décimales

    Args:
        root: Racine complexe

    Returns:
        "a", "a + bi" ou "a - bi"
    """
    real_part = f"{root.real:.2f}"
    imag_part = f"{abs(root.imag):.2f}"
    if root.imag == 0:
        return real_part
    if root.imag > 0:
        return f"{real_part} + {imag_part}i"
    return f"{real_part} - {imag_part}i"


def _sympy_coefficient(value: float):
    if float(value).is_integer():
        return sp.Integer(int(value))
    return sp.Float(value, 4)


def polynomial_expression(polynomial: Polynomial) -> sp.Expr:
    """Expression sympy d'un polynôme en s"""
    degree = polynomial.degree
    return sp.Add(*[
        _sympy_coefficient(coeff) * S ** (degree - i)
        for i, coeff in enumerate(polynomial.coefficients)
    ])


def transfer_function_latex(tf: TransferFunction) -> str:
    """
    Rendu LaTeX de N(s)/D(s), sans simplification de la fraction

    Args:
        tf: Fonction de transfert

    Returns:
        Chaîne LaTeX de la forme \\frac{N}{D}
    """
    numerator = sp.latex(polynomial_expression(tf.numerator))
    denominator = sp.latex(polynomial_expression(tf.denominator))
    return rf"\frac{{{numerator}}}{{{denominator}}}"


def transfer_function_text(tf: TransferFunction) -> str:
    """Forme texte "(N) / (D)", utilisée aussi comme nom par défaut d'une sauvegarde"""
    numerator = polynomial_to_string(tf.numerator.coefficients)
    denominator = polynomial_to_string(tf.denominator.coefficients)
    return f"({numerator}) / ({denominator})"


def _phase_label(non_minimum_phase: bool) -> str:
    return "à phase non minimale" if non_minimum_phase else "à phase minimale"


def _poles_position(poles: Sequence[ComplexRoot]) -> str:
    if len(poles) == 0:
        return "Aucun pôle n'a été trouvé"
    if all_in_left_half_plane(poles):
        return "Les pôles sont situés dans le demi-plan gauche du plan complexe"
    return "Les pôles sont situés dans le demi-plan droit du plan complexe"


def _routh_sentence(result: AnalysisResult) -> str:
    routh = result.routh
    if not routh.completed:
        return f"Critère de Routh-Hurwitz non applicable : {routh.reason}"
    verdict = "stable" if routh.stable else "instable"
    return (f"Critère de Routh-Hurwitz : {routh.result.sign_changes} changement(s) de signe "
            f"dans la première colonne, système {verdict}.")


def _roots_payload(roots: Sequence[ComplexRoot]):
    return [{'real': root.real, 'imag': root.imag} for root in roots]


def build_payload(result: AnalysisResult) -> Dict[str, Any]:
    """
    Rassembler les données d'une analyse sous forme sérialisable JSON

    Args:
        result: Résultat de l'analyse

    Returns:
        Dictionnaire de types Python natifs
    """
    tf = result.transfer_function
    routh = result.routh
    payload = {
        'transfer_function': transfer_function_text(tf),
        'numerator': list(tf.numerator.coefficients),
        'denominator': list(tf.denominator.coefficients),
        'stability': result.stability.value,
        'is_stable': result.is_stable,
        'non_minimum_phase': result.non_minimum_phase,
        'poles': _roots_payload(result.poles),
        'zeros': _roots_payload(result.zeros),
        'routh': {
            'completed': routh.completed,
            'stable': routh.stable,
            'first_column': list(routh.result.first_column) if routh.completed else [],
            'reason': routh.reason,
        },
        'step_characteristics': step_characteristics(result.step_response),
        'state_space': {
            'A': result.state_space.A,
            'B': result.state_space.B,
            'C': result.state_space.C,
            'D': result.state_space.D,
        },
    }
    return convert_for_json(payload)


def explain(result: AnalysisResult) -> Explanation:
    """
    Produire les textes d'une analyse

    Args:
        result: Résultat de l'analyse

    Returns:
        Explanation (résumé, explication, conclusion et données)
    """
    stable_word = "stable" if result.is_stable else "instable"
    phase = _phase_label(result.non_minimum_phase)

    summary = (f"Le système est {stable_word}. L'analyse des pôles et des zéros "
               f"indique que le système est {phase}.")

    explanation = (f"Analyse du système : le système est {stable_word}. "
                   f"Le système est {phase}. {_routh_sentence(result)}")

    if result.non_minimum_phase:
        phase_sentence = ("Cependant, le système est à phase non minimale, ce qui peut "
                          "affecter son comportement dynamique.")
    else:
        phase_sentence = ("Le système est également à phase minimale, ce qui favorise "
                          "un meilleur comportement dynamique.")
    stability_noun = "stabilité" if result.is_stable else "instabilité"
    conclusion = (f"Le système présente un comportement {stable_word} d'après l'analyse "
                  f"des pôles et des zéros. {_poles_position(result.poles)}, ce qui indique "
                  f"sa {stability_noun}. {phase_sentence}")

    return Explanation(
        summary=summary,
        explanation=explanation,
        conclusion=conclusion,
        payload=build_payload(result),
    )
