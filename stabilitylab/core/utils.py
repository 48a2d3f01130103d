#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Utilitaires et validations pour StabilityLab
Exceptions personnalisées, constantes de configuration, parsing des coefficients
et fonctions de formatage
"""

import re
from typing import Any, List, Union

import numpy as np


class StabilityLabError(Exception):
    """Exception de base pour StabilityLab"""
    pass


class PolynomialError(StabilityLabError):
    """Erreur liée à un polynôme de la fonction de transfert"""
    pass


class EmptyOrZeroPolynomial(PolynomialError):
    """Numérateur ou dénominateur vide ou composé uniquement de zéros"""
    pass


class InvalidPolynomial(PolynomialError):
    """Polynôme dont le coefficient dominant reste nul ou qui contient des valeurs non finies"""
    pass


class ZeroLeadingDenominatorCoefficient(PolynomialError):
    """Premier coefficient du dénominateur nul lors de la construction d'état"""
    pass


class ImproperTransferFunction(PolynomialError):
    """Fonction de transfert impropre (degré du numérateur > degré du dénominateur)"""
    pass


class DegenerateRouthRow(StabilityLabError):
    """Pivot nul dans le tableau de Routh (ligne nulle ou premier élément nul)"""
    pass


class CoefficientParseError(StabilityLabError):
    """Erreur de lecture d'une liste de coefficients"""
    pass


class SimulationConfigError(StabilityLabError):
    """Paramètres de simulation invalides"""
    pass


def parse_coefficients(text: str) -> List[float]:
    """
    Lire une liste de coefficients séparés par des virgules

    Args:
        text: Chaîne saisie (ex: "1, 3, 2"), puissance la plus élevée en premier

    Returns:
        Liste des coefficients
    """
    if text is None or not text.strip():
        raise CoefficientParseError("La liste de coefficients est vide")

    coefficients = []
    for position, item in enumerate(text.split(','), start=1):
        item = item.strip()
        if not item:
            raise CoefficientParseError(f"Coefficient manquant en position {position}")
        try:
            value = float(item)
        except ValueError:
            raise CoefficientParseError(f"Coefficient non numérique en position {position}: '{item}'")
        if not np.isfinite(value):
            raise CoefficientParseError(f"Coefficient non fini en position {position}: '{item}'")
        coefficients.append(value)

    return coefficients


def coefficients_to_text(coefficients) -> str:
    """Reformater des coefficients en chaîne séparée par des virgules"""
    return ", ".join(f"{float(c):g}" for c in coefficients)


def format_number(value: Union[int, float, complex], precision: int = 4) -> str:
    """Représentation lisible d'un scalaire (notation scientifique hors de [1e-4, 1e6])"""
    if isinstance(value, (int, np.integer)) and not isinstance(value, bool):
        return str(int(value))
    if np.iscomplexobj(value):
        if abs(value.imag) >= 1e-10:
            sign = '-' if value.imag < 0 else '+'
            return f"{value.real:.{precision}f} {sign} {abs(value.imag):.{precision}f}j"
        value = value.real
    try:
        value = float(value)
    except (TypeError, ValueError):
        return str(value)

    if not np.isfinite(value):
        return str(value)
    magnitude = abs(value)
    if magnitude < 1e-10:
        return "0"
    style = 'e' if magnitude >= 1e6 or magnitude <= 1e-4 else 'f'
    return f"{value:.{precision}{style}}"


def _monomial(magnitude: float, power: int, variable: str) -> str:
    if power == 0:
        return f"{magnitude:g}"
    factor = variable if power == 1 else f"{variable}^{power}"
    if np.isclose(magnitude, 1.0, rtol=0.0, atol=1e-12):
        return factor
    return f"{magnitude:g}*{factor}"


def polynomial_to_string(coeffs, variable: str = "s") -> str:
    """
    Écrire un polynôme sous forme lisible

    Args:
        coeffs: Coefficients du polynôme (puissance la plus élevée en premier)
        variable: Nom de la variable

    Returns:
        Chaîne représentant le polynôme (ex: "s^2 + 3*s + 2")
    """
    coeffs = np.asarray(coeffs, dtype=float)
    degree = len(coeffs) - 1

    text = ""
    for index, coeff in enumerate(coeffs):
        if abs(coeff) < 1e-12:
            continue
        monomial = _monomial(abs(coeff), degree - index, variable)
        if not text:
            text = f"-{monomial}" if coeff < 0 else monomial
        else:
            text += f" {'-' if coeff < 0 else '+'} {monomial}"

    return text or "0"


def sanitize_filename(filename: str, max_length: int = 200) -> str:
    """Remplacer les caractères interdits dans un nom de fichier"""
    cleaned = re.sub(r'[<>:"/\\|?*]', '_', filename)[:max_length].strip()
    return cleaned or "stabilitylab_file"


def convert_for_json(obj: Any) -> Any:
    """
    Rendre un objet sérialisable par le module json

    Les tableaux numpy deviennent des listes, les scalaires numpy des types
    Python et les complexes des dictionnaires {real, imag}.
    """
    if isinstance(obj, dict):
        return {key: convert_for_json(value) for key, value in obj.items()}
    if isinstance(obj, (list, tuple, np.ndarray)):
        items = obj.tolist() if isinstance(obj, np.ndarray) else obj
        return [convert_for_json(item) for item in items]
    if isinstance(obj, (complex, np.complexfloating)):
        return {"real": float(obj.real), "imag": float(obj.imag)}
    if isinstance(obj, np.generic):
        return obj.item()
    return obj


# Seuils numériques
DEFAULT_TOLERANCES = {
    'routh_pivot': 1e-12,
    'root_real': 1e-9,
    'settling_band': 0.02,
}

# Bornes acceptées pour la simulation
SYSTEM_LIMITS = {
    'max_simulation_time': 1e3,
    'min_time_step': 1e-6,
    'max_time_step': 10.0,
}

FREQUENCY_DEFAULTS = {
    'nyquist_points': 100,
    'bode_points': 100,
    'bode_decades': (-2.0, 2.0),
}
