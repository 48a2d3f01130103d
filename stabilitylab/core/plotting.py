#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Construction des graphiques matplotlib
Figures autonomes (sans état pyplot) réutilisées par l'interface et le rapport PDF
"""

import io
from typing import Optional, Sequence

import numpy as np
from matplotlib.figure import Figure

from .analysis import AnalysisResult
from .complex_ops import ComplexRoot
from .frequency import BodeSamples, NyquistSamples
from .polynomial import TransferFunction
from .report_text import transfer_function_latex
from .simulation import TimeSeries

THEME_COLOR = '#0D47A1'
BACKGROUND = '#F0F8FF'


def new_figure(figsize=(10, 6)) -> Figure:
    return Figure(figsize=figsize, facecolor=BACKGROUND)


def styled_axes(figure: Figure, *subplot):
    """Ajouter des axes au thème de l'application"""
    ax = figure.add_subplot(*(subplot or (1, 1, 1)))
    ax.set_facecolor(BACKGROUND)
    ax.grid(True, alpha=0.3, color=THEME_COLOR)
    for spine in ax.spines.values():
        spine.set_color(THEME_COLOR)
    return ax


def _finite(values: np.ndarray) -> np.ndarray:
    # Les valeurs infinies (pôle sur l'axe imaginaire) coupent la courbe
    values = np.asarray(values, dtype=float)
    return np.where(np.isfinite(values), values, np.nan)


def plot_time_series(series: TimeSeries, title: str, ylabel: str = "Sortie",
                     figure: Optional[Figure] = None) -> Figure:
    """
    Tracer une réponse temporelle

    Args:
        series: Réponse simulée
        title: Titre du graphique
        ylabel: Légende de l'axe vertical
        figure: Figure existante à réutiliser (effacée)

    Returns:
        Figure matplotlib
    """
    figure = figure if figure is not None else new_figure()
    figure.clear()
    ax = styled_axes(figure)
    ax.plot(series.time, _finite(series.response), 'b-', linewidth=2, label=ylabel)
    ax.set_xlabel('Temps (s)')
    ax.set_ylabel(ylabel)
    ax.set_title(title)
    ax.legend(loc='best')
    return figure


def plot_step_response(series: TimeSeries, figure: Optional[Figure] = None) -> Figure:
    return plot_time_series(series, "Réponse indicielle", figure=figure)


def plot_impulse_response(series: TimeSeries, figure: Optional[Figure] = None) -> Figure:
    return plot_time_series(series, "Réponse impulsionnelle", figure=figure)


def plot_pole_zero_map(poles: Sequence[ComplexRoot], zeros: Sequence[ComplexRoot],
                       figure: Optional[Figure] = None) -> Figure:
    """Carte des pôles (croix) et des zéros (cercles) dans le plan complexe"""
    figure = figure if figure is not None else new_figure()
    figure.clear()
    ax = styled_axes(figure)

    if len(poles) > 0:
        ax.scatter([p.real for p in poles], [p.imag for p in poles],
                   marker='x', s=100, c='blue', linewidth=3, label='Pôles')
    if len(zeros) > 0:
        ax.scatter([z.real for z in zeros], [z.imag for z in zeros],
                   marker='o', s=100, facecolors='none', edgecolors='red',
                   linewidth=2, label='Zéros')

    ax.axhline(y=0, color='k', linestyle='-', alpha=0.3)
    ax.axvline(x=0, color='k', linestyle='-', alpha=0.3)
    ax.set_xlabel('Partie réelle')
    ax.set_ylabel('Partie imaginaire')
    ax.set_title('Pôles et zéros du système')
    if len(poles) > 0 or len(zeros) > 0:
        ax.legend()
    return figure


def plot_nyquist(samples: NyquistSamples, figure: Optional[Figure] = None) -> Figure:
    """Lieu de Nyquist avec le point critique -1"""
    figure = figure if figure is not None else new_figure()
    figure.clear()
    ax = styled_axes(figure)
    real = _finite(samples.real)
    imag = _finite(samples.imag)
    ax.plot(real, imag, 'b-', linewidth=2, label='H(jω)')
    ax.plot(real, -imag, 'b--', linewidth=1, alpha=0.5, label='H(-jω)')
    ax.plot([-1], [0], 'r+', markersize=12, markeredgewidth=2, label='Point critique')
    ax.set_xlabel('Partie réelle')
    ax.set_ylabel('Partie imaginaire')
    ax.set_title(f'Diagramme de Nyquist ({samples.negative_real_count} points à partie réelle négative)')
    ax.legend(loc='best')
    return figure


def plot_bode(samples: BodeSamples, figure: Optional[Figure] = None) -> Figure:
    """Diagramme de Bode (module en dB et phase en degrés)"""
    figure = figure if figure is not None else new_figure()
    figure.clear()

    ax1 = styled_axes(figure, 2, 1, 1)
    ax1.semilogx(samples.frequencies, _finite(samples.magnitude_db), 'b-', linewidth=2)
    ax1.set_ylabel('Module (dB)', color='blue')
    ax1.set_title('Diagramme de Bode')

    ax2 = styled_axes(figure, 2, 1, 2)
    ax2.semilogx(samples.frequencies, _finite(samples.phase_deg), 'r-', linewidth=2)
    ax2.set_xlabel('Pulsation (rad/s)')
    ax2.set_ylabel('Phase (°)', color='red')
    return figure


def plot_formula(tf: TransferFunction, figure: Optional[Figure] = None) -> Figure:
    """Image de la formule H(s) = N(s)/D(s) rendue par mathtext"""
    figure = figure if figure is not None else Figure(figsize=(6, 1.2), facecolor='white')
    figure.clear()
    figure.text(0.5, 0.5, f"$H(s) = {transfer_function_latex(tf)}$",
                ha='center', va='center', fontsize=18)
    return figure


def analysis_figures(result: AnalysisResult, selected: Sequence[str]):
    """
    Construire les figures des analyses sélectionnées

    Args:
        result: Résultat de l'analyse
        selected: Clés parmi 'pzmap', 'step', 'impulse', 'nyquist', 'bode'

    Returns:
        Liste de couples (clé, Figure) dans l'ordre du rapport
    """
    builders = {
        'pzmap': lambda: plot_pole_zero_map(result.poles, result.zeros),
        'step': lambda: plot_step_response(result.step_response),
        'impulse': lambda: plot_impulse_response(result.impulse_response),
        'nyquist': lambda: plot_nyquist(result.nyquist),
        'bode': lambda: plot_bode(result.bode),
    }
    return [(key, builder()) for key, builder in builders.items() if key in selected]


def figure_to_png(figure: Figure, dpi: int = 150) -> bytes:
    """Rendu PNG en mémoire d'une figure"""
    buffer = io.BytesIO()
    figure.savefig(buffer, format='png', dpi=dpi, bbox_inches='tight',
                   facecolor='white', edgecolor='none')
    return buffer.getvalue()
