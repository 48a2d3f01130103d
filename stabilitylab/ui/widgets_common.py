#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Widgets communs pour StabilityLab
Saisie de la fonction de transfert, paramètres de simulation, choix des analyses
et canvas matplotlib
"""

from typing import Callable, Dict, List, Optional, Tuple

from PyQt5.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QGridLayout, QPushButton,
    QLabel, QLineEdit, QDoubleSpinBox, QGroupBox, QCheckBox,
    QMessageBox, QFileDialog
)
from PyQt5.QtCore import pyqtSignal

from matplotlib.backends.backend_qt5agg import FigureCanvasQTAgg as FigureCanvas
from matplotlib.figure import Figure

from ..core.exports import save_figure
from ..core.plotting import new_figure
from ..core.simulation import SimulationConfig
from ..core.utils import parse_coefficients, sanitize_filename


class TransferFunctionInput(QGroupBox):
    """Saisie du numérateur et du dénominateur (coefficients séparés par des virgules)"""

    coefficients_changed = pyqtSignal()

    def __init__(self, title: str = "Fonction de transfert H(s) = N(s) / D(s)"):
        super().__init__(title)
        self.setup_ui()

    def setup_ui(self):
        layout = QGridLayout(self)
        layout.setSpacing(10)

        layout.addWidget(QLabel("Numérateur N(s):"), 0, 0)
        self.numerator_edit = QLineEdit("1")
        self.numerator_edit.setPlaceholderText("ex: 1, 2")
        layout.addWidget(self.numerator_edit, 0, 1)

        layout.addWidget(QLabel("Dénominateur D(s):"), 1, 0)
        self.denominator_edit = QLineEdit("1, 3, 2")
        self.denominator_edit.setPlaceholderText("ex: 1, 3, 2")
        layout.addWidget(self.denominator_edit, 1, 1)

        hint = QLabel("Coefficients par puissances décroissantes de s")
        hint.setObjectName("hintLabel")
        layout.addWidget(hint, 2, 0, 1, 2)

        self.numerator_edit.textChanged.connect(lambda _text: self.coefficients_changed.emit())
        self.denominator_edit.textChanged.connect(lambda _text: self.coefficients_changed.emit())

    def texts(self) -> Tuple[str, str]:
        """Textes bruts saisis"""
        return self.numerator_edit.text().strip(), self.denominator_edit.text().strip()

    def get_coefficients(self) -> Tuple[List[float], List[float]]:
        """
        Lire les coefficients saisis

        Returns:
            (numérateur, dénominateur) ; CoefficientParseError si la saisie est invalide
        """
        numerator_text, denominator_text = self.texts()
        return parse_coefficients(numerator_text), parse_coefficients(denominator_text)

    def set_texts(self, numerator: str, denominator: str):
        self.numerator_edit.setText(numerator)
        self.denominator_edit.setText(denominator)


class SimulationPanel(QGroupBox):
    """Horizon et pas de la simulation temporelle"""

    def __init__(self, title: str = "Paramètres de simulation"):
        super().__init__(title)
        self.setup_ui()

    def setup_ui(self):
        layout = QGridLayout(self)
        layout.setSpacing(15)
        layout.setColumnStretch(1, 1)
        defaults = SimulationConfig()

        layout.addWidget(QLabel("Horizon (s)"), 0, 0)
        self.horizon_spin = QDoubleSpinBox()
        self.horizon_spin.setRange(0.1, 1000.0)
        self.horizon_spin.setDecimals(2)
        self.horizon_spin.setValue(defaults.horizon)
        self.horizon_spin.setSuffix(" s")
        layout.addWidget(self.horizon_spin, 0, 1)

        layout.addWidget(QLabel("Pas d'intégration"), 1, 0)
        self.step_spin = QDoubleSpinBox()
        self.step_spin.setRange(0.0001, 1.0)
        self.step_spin.setDecimals(4)
        self.step_spin.setSingleStep(0.001)
        self.step_spin.setValue(defaults.step_size)
        self.step_spin.setSuffix(" s")
        layout.addWidget(self.step_spin, 1, 1)

    def get_config(self) -> SimulationConfig:
        """SimulationConfig validée (SimulationConfigError si incohérente)"""
        return SimulationConfig(horizon=self.horizon_spin.value(),
                                step_size=self.step_spin.value())


class AnalysisOptions(QGroupBox):
    """Cases à cocher des analyses à afficher et à exporter"""

    OPTIONS = [
        ('step', "Réponse indicielle"),
        ('impulse', "Réponse impulsionnelle"),
        ('pzmap', "Pôles et zéros (PZMap)"),
        ('non_minimum_phase', "Analyse de la phase minimale"),
        ('nyquist', "Diagramme de Nyquist"),
        ('bode', "Diagramme de Bode"),
    ]

    def __init__(self, title: str = "Analyses"):
        super().__init__(title)
        self.checkboxes: Dict[str, QCheckBox] = {}
        self.setup_ui()

    def setup_ui(self):
        layout = QVBoxLayout(self)
        for key, label in self.OPTIONS:
            checkbox = QCheckBox(label)
            checkbox.setChecked(key in ('step', 'impulse', 'pzmap'))
            self.checkboxes[key] = checkbox
            layout.addWidget(checkbox)

    def selected(self) -> List[str]:
        return [key for key, checkbox in self.checkboxes.items() if checkbox.isChecked()]


class PlotCanvas(QWidget):
    """Canvas matplotlib intégré, alimenté par les constructeurs de core.plotting"""

    def __init__(self, title: str = "Graphique", figure: Optional[Figure] = None,
                 show_controls: bool = True):
        super().__init__()
        self.title = title
        self.figure = figure if figure is not None else new_figure()
        self.setup_ui(show_controls)

    def setup_ui(self, show_controls: bool):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(5, 5, 5, 5)

        self.canvas = FigureCanvas(self.figure)
        self.canvas.setParent(self)
        layout.addWidget(self.canvas)

        if not show_controls:
            return

        controls_layout = QHBoxLayout()
        controls_layout.setSpacing(10)

        btn_clear = QPushButton("Effacer")
        btn_clear.setObjectName("controlButton")
        btn_clear.clicked.connect(self.clear_plot)
        controls_layout.addWidget(btn_clear)

        btn_save = QPushButton("Sauvegarder")
        btn_save.setObjectName("captureButton")
        btn_save.clicked.connect(self.save_figure)
        controls_layout.addWidget(btn_save)

        controls_layout.addStretch()
        layout.addLayout(controls_layout)

    def draw_with(self, builder: Callable[..., Figure], *args):
        """Redessiner la figure avec un constructeur plot_* (figure passée en mot-clé)"""
        builder(*args, figure=self.figure)
        self.refresh()

    def clear_plot(self):
        self.figure.clear()
        self.canvas.draw()

    def save_figure(self):
        """Sauvegarder la figure dans un fichier image"""
        filename, _ = QFileDialog.getSaveFileName(
            self, "Sauvegarder le graphique", f"{sanitize_filename(self.title)}.png",
            "Images PNG (*.png);;Images SVG (*.svg);;Images PDF (*.pdf)"
        )
        if not filename:
            return
        if save_figure(self.figure, filename):
            QMessageBox.information(self, "Sauvegarde", f"Graphique sauvegardé: {filename}")
        else:
            QMessageBox.warning(self, "Erreur", f"Impossible de sauvegarder {filename}")

    def refresh(self):
        self.canvas.draw()
