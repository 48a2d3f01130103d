#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Interface principale de StabilityLab
Saisie de la fonction de transfert, résultats, graphiques, fonctions
sauvegardées et exports
"""

import logging
from typing import List, Optional

from PyQt5.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QPushButton,
    QTabWidget, QLabel, QFileDialog, QMessageBox, QSplitter, QFrame,
    QTextEdit, QGroupBox, QListWidget, QInputDialog
)
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QFont
from matplotlib.figure import Figure

from .widgets_common import AnalysisOptions, PlotCanvas, SimulationPanel, TransferFunctionInput
from ..core.analysis import AnalysisResult, analyze
from ..core.exports import export_csv, export_matlab_script, export_pdf_report
from ..core.plotting import (
    plot_bode, plot_formula, plot_impulse_response, plot_nyquist,
    plot_pole_zero_map, plot_step_response
)
from ..core.polynomial import TransferFunction
from ..core.report_text import explain, format_root, transfer_function_text
from ..core.repository import FunctionRepository, InMemoryFunctionRepository, SavedFunction
from ..core.simulation import step_characteristics
from ..core.utils import StabilityLabError, format_number

logger = logging.getLogger(__name__)

PLOT_TABS = [
    ('step', "Réponse indicielle"),
    ('impulse', "Réponse impulsionnelle"),
    ('pzmap', "Pôles et zéros"),
    ('nyquist', "Nyquist"),
    ('bode', "Bode"),
]


class MainWindow(QMainWindow):
    """Fenêtre d'analyse : saisie, résultats, graphiques et exports"""

    def __init__(self, repository: Optional[FunctionRepository] = None):
        super().__init__()
        self.repository = repository if repository is not None else InMemoryFunctionRepository()
        self.result: Optional[AnalysisResult] = None
        self.canvases = {}
        self.setup_ui()
        self.setup_connections()
        self.refresh_saved_functions()
        self.update_formula()

    def setup_ui(self):
        """Barre latérale à gauche, zone de résultats à droite"""
        self.setWindowTitle("StabilityLab - Analyse de stabilité des fonctions de transfert")
        self.setMinimumSize(1100, 750)
        self.resize(1400, 900)

        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        main_layout = QHBoxLayout(central_widget)
        main_layout.setContentsMargins(0, 0, 0, 0)

        splitter = QSplitter(Qt.Horizontal)
        main_layout.addWidget(splitter)
        splitter.addWidget(self.create_sidebar())
        splitter.addWidget(self.create_main_area())
        splitter.setSizes([420, 980])
        splitter.setCollapsible(0, False)
        splitter.setCollapsible(1, False)

    def create_sidebar(self) -> QWidget:
        """Saisie, options d'analyse, fonctions sauvegardées et exports"""
        sidebar = QFrame()
        sidebar.setObjectName("sidebar")
        layout = QVBoxLayout(sidebar)
        layout.setContentsMargins(10, 15, 10, 15)
        layout.setSpacing(12)

        title_label = QLabel("StabilityLab")
        title_font = QFont()
        title_font.setPointSize(16)
        title_font.setBold(True)
        title_label.setFont(title_font)
        title_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(title_label)

        self.tf_input = TransferFunctionInput()
        layout.addWidget(self.tf_input)

        self.simulation_panel = SimulationPanel()
        layout.addWidget(self.simulation_panel)

        self.options = AnalysisOptions()
        layout.addWidget(self.options)

        self.btn_analyze = QPushButton("Analyser le système")
        self.btn_analyze.setObjectName("actionButton")
        self.btn_analyze.setMinimumHeight(40)
        layout.addWidget(self.btn_analyze)

        saved_group = QGroupBox("Fonctions sauvegardées")
        saved_layout = QVBoxLayout(saved_group)
        self.saved_list = QListWidget()
        self.saved_list.setMaximumHeight(140)
        saved_layout.addWidget(self.saved_list)
        saved_buttons = QHBoxLayout()
        self.btn_save = QPushButton("Enregistrer")
        self.btn_load = QPushButton("Charger")
        self.btn_delete = QPushButton("Supprimer")
        self.btn_delete.setObjectName("errorButton")
        for btn in (self.btn_save, self.btn_load, self.btn_delete):
            saved_buttons.addWidget(btn)
        saved_layout.addLayout(saved_buttons)
        layout.addWidget(saved_group)

        export_group = QGroupBox("Exporter")
        export_layout = QHBoxLayout(export_group)
        self.btn_matlab = QPushButton("MATLAB")
        self.btn_csv = QPushButton("CSV")
        self.btn_pdf = QPushButton("PDF")
        for btn in (self.btn_matlab, self.btn_csv, self.btn_pdf):
            export_layout.addWidget(btn)
        layout.addWidget(export_group)

        layout.addStretch()
        return sidebar

    def create_main_area(self) -> QWidget:
        """Formule, résultats textuels et onglets de graphiques"""
        main_widget = QWidget()
        layout = QVBoxLayout(main_widget)
        layout.setContentsMargins(10, 10, 10, 10)

        self.formula_canvas = PlotCanvas("Formule", figure=Figure(figsize=(6, 1.1), facecolor="white"),
                                         show_controls=False)
        self.formula_canvas.setFixedHeight(110)
        layout.addWidget(self.formula_canvas)

        self.results_text = QTextEdit()
        self.results_text.setReadOnly(True)
        self.results_text.setObjectName("resultsText")
        self.results_text.setMaximumHeight(220)
        layout.addWidget(self.results_text)

        self.plot_tabs = QTabWidget()
        self.plot_tabs.setObjectName("plotTabs")
        for key, label in PLOT_TABS:
            canvas = PlotCanvas(label)
            self.canvases[key] = canvas
            self.plot_tabs.addTab(canvas, label)
        layout.addWidget(self.plot_tabs)

        return main_widget

    def setup_connections(self):
        """Relie les boutons et la saisie aux actions"""
        self.tf_input.coefficients_changed.connect(self.update_formula)
        self.btn_analyze.clicked.connect(self.run_analysis)
        self.btn_save.clicked.connect(self.save_function)
        self.btn_load.clicked.connect(self.load_function)
        self.btn_delete.clicked.connect(self.delete_function)
        self.saved_list.itemDoubleClicked.connect(lambda _item: self.load_function())
        self.btn_matlab.clicked.connect(self.on_export_matlab)
        self.btn_csv.clicked.connect(self.on_export_csv)
        self.btn_pdf.clicked.connect(self.on_export_pdf)

    # --- Analyse -----------------------------------------------------------

    def update_formula(self):
        """Aperçu de H(s) pendant la saisie (ignoré tant que la saisie est invalide)"""
        try:
            numerator, denominator = self.tf_input.get_coefficients()
            tf = TransferFunction.from_coefficients(numerator, denominator)
        except StabilityLabError:
            return
        self.formula_canvas.draw_with(plot_formula, tf)

    def run_analysis(self):
        """Lancer l'analyse complète et afficher les résultats"""
        try:
            numerator, denominator = self.tf_input.get_coefficients()
            config = self.simulation_panel.get_config()
            result = analyze(numerator, denominator, config=config)
        except StabilityLabError as e:
            logger.warning("Analyse impossible: %s", e)
            QMessageBox.warning(self, "Erreur", str(e))
            return

        self.result = result
        self.results_text.setText(self.format_results(result, self.options.selected()))
        self.update_plots(result)
        logger.info("Analyse terminée: %s", transfer_function_text(result.transfer_function))

    def format_results(self, result: AnalysisResult, selected: List[str]) -> str:
        texts = explain(result)
        lines = [texts.summary, "", texts.explanation]

        if 'pzmap' in selected:
            lines += ["", "Pôles :"]
            lines += [f"  {format_root(p)}" for p in result.poles] or ["  Aucun pôle trouvé"]
            lines += ["Zéros :"]
            lines += [f"  {format_root(z)}" for z in result.zeros] or ["  Aucun zéro trouvé"]

        if 'step' in selected:
            info = step_characteristics(result.step_response)
            lines += [
                "",
                f"Temps de montée : {format_number(info['rise_time'])} s",
                f"Dépassement : {format_number(info['overshoot'], 2)} %",
                f"Temps d'établissement : {format_number(info['settling_time'])} s",
                f"Valeur finale : {format_number(info['steady_state_value'])}",
            ]

        if 'nyquist' in selected:
            lines += ["", f"Nyquist : {result.nyquist.negative_real_count} points "
                          f"à partie réelle négative sur {len(result.nyquist.frequencies)}"]

        lines += ["", texts.conclusion]
        return "\n".join(lines)

    def update_plots(self, result: AnalysisResult):
        """Redessiner les onglets des analyses sélectionnées"""
        selected = self.options.selected()
        builders = {
            'step': (plot_step_response, result.step_response),
            'impulse': (plot_impulse_response, result.impulse_response),
            'pzmap': (plot_pole_zero_map, result.poles, result.zeros),
            'nyquist': (plot_nyquist, result.nyquist),
            'bode': (plot_bode, result.bode),
        }
        for index, (key, _label) in enumerate(PLOT_TABS):
            canvas = self.canvases[key]
            enabled = key in selected
            self.plot_tabs.setTabEnabled(index, enabled)
            if enabled:
                builder, *args = builders[key]
                canvas.draw_with(builder, *args)
            else:
                canvas.clear_plot()

    # --- Fonctions sauvegardées -------------------------------------------

    def refresh_saved_functions(self):
        self.saved_list.clear()
        for entry in self.repository.list():
            self.saved_list.addItem(entry.name)

    def selected_saved_name(self) -> Optional[str]:
        item = self.saved_list.currentItem()
        return item.text() if item is not None else None

    def save_function(self):
        """Enregistrer la saisie courante sous un nom (par défaut la formule)"""
        numerator_text, denominator_text = self.tf_input.texts()
        try:
            numerator, denominator = self.tf_input.get_coefficients()
            default_name = transfer_function_text(TransferFunction.from_coefficients(numerator, denominator))
        except StabilityLabError as e:
            QMessageBox.warning(self, "Erreur", str(e))
            return

        name, ok = QInputDialog.getText(self, "Enregistrer", "Nom de la fonction :", text=default_name)
        if not ok or not name.strip():
            return

        try:
            saved = self.repository.save(SavedFunction(name.strip(), numerator_text, denominator_text))
        except OSError as e:
            logger.error("Erreur lors de l'enregistrement de « %s »: %s", name.strip(), e)
            QMessageBox.warning(self, "Enregistrer", f"Enregistrement impossible : {e}")
            self.refresh_saved_functions()
            return
        if saved:
            self.refresh_saved_functions()
        else:
            QMessageBox.information(self, "Enregistrer", f"« {name.strip()} » existe déjà")

    def load_function(self):
        name = self.selected_saved_name()
        if name is None:
            return
        entry = self.repository.load(name)
        self.tf_input.set_texts(entry.numerator, entry.denominator)

    def delete_function(self):
        name = self.selected_saved_name()
        if name is None:
            return
        reply = QMessageBox.question(
            self, "Supprimer", f"Supprimer « {name} » ?",
            QMessageBox.Yes | QMessageBox.No, QMessageBox.No
        )
        if reply == QMessageBox.Yes:
            try:
                self.repository.delete(name)
            except OSError as e:
                logger.error("Erreur lors de la suppression de « %s »: %s", name, e)
                QMessageBox.warning(self, "Supprimer", f"Suppression impossible : {e}")
            self.refresh_saved_functions()

    # --- Exports -----------------------------------------------------------

    def require_result(self) -> bool:
        if self.result is None:
            QMessageBox.information(self, "Export", "Lancez d'abord une analyse")
            return False
        return True

    def report_export(self, ok: bool, filename: str):
        if ok:
            QMessageBox.information(self, "Export", f"Fichier exporté: {filename}")
        else:
            QMessageBox.warning(self, "Erreur d'export", f"Impossible d'écrire {filename}")

    def on_export_matlab(self):
        try:
            numerator, denominator = self.tf_input.get_coefficients()
        except StabilityLabError as e:
            QMessageBox.warning(self, "Erreur", str(e))
            return
        filename, _ = QFileDialog.getSaveFileName(
            self, "Exporter vers MATLAB", "transfer_function_analysis.m", "Scripts MATLAB (*.m)"
        )
        if filename:
            self.report_export(
                export_matlab_script(numerator, denominator, self.options.selected(), filename),
                filename)

    def on_export_csv(self):
        if not self.require_result():
            return
        filename, _ = QFileDialog.getSaveFileName(
            self, "Exporter les réponses", "stability-analysis.csv", "Fichiers CSV (*.csv)"
        )
        if filename:
            self.report_export(export_csv(self.result, filename), filename)

    def on_export_pdf(self):
        if not self.require_result():
            return
        filename, _ = QFileDialog.getSaveFileName(
            self, "Exporter le rapport", "stability-analysis.pdf", "Documents PDF (*.pdf)"
        )
        if filename:
            self.report_export(export_pdf_report(self.result, filename, self.options.selected()), filename)

    def closeEvent(self, a0):
        """Demande confirmation avant de quitter"""
        event = a0
        reply = QMessageBox.question(
            self, "Fermeture", "Voulez-vous vraiment fermer StabilityLab?",
            QMessageBox.Yes | QMessageBox.No, QMessageBox.No
        )
        if reply == QMessageBox.Yes:
            event.accept()
        else:
            event.ignore()
