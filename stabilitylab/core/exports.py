#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Fonctions d'exportation
Script MATLAB, export CSV des réponses temporelles, sauvegarde de figures et
rapport PDF
"""

import io
import logging
from datetime import datetime
from typing import Sequence

import pandas as pd
from matplotlib.figure import Figure
from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.utils import ImageReader
from reportlab.platypus import Image, Paragraph, SimpleDocTemplate, Spacer

from .analysis import AnalysisResult
from .plotting import analysis_figures, figure_to_png, plot_formula
from .report_text import explain, format_root, transfer_function_text
from .simulation import step_characteristics
from .utils import coefficients_to_text

logger = logging.getLogger(__name__)

MATLAB_BLOCKS = {
    'bode': ("Bode Plot", "bode(sys);"),
    'nyquist': ("Nyquist Plot", "nyquist(sys);"),
    'step': ("Step Response", "step(sys);"),
    'impulse': ("Impulse Response", "impulse(sys);"),
    'pzmap': ("Pole-Zero Map", "pzmap(sys);"),
}

CHART_CAPTIONS = {
    'pzmap': "Position des pôles et des zéros dans le plan complexe",
    'step': "Réponse indicielle",
    'impulse': "Réponse impulsionnelle",
    'nyquist': "Diagramme de Nyquist",
    'bode': "Diagramme de Bode",
}


def matlab_script(numerator: Sequence[float], denominator: Sequence[float],
                  selected: Sequence[str]) -> str:
    """
    Générer un script MATLAB reproduisant l'analyse

    Args:
        numerator: Coefficients du numérateur
        denominator: Coefficients du dénominateur
        selected: Analyses à inclure parmi 'bode', 'nyquist', 'step', 'impulse', 'pzmap'

    Returns:
        Contenu du fichier .m
    """
    lines = [
        "% MATLAB Script for Transfer Function Analysis",
        "",
        "% Numerator and Denominator of the Transfer Function",
        f"num = [{coefficients_to_text(numerator)}];",
        f"den = [{coefficients_to_text(denominator)}];",
        "",
        "% Create Transfer Function",
        "sys = tf(num, den);",
    ]
    for key, (title, command) in MATLAB_BLOCKS.items():
        if key in selected:
            lines += ["", f"% {title}", "figure;", command]
    return "\n".join(lines) + "\n"


def export_matlab_script(numerator: Sequence[float], denominator: Sequence[float],
                         selected: Sequence[str], filename: str) -> bool:
    """Écrire le script MATLAB dans un fichier .m"""
    try:
        with open(filename, 'w', encoding='utf-8') as f:
            f.write(matlab_script(numerator, denominator, selected))
        logger.info("Script MATLAB exporté: %s", filename)
        return True
    except OSError as e:
        logger.error("Erreur lors de l'export MATLAB: %s", e)
        return False


def export_csv(result: AnalysisResult, filename: str, include_metadata: bool = True) -> bool:
    """
    Exporter les réponses temporelles vers un fichier CSV

    Args:
        result: Résultat de l'analyse
        filename: Nom du fichier de sortie
        include_metadata: Écrire la fonction de transfert et le verdict en commentaires

    Returns:
        True si l'export a réussi
    """
    df = pd.DataFrame({
        'time': result.step_response.time,
        'step_response': result.step_response.response,
        'impulse_response': result.impulse_response.response,
    })

    try:
        with open(filename, 'w', newline='', encoding='utf-8') as f:
            if include_metadata:
                f.write(f"# Exporté le: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
                f.write("# Source: StabilityLab\n")
                f.write(f"# transfer_function: {transfer_function_text(result.transfer_function)}\n")
                f.write(f"# stability: {result.stability.value}\n")
                f.write(f"# non_minimum_phase: {result.non_minimum_phase}\n")
                f.write(f"# poles: {'; '.join(format_root(p) for p in result.poles)}\n")
                f.write(f"# zeros: {'; '.join(format_root(z) for z in result.zeros)}\n")
                f.write("#\n")
            df.to_csv(f, index=False, float_format='%.6f')
        logger.info("Données CSV exportées: %s", filename)
        return True
    except OSError as e:
        logger.error("Erreur lors de l'export CSV: %s", e)
        return False


def save_figure(figure: Figure, filename: str, dpi: int = 300) -> bool:
    """
    Sauvegarder une figure matplotlib

    Args:
        figure: Figure matplotlib
        filename: Nom du fichier (le format est déduit de l'extension)
        dpi: Résolution

    Returns:
        True si la sauvegarde a réussi
    """
    try:
        figure.savefig(filename, dpi=dpi, bbox_inches='tight',
                       facecolor='white', edgecolor='none')
        return True
    except OSError as e:
        logger.error("Erreur lors de la sauvegarde: %s", e)
        return False


def _pdf_image(figure: Figure, width: float) -> Image:
    png = figure_to_png(figure)
    img_width, img_height = ImageReader(io.BytesIO(png)).getSize()
    return Image(io.BytesIO(png), width=width, height=width * img_height / img_width)


def _roots_paragraphs(label: str, roots, empty_text: str, styles):
    story = [Paragraph(f"<b>{label}</b>", styles['Normal'])]
    if roots:
        story += [Paragraph(f"- {format_root(root)}", styles['Normal']) for root in roots]
    else:
        story.append(Paragraph(empty_text, styles['Normal']))
    story.append(Spacer(1, 8))
    return story


def export_pdf_report(result: AnalysisResult, output_path: str, selected: Sequence[str]) -> bool:
    """
    Générer le rapport PDF d'une analyse

    Args:
        result: Résultat de l'analyse
        output_path: Chemin de sortie du PDF
        selected: Analyses sélectionnées ('step', 'impulse', 'pzmap',
            'non_minimum_phase', 'nyquist', 'bode')

    Returns:
        True si la génération a réussi
    """
    texts = explain(result)

    doc = SimpleDocTemplate(output_path, pagesize=A4,
                            rightMargin=72, leftMargin=72,
                            topMargin=72, bottomMargin=36)
    content_width = A4[0] - 144

    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        'ReportTitle',
        parent=styles['Heading1'],
        fontSize=18,
        spaceAfter=20,
        alignment=TA_CENTER,
        textColor=colors.HexColor('#0D47A1')
    )
    heading_style = ParagraphStyle(
        'ReportHeading',
        parent=styles['Heading2'],
        fontSize=14,
        spaceAfter=10,
        textColor=colors.HexColor('#0D47A1')
    )
    caption_style = ParagraphStyle(
        'ReportCaption',
        parent=styles['Normal'],
        alignment=TA_CENTER,
        textColor=colors.HexColor('#323232')
    )

    story = [
        Paragraph("Résultats de l'analyse du système", title_style),
        Paragraph(f"<b>Généré le:</b> {datetime.now().strftime('%d/%m/%Y à %H:%M:%S')}",
                  styles['Normal']),
        Spacer(1, 12),
        _pdf_image(plot_formula(result.transfer_function), content_width * 0.8),
        Spacer(1, 12),
        Paragraph(texts.summary, styles['Normal']),
        Spacer(1, 12),
    ]

    if 'non_minimum_phase' in selected:
        story.append(Paragraph("Analyse de la phase minimale", heading_style))
        phase_text = ("Le système est à phase non minimale." if result.non_minimum_phase
                      else "Le système est à phase minimale.")
        story += [Paragraph(phase_text, styles['Normal']), Spacer(1, 12)]

    if 'pzmap' in selected:
        story.append(Paragraph("Pôles et zéros du système", heading_style))
        story += _roots_paragraphs("Pôles :", result.poles, "Aucun pôle trouvé", styles)
        story += _roots_paragraphs("Zéros :", result.zeros, "Aucun zéro trouvé", styles)

    if 'step' in selected:
        info = step_characteristics(result.step_response)
        story.append(Paragraph("Caractéristiques de la réponse indicielle", heading_style))
        story.append(Paragraph(
            f"Temps de montée : {info['rise_time']:.3f} s<br/>"
            f"Dépassement : {info['overshoot']:.2f} %<br/>"
            f"Temps d'établissement (2 %) : {info['settling_time']:.3f} s<br/>"
            f"Valeur finale : {info['steady_state_value']:.4f}",
            styles['Normal']))
        story.append(Spacer(1, 12))

    for key, figure in analysis_figures(result, selected):
        story.append(_pdf_image(figure, content_width))
        story.append(Paragraph(CHART_CAPTIONS[key], caption_style))
        story.append(Spacer(1, 16))

    story.append(Paragraph("Conclusion", heading_style))
    story.append(Paragraph(texts.conclusion, styles['Normal']))

    try:
        doc.build(story)
        logger.info("Rapport PDF généré: %s", output_path)
        return True
    except OSError as e:
        logger.error("Erreur lors de la génération du rapport PDF: %s", e)
        return False
