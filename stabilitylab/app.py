#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
StabilityLab - Application principale
Point d'entrée de l'application desktop d'analyse de stabilité
"""

import logging
import os
import sys
from typing import Optional

from PyQt5.QtGui import QFont
from PyQt5.QtWidgets import QApplication, QMessageBox

from . import __version__
from .core.repository import JsonFunctionRepository
from .ui.main_window import MainWindow

logger = logging.getLogger(__name__)

DEFAULT_STORE = os.path.join(os.path.expanduser("~"), ".stabilitylab", "saved_functions.json")


def configure_logging(level: int = logging.INFO) -> None:
    """Handler console unique, préfixé par le nom de l'application"""
    logging.basicConfig(
        level=level,
        format="[StabilityLab] %(asctime)s %(levelname)s %(name)s: %(message)s",
    )


class StabilityLabApp:
    """Application Qt et dépôt des fonctions sauvegardées"""

    def __init__(self, store_path: str = DEFAULT_STORE):
        self.store_path = store_path
        self.qt_app: Optional[QApplication] = None
        self.window: Optional[MainWindow] = None

    def create_qt_application(self) -> QApplication:
        qt_app = QApplication(sys.argv)
        qt_app.setApplicationName("StabilityLab")
        qt_app.setOrganizationName("StabilityLab")
        qt_app.setApplicationVersion(__version__)
        qt_app.setFont(QFont("Segoe UI", 10))
        return qt_app

    def run(self) -> int:
        """Ouvre le dépôt puis la fenêtre principale; code de sortie de la boucle Qt"""
        self.qt_app = self.create_qt_application()
        try:
            repository = JsonFunctionRepository(self.store_path)
        except (OSError, ValueError) as e:
            logger.error("Lecture des fonctions sauvegardées impossible (%s): %s", self.store_path, e)
            QMessageBox.critical(None, "StabilityLab",
                                 f"Impossible de lire {self.store_path}:\n{e}")
            return 1

        logger.info("Fonctions sauvegardées: %s", self.store_path)
        self.window = MainWindow(repository=repository)
        self.window.show()
        return self.qt_app.exec_()


def main() -> int:
    configure_logging()
    return StabilityLabApp().run()


if __name__ == "__main__":
    sys.exit(main())
