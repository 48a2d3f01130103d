#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Fonctions de transfert sauvegardées
Dépôt injectable : en mémoire ou dans un fichier JSON
"""

import json
import os
from abc import ABC, abstractmethod
from typing import Dict, List, NamedTuple


class SavedFunction(NamedTuple):
    """Fonction de transfert sauvegardée (coefficients tels que saisis)"""
    name: str
    numerator: str
    denominator: str


class FunctionRepository(ABC):
    """Interface de stockage des fonctions de transfert"""

    @abstractmethod
    def list(self) -> List[SavedFunction]:
        """Toutes les entrées, dans l'ordre d'enregistrement"""

    @abstractmethod
    def load(self, name: str) -> SavedFunction:
        """Charger une entrée (KeyError si le nom est inconnu)"""

    @abstractmethod
    def save(self, entry: SavedFunction) -> bool:
        """Enregistrer une entrée ; False si le nom existe déjà"""

    @abstractmethod
    def delete(self, name: str) -> bool:
        """Supprimer une entrée ; False si le nom est inconnu"""


class InMemoryFunctionRepository(FunctionRepository):

    def __init__(self):
        self._entries: Dict[str, SavedFunction] = {}

    def list(self) -> List[SavedFunction]:
        return list(self._entries.values())

    def load(self, name: str) -> SavedFunction:
        return self._entries[name]

    def save(self, entry: SavedFunction) -> bool:
        if entry.name in self._entries:
            return False
        self._entries[entry.name] = entry
        return True

    def delete(self, name: str) -> bool:
        return self._entries.pop(name, None) is not None


class JsonFunctionRepository(InMemoryFunctionRepository):
    """
    Dépôt persistant dans un seul fichier JSON

    Le fichier est relu à la construction (ValueError si son contenu est
    invalide) et réécrit après chaque modification.
    """

    def __init__(self, path: str):
        super().__init__()
        self.path = path
        if os.path.exists(path):
            with open(path, 'r', encoding='utf-8') as f:
                items = json.load(f)
            if not isinstance(items, list):
                raise ValueError(f"{path}: liste d'entrées attendue")
            for item in items:
                try:
                    entry = SavedFunction(**item)
                except TypeError as e:
                    raise ValueError(f"{path}: entrée invalide {item!r}") from e
                self._entries[entry.name] = entry

    def _write(self):
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump([entry._asdict() for entry in self._entries.values()], f,
                      indent=2, ensure_ascii=False)

    def save(self, entry: SavedFunction) -> bool:
        saved = super().save(entry)
        if saved:
            self._write()
        return saved

    def delete(self, name: str) -> bool:
        deleted = super().delete(name)
        if deleted:
            self._write()
        return deleted
