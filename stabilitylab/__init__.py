"""StabilityLab - analyse de stabilité de fonctions de transfert"""

__version__ = "1.0.0"
