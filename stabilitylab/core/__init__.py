"""Moteur de calcul et couche de présentation sans interface graphique"""
