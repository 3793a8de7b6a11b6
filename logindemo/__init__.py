"""Démonstration d'un écran de connexion avec authentification simulée."""
