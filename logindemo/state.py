"""Structures de données partagées entre la couche UI et les services."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Credentials:
    """Identifiants d'une tentative de connexion, construits après validation."""

    username: str
    password: str = field(repr=False)


@dataclass(slots=True)
class AppState:
    """État interne d'une fenêtre de l'application."""

    username: str | None = None

    @property
    def is_authenticated(self) -> bool:
        """Retourne True si l'utilisateur est authentifié."""
        return self.username is not None

    def sign_in(self, username: str) -> None:
        self.username = username

    def reset(self) -> None:
        """Réinitialise l'état de l'application."""
        self.username = None
