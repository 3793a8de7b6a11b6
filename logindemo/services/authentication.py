"""Services d'authentification utilisés par le contrôleur de connexion."""

from __future__ import annotations

import asyncio
import enum
import logging
from typing import Protocol

from logindemo.config import AppConfig

logger = logging.getLogger(__name__)


class AuthOutcome(enum.Enum):
    """Verdict d'une tentative d'authentification."""

    SUCCESS = "success"
    FAILURE = "failure"


class AuthServiceError(RuntimeError):
    """Erreur levée lorsqu'un service ne parvient pas à rendre de verdict.

    C'est l'erreur attendue d'un service réel (réseau, annuaire indisponible) ;
    le contrôleur la présente à l'utilisateur comme un échec de connexion.
    Le service simulé ne la lève jamais.
    """


class Authenticator(Protocol):
    """Contrat commun à tous les services d'authentification."""

    async def authenticate(self, username: str, password: str) -> AuthOutcome:
        ...

    async def logout(self) -> None:
        ...


class SimulatedAuthenticator:
    """Service factice : attend un délai fixe puis accepte tout identifiant non vide.

    Il remplace un véritable appel réseau et ne vérifie aucun mot de passe.
    """

    def __init__(self, *, delay: float = 2.0, logout_delay: float = 1.0) -> None:
        if delay < 0 or logout_delay < 0:
            raise ValueError("Les délais simulés ne peuvent pas être négatifs.")
        self._delay = delay
        self._logout_delay = logout_delay

    @classmethod
    def from_config(cls, config: AppConfig) -> SimulatedAuthenticator:
        return cls(delay=config.auth_delay_seconds, logout_delay=config.logout_delay_seconds)

    @property
    def delay(self) -> float:
        return self._delay

    async def authenticate(self, username: str, password: str) -> AuthOutcome:
        await asyncio.sleep(self._delay)
        if username and password:
            return AuthOutcome.SUCCESS
        return AuthOutcome.FAILURE

    async def logout(self) -> None:
        await asyncio.sleep(self._logout_delay)
        logger.debug("Simulated logout completed")
