"""Gestion centralisée de la configuration de l'application."""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

DEFAULT_AUTH_DELAY_SECONDS = 2.0
DEFAULT_LOGOUT_DELAY_SECONDS = 1.0
DEFAULT_AUTH_TIMEOUT_SECONDS = 10.0
DEFAULT_THEME = "light"
DEFAULT_LOG_LEVEL = "INFO"
SUPPORTED_THEMES = ("light", "dark")


class ConfigError(RuntimeError):
    """Erreur levée lorsque la configuration est invalide."""


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Paramètres de l'application de démonstration."""

    auth_delay_seconds: float = DEFAULT_AUTH_DELAY_SECONDS
    logout_delay_seconds: float = DEFAULT_LOGOUT_DELAY_SECONDS
    auth_timeout_seconds: float | None = DEFAULT_AUTH_TIMEOUT_SECONDS
    theme: str = DEFAULT_THEME
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def log_level_number(self) -> int:
        """Niveau de journalisation sous forme numérique."""
        return logging.getLevelName(self.log_level)


def _read_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} doit être un nombre, reçu : {raw!r}.") from exc
    if not math.isfinite(value):
        raise ConfigError(f"{name} doit être un nombre fini, reçu : {raw!r}.")
    return value


def _read_delay(name: str, default: float) -> float:
    value = _read_float(name, default)
    if value < 0:
        raise ConfigError(f"{name} ne peut pas être négatif.")
    return value


def load_config() -> AppConfig:
    """Charge la configuration depuis l'environnement (et un éventuel fichier .env)."""
    load_dotenv(find_dotenv(usecwd=True))

    auth_delay = _read_delay("LOGINDEMO_AUTH_DELAY_SECONDS", DEFAULT_AUTH_DELAY_SECONDS)
    logout_delay = _read_delay("LOGINDEMO_LOGOUT_DELAY_SECONDS", DEFAULT_LOGOUT_DELAY_SECONDS)

    # Une valeur nulle ou négative désactive le délai maximal.
    timeout: float | None = _read_float(
        "LOGINDEMO_AUTH_TIMEOUT_SECONDS", DEFAULT_AUTH_TIMEOUT_SECONDS
    )
    if timeout is not None and timeout <= 0:
        timeout = None

    theme = os.getenv("LOGINDEMO_THEME", DEFAULT_THEME).strip().lower()
    if theme not in SUPPORTED_THEMES:
        raise ConfigError(
            f"LOGINDEMO_THEME doit valoir {' ou '.join(SUPPORTED_THEMES)}, reçu : {theme!r}."
        )

    log_level = os.getenv("LOGINDEMO_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigError(f"LOGINDEMO_LOG_LEVEL inconnu : {log_level!r}.")

    return AppConfig(
        auth_delay_seconds=auth_delay,
        logout_delay_seconds=logout_delay,
        auth_timeout_seconds=timeout,
        theme=theme,
        log_level=log_level,
    )
