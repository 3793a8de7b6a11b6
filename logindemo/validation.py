"""Validation des champs du formulaire de connexion.

Chaque validateur est une fonction pure : il ne lève jamais d'exception et
renvoie soit ``VALID``, soit une instance de ``Invalid`` décrivant le problème.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Union

REQUIRED = "required"
TOO_SHORT = "too_short"

USERNAME_MIN_LENGTH = 3
PASSWORD_MIN_LENGTH = 6


@dataclass(frozen=True, slots=True)
class Valid:
    """Valeur acceptée."""

    @property
    def is_valid(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Invalid:
    """Valeur refusée, avec un code stable et un message destiné à l'utilisateur."""

    code: str
    message: str

    @property
    def is_valid(self) -> bool:
        return False


ValidationResult = Union[Valid, Invalid]

VALID = Valid()


class Validator(Protocol):
    """Capacité commune à tous les validateurs de champ."""

    def validate(self, value: str | None) -> ValidationResult:
        ...


@dataclass(frozen=True, slots=True)
class RequiredLengthValidator:
    """Refuse les valeurs absentes, vides ou blanches, puis celles trop courtes."""

    min_length: int
    required_message: str
    too_short_message: str

    def validate(self, value: str | None) -> ValidationResult:
        if value is None or not value.strip():
            return Invalid(REQUIRED, self.required_message)
        if len(value) < self.min_length:
            return Invalid(TOO_SHORT, self.too_short_message)
        return VALID


def username_validator(min_length: int = USERNAME_MIN_LENGTH) -> RequiredLengthValidator:
    return RequiredLengthValidator(
        min_length=min_length,
        required_message="Veuillez saisir votre nom d'utilisateur.",
        too_short_message=(
            f"Le nom d'utilisateur doit contenir au moins {min_length} caractères."
        ),
    )


def password_validator(min_length: int = PASSWORD_MIN_LENGTH) -> RequiredLengthValidator:
    return RequiredLengthValidator(
        min_length=min_length,
        required_message="Veuillez saisir votre mot de passe.",
        too_short_message=f"Le mot de passe doit contenir au moins {min_length} caractères.",
    )


USERNAME_VALIDATOR = username_validator()
PASSWORD_VALIDATOR = password_validator()
