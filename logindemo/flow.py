"""Machine à états du formulaire de connexion.

Le contrôleur coordonne la validation des champs, l'appel (asynchrone) au
service d'authentification et la transition finale : passage à l'écran
d'accueil en cas de succès, message d'erreur et retour à l'édition sinon.

Transitions possibles ::

    Editing --submit valide--> Submitting --succès--> Succeeded
                                          --échec---> Failed --> Editing
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Union

from logindemo.services.authentication import Authenticator, AuthOutcome
from logindemo.state import Credentials
from logindemo.validation import PASSWORD_VALIDATOR, USERNAME_VALIDATOR, Invalid, Validator

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "Échec de la connexion. Veuillez réessayer."
ERROR_MESSAGE = "Une erreur est survenue : {}"
TIMEOUT_MESSAGE = "Le service d'authentification n'a pas répondu à temps."

USERNAME_FIELD = "username"
PASSWORD_FIELD = "password"


@dataclass(frozen=True, slots=True)
class Editing:
    """Formulaire modifiable, aucune tentative en cours."""


@dataclass(frozen=True, slots=True)
class Submitting:
    """Tentative d'authentification en cours."""


@dataclass(frozen=True, slots=True)
class Failed:
    message: str


@dataclass(frozen=True, slots=True)
class Succeeded:
    username: str


LoginFlowState = Union[Editing, Submitting, Failed, Succeeded]
StateListener = Callable[[LoginFlowState], None]

EDITING = Editing()
SUBMITTING = Submitting()


class LoginFlowController:
    """Contrôleur d'une session de connexion.

    Une instance appartient à un seul écran de connexion. Au plus une
    tentative d'authentification est en vol à un instant donné ; après
    ``dispose()``, le résultat d'une tentative encore en cours est ignoré.
    """

    def __init__(
        self,
        authenticator: Authenticator,
        *,
        on_success: Callable[[str], None] | None = None,
        username_validator: Validator = USERNAME_VALIDATOR,
        password_validator: Validator = PASSWORD_VALIDATOR,
        timeout: float | None = None,
    ) -> None:
        self._authenticator = authenticator
        self._on_success = on_success
        self._validators: dict[str, Validator] = {
            USERNAME_FIELD: username_validator,
            PASSWORD_FIELD: password_validator,
        }
        self._timeout = timeout

        self._state: LoginFlowState = EDITING
        self._field_errors: dict[str, str] = {}
        self._pending_message: str | None = None
        self._listeners: list[StateListener] = []
        self._task: asyncio.Task[None] | None = None
        self._disposed = False

    # ---------------------------------------------------------------- Lecture -
    def current_state(self) -> LoginFlowState:
        return self._state

    @property
    def field_errors(self) -> dict[str, str]:
        """Messages d'erreur par champ issus de la dernière validation."""
        return dict(self._field_errors)

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def consume_message(self) -> str | None:
        """Retourne le dernier message d'échec une seule fois, puis None."""
        message, self._pending_message = self._pending_message, None
        return message

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Abonne ``listener`` aux changements d'état et retourne la fonction de désabonnement."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ---------------------------------------------------------------- Actions -
    def validate(self, username: str | None, password: str | None) -> dict[str, str]:
        values = {USERNAME_FIELD: username, PASSWORD_FIELD: password}
        errors: dict[str, str] = {}
        for name, validator in self._validators.items():
            result = validator.validate(values[name])
            if isinstance(result, Invalid):
                errors[name] = result.message
        return errors

    def submit(self, username: str, password: str) -> asyncio.Task[None] | None:
        """Lance une tentative de connexion si le formulaire est valide.

        Retourne la tâche planifiée, ou None si la demande est refusée par la
        validation ou ignorée (tentative déjà en cours, contrôleur libéré).
        Doit être appelée depuis une boucle asyncio en cours d'exécution.
        """
        if self._disposed:
            logger.debug("Submit ignored: controller disposed")
            return None
        if not isinstance(self._state, Editing):
            logger.debug("Submit ignored in state %s", type(self._state).__name__)
            return None

        self._field_errors = self.validate(username, password)
        if self._field_errors:
            logger.debug("Submit rejected by validation: %s", sorted(self._field_errors))
            return None

        credentials = Credentials(username=username, password=password)
        loop = asyncio.get_running_loop()
        self._transition(SUBMITTING)
        self._task = loop.create_task(self._authenticate(credentials))
        self._task.add_done_callback(_log_attempt_error)
        return self._task

    def dispose(self) -> None:
        """Libère le contrôleur : annule la tentative en cours et coupe les abonnés."""
        if self._disposed:
            return
        self._disposed = True
        self._listeners.clear()
        self._on_success = None
        if self._task is not None and not self._task.done():
            self._task.cancel()

    # ---------------------------------------------------------------- Interne -
    async def _authenticate(self, credentials: Credentials) -> None:
        logger.info("Authenticating user %s", credentials.username)
        try:
            outcome = await self._call_authenticator(credentials)
        except asyncio.TimeoutError:
            logger.warning("Authentication timed out after %s s", self._timeout)
            message: str | None = TIMEOUT_MESSAGE
        except Exception as exc:
            logger.warning("Authentication error: %r", exc)
            message = ERROR_MESSAGE.format(str(exc) or type(exc).__name__)
        else:
            message = None if outcome is AuthOutcome.SUCCESS else FAILURE_MESSAGE

        if self._disposed:
            logger.debug("Authentication result discarded: controller disposed")
            return

        if message is None:
            self._succeed(credentials.username)
        else:
            self._fail(message)

    async def _call_authenticator(self, credentials: Credentials) -> AuthOutcome:
        call = self._authenticator.authenticate(credentials.username, credentials.password)
        if self._timeout is None:
            return await call
        return await asyncio.wait_for(call, timeout=self._timeout)

    def _succeed(self, username: str) -> None:
        logger.info("User %s authenticated", username)
        self._transition(Succeeded(username))
        if self._on_success is not None:
            self._on_success(username)

    def _fail(self, message: str) -> None:
        logger.info("Authentication failed: %s", message)
        self._pending_message = message
        self._transition(Failed(message))
        # Pas d'état Failed conservé entre deux tentatives.
        self._transition(EDITING)

    def _transition(self, new_state: LoginFlowState) -> None:
        self._state = new_state
        for listener in list(self._listeners):
            listener(new_state)


def _log_attempt_error(task: asyncio.Task[None]) -> None:
    # Erreurs levées par on_success ou par un abonné, hors authentification.
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error("Login attempt handler failed", exc_info=exc)
