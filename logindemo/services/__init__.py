"""Services applicatifs."""

from logindemo.services.authentication import (
    Authenticator,
    AuthOutcome,
    AuthServiceError,
    SimulatedAuthenticator,
)

__all__ = ["AuthOutcome", "AuthServiceError", "Authenticator", "SimulatedAuthenticator"]
