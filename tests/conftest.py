from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Callable

import pytest

from logindemo.flow import LoginFlowController, LoginFlowState
from logindemo.services import AuthOutcome


@dataclass
class AuthCall:
    username: str
    password: str


class GatedAuthenticator:
    """Authenticator that resolves only when the test opens its gate."""

    def __init__(self, outcome: AuthOutcome = AuthOutcome.SUCCESS) -> None:
        self.outcome = outcome
        self.error: Exception | None = None
        self.calls: list[AuthCall] = []
        self.cancelled = False
        self.logout_calls = 0
        self._gate = asyncio.Event()

    def release(self) -> None:
        self._gate.set()

    async def authenticate(self, username: str, password: str) -> AuthOutcome:
        self.calls.append(AuthCall(username=username, password=password))
        try:
            await self._gate.wait()
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        if self.error is not None:
            raise self.error
        return self.outcome

    async def logout(self) -> None:
        self.logout_calls += 1


class StubbornAuthenticator(GatedAuthenticator):
    """Authenticator that ignores cancellation and still resolves."""

    async def authenticate(self, username: str, password: str) -> AuthOutcome:
        self.calls.append(AuthCall(username=username, password=password))
        while True:
            try:
                await self._gate.wait()
                return self.outcome
            except asyncio.CancelledError:
                self.cancelled = True


class StateRecorder:
    def __init__(self) -> None:
        self.states: list[LoginFlowState] = []

    def __call__(self, state: LoginFlowState) -> None:
        self.states.append(state)


@pytest.fixture
def authenticator() -> GatedAuthenticator:
    return GatedAuthenticator()


@pytest.fixture
def recorder() -> StateRecorder:
    return StateRecorder()


@pytest.fixture
def successes() -> list[str]:
    return []


@pytest.fixture
def make_controller(
    authenticator: GatedAuthenticator,
    recorder: StateRecorder,
    successes: list[str],
) -> Callable[..., LoginFlowController]:
    def _make_controller(**kwargs) -> LoginFlowController:
        kwargs.setdefault("on_success", successes.append)
        auth = kwargs.pop("authenticator", authenticator)
        controller = LoginFlowController(auth, **kwargs)
        controller.subscribe(recorder)
        return controller

    return _make_controller
