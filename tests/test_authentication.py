from __future__ import annotations

import asyncio

import pytest

from logindemo.config import AppConfig
from logindemo.services import AuthOutcome, SimulatedAuthenticator


@pytest.mark.asyncio
async def test_simulated_authenticator_accepts_non_empty_credentials() -> None:
    authenticator = SimulatedAuthenticator(delay=0)

    assert await authenticator.authenticate("alice", "secret1") is AuthOutcome.SUCCESS


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("username", "password"),
    [("", "secret1"), ("alice", ""), ("", "")],
)
async def test_simulated_authenticator_rejects_empty_fields(username: str, password: str) -> None:
    authenticator = SimulatedAuthenticator(delay=0)

    assert await authenticator.authenticate(username, password) is AuthOutcome.FAILURE


@pytest.mark.asyncio
async def test_simulated_authenticator_waits_for_its_delay(monkeypatch) -> None:
    delays: list[float] = []

    async def fake_sleep(delay: float) -> None:
        delays.append(delay)

    monkeypatch.setattr(asyncio, "sleep", fake_sleep)
    authenticator = SimulatedAuthenticator(delay=2.0, logout_delay=1.0)

    await authenticator.authenticate("alice", "secret1")
    await authenticator.logout()

    assert delays == [2.0, 1.0]


def test_default_delay_matches_configuration_default() -> None:
    assert SimulatedAuthenticator().delay == 2.0


def test_from_config_uses_configured_delays() -> None:
    config = AppConfig(auth_delay_seconds=0.5, logout_delay_seconds=0.25)

    authenticator = SimulatedAuthenticator.from_config(config)

    assert authenticator.delay == 0.5


def test_negative_delay_is_rejected() -> None:
    with pytest.raises(ValueError):
        SimulatedAuthenticator(delay=-1)
    with pytest.raises(ValueError):
        SimulatedAuthenticator(logout_delay=-1)
