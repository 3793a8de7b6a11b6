from __future__ import annotations

import logging

import pytest

from logindemo.config import ConfigError, load_config

ENV_VARS = (
    "LOGINDEMO_AUTH_DELAY_SECONDS",
    "LOGINDEMO_LOGOUT_DELAY_SECONDS",
    "LOGINDEMO_AUTH_TIMEOUT_SECONDS",
    "LOGINDEMO_THEME",
    "LOGINDEMO_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ENV_VARS:
        # setenv then delenv so teardown restores the original value even
        # when load_dotenv wrote to os.environ during the test.
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


def test_defaults() -> None:
    config = load_config()

    assert config.auth_delay_seconds == 2.0
    assert config.logout_delay_seconds == 1.0
    assert config.auth_timeout_seconds == 10.0
    assert config.theme == "light"
    assert config.log_level_number == logging.INFO


def test_values_are_read_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("LOGINDEMO_AUTH_DELAY_SECONDS", "0.5")
    monkeypatch.setenv("LOGINDEMO_LOGOUT_DELAY_SECONDS", "0")
    monkeypatch.setenv("LOGINDEMO_AUTH_TIMEOUT_SECONDS", "3")
    monkeypatch.setenv("LOGINDEMO_THEME", "Dark")
    monkeypatch.setenv("LOGINDEMO_LOG_LEVEL", "debug")

    config = load_config()

    assert config.auth_delay_seconds == 0.5
    assert config.logout_delay_seconds == 0.0
    assert config.auth_timeout_seconds == 3.0
    assert config.theme == "dark"
    assert config.log_level_number == logging.DEBUG


def test_values_are_read_from_dotenv_file(tmp_path) -> None:
    (tmp_path / ".env").write_text("LOGINDEMO_AUTH_DELAY_SECONDS=0.1\n", encoding="utf-8")

    config = load_config()

    assert config.auth_delay_seconds == 0.1


@pytest.mark.parametrize("value", ["0", "-1"])
def test_non_positive_timeout_disables_it(monkeypatch, value: str) -> None:
    monkeypatch.setenv("LOGINDEMO_AUTH_TIMEOUT_SECONDS", value)

    assert load_config().auth_timeout_seconds is None


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("LOGINDEMO_AUTH_DELAY_SECONDS", "abc"),
        ("LOGINDEMO_AUTH_DELAY_SECONDS", "-2"),
        ("LOGINDEMO_LOGOUT_DELAY_SECONDS", "-0.5"),
        ("LOGINDEMO_AUTH_TIMEOUT_SECONDS", "soon"),
        ("LOGINDEMO_AUTH_DELAY_SECONDS", "nan"),
        ("LOGINDEMO_LOGOUT_DELAY_SECONDS", "inf"),
        ("LOGINDEMO_AUTH_TIMEOUT_SECONDS", "nan"),
        ("LOGINDEMO_AUTH_TIMEOUT_SECONDS", "inf"),
        ("LOGINDEMO_THEME", "blue"),
        ("LOGINDEMO_LOG_LEVEL", "LOUD"),
    ],
)
def test_invalid_values_raise_config_error(monkeypatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(ConfigError):
        load_config()
