"""
tests.test_settings

Env-driven configuration: required secrets, accepted variable names and bounds.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from cep_weather.settings import Settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    names = ("WEATHER_API_KEY", "CEPW_WEATHER_API_KEY", "CEPW_ENV", "SERVER_PORT", "CEPW_API_PORT")
    for name in names:
        monkeypatch.delenv(name, raising=False)


def test_weather_key_required_outside_test_env() -> None:
    with pytest.raises(ValidationError, match="WEATHER_API_KEY"):
        Settings(env="prod")


def test_bare_weather_api_key_env_is_accepted(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WEATHER_API_KEY", "from-env")

    assert Settings(env="prod").weather_api_key == "from-env"


def test_prefixed_env_vars(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CEPW_WEATHER_API_KEY", "prefixed")
    monkeypatch.setenv("CEPW_API_PORT", "9090")
    monkeypatch.setenv("CEPW_REQUEST_DEADLINE_SECONDS", "2.5")

    s = Settings()

    assert s.weather_api_key == "prefixed"
    assert s.api_port == 9090
    assert s.request_deadline_seconds == 2.5
    assert s.orchestrator_base_url is None


def test_api_key_hidden_from_repr() -> None:
    s = Settings(env="test", weather_api_key="super-secret")

    assert "super-secret" not in repr(s)


def test_deadline_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        Settings(env="test", request_deadline_seconds=0)


def test_bare_server_port_env_is_accepted(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SERVER_PORT", "8082")

    assert Settings(env="test").api_port == 8082


def test_shutdown_timeout_defaults_to_ten_seconds() -> None:
    assert Settings(env="test").shutdown_timeout_seconds == 10
