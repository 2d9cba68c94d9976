"""
tests.conftest

Shared fixtures and test doubles.

Responsibilities:
- Provide a recording span factory to assert span lifecycle and nesting.
- Provide fake provider clients that record the calls they receive.
- Provide test settings and a ready-to-use app.
"""

from __future__ import annotations

import contextvars
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

import pytest

from cep_weather.api.app import create_app
from cep_weather.orchestrator.models import LocalityResult, TemperatureResult
from cep_weather.settings import Settings

GEOCODE_URL = "https://viacep.com.br/ws/{code}/json/"
WEATHER_URL = "http://api.weatherapi.com/v1/current.json"


@dataclass
class RecordedSpan:
    name: str
    parent: RecordedSpan | None
    carrier: dict[str, str] | None
    attributes: dict[str, Any] = field(default_factory=dict)
    exceptions: list[BaseException] = field(default_factory=list)
    end_count: int = 0

    def set_attribute(self, key: str, value: Any) -> None:
        self.attributes[key] = value

    def record_exception(self, exc: BaseException) -> None:
        self.exceptions.append(exc)

    def propagation_headers(self) -> dict[str, str]:
        return {"x-test-span": self.name}


class RecordingSpanFactory:
    def __init__(self) -> None:
        self.spans: list[RecordedSpan] = []
        self._current: contextvars.ContextVar[RecordedSpan | None] = contextvars.ContextVar(
            "current_span", default=None
        )

    @contextmanager
    def start_span(
        self, name: str, *, carrier: Mapping[str, str] | None = None
    ) -> Iterator[RecordedSpan]:
        span = RecordedSpan(
            name=name,
            parent=self._current.get(),
            carrier=dict(carrier) if carrier is not None else None,
        )
        self.spans.append(span)
        token = self._current.set(span)
        try:
            yield span
        finally:
            self._current.reset(token)
            span.end_count += 1

    def named(self, name: str) -> list[RecordedSpan]:
        return [s for s in self.spans if s.name == name]


class FakeGeocode:
    def __init__(
        self,
        *,
        name: str = "São Paulo",
        error: BaseException | None = None,
    ) -> None:
        self.name = name
        self.error = error
        self.calls: list[dict[str, Any]] = []

    async def lookup(
        self,
        code: str,
        *,
        headers: Mapping[str, str] | None = None,
        deadline: float | None = None,
    ) -> LocalityResult:
        self.calls.append({"code": code, "headers": dict(headers or {}), "deadline": deadline})
        if self.error is not None:
            raise self.error
        return LocalityResult(name=self.name)


class FakeWeather:
    def __init__(
        self,
        *,
        celsius: float = 25.0,
        error: BaseException | None = None,
    ) -> None:
        self.celsius = celsius
        self.error = error
        self.calls: list[dict[str, Any]] = []

    async def current_temperature(
        self,
        city: str,
        *,
        headers: Mapping[str, str] | None = None,
        deadline: float | None = None,
    ) -> TemperatureResult:
        self.calls.append({"city": city, "headers": dict(headers or {}), "deadline": deadline})
        if self.error is not None:
            raise self.error
        return TemperatureResult(celsius=self.celsius)


@pytest.fixture()
def tracer() -> RecordingSpanFactory:
    return RecordingSpanFactory()


@pytest.fixture()
def settings() -> Settings:
    return Settings(env="test", weather_api_key="test-key", log_level="WARNING")


@pytest.fixture()
def app(settings: Settings, tracer: RecordingSpanFactory):
    return create_app(settings=settings, tracer=tracer)


# --- Module Notes -----------------------------------------------------------
# The recording factory nests spans through a contextvar, the same way the
# OpenTelemetry API tracks the current span.
