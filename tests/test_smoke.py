"""
tests.test_smoke

Minimal smoke tests to validate the service can boot and serve its probes.

Responsibilities:
- Ensure the FastAPI app starts and the liveness/readiness probes answer.
- Ensure the entrypoint hands the shutdown grace period to uvicorn.
"""

from __future__ import annotations

import httpx
import pytest

from cep_weather.api import __main__ as entrypoint
from cep_weather.api.app import create_app
from cep_weather.observability.tracing import NoopSpanFactory, OtelSpanFactory
from cep_weather.settings import Settings


@pytest.mark.asyncio
async def test_health_endpoints(app) -> None:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        r = await client.get("/healthz")
        assert r.status_code == 200
        assert r.json()["status"] == "ok"

        r = await client.get("/readyz")
        assert r.status_code == 200
        assert r.json()["status"] == "ready"


@pytest.mark.asyncio
async def test_readyz_fails_once_http_client_closed(app) -> None:
    await app.state.http.aclose()

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        r = await client.get("/readyz")
    assert r.status_code == 503


def test_main_bounds_graceful_shutdown(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict = {}
    monkeypatch.setattr(
        entrypoint, "get_settings", lambda: Settings(env="test", shutdown_timeout_seconds=7)
    )
    monkeypatch.setattr(entrypoint.uvicorn, "run", lambda app, **kwargs: captured.update(kwargs))

    entrypoint.main()

    assert captured["timeout_graceful_shutdown"] == 7
    assert captured["port"] == 8081


def test_tracer_selection_follows_settings() -> None:
    enabled = create_app(settings=Settings(env="test", tracing_enabled=True))
    disabled = create_app(settings=Settings(env="test", tracing_enabled=False))

    assert isinstance(enabled.state.tracer, OtelSpanFactory)
    assert isinstance(disabled.state.tracer, NoopSpanFactory)


def test_provider_client_has_no_own_timeout(app) -> None:
    # Provider calls are bounded only by the request deadline and cancellation.
    assert app.state.http.timeout == httpx.Timeout(None)


# --- Module Notes -----------------------------------------------------------
# Orchestration behaviour is covered end-to-end in tests/test_api.py.
