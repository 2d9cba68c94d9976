"""
cep_weather.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Expose the app-scoped settings, span factory and orchestrator stored on app.state.
- Derive the per-request deadline handed to the provider calls.
"""

from __future__ import annotations

import asyncio

from fastapi import Depends, Request

from cep_weather.observability.tracing import SpanFactory
from cep_weather.orchestrator.handler import Orchestrator
from cep_weather.settings import Settings


def settings_dep(request: Request) -> Settings:
    # Set by `cep_weather.api.app.create_app`.
    return request.app.state.settings  # type: ignore[no-any-return]


def tracer_dep(request: Request) -> SpanFactory:
    return request.app.state.tracer  # type: ignore[no-any-return]


def orchestrator_dep(request: Request) -> Orchestrator:
    return request.app.state.orchestrator  # type: ignore[no-any-return]


async def deadline_dep(settings: Settings = Depends(settings_dep)) -> float | None:
    # Absolute event-loop time, the same clock `asyncio.timeout_at` uses. Async so it
    # runs on the loop rather than in the threadpool.
    if settings.request_deadline_seconds is None:
        return None
    return asyncio.get_running_loop().time() + settings.request_deadline_seconds
