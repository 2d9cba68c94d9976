"""
cep_weather.api.app

FastAPI app factory for the CEP weather orchestration service.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Create and dispose the pooled provider HTTP client.
- Compose the orchestrator from settings, provider clients and the span factory.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from cep_weather import __version__
from cep_weather.api.routers.gateway import router as gateway_router
from cep_weather.api.routers.health import router as health_router
from cep_weather.api.routers.weather import router as weather_router
from cep_weather.observability.logging import configure_logging, get_logger
from cep_weather.observability.middleware import RequestContextMiddleware
from cep_weather.observability.tracing import NoopSpanFactory, OtelSpanFactory, SpanFactory
from cep_weather.orchestrator.handler import Orchestrator
from cep_weather.providers.viacep import ViaCepClient
from cep_weather.providers.weatherapi import WeatherApiClient
from cep_weather.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings, tracer: SpanFactory | None = None) -> FastAPI:
    # Configure structured logging once at process startup (before app serves requests).
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    if tracer is None:
        tracer = (
            OtelSpanFactory(service_name=settings.service_name)
            if settings.tracing_enabled
            else NoopSpanFactory()
        )

    # No client-level timeout: provider calls are bounded by the request deadline/cancellation.
    http = httpx.AsyncClient(timeout=None)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        try:
            yield
        finally:
            # Close pooled connections gracefully.
            await http.aclose()
            log.info("shutdown")

    app = FastAPI(
        title="CEP Weather Orchestration",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.http = http
    app.state.tracer = tracer
    app.state.orchestrator = Orchestrator(
        geocode=ViaCepClient(http=http, base_url=settings.geocode_base_url),
        weather=WeatherApiClient(
            http=http,
            base_url=settings.weather_base_url,
            api_key=settings.weather_api_key,
        ),
        tracer=tracer,
    )

    app.add_middleware(RequestContextMiddleware)
    # Order matters: `/{cep}` would otherwise shadow the fixed paths.
    app.include_router(health_router, tags=["health"])
    app.include_router(gateway_router)
    app.include_router(weather_router)

    return app


# --- Module Notes -----------------------------------------------------------
# This file is intentionally small: app composition stays here; business logic stays
# in the orchestrator and provider layers.
