"""
cep_weather.providers.base

Provider client boundary shared by the geocode and weather clients.

Responsibilities:
- Declare the `GeocodeClient`/`WeatherClient` protocols the orchestrator depends on.
- Perform one JSON GET and classify transport, status and decode failures by stage.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any, Protocol

import httpx

from cep_weather.orchestrator.errors import UpstreamError
from cep_weather.orchestrator.models import LocalityResult, Stage, TemperatureResult


class GeocodeClient(Protocol):
    async def lookup(
        self,
        code: str,
        *,
        headers: Mapping[str, str] | None = None,
        deadline: float | None = None,
    ) -> LocalityResult:
        """Raises `LocalityNotFound` on a provider miss, `UpstreamError` otherwise."""
        ...


class WeatherClient(Protocol):
    async def current_temperature(
        self,
        city: str,
        *,
        headers: Mapping[str, str] | None = None,
        deadline: float | None = None,
    ) -> TemperatureResult:
        """Raises `UpstreamError` on transport or parse failures."""
        ...


async def get_json(
    http: httpx.AsyncClient,
    url: str,
    *,
    stage: Stage,
    params: Mapping[str, str] | None = None,
    headers: Mapping[str, str] | None = None,
    deadline: float | None = None,
) -> dict[str, Any]:
    """
    GET `url` and return the decoded JSON object.

    `deadline` is an absolute event-loop time; `None` leaves the call bounded only
    by the caller's cancellation. Cancellation itself is never caught here.
    """

    try:
        async with asyncio.timeout_at(deadline):
            r = await http.get(url, params=params, headers=headers)
    except TimeoutError as e:
        raise UpstreamError(stage=stage, detail="deadline exceeded") from e
    except httpx.HTTPError as e:
        # Exception text may carry the request URL (and the API key with it).
        raise UpstreamError(stage=stage, detail=f"transport error: {type(e).__name__}") from e

    if not r.is_success:
        raise UpstreamError(stage=stage, detail=f"unexpected status {r.status_code}")

    try:
        payload = r.json()
    except ValueError as e:
        raise UpstreamError(stage=stage, detail="undecodable body") from e
    if not isinstance(payload, dict):
        raise UpstreamError(stage=stage, detail="body is not a JSON object")
    return payload


# --- Module Notes -----------------------------------------------------------
# The shared httpx client has no timeout of its own (see api.app); calls are bounded
# by the per-request deadline (asyncio.timeout_at) and by cancellation of the request.
