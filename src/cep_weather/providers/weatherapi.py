"""
cep_weather.providers.weatherapi

Weather client for WeatherAPI (locality -> current Celsius temperature).
"""

from __future__ import annotations

from collections.abc import Mapping

import httpx

from cep_weather.orchestrator.errors import UpstreamError
from cep_weather.orchestrator.models import Stage, TemperatureResult
from cep_weather.providers.base import get_json


class WeatherApiClient:
    def __init__(self, *, http: httpx.AsyncClient, base_url: str, api_key: str) -> None:
        self._http = http
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key

    async def current_temperature(
        self,
        city: str,
        *,
        headers: Mapping[str, str] | None = None,
        deadline: float | None = None,
    ) -> TemperatureResult:
        # httpx percent-encodes query params, so localities with spaces/accents are safe.
        payload = await get_json(
            self._http,
            f"{self._base_url}/v1/current.json",
            stage=Stage.weather,
            params={"key": self._api_key, "q": city},
            headers=headers,
            deadline=deadline,
        )

        current = payload.get("current")
        temp_c = current.get("temp_c") if isinstance(current, dict) else None
        # bool is an int subclass; a JSON `true` is not a temperature.
        if isinstance(temp_c, bool) or not isinstance(temp_c, (int, float)):
            raise UpstreamError(stage=Stage.weather, detail="current.temp_c missing or not a number")
        return TemperatureResult(celsius=float(temp_c))
