"""
cep_weather.providers.viacep

Geocoding client for ViaCEP (postal code -> locality).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from cep_weather.orchestrator.errors import LocalityNotFound, UpstreamError
from cep_weather.orchestrator.models import LocalityResult, Stage
from cep_weather.providers.base import get_json


class ViaCepClient:
    def __init__(self, *, http: httpx.AsyncClient, base_url: str) -> None:
        self._http = http
        self._base_url = base_url.rstrip("/")

    async def lookup(
        self,
        code: str,
        *,
        headers: Mapping[str, str] | None = None,
        deadline: float | None = None,
    ) -> LocalityResult:
        payload = await get_json(
            self._http,
            f"{self._base_url}/ws/{code}/json/",
            stage=Stage.geocode,
            headers=headers,
            deadline=deadline,
        )

        if _is_flagged(payload.get("erro")):
            raise LocalityNotFound(code=code)

        name = payload.get("localidade", "")
        if not isinstance(name, str):
            raise UpstreamError(stage=Stage.geocode, detail="localidade is not a string")
        if not name:
            raise LocalityNotFound(code=code)
        # Returned verbatim: no case or diacritic normalization.
        return LocalityResult(name=name)


def _is_flagged(value: Any) -> bool:
    # ViaCEP has emitted both `true` and `"true"` for unknown codes.
    return value is True or value == "true"
