"""
cep_weather.orchestrator.errors

Domain-specific exceptions raised by provider clients.

Responsibilities:
- Signal a semantic "postal code unknown" miss from the geocoding provider.
- Signal an infrastructure/parse failure tagged with the stage it happened in.
"""

from __future__ import annotations

from dataclasses import dataclass

from cep_weather.orchestrator.models import Stage


@dataclass(eq=False)
class LocalityNotFound(Exception):
    """
    Raised by the geocode client when the provider flags the code as unknown
    or returns an empty locality.
    """

    code: str

    def __str__(self) -> str:
        return f"postal code not found: {self.code}"


# Not frozen: contextlib re-raise paths assign `__traceback__` on the instance.
@dataclass(eq=False)
class UpstreamError(Exception):
    """
    Raised by a provider client on transport errors, non-2xx statuses or
    undecodable bodies.
    """

    stage: Stage
    detail: str

    def __str__(self) -> str:
        return f"{self.stage.value}: {self.detail}"


# --- Module Notes -----------------------------------------------------------
# The orchestrator catches exactly these two types and converts them into
# `Outcome` variants; anything else (cancellation included) propagates.
