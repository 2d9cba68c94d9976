"""
cep_weather.orchestrator.models

Typed values exchanged between the orchestrator, the provider clients and the API layer.

Responsibilities:
- Define request-scoped entities (postal code, locality, temperature, result).
- Define the tagged `Outcome` variants produced by one orchestration run.
- Define the transport-neutral `Reply` assembled from an outcome.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TypeAlias


class Stage(str, enum.Enum):
    """Downstream dependency a failure is attributed to."""

    geocode = "geocode"
    weather = "weather"


class OrchestrationState(str, enum.Enum):
    start = "start"
    validated = "validated"
    geocoded = "geocoded"
    weathered = "weathered"
    responded = "responded"


@dataclass(frozen=True, slots=True)
class PostalCodeRequest:
    # Only constructed after validation; `code` always matches ^[0-9]{8}$.
    code: str


@dataclass(frozen=True, slots=True)
class LocalityResult:
    name: str


@dataclass(frozen=True, slots=True)
class TemperatureResult:
    celsius: float


@dataclass(frozen=True, slots=True)
class OrchestrationResult:
    city: str
    celsius: float
    fahrenheit: float
    kelvin: float

    def to_payload(self) -> dict[str, str | float]:
        # Wire names are fixed by the public contract.
        return {
            "city": self.city,
            "temp_C": self.celsius,
            "temp_F": self.fahrenheit,
            "temp_K": self.kelvin,
        }


@dataclass(frozen=True, slots=True)
class Success:
    result: OrchestrationResult


@dataclass(frozen=True, slots=True)
class InvalidInput:
    code: str


@dataclass(frozen=True, slots=True)
class NotFound:
    code: str


@dataclass(frozen=True, slots=True)
class UpstreamFailure:
    stage: Stage
    detail: str


Outcome: TypeAlias = Success | InvalidInput | NotFound | UpstreamFailure


@dataclass(frozen=True, slots=True)
class Reply:
    """
    HTTP-shaped response for one request; the API layer turns it into a Starlette response.
    """

    status_code: int
    body: bytes
    media_type: str


# --- Module Notes -----------------------------------------------------------
# Nothing here is shared across requests; every instance lives for one call chain.
