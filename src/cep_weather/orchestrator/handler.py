"""
cep_weather.orchestrator.handler

Request-scoped orchestration of the postal code -> locality -> weather chain.

Responsibilities:
- Validate the postal code and short-circuit before any provider call.
- Call the geocode and weather providers sequentially, each inside a child span.
- Classify failures per stage and convert them into `Outcome` variants.
- Assemble the HTTP-shaped `Reply` under one request-level parent span.
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping

from cep_weather.observability.logging import get_logger
from cep_weather.observability.tracing import Span, SpanFactory
from cep_weather.orchestrator.conversion import celsius_to_fahrenheit, celsius_to_kelvin
from cep_weather.orchestrator.errors import LocalityNotFound, UpstreamError
from cep_weather.orchestrator.models import (
    InvalidInput,
    LocalityResult,
    NotFound,
    OrchestrationResult,
    OrchestrationState,
    Outcome,
    PostalCodeRequest,
    Reply,
    Success,
    TemperatureResult,
    UpstreamFailure,
)
from cep_weather.orchestrator.validation import is_valid_postal_code
from cep_weather.providers.base import GeocodeClient, WeatherClient

log = get_logger(__name__)

SPAN_HANDLER = "orchestration-handler"
SPAN_GEOCODE = "call-viacep-api"
SPAN_WEATHER = "call-weather-api"

MSG_INVALID = "invalid zipcode"
MSG_NOT_FOUND = "can not find zipcode"
MSG_SERVER_ERROR = "internal server error"

_TEXT = "text/plain; charset=utf-8"
_JSON = "application/json"


class Orchestrator:
    """
    One instance may serve many requests; it holds only the injected collaborators,
    never per-request state.
    """

    def __init__(
        self,
        *,
        geocode: GeocodeClient,
        weather: WeatherClient,
        tracer: SpanFactory,
    ) -> None:
        self._geocode = geocode
        self._weather = weather
        self._tracer = tracer

    async def handle(
        self,
        code: str,
        *,
        deadline: float | None = None,
        carrier: Mapping[str, str] | None = None,
    ) -> Reply:
        with self._tracer.start_span(SPAN_HANDLER, carrier=carrier) as span:
            log.info("cep_received", cep=code)
            outcome = await self.run(code, deadline=deadline)
            span.set_attribute("outcome", type(outcome).__name__)
            if isinstance(outcome, UpstreamFailure):
                span.set_attribute("error.stage", outcome.stage.value)
            reply = render(outcome)
            span.set_attribute("http.status_code", reply.status_code)
            _transition(OrchestrationState.responded, cep=code, status=reply.status_code)
            return reply

    async def run(self, code: str, *, deadline: float | None = None) -> Outcome:
        if not is_valid_postal_code(code):
            log.info("invalid_zipcode", cep=code)
            return InvalidInput(code=code)
        request = PostalCodeRequest(code=code)
        _transition(OrchestrationState.validated, cep=code)

        locality = await self._resolve_locality(request, deadline=deadline)
        if not isinstance(locality, LocalityResult):
            return locality
        _transition(OrchestrationState.geocoded, cep=code, city=locality.name)

        temperature = await self._resolve_temperature(locality, deadline=deadline)
        if not isinstance(temperature, TemperatureResult):
            return temperature
        _transition(OrchestrationState.weathered, cep=code, temp_c=temperature.celsius)

        celsius = temperature.celsius
        result = OrchestrationResult(
            city=locality.name,
            celsius=celsius,
            fahrenheit=celsius_to_fahrenheit(celsius),
            kelvin=celsius_to_kelvin(celsius),
        )
        log.info("orchestration_succeeded", cep=code, **result.to_payload())
        return Success(result=result)

    async def _resolve_locality(
        self, request: PostalCodeRequest, *, deadline: float | None
    ) -> LocalityResult | NotFound | UpstreamFailure:
        with self._tracer.start_span(SPAN_GEOCODE) as span:
            span.set_attribute("cep", request.code)
            try:
                return await self._geocode.lookup(
                    request.code,
                    headers=span.propagation_headers(),
                    deadline=deadline,
                )
            except LocalityNotFound:
                span.set_attribute("geocode.found", False)
                log.info("cep_not_found", cep=request.code)
                return NotFound(code=request.code)
            except UpstreamError as e:
                return _upstream_failure(span, e, cep=request.code)

    async def _resolve_temperature(
        self, locality: LocalityResult, *, deadline: float | None
    ) -> TemperatureResult | UpstreamFailure:
        with self._tracer.start_span(SPAN_WEATHER) as span:
            span.set_attribute("city", locality.name)
            try:
                return await self._weather.current_temperature(
                    locality.name,
                    headers=span.propagation_headers(),
                    deadline=deadline,
                )
            except UpstreamError as e:
                return _upstream_failure(span, e, city=locality.name)


def _upstream_failure(span: Span, e: UpstreamError, **context: str) -> UpstreamFailure:
    span.record_exception(e)
    span.set_attribute("error.stage", e.stage.value)
    log.error("upstream_failed", stage=e.stage.value, detail=e.detail, **context)
    return UpstreamFailure(stage=e.stage, detail=e.detail)


def _transition(state: OrchestrationState, **fields: object) -> None:
    log.debug("state_transition", state=state.value, **fields)


def render(outcome: Outcome) -> Reply:
    """
    Map an outcome onto status code and body. Failure bodies are one plain-text
    line; the failing stage never reaches the body.
    """

    if isinstance(outcome, Success):
        return Reply(status_code=200, body=_encode_success(outcome.result), media_type=_JSON)
    if isinstance(outcome, InvalidInput):
        return _text(422, MSG_INVALID)
    if isinstance(outcome, NotFound):
        return _text(404, MSG_NOT_FOUND)
    return _text(500, MSG_SERVER_ERROR)


def _text(status_code: int, message: str) -> Reply:
    return Reply(status_code=status_code, body=f"{message}\n".encode(), media_type=_TEXT)


def _encode_success(result: OrchestrationResult) -> bytes:
    payload = {k: _compact_number(v) for k, v in result.to_payload().items()}
    try:
        return json.dumps(
            payload, ensure_ascii=False, separators=(",", ":"), allow_nan=False
        ).encode()
    except ValueError:
        # Status 200 is already decided at this point; the failure is reported, not retried.
        log.error("response_encoding_failed", city=result.city, temp_c=repr(result.celsius))
        return b""


def _compact_number(value: str | float) -> str | float | int:
    # 25.0 -> 25, so whole temperatures serialize without a fractional part.
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    return value


# --- Module Notes -----------------------------------------------------------
# The weather call depends on the geocode result, so the two provider calls are
# sequential by data dependency; each is an await that honours task cancellation.
