"""
cep_weather.api.routers.gateway

Public input gateway: `POST /zipcode` with `{"cep": "<8 digits>"}`.

Responsibilities:
- Decode and validate the JSON body before any downstream call.
- Forward valid codes to the orchestration endpoint (`GET /{cep}`), propagating
  trace context and request id, and relay its status and body verbatim.
- Abandon the forward when the client disconnects.
"""

from __future__ import annotations

import json

import httpx
from fastapi import APIRouter, Depends, Request
from starlette.responses import PlainTextResponse, Response

from cep_weather.api.cancellation import (
    ClientDisconnected,
    disconnected_response,
    until_disconnected,
)
from cep_weather.api.deps import settings_dep, tracer_dep
from cep_weather.observability.logging import get_logger
from cep_weather.observability.middleware import REQUEST_ID_HEADER
from cep_weather.observability.tracing import SpanFactory
from cep_weather.orchestrator.handler import MSG_INVALID, MSG_SERVER_ERROR
from cep_weather.orchestrator.validation import is_valid_postal_code
from cep_weather.settings import Settings

log = get_logger(__name__)

router = APIRouter(tags=["gateway"])

SPAN_GATEWAY = "gateway-handler"
SPAN_FORWARD = "call-orchestration-service"


@router.post("/zipcode")
async def submit_zipcode(
    request: Request,
    settings: Settings = Depends(settings_dep),
    tracer: SpanFactory = Depends(tracer_dep),
) -> Response:
    with tracer.start_span(SPAN_GATEWAY, carrier=request.headers) as span:
        try:
            body = json.loads(await request.body())
        except ValueError as e:
            span.record_exception(e)
            return PlainTextResponse("invalid request body\n", status_code=400)
        if not isinstance(body, dict):
            span.set_attribute("validation.status", "failed")
            return PlainTextResponse("invalid request body\n", status_code=400)

        cep = body.get("cep")
        if not is_valid_postal_code(cep):
            span.set_attribute("validation.status", "failed")
            log.info("invalid_zipcode", cep=cep)
            return PlainTextResponse(f"{MSG_INVALID}\n", status_code=422)
        span.set_attribute("validation.status", "success")

        with tracer.start_span(SPAN_FORWARD) as call_span:
            headers = call_span.propagation_headers()
            headers[REQUEST_ID_HEADER] = request.state.request_id
            try:
                r = await until_disconnected(
                    request, _forward(request, settings=settings, cep=cep, headers=headers)
                )
            except ClientDisconnected:
                call_span.set_attribute("client.disconnected", True)
                return disconnected_response()
            except httpx.HTTPError as e:
                call_span.record_exception(e)
                log.error("forward_failed", cep=cep, error=type(e).__name__)
                return PlainTextResponse(f"{MSG_SERVER_ERROR}\n", status_code=500)
            call_span.set_attribute("http.status_code", r.status_code)

        return Response(
            content=r.content,
            status_code=r.status_code,
            media_type=r.headers.get("content-type"),
        )


async def _forward(
    request: Request, *, settings: Settings, cep: str, headers: dict[str, str]
) -> httpx.Response:
    if settings.orchestrator_base_url:
        base_url = settings.orchestrator_base_url.rstrip("/")
        return await request.app.state.http.get(f"{base_url}/{cep}", headers=headers)

    # No remote orchestrator configured: call this app's own `/{cep}` route in-process.
    transport = httpx.ASGITransport(app=request.app)
    async with httpx.AsyncClient(
        transport=transport, base_url=str(request.base_url).rstrip("/")
    ) as http:
        return await http.get(f"/{cep}", headers=headers)


# --- Module Notes -----------------------------------------------------------
# Validation runs here as well as in the orchestrator so malformed codes never
# cost a hop; the orchestrator remains the authority for everything else.
