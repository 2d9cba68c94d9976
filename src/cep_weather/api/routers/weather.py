"""
cep_weather.api.routers.weather

Orchestration endpoint: `GET /{cep}`.

Responsibilities:
- Extract the postal code from the path and delegate to the orchestrator.
- Abandon the orchestration when the client disconnects.
- Turn the orchestrator's `Reply` into a Starlette response.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from starlette.responses import Response

from cep_weather.api.cancellation import (
    ClientDisconnected,
    disconnected_response,
    until_disconnected,
)
from cep_weather.api.deps import deadline_dep, orchestrator_dep
from cep_weather.orchestrator.handler import Orchestrator
from cep_weather.orchestrator.models import Reply

router = APIRouter(tags=["weather"])


@router.get("/", include_in_schema=False)
async def weather_without_cep(
    request: Request,
    orchestrator: Orchestrator = Depends(orchestrator_dep),
    deadline: float | None = Depends(deadline_dep),
) -> Response:
    # An empty path is an empty postal code, rejected like any other invalid one.
    return await _handle(request, orchestrator, "", deadline)


# `:path` keeps the raw remainder, so `/01001000/` and `/a/b` reach validation
# instead of being redirected or unmatched.
@router.get("/{cep:path}")
async def weather_by_cep(
    cep: str,
    request: Request,
    orchestrator: Orchestrator = Depends(orchestrator_dep),
    deadline: float | None = Depends(deadline_dep),
) -> Response:
    return await _handle(request, orchestrator, cep, deadline)


async def _handle(
    request: Request, orchestrator: Orchestrator, cep: str, deadline: float | None
) -> Response:
    try:
        reply = await until_disconnected(
            request, orchestrator.handle(cep, deadline=deadline, carrier=request.headers)
        )
    except ClientDisconnected:
        return disconnected_response()
    return to_response(reply)


def to_response(reply: Reply) -> Response:
    return Response(content=reply.body, status_code=reply.status_code, media_type=reply.media_type)
