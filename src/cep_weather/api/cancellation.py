"""
cep_weather.api.cancellation

Ties request handling to the client connection.

Responsibilities:
- Run a handler coroutine while watching the ASGI receive channel.
- Cancel the handler when the client disconnects, so in-flight provider calls stop.
"""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from typing import Any, TypeVar

from starlette.requests import Request
from starlette.responses import Response

from cep_weather.observability.logging import get_logger

T = TypeVar("T")

# Non-standard status (nginx convention) used for the completion log only; the client is gone.
CLIENT_CLOSED_REQUEST = 499

log = get_logger(__name__)


class ClientDisconnected(Exception):
    pass


async def until_disconnected(request: Request, work: Coroutine[Any, Any, T]) -> T:
    """
    Await `work`; raise `ClientDisconnected` if the client goes away first.

    `work` is cancelled and awaited before raising, so its spans close. Exceptions
    from `work` and cancellation of the caller propagate unchanged.
    """

    task = asyncio.ensure_future(work)
    watcher = asyncio.ensure_future(_wait_for_disconnect(request))
    try:
        await asyncio.wait({task, watcher}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        watcher.cancel()
        if not task.done():
            task.cancel()
            await asyncio.wait({task})

    if watcher.done() and not watcher.cancelled():
        watcher.result()
    if task.cancelled():
        raise ClientDisconnected()
    return task.result()


async def _wait_for_disconnect(request: Request) -> None:
    while True:
        message = await request.receive()
        if message["type"] == "http.disconnect":
            return


def disconnected_response() -> Response:
    log.info("client_disconnected")
    return Response(status_code=CLIENT_CLOSED_REQUEST)


# --- Module Notes -----------------------------------------------------------
# Starlette does not cancel an endpoint when its client disconnects; the watcher
# reads `http.disconnect` itself. Request bodies must be read before calling
# `until_disconnected`, since the watcher drains the receive channel.
