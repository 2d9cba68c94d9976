"""
cep_weather.api.__main__

Entrypoint for running the FastAPI application via `python -m cep_weather.api`.

Responsibilities:
- Load settings.
- Create the app.
- Start uvicorn with structlog-compatible logging config.
"""

from __future__ import annotations

import uvicorn

from cep_weather.api.app import create_app
from cep_weather.settings import get_settings


def main() -> None:
    settings = get_settings()
    app = create_app(settings=settings)

    # uvicorn handles SIGINT/SIGTERM: in-flight requests drain (bounded by the grace
    # period, after which their tasks are cancelled), then lifespan shutdown runs.
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        timeout_graceful_shutdown=settings.shutdown_timeout_seconds,
        log_config=None,  # structlog
    )


if __name__ == "__main__":
    main()
