"""
cep_weather.api

HTTP API package (FastAPI).

Responsibilities:
- App factory, dependency wiring, routers and the uvicorn entrypoint.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Routers stay thin: they extract the postal code and delegate to the orchestrator.
