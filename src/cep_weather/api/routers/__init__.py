"""
cep_weather.api.routers

Router package.

Responsibilities:
- Health probes, the orchestration endpoint and the JSON input gateway.
"""

# Package marker.
