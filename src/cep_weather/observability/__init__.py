"""
cep_weather.observability

Observability package.

Responsibilities:
- Structured logging configuration.
- Request context propagation for consistent log enrichment.
- Span factories for request and provider-call tracing.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Exporter/SDK wiring is a deployment concern; this package only depends on the OTel API.
