"""
cep_weather.orchestrator

Orchestration package (postal code -> locality -> weather).

Responsibilities:
- Typed request/result/outcome model, validation, unit conversion.
- The request-scoped orchestrator that sequences the provider calls.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Public surface area should remain small and stable; routers call `Orchestrator.handle`.
