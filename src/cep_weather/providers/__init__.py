"""
cep_weather.providers

Provider client package.

Responsibilities:
- Provide client interfaces for the geocoding (ViaCEP) and weather (WeatherAPI) providers.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The orchestrator depends on the protocols in `providers.base`, never on httpx directly.
