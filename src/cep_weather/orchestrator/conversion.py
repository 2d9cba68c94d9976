"""
cep_weather.orchestrator.conversion

Temperature unit conversion.
"""

from __future__ import annotations

KELVIN_OFFSET = 273.15


def celsius_to_fahrenheit(celsius: float) -> float:
    return celsius * 1.8 + 32


def celsius_to_kelvin(celsius: float) -> float:
    return celsius + KELVIN_OFFSET
