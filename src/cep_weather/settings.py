"""
cep_weather.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide the weather provider API key from repr/logging.
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    - Strict env-driven configuration
    - Defaults safe for local dev
    - Single settings object injected across layers
    """

    model_config = SettingsConfigDict(
        env_prefix="CEPW_", case_sensitive=False, populate_by_name=True
    )

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "cep-weather-orchestration"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = Field(
        default=8081, validation_alias=AliasChoices("CEPW_API_PORT", "SERVER_PORT")
    )
    # Seconds uvicorn waits for in-flight requests on shutdown before cancelling them.
    shutdown_timeout_seconds: int = Field(default=10, ge=0)

    # Providers
    weather_api_key: str = Field(
        default="",
        repr=False,
        validation_alias=AliasChoices("CEPW_WEATHER_API_KEY", "WEATHER_API_KEY"),
    )
    geocode_base_url: str = "https://viacep.com.br"
    weather_base_url: str = "http://api.weatherapi.com"

    # Gateway forward target; unset means the orchestration routes of this same app.
    orchestrator_base_url: str | None = None

    # Per-request deadline applied to the provider calls; unset means no deadline.
    request_deadline_seconds: float | None = Field(default=None, gt=0)

    tracing_enabled: bool = True

    @model_validator(mode="after")
    def _require_weather_key(self) -> Settings:
        if self.env != "test" and not self.weather_api_key:
            raise ValueError(
                "WEATHER_API_KEY is not set; please provide it via environment variable"
            )
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# The weather key and the port accept both the prefixed name and the bare
# WEATHER_API_KEY / SERVER_PORT names, so existing deployments keep working
# without renaming them.
