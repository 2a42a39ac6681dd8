"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) para ambos servicios.
- Los adaptadores HTTP y la CLI leen la misma configuración tipada.
- La API key de WeatherAPI solo llega por configuración; nunca hay default.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.errors import ConfigurationError


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para gateway, aggregator y CLI.
    """

    model_config = SettingsConfigDict(
        env_prefix="CEP_WEATHER_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    weather_api_key: str | None = Field(
        default=None,
        description="API key de WeatherAPI (obligatoria para el aggregator).",
    )
    viacep_base_url: str = Field(
        default="https://viacep.com.br",
        min_length=8,
        description="Base URL del directorio de CEPs (ViaCEP).",
    )
    weatherapi_base_url: str = Field(
        default="https://api.weatherapi.com/v1",
        min_length=8,
        description="Base URL de WeatherAPI.",
    )
    aggregator_url: str = Field(
        default="http://localhost:8081",
        min_length=8,
        description="URL base del servicio de agregación (usada por el gateway).",
    )

    http_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout por request saliente (segundos).",
    )
    user_agent: str = Field(
        default="cep-weather/0.1",
        min_length=1,
        description="User-Agent para peticiones salientes.",
    )

    gateway_host: str = Field(default="0.0.0.0", description="Host de escucha del gateway.")
    gateway_port: int = Field(default=8080, ge=1, le=65535, description="Puerto del gateway.")
    aggregator_host: str = Field(default="0.0.0.0", description="Host de escucha del aggregator.")
    aggregator_port: int = Field(default=8081, ge=1, le=65535, description="Puerto del aggregator.")

    log_level: str = Field(
        default="INFO",
        description="Nivel de logging (DEBUG, INFO, WARNING, ERROR).",
    )

    def require_weather_api_key(self) -> str:
        """Devuelve la API key o falla en el arranque si no está configurada."""

        key = (self.weather_api_key or "").strip()
        if not key:
            raise ConfigurationError(
                "CEP_WEATHER_WEATHER_API_KEY is not set; the aggregation service cannot start"
            )
        return key
