"""Weather resolver: WeatherAPI (`/current.json`).

Notas:
- La API key llega inyectada desde `AppSettings`; este módulo no tiene default.
- `q` va URL-escapada (httpx codifica los query params: "São Paulo" -> "S%C3%A3o+Paulo").
- Errores de WeatherAPI vienen como `{"error": {"code": ..., "message": ...}}`.
"""

from __future__ import annotations

import logging

import httpx
from pydantic import BaseModel, ValidationError
from pydantic.config import ConfigDict

from adapters.http_client import describe_http_error
from core.domain.errors import TransportError
from core.domain.models import WeatherSample
from core.interfaces.resolvers import WeatherResolver
from observability.metrics import record_upstream

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.weatherapi.com/v1"


class _Current(BaseModel):
    model_config = ConfigDict(extra="ignore")

    temp_c: float
    temp_f: float


class WeatherApiPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    current: _Current


def _api_error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    error = payload.get("error") if isinstance(payload, dict) else None
    if isinstance(error, dict) and isinstance(error.get("message"), str):
        return f"HTTP {response.status_code}: {error['message']}"
    return f"HTTP {response.status_code}"


class WeatherApiResolver(WeatherResolver):
    """Consulta la temperatura actual de una localidad."""

    upstream = "weatherapi"

    def __init__(self, client: httpx.AsyncClient, *, api_key: str, base_url: str = DEFAULT_BASE_URL) -> None:
        self._client = client
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")

    async def resolve(self, location: str) -> WeatherSample:
        url = f"{self._base_url}/current.json"
        try:
            response = await self._client.get(url, params={"key": self._api_key, "q": location})
        except httpx.HTTPError as exc:
            record_upstream(self.upstream, "transport_error")
            raise TransportError(f"failed to fetch data from WeatherAPI: {describe_http_error(exc)}") from exc

        if not response.is_success:
            record_upstream(self.upstream, "http_error")
            raise TransportError(f"failed to fetch data from WeatherAPI: {_api_error_message(response)}")

        try:
            payload = WeatherApiPayload.model_validate_json(response.content)
        except ValidationError as exc:
            record_upstream(self.upstream, "decode_error")
            raise TransportError(f"failed to decode WeatherAPI response: {exc.error_count()} error(s)") from exc

        record_upstream(self.upstream, "ok")
        logger.debug("Weather for %r: %.1fC", location, payload.current.temp_c)
        return WeatherSample(celsius=payload.current.temp_c, fahrenheit=payload.current.temp_f)
