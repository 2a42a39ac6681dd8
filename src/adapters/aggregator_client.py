"""Cliente HTTP del gateway hacia el servicio de agregación.

Devuelve la respuesta cruda (`UpstreamReply`); interpretar status y cuerpo
es trabajo de `core.services.gateway`.
"""

from __future__ import annotations

import httpx

from adapters.http_client import describe_http_error
from core.config import AppSettings
from core.domain.errors import TransportError
from core.domain.models import UpstreamReply
from core.interfaces.resolvers import WeatherUpstream
from observability.metrics import record_upstream

REQUEST_ID_HEADER = "X-Request-ID"


class AggregatorClient(WeatherUpstream):
    upstream = "aggregator"

    def __init__(self, client: httpx.AsyncClient, settings: AppSettings | None = None) -> None:
        self._client = client
        self._settings = settings or AppSettings()

    async def fetch_weather(self, code: str, *, request_id: str | None = None) -> UpstreamReply:
        url = f"{self._settings.aggregator_url.rstrip('/')}/weather"
        headers = {REQUEST_ID_HEADER: request_id} if request_id else None
        try:
            response = await self._client.get(url, params={"cep": code}, headers=headers)
        except httpx.HTTPError as exc:
            record_upstream(self.upstream, "transport_error")
            raise TransportError(describe_http_error(exc)) from exc

        record_upstream(self.upstream, "ok" if response.is_success else "http_error")
        return UpstreamReply(status_code=response.status_code, body=response.content)
