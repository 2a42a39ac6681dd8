"""Location resolver: ViaCEP.

Notas:
- `GET /ws/<cep>/json/` devuelve `{"localidade": ..., ...}`.
- Un CEP inexistente responde 200 con `{"erro": true}` (a veces `"true"`).
- Un CEP mal formado responde 400 con HTML; lo tratamos como fallo de transporte.
"""

from __future__ import annotations

import logging

import httpx
from pydantic import BaseModel, Field, ValidationError
from pydantic.config import ConfigDict

from adapters.http_client import describe_http_error
from core.config import AppSettings
from core.domain.errors import TransportError
from core.domain.models import LocationRecord
from core.interfaces.resolvers import LocationResolver
from observability.metrics import record_upstream

logger = logging.getLogger(__name__)


class ViaCepPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    localidade: str = Field(default="")
    erro: bool = Field(default=False)


class ViaCepLocationResolver(LocationResolver):
    """Resuelve un CEP a su localidad usando ViaCEP."""

    upstream = "viacep"

    def __init__(self, client: httpx.AsyncClient, settings: AppSettings | None = None) -> None:
        self._client = client
        self._settings = settings or AppSettings()

    def _url(self, code: str) -> str:
        base = self._settings.viacep_base_url.rstrip("/")
        return f"{base}/ws/{code}/json/"

    async def resolve(self, code: str) -> LocationRecord | None:
        try:
            response = await self._client.get(self._url(code))
        except httpx.HTTPError as exc:
            record_upstream(self.upstream, "transport_error")
            raise TransportError(f"failed to fetch data from ViaCEP: {describe_http_error(exc)}") from exc

        if not response.is_success:
            record_upstream(self.upstream, "http_error")
            raise TransportError(f"ViaCEP answered HTTP {response.status_code}")

        try:
            payload = ViaCepPayload.model_validate_json(response.content)
        except ValidationError as exc:
            record_upstream(self.upstream, "decode_error")
            raise TransportError(f"failed to decode ViaCEP response: {exc.error_count()} error(s)") from exc

        if payload.erro:
            record_upstream(self.upstream, "not_found")
            return None

        name = payload.localidade.strip()
        if not name:
            record_upstream(self.upstream, "decode_error")
            raise TransportError("failed to decode ViaCEP response: missing localidade")

        record_upstream(self.upstream, "ok")
        logger.debug("CEP %s resolved to %r", code, name)
        return LocationRecord(name=name)
