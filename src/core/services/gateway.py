"""Lógica de entrada del servicio gateway.

Por qué un servicio aparte de la capa HTTP:
- El gateway valida el body, reenvía el CEP al agregador y retransmite su
  respuesta; todo fallo se convierte aquí en un `ErrorEnvelope`.
- La capa FastAPI solo serializa, y los tests ejercitan esta lógica sin ASGI.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass

from pydantic import ValidationError

from core.domain.errors import (
    LookupPipelineError,
    MalformedInput,
    TransportError,
    UpstreamFailure,
    UpstreamMalformed,
)
from core.domain.models import ErrorEnvelope, PostalCodeQuery, UpstreamReply, WeatherResult
from core.domain.validation import ensure_postal_code
from core.interfaces.resolvers import WeatherUpstream

logger = logging.getLogger(__name__)

GatewayOutcome = tuple[WeatherResult | ErrorEnvelope, int]


def parse_query(raw_body: bytes) -> PostalCodeQuery:
    """Decodifica `{"cep": "..."}`.

    Un `cep` ausente, `null` o vacío cuenta como "falta el parámetro"; solo el
    alias `cep` se acepta como nombre del campo.
    """

    try:
        payload = json.loads(raw_body or b"")
        if not isinstance(payload, dict):
            raise ValueError("body is not a JSON object")
        if payload.get("cep") is None:
            raise MalformedInput("CEP parameter is required")
        query = PostalCodeQuery.model_validate(payload)
    except (ValueError, ValidationError) as exc:
        logger.debug("Rejected request body: %s", exc)
        raise MalformedInput("Failed to decode request body") from exc

    if not query.code:
        raise MalformedInput("CEP parameter is required")
    return query


def _extract_error_message(body: bytes) -> str | None:
    try:
        payload = json.loads(body)
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    message = payload.get("error")
    if not isinstance(message, str):
        return None
    return message


def interpret_reply(reply: UpstreamReply) -> WeatherResult:
    """Traduce la respuesta del agregador a un resultado o a un error."""

    if reply.status_code != 200:
        message = _extract_error_message(reply.body)
        if message is None:
            raise UpstreamFailure("Weather aggregation service failed to process the request")
        raise LookupPipelineError(message, status_code=reply.status_code)

    try:
        return WeatherResult.model_validate_json(reply.body)
    except ValidationError as exc:
        raise UpstreamMalformed("Failed to decode response from the weather aggregation service") from exc


@dataclass(frozen=True)
class GatewayService:
    upstream: WeatherUpstream

    async def handle(self, raw_body: bytes, *, request_id: str | None = None) -> GatewayOutcome:
        try:
            query = parse_query(raw_body)
            code = ensure_postal_code(query.code)
            try:
                reply = await self.upstream.fetch_weather(code, request_id=request_id)
            except TransportError as exc:
                logger.warning("Weather aggregation service unreachable: %s", exc)
                raise UpstreamFailure("Failed to communicate with the weather aggregation service") from exc
            result = interpret_reply(reply)
        except LookupPipelineError as exc:
            return ErrorEnvelope(error=exc.message, status_code=exc.status_code), exc.status_code
        return result, 200
