"""Orquestación CEP -> ciudad -> temperatura.

Por qué un pipeline propio:
- Es el núcleo del servicio de agregación: dos saltos estrictamente
  secuenciales que cortan en el primer fallo.
- Solo depende de los protocolos de resolvers, así que la capa HTTP, el
  comando `lookup` y los tests usan el mismo código con distintos adaptadores.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from core.domain.errors import LocationNotFound, TransportError, UpstreamFailure
from core.domain.models import ErrorEnvelope, WeatherResult
from core.domain.units import celsius_to_kelvin
from core.domain.validation import ensure_postal_code
from core.interfaces.resolvers import LocationResolver, WeatherResolver

logger = logging.getLogger(__name__)

LOCATION_NOT_FOUND_MESSAGE = "zip code not found"


def location_not_found_envelope() -> ErrorEnvelope:
    return ErrorEnvelope(error=LOCATION_NOT_FOUND_MESSAGE, status_code=LocationNotFound.status_code)


@dataclass(frozen=True)
class WeatherPipeline:
    """Resuelve un CEP en un `WeatherResult`.

    Política de fallos:
    - longitud incorrecta -> `InvalidFormat` (422), sin llamadas salientes;
    - localidad inexistente *o* consulta de localidad fallida -> `LocationNotFound` (404);
    - consulta de clima fallida -> `UpstreamFailure` (500) con el texto del resolver.
    """

    locations: LocationResolver
    weather: WeatherResolver

    async def resolve(self, code: str) -> WeatherResult:
        ensure_postal_code(code)

        try:
            location = await self.locations.resolve(code)
        except TransportError as exc:
            # Un fallo de ViaCEP se responde como "not found".
            logger.info("Location lookup failed for %s: %s", code, exc)
            location = None
        if location is None:
            raise LocationNotFound(LOCATION_NOT_FOUND_MESSAGE)

        try:
            sample = await self.weather.resolve(location.name)
        except TransportError as exc:
            logger.warning("Weather lookup failed for %r: %s", location.name, exc)
            raise UpstreamFailure(str(exc)) from exc

        return WeatherResult(
            city=location.name,
            temp_c=sample.celsius,
            temp_f=sample.fahrenheit,
            temp_k=celsius_to_kelvin(sample.celsius),
        )
