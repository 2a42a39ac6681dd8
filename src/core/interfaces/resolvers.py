"""Contratos de los adaptadores externos.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite que ViaCEP, WeatherAPI o el cliente del aggregator sean
  intercambiables y testeables sin acoplar el Core a `httpx`.

Reglas de diseño:
- Todos los métodos son asíncronos porque hacen I/O (HTTP).
- Cualquier fallo de transporte o payload inválido se expresa como
  `core.domain.errors.TransportError`, nunca como excepción de `httpx`.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import LocationRecord, UpstreamReply, WeatherSample


@runtime_checkable
class LocationResolver(Protocol):
    """Resuelve un CEP a una localidad."""

    async def resolve(self, code: str) -> LocationRecord | None:
        """Devuelve la localidad, o `None` si el directorio informa que no existe."""

        ...


@runtime_checkable
class WeatherResolver(Protocol):
    """Resuelve una localidad a su temperatura actual."""

    async def resolve(self, location: str) -> WeatherSample:
        ...


@runtime_checkable
class WeatherUpstream(Protocol):
    """Lado cliente del servicio de agregación (usado por el gateway)."""

    async def fetch_weather(self, code: str, *, request_id: str | None = None) -> UpstreamReply:
        ...
