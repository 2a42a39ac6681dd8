"""Taxonomía de errores del pipeline.

Por qué una jerarquía propia:
- Todo fallo que llega al cliente es una subclase de `LookupPipelineError` y
  lleva el status HTTP con el que responden los servicios.
- `TransportError` nunca sale de la capa de servicios: lo lanzan los
  adaptadores y lo traducen los orquestadores.
"""

from __future__ import annotations


class LookupPipelineError(Exception):
    """Base de los fallos con status HTTP hacia el cliente."""

    status_code: int = 500

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class MalformedInput(LookupPipelineError):
    status_code = 400


class InvalidFormat(LookupPipelineError):
    status_code = 422


class LocationNotFound(LookupPipelineError):
    status_code = 404


class UpstreamFailure(LookupPipelineError):
    status_code = 500


class UpstreamMalformed(LookupPipelineError):
    status_code = 500


class TransportError(Exception):
    """Una llamada externa falló o devolvió un payload inutilizable."""


class ConfigurationError(RuntimeError):
    """Falta configuración obligatoria al arrancar."""
