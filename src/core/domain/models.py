"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Los alias definen el formato de cable (`temp_C`, `statuscode`) en un único sitio.

Nota:
- Todos los registros son inmutables y viven lo que dura un request.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class PostalCodeQuery(BaseModel):
    """Consulta entrante del gateway: `{"cep": "01001000"}`."""

    model_config = ConfigDict(frozen=True)

    code: str = Field(
        default="",
        alias="cep",
        strict=True,
        description="CEP tal como lo envió el cliente (solo se valida la longitud).",
    )


class LocationRecord(BaseModel):
    """Localidad resuelta a partir de un CEP."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        ...,
        min_length=1,
        description="Nombre canónico de la ciudad (campo `localidade` de ViaCEP).",
    )


class WeatherSample(BaseModel):
    """Temperatura actual en las dos unidades que entrega WeatherAPI."""

    model_config = ConfigDict(frozen=True)

    celsius: float = Field(..., description="Temperatura en grados Celsius.")
    fahrenheit: float = Field(..., description="Temperatura en grados Fahrenheit.")


class WeatherResult(BaseModel):
    """Resultado compuesto que recibe el cliente final.

    `temp_k` siempre se deriva de `temp_c`; nunca viene de una fuente externa.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    city: str = Field(..., description="Ciudad del CEP consultado.")
    temp_c: float = Field(..., alias="temp_C", description="Temperatura en Celsius.")
    temp_f: float = Field(..., alias="temp_F", description="Temperatura en Fahrenheit.")
    temp_k: float = Field(..., alias="temp_K", description="Temperatura en Kelvin (derivada).")

    def to_wire(self) -> dict[str, object]:
        return self.model_dump(mode="json", by_alias=True)


class ErrorEnvelope(BaseModel):
    """Error con status explícito, p.ej. `{"error": "zip code not found", "statuscode": 404}`."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    error: str = Field(..., description="Mensaje legible para el cliente.")
    status_code: int = Field(
        ...,
        alias="statuscode",
        ge=100,
        le=599,
        description="Status HTTP asociado al error.",
    )

    def to_wire(self, *, include_status: bool = True) -> dict[str, object]:
        if include_status:
            return self.model_dump(mode="json", by_alias=True)
        return {"error": self.error}


class UpstreamReply(BaseModel):
    """Respuesta cruda del servicio de agregación tal como la ve el gateway."""

    model_config = ConfigDict(frozen=True)

    status_code: int = Field(..., ge=100, le=599)
    body: bytes = Field(default=b"")
