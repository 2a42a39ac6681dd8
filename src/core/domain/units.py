"""Conversión de unidades de temperatura."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

_KELVIN_OFFSET = Decimal("273.15")
_ONE_DECIMAL = Decimal("0.1")


def celsius_to_kelvin(celsius: float) -> float:
    """Convierte Celsius a Kelvin redondeando a un decimal.

    La suma se hace en aritmética decimal sobre el repr más corto del float,
    así `25.3` da exactamente `298.45` antes de redondear. Los empates se
    alejan de cero: `25.3 -> 298.5`, `-300.0 -> -26.9`.
    """

    kelvin = Decimal(repr(float(celsius))) + _KELVIN_OFFSET
    return float(kelvin.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))
