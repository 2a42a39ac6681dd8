"""Chequeos de forma del CEP compartidos por el gateway y el agregador."""

from __future__ import annotations

from core.domain.errors import InvalidFormat

POSTAL_CODE_LENGTH = 8


def ensure_postal_code(code: str) -> str:
    """Devuelve `code` sin cambios si tiene exactamente 8 caracteres.

    Solo se valida la longitud; dígitos y existencia los decide ViaCEP.
    """

    if len(code) != POSTAL_CODE_LENGTH:
        raise InvalidFormat("invalid zipcode")
    return code
