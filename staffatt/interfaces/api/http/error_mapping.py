"""
===============================================================================
TARJETA CRC - error_mapping.py (Result -> HTTP)
===============================================================================

Responsabilidades:
  - Traducir ErrorKind a status HTTP.
  - Serializar Result como Envelope JSON (éxito y fallo de negocio).
  - Mantener el dominio libre de HTTP.

Reglas:
  - Los fallos de negocio SIEMPRE viajan en el envelope (application/json).
  - Los fallos de token (401) y los inesperados (500) NO pasan por acá:
    salen como RFC7807 (crosscutting.error_responses).
===============================================================================
"""

from __future__ import annotations

from typing import Any, Callable

from fastapi.responses import JSONResponse

from ....application.usecases.results import ErrorKind, Result
from .schemas.envelope import Envelope

_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.INVALID_CREDENTIALS: 401,
    ErrorKind.VALIDATION_ERROR: 422,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.CONFLICT: 409,
    ErrorKind.STORE_UNAVAILABLE: 503,
}


def status_for(result: Result) -> int:
    if result.is_success:
        return 200
    # Fallback: un ErrorKind nuevo sin mapeo explícito es 422.
    return _STATUS_BY_KIND.get(result.error_kind, 422)


def envelope_response(
    result: Result, to_value: Callable[[Any], Any] | None = None
) -> JSONResponse:
    """Construye la respuesta HTTP de un Result (value mapeado con to_value)."""
    if result.is_success:
        value = result.value
        if to_value is not None and value is not None:
            value = to_value(value)
        body = Envelope(is_success=True, value=value)
    else:
        body = Envelope(
            is_success=False,
            error_message=result.error_message,
            error_code=result.error_kind.value,
        )

    return JSONResponse(
        status_code=status_for(result),
        content=body.model_dump(mode="json"),
    )
