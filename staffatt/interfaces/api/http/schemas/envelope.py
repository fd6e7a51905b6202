"""
===============================================================================
TARJETA CRC - schemas/envelope.py
===============================================================================

Responsabilidades:
    - Definir el DTO HTTP del envelope de resultado:
      {is_success, value, error_message, error_code}.
    - Es el body de TODAS las operaciones del núcleo (éxito o fallo de negocio).

Colaboradores:
    - application.usecases.results.Result / ErrorKind
    - interfaces/api/http/error_mapping.py
===============================================================================
"""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    is_success: bool
    value: T | None = None
    error_message: str | None = None
    error_code: str | None = None
