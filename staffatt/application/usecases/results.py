"""
===============================================================================
USE CASE RESULTS (Result Envelope)
===============================================================================

Business Goal:
    Un único contrato de salida para todos los casos de uso: o bien un valor,
    o bien un mensaje de error + ErrorKind estable. Las fallas esperables no
    se lanzan como excepciones; las inesperadas sí (las atrapa el borde HTTP).

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Component:
    Result[T] / ErrorKind

Responsibilities:
    - Representar éxito (value) o fallo (error_message + error_kind).
    - Impedir estados inválidos: solo se construye vía success()/fail().

Collaborators:
    - application/usecases/auth/*, application/usecases/attendance/*
    - interfaces/api/http/error_mapping.py (ErrorKind -> HTTP status)
    - clients/kiosk_client.py (reconstruye Result desde JSON)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    """
    Categorías estables de fallo esperable.

      - INVALID_CREDENTIALS: alias/PIN o email/password incorrectos (sin
        distinguir identidad inexistente de secreto incorrecto).
      - VALIDATION_ERROR: input mal formado o password nuevo fuera de política.
      - NOT_FOUND: staff/identidad inexistente.
      - STORE_UNAVAILABLE: timeout o falla de conectividad del store.
      - FORBIDDEN: el actor no puede operar sobre ese staff.
      - CONFLICT: otra escritura ganó la carrera (entre procesos).
    """

    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    FORBIDDEN = "FORBIDDEN"
    CONFLICT = "CONFLICT"


STORE_UNAVAILABLE_MESSAGE = "Attendance store is temporarily unavailable. Please try again."

_FACTORY_KEY = object()


@dataclass(frozen=True, slots=True)
class Result(Generic[T]):
    """
    Envelope {is_success, value, error_message}.

    Contrato:
      - is_success => error_message/error_kind son None.
      - not is_success => value es None y error_message no es vacío.
    """

    is_success: bool
    value: T | None = None
    error_message: str | None = None
    error_kind: ErrorKind | None = None
    _key: object = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self._key is not _FACTORY_KEY:
            raise TypeError("Result must be built with Result.success() or Result.fail()")

    @classmethod
    def success(cls, value: T | None = None) -> "Result[T]":
        return cls(True, value, None, None, _FACTORY_KEY)

    @classmethod
    def fail(cls, kind: ErrorKind, message: str) -> "Result[T]":
        if not message:
            raise ValueError("A failed Result needs an error message")
        return cls(False, None, message, ErrorKind(kind), _FACTORY_KEY)

    @property
    def is_failure(self) -> bool:
        return not self.is_success
