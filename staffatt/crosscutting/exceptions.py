# staffatt/crosscutting/exceptions.py
"""
===============================================================================
MÓDULO: Excepciones tipadas del backend (errores internos)
===============================================================================

Objetivo
--------
Excepciones internas coherentes, con:
- error_code estable
- error_id para correlación con logs
- message "humana" (sin filtrar secretos)

Las fallas esperables de negocio (credenciales inválidas, validación,
not found) NO son excepciones: viajan como Result.fail. Acá solo viven las
fallas de infraestructura y de arranque.

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  StaffAttError + subclases

Colaboradores:
  - api/exception_handlers.py (mapea a AppHTTPException)
  - application/usecases/* (DatabaseError -> STORE_UNAVAILABLE)
===============================================================================
"""

from __future__ import annotations

from uuid import uuid4


class StaffAttError(Exception):
    """Base para errores internos del sistema (error_code + error_id + message)."""

    error_code: str = "STAFFATT_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)


class DatabaseError(StaffAttError):
    """Errores del store (conexión, query, timeout, pool)."""

    error_code: str = "DATABASE_ERROR"


class ConfigurationError(StaffAttError):
    """Configuración faltante o inválida; fatal en el arranque."""

    error_code: str = "CONFIGURATION_ERROR"
