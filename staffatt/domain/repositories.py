"""
===============================================================================
TARJETA CRC - domain/repositories.py (Puertos de persistencia)
===============================================================================

Responsabilidades:
  - Definir contratos (Protocols) para credenciales y sesiones de asistencia.
  - Aislar application/ de la tecnología de almacenamiento.

Colaboradores:
  - infrastructure/repositories/postgres/* (implementación Postgres)
  - infrastructure/repositories/in_memory/* (implementación en memoria)
  - application/usecases/* (consumidores)

Contrato de errores:
  - "No existe" se expresa con None (nunca excepción).
  - Fallas de conectividad/timeout se expresan con DatabaseError.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from .entities import AttendanceSession, CredentialKind, CredentialRecord, Identity


class CredentialStore(Protocol):
    """Lookup de identidades y verifiers (kiosk por alias, admin por email)."""

    def find_by_alias(self, alias: str) -> CredentialRecord | None:
        """Busca una identidad KIOSK_PIN por alias (case-insensitive)."""
        ...

    def find_by_email(self, email: str) -> CredentialRecord | None:
        """Busca una identidad por email normalizado (único entre identidades)."""
        ...

    def get_identity(self, identity_id: int) -> Identity | None: ...

    def get_credential(self, identity_id: int) -> CredentialRecord | None: ...

    def create_identity(
        self,
        *,
        display_name: str,
        email: str,
        credential_kind: CredentialKind,
        verifier: str,
        roles: frozenset[str] = frozenset(),
        alias: str | None = None,
    ) -> Identity: ...

    def update_verifier(self, identity_id: int, verifier: str) -> bool:
        """Reemplaza el verifier. Retorna False si la identidad no existe."""
        ...


class SessionStore(Protocol):
    """
    Persistencia append-only de sesiones.

    open_session/close_session son escrituras condicionales: devuelven None
    cuando la precondición (no hay abierta / sigue abierta) ya no se cumple.
    """

    def get_last_session(self, staff_id: int) -> AttendanceSession | None:
        """Sesión más reciente por check_in_at (abierta o cerrada)."""
        ...

    def get_open_session(self, staff_id: int) -> AttendanceSession | None:
        """Sesión abierta del staff (check_out_at IS NULL), independiente del orden."""
        ...

    def open_session(
        self, staff_id: int, check_in_at: datetime
    ) -> AttendanceSession | None: ...

    def close_session(
        self, session_id: int, check_out_at: datetime
    ) -> AttendanceSession | None: ...

    def list_sessions(
        self,
        *,
        start: datetime,
        end: datetime,
        staff_ids: list[int] | None = None,
    ) -> list[AttendanceSession]:
        """Sesiones con check_in_at en [start, end], más recientes primero."""
        ...

    def ping(self) -> bool: ...
