"""
===============================================================================
TARJETA CRC - domain/entities.py
===============================================================================

Responsabilidades:
  - Definir las entidades del núcleo: Identity, CredentialRecord,
    AttendanceSession.
  - Mantener invariantes simples y locales (is_open, identidad de kiosk vs admin).

Colaboradores:
  - domain/repositories.py (puertos que devuelven estas entidades)
  - application/usecases/* (consumen las entidades)

Notas:
  - Entidades inmutables (frozen): cerrar una sesión produce una copia nueva.
  - El verifier es opaco; solo identity/passwords.py sabe compararlo.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum


class CredentialKind(str, Enum):
    """Tipo de credencial con la que se autentica una identidad."""

    KIOSK_PIN = "KIOSK_PIN"
    ADMIN_PASSWORD = "ADMIN_PASSWORD"


@dataclass(frozen=True, slots=True)
class Identity:
    """
    Miembro del staff (kiosk) o administrador (web).

    `alias` solo aplica a identidades KIOSK_PIN; se compara sin distinguir
    mayúsculas.
    """

    id: int
    display_name: str
    email: str
    credential_kind: CredentialKind
    roles: frozenset[str] = field(default_factory=frozenset)
    alias: str | None = None


@dataclass(frozen=True, slots=True)
class CredentialRecord:
    """Identidad + verifier (hash Argon2 del PIN o password)."""

    identity: Identity
    verifier: str


@dataclass(frozen=True, slots=True)
class AttendanceSession:
    """
    Sesión de asistencia (check-in con check-out opcional).

    Invariante de store: a lo sumo una sesión abierta por staff_id.
    """

    id: int
    staff_id: int
    check_in_at: datetime
    check_out_at: datetime | None = None

    @property
    def is_open(self) -> bool:
        return self.check_out_at is None

    def closed_at(self, when: datetime) -> "AttendanceSession":
        return replace(self, check_out_at=when)
