"""
===============================================================================
TARJETA CRC - identity/users.py
===============================================================================

Módulo:
    Roles y Principal autenticado

Responsabilidades:
    - Definir los roles conocidos (Administrator / Member).
    - Definir Principal: la identidad que viaja en el token y que los casos de
      uso reciben como parámetro explícito (no hay "usuario actual" ambiente).

Colaboradores:
    - identity/tokens.py: construye Principal desde los claims verificados.
    - application/usecases/*: reglas de autorización sobre Principal.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Role(str, Enum):
    """Roles emitidos en el claim `role` del access token."""

    ADMINISTRATOR = "Administrator"
    MEMBER = "Member"


@dataclass(frozen=True, slots=True)
class Principal:
    """Identidad autenticada derivada de un token válido."""

    subject_id: int
    email: str
    roles: frozenset[str] = field(default_factory=frozenset)

    def has_role(self, role: Role | str) -> bool:
        value = role.value if isinstance(role, Role) else role
        return value in self.roles

    @property
    def is_admin(self) -> bool:
        return self.has_role(Role.ADMINISTRATOR)
