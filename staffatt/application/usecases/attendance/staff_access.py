"""
===============================================================================
TARJETA CRC - attendance/staff_access.py (Política de acceso a un staff)
===============================================================================

Responsabilidades:
  - Decidir si un Principal puede operar sobre la asistencia de un staff_id:
    el propio staff o un Administrator.
  - Verificar que el staff exista (NOT_FOUND).

Colaboradores:
  - identity.users.Principal
  - domain.repositories.CredentialStore
===============================================================================
"""

from __future__ import annotations

from ....domain.repositories import CredentialStore
from ....identity.users import Principal
from ..results import ErrorKind, Result


def check_staff_access(principal: Principal, staff_id: int) -> Result | None:
    """Devuelve un Result de fallo si el actor no puede operar; None si puede."""
    if principal.subject_id == staff_id or principal.is_admin:
        return None
    return Result.fail(
        ErrorKind.FORBIDDEN, "You can only access your own attendance records."
    )


def check_staff_exists(credentials: CredentialStore, staff_id: int) -> Result | None:
    """Puede lanzar DatabaseError; el caso de uso lo traduce."""
    if credentials.get_identity(staff_id) is None:
        return Result.fail(ErrorKind.NOT_FOUND, f"Staff '{staff_id}' not found.")
    return None
