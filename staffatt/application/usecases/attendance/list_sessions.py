"""
===============================================================================
USE CASE: List Sessions (reporte de administración)
===============================================================================

Business Goal:
    Listar sesiones de asistencia en un rango de fechas, para todo el staff,
    para un staff_id o para el staff de un email.

Reglas:
    - Solo Administrator (FORBIDDEN en otro caso).
    - start <= end; fechas naive se interpretan como UTC.
    - staff_id y email son excluyentes.
    - Rango inclusivo sobre check_in_at; orden: más recientes primero.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger
from ....domain.entities import AttendanceSession
from ....domain.repositories import CredentialStore, SessionStore
from ....identity.users import Principal
from ..results import STORE_UNAVAILABLE_MESSAGE, ErrorKind, Result


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(frozen=True)
class ListSessionsInput:
    principal: Principal
    start: datetime
    end: datetime
    staff_id: int | None = None
    email: str | None = None


class ListSessionsUseCase:
    def __init__(self, sessions: SessionStore, credentials: CredentialStore) -> None:
        self._sessions = sessions
        self._credentials = credentials

    def execute(self, input_data: ListSessionsInput) -> Result[list[AttendanceSession]]:
        if not input_data.principal.is_admin:
            return Result.fail(
                ErrorKind.FORBIDDEN, "Only administrators can list attendance."
            )

        start = _as_utc(input_data.start)
        end = _as_utc(input_data.end)
        if start > end:
            return Result.fail(
                ErrorKind.VALIDATION_ERROR, "Start date must not be after end date."
            )

        email = (input_data.email or "").strip().lower()
        if input_data.staff_id is not None and email:
            return Result.fail(
                ErrorKind.VALIDATION_ERROR, "Filter by staff id or by email, not both."
            )

        try:
            staff_ids: list[int] | None = None
            if input_data.staff_id is not None:
                if self._credentials.get_identity(input_data.staff_id) is None:
                    return Result.fail(
                        ErrorKind.NOT_FOUND, f"Staff '{input_data.staff_id}' not found."
                    )
                staff_ids = [input_data.staff_id]
            elif email:
                record = self._credentials.find_by_email(email)
                if record is None:
                    return Result.fail(ErrorKind.NOT_FOUND, f"Staff '{email}' not found.")
                staff_ids = [record.identity.id]

            sessions = self._sessions.list_sessions(
                start=start, end=end, staff_ids=staff_ids
            )
        except DatabaseError as exc:
            logger.warning(
                "List sessions: store unavailable", extra={"error_id": exc.error_id}
            )
            return Result.fail(ErrorKind.STORE_UNAVAILABLE, STORE_UNAVAILABLE_MESSAGE)

        return Result.success(sessions)
