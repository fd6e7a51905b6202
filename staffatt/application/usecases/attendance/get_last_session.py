"""
===============================================================================
USE CASE: Get Last Session
===============================================================================

Devuelve la sesión más reciente (por check_in_at) de un staff, abierta o
cerrada, o None si nunca hizo check-in. El kiosk la usa para mostrar el
estado actual antes de ofrecer el toggle.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger
from ....domain.entities import AttendanceSession
from ....domain.repositories import CredentialStore, SessionStore
from ....identity.users import Principal
from ..results import STORE_UNAVAILABLE_MESSAGE, ErrorKind, Result
from .staff_access import check_staff_access, check_staff_exists


@dataclass(frozen=True)
class GetLastSessionInput:
    principal: Principal
    staff_id: int


class GetLastSessionUseCase:
    def __init__(self, sessions: SessionStore, credentials: CredentialStore) -> None:
        self._sessions = sessions
        self._credentials = credentials

    def execute(
        self, input_data: GetLastSessionInput
    ) -> Result[AttendanceSession | None]:
        denied = check_staff_access(input_data.principal, input_data.staff_id)
        if denied is not None:
            return denied

        try:
            missing = check_staff_exists(self._credentials, input_data.staff_id)
            if missing is not None:
                return missing
            session = self._sessions.get_last_session(input_data.staff_id)
        except DatabaseError as exc:
            logger.warning(
                "Get last session: store unavailable",
                extra={"staff_id": input_data.staff_id, "error_id": exc.error_id},
            )
            return Result.fail(ErrorKind.STORE_UNAVAILABLE, STORE_UNAVAILABLE_MESSAGE)

        return Result.success(session)
