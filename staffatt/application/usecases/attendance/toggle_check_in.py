"""
===============================================================================
USE CASE: Toggle Check-In
===============================================================================

Business Goal:
    Un único comando para el kiosk: si el staff tiene una sesión abierta, la
    cierra (check-out); si no, abre una nueva (check-in).

    Nota de UX conocida: el cliente no declara la intención ("entrar" vs
    "salir"), así que un doble toque invierte el estado. Se mantiene así.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    ToggleCheckInUseCase

Responsibilities:
    - Autorizar (propio staff o Administrator) y verificar existencia.
    - Serializar toggles del mismo staff (KeyedLockTable, con timeout).
    - Decidir por la sesión abierta (no por el orden) y cerrar/abrir con
      escrituras condicionales.
    - Devolver Result[bool]: True = quedó checked-in, False = checked-out.

Collaborators:
    - SessionStore: get_open_session / get_last_session / open_session / close_session
    - CredentialStore: get_identity
    - KeyedLockTable

Error Mapping:
    - FORBIDDEN: actor distinto del staff y sin rol Administrator
    - NOT_FOUND: staff inexistente
    - STORE_UNAVAILABLE: lock timeout o DatabaseError
    - CONFLICT: otra instancia escribió primero (la escritura condicional no aplicó)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger
from ....domain.entities import AttendanceSession
from ....domain.repositories import CredentialStore, SessionStore
from ....identity.users import Principal
from ...keyed_locks import KeyedLockTable, LockTimeoutError
from ..results import STORE_UNAVAILABLE_MESSAGE, ErrorKind, Result
from .staff_access import check_staff_access, check_staff_exists

CONCURRENT_UPDATE_MESSAGE = "Attendance state changed concurrently. Please try again."


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ToggleCheckInInput:
    principal: Principal
    staff_id: int


class ToggleCheckInUseCase:
    def __init__(
        self,
        sessions: SessionStore,
        credentials: CredentialStore,
        locks: KeyedLockTable,
        *,
        lock_timeout_seconds: float,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._sessions = sessions
        self._credentials = credentials
        self._locks = locks
        self._lock_timeout = lock_timeout_seconds
        self._clock = clock

    def execute(self, input_data: ToggleCheckInInput) -> Result[bool]:
        staff_id = input_data.staff_id

        denied = check_staff_access(input_data.principal, staff_id)
        if denied is not None:
            return denied

        try:
            missing = check_staff_exists(self._credentials, staff_id)
            if missing is not None:
                return missing

            with self._locks.hold(staff_id, timeout=self._lock_timeout):
                return self._toggle(staff_id)
        except LockTimeoutError:
            logger.warning(
                "Toggle check-in: lock timeout",
                extra={"staff_id": staff_id, "timeout_s": self._lock_timeout},
            )
            return Result.fail(ErrorKind.STORE_UNAVAILABLE, STORE_UNAVAILABLE_MESSAGE)
        except DatabaseError as exc:
            logger.warning(
                "Toggle check-in: store unavailable",
                extra={"staff_id": staff_id, "error_id": exc.error_id},
            )
            return Result.fail(ErrorKind.STORE_UNAVAILABLE, STORE_UNAVAILABLE_MESSAGE)

    def _toggle(self, staff_id: int) -> Result[bool]:
        now = self._clock()
        # El estado sale de la sesión abierta, no del orden por check_in_at.
        current = self._sessions.get_open_session(staff_id)
        if current is not None:
            return self._check_out(current, now)

        # check_in_at nunca es anterior al último check_out_at (reloj que retrocede).
        last = self._sessions.get_last_session(staff_id)
        if last is not None and last.check_out_at is not None:
            now = max(now, last.check_out_at)

        opened = self._sessions.open_session(staff_id, now)
        if opened is None:
            logger.warning("Toggle check-in: open lost a race", extra={"staff_id": staff_id})
            return Result.fail(ErrorKind.CONFLICT, CONCURRENT_UPDATE_MESSAGE)

        logger.info("Staff checked in", extra={"staff_id": staff_id, "session_id": opened.id})
        return Result.success(True)

    def _check_out(self, session: AttendanceSession, now: datetime) -> Result[bool]:
        # check_out_at nunca es anterior a check_in_at.
        when = max(now, session.check_in_at)
        closed = self._sessions.close_session(session.id, when)
        if closed is None:
            logger.warning(
                "Toggle check-in: close lost a race",
                extra={"staff_id": session.staff_id, "session_id": session.id},
            )
            return Result.fail(ErrorKind.CONFLICT, CONCURRENT_UPDATE_MESSAGE)

        logger.info(
            "Staff checked out",
            extra={"staff_id": session.staff_id, "session_id": session.id},
        )
        return Result.success(False)
