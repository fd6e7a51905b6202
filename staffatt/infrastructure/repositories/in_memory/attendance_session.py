"""
============================================================
TARJETA CRC - infrastructure/repositories/in_memory/attendance_session.py
============================================================
Class: InMemorySessionStore

Responsibilities:
  - Almacenar sesiones de asistencia en memoria (append-only).
  - Escrituras condicionales equivalentes al store Postgres:
      * open_session -> None si ya hay una sesión abierta para el staff
      * close_session -> None si la sesión no existe o ya estaba cerrada
  - Ordering alineado con Postgres: check_in_at DESC, id DESC.

Constraints:
  - Thread-safe: cada operación corre bajo un Lock propio.
============================================================
"""

from __future__ import annotations

from datetime import datetime
from itertools import count
from threading import Lock

from ....domain.entities import AttendanceSession


def _sort_key(session: AttendanceSession) -> tuple[datetime, int]:
    return (session.check_in_at, session.id)


class InMemorySessionStore:
    def __init__(self) -> None:
        self._lock = Lock()
        self._sessions: dict[int, AttendanceSession] = {}
        self._ids = count(1)

    def get_last_session(self, staff_id: int) -> AttendanceSession | None:
        with self._lock:
            own = [s for s in self._sessions.values() if s.staff_id == staff_id]
        return max(own, key=_sort_key) if own else None

    def get_open_session(self, staff_id: int) -> AttendanceSession | None:
        with self._lock:
            return next(
                (
                    s
                    for s in self._sessions.values()
                    if s.staff_id == staff_id and s.is_open
                ),
                None,
            )

    def open_session(
        self, staff_id: int, check_in_at: datetime
    ) -> AttendanceSession | None:
        with self._lock:
            if any(
                s.staff_id == staff_id and s.is_open for s in self._sessions.values()
            ):
                return None
            session = AttendanceSession(
                id=next(self._ids), staff_id=staff_id, check_in_at=check_in_at
            )
            self._sessions[session.id] = session
            return session

    def close_session(
        self, session_id: int, check_out_at: datetime
    ) -> AttendanceSession | None:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None or not session.is_open:
                return None
            closed = session.closed_at(check_out_at)
            self._sessions[session_id] = closed
            return closed

    def list_sessions(
        self,
        *,
        start: datetime,
        end: datetime,
        staff_ids: list[int] | None = None,
    ) -> list[AttendanceSession]:
        wanted = set(staff_ids) if staff_ids is not None else None
        with self._lock:
            matches = [
                s
                for s in self._sessions.values()
                if start <= s.check_in_at <= end
                and (wanted is None or s.staff_id in wanted)
            ]
        return sorted(matches, key=_sort_key, reverse=True)

    def ping(self) -> bool:
        return True
