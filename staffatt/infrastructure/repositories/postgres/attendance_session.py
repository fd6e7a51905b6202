"""
============================================================
TARJETA CRC - infrastructure/repositories/postgres/attendance_session.py
============================================================
Class: PostgresSessionStore

Responsibilities:
  - Leer la última sesión por staff (ORDER BY check_in_at DESC, id DESC)
    y la sesión abierta (WHERE check_out_at IS NULL).
  - Abrir/cerrar sesiones con escrituras condicionales:
      * open:  INSERT ... ON CONFLICT DO NOTHING sobre el índice parcial
               uq_attendance_sessions_open_staff (check_out_at IS NULL)
      * close: UPDATE ... WHERE check_out_at IS NULL
    Si otra instancia del servicio ganó la carrera, devuelven None.
  - Listar sesiones por rango (reporte admin).

Collaborators:
  - repositories.postgres.sql (fetchone/fetchall + DatabaseError)
  - domain.entities.AttendanceSession
============================================================
"""

from __future__ import annotations

from datetime import datetime

from ....domain.entities import AttendanceSession
from .sql import fetchall, fetchone

_SESSION_COLUMNS = "id, staff_id, check_in_at, check_out_at"
_SESSION_ORDER_BY = "check_in_at DESC, id DESC"


def _row_to_session(row: tuple) -> AttendanceSession:
    return AttendanceSession(
        id=row[0], staff_id=row[1], check_in_at=row[2], check_out_at=row[3]
    )


class PostgresSessionStore:
    """Session store sobre la tabla `attendance_sessions` (append-only)."""

    def get_last_session(self, staff_id: int) -> AttendanceSession | None:
        row = fetchone(
            query=f"""
                SELECT {_SESSION_COLUMNS}
                FROM attendance_sessions
                WHERE staff_id = %s
                ORDER BY {_SESSION_ORDER_BY}
                LIMIT 1
            """,
            params=(staff_id,),
            log_msg="PostgresSessionStore: get_last_session failed",
            log_extra={"staff_id": staff_id},
        )
        return _row_to_session(row) if row else None

    def get_open_session(self, staff_id: int) -> AttendanceSession | None:
        # A lo sumo una fila: índice parcial uq_attendance_sessions_open_staff.
        row = fetchone(
            query=f"""
                SELECT {_SESSION_COLUMNS}
                FROM attendance_sessions
                WHERE staff_id = %s AND check_out_at IS NULL
            """,
            params=(staff_id,),
            log_msg="PostgresSessionStore: get_open_session failed",
            log_extra={"staff_id": staff_id},
        )
        return _row_to_session(row) if row else None

    def open_session(
        self, staff_id: int, check_in_at: datetime
    ) -> AttendanceSession | None:
        row = fetchone(
            query=f"""
                INSERT INTO attendance_sessions (staff_id, check_in_at)
                VALUES (%s, %s)
                ON CONFLICT (staff_id) WHERE check_out_at IS NULL DO NOTHING
                RETURNING {_SESSION_COLUMNS}
            """,
            params=(staff_id, check_in_at),
            log_msg="PostgresSessionStore: open_session failed",
            log_extra={"staff_id": staff_id},
        )
        return _row_to_session(row) if row else None

    def close_session(
        self, session_id: int, check_out_at: datetime
    ) -> AttendanceSession | None:
        row = fetchone(
            query=f"""
                UPDATE attendance_sessions
                SET check_out_at = %s
                WHERE id = %s AND check_out_at IS NULL
                RETURNING {_SESSION_COLUMNS}
            """,
            params=(check_out_at, session_id),
            log_msg="PostgresSessionStore: close_session failed",
            log_extra={"session_id": session_id},
        )
        return _row_to_session(row) if row else None

    def list_sessions(
        self,
        *,
        start: datetime,
        end: datetime,
        staff_ids: list[int] | None = None,
    ) -> list[AttendanceSession]:
        query = f"""
            SELECT {_SESSION_COLUMNS}
            FROM attendance_sessions
            WHERE check_in_at BETWEEN %s AND %s
        """
        params: list[object] = [start, end]
        if staff_ids is not None:
            query += " AND staff_id = ANY(%s)"
            params.append(list(staff_ids))
        query += f" ORDER BY {_SESSION_ORDER_BY}"

        rows = fetchall(
            query=query,
            params=params,
            log_msg="PostgresSessionStore: list_sessions failed",
            log_extra={"staff_ids": staff_ids},
        )
        return [_row_to_session(r) for r in rows]

    def ping(self) -> bool:
        row = fetchone(
            query="SELECT 1",
            log_msg="PostgresSessionStore: ping failed",
            log_extra={},
        )
        return row is not None
