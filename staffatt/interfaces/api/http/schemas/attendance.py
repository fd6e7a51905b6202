"""
===============================================================================
TARJETA CRC - schemas/attendance.py
===============================================================================

Módulo:
    Schemas HTTP para sesiones de asistencia

Responsabilidades:
    - DTO de respuesta de sesión (SessionRes) y su mapeo desde dominio.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from .....domain.entities import AttendanceSession


class SessionRes(BaseModel):
    id: int
    staff_id: int
    check_in_at: datetime
    check_out_at: datetime | None = None
    is_open: bool


def to_session_res(session: AttendanceSession) -> SessionRes:
    return SessionRes(
        id=session.id,
        staff_id=session.staff_id,
        check_in_at=session.check_in_at,
        check_out_at=session.check_out_at,
        is_open=session.is_open,
    )
