"""
===============================================================================
TARJETA CRC - staffatt/interfaces/api/http/routers/attendance.py
===============================================================================

Class/Module:
    Attendance Router

Responsibilities:
    - Exponer toggle de check-in, última sesión y listado admin.
    - Resolver el Principal desde el Bearer token y pasarlo explícitamente
      al caso de uso.
    - Serializar el Result como envelope (error_mapping.envelope_response).

Collaborators:
    - staffatt.application.usecases (Toggle/GetLast/ListSessions)
    - staffatt.identity.auth_users.require_principal
    - staffatt.container (factories DI)
===============================================================================
"""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, Query

from staffatt.application.usecases import (
    GetLastSessionInput,
    GetLastSessionUseCase,
    ListSessionsInput,
    ListSessionsUseCase,
    ToggleCheckInInput,
    ToggleCheckInUseCase,
)
from staffatt.container import (
    get_last_session_use_case,
    get_list_sessions_use_case,
    get_toggle_check_in_use_case,
)
from staffatt.identity.auth_users import require_principal
from staffatt.identity.users import Principal

from ..error_mapping import envelope_response
from ..schemas.attendance import SessionRes, to_session_res
from ..schemas.envelope import Envelope

router = APIRouter(tags=["attendance"])


@router.post("/checkins/{staff_id}/toggle", response_model=Envelope[bool])
def toggle_check_in(
    staff_id: int,
    principal: Principal = Depends(require_principal()),
    use_case: ToggleCheckInUseCase = Depends(get_toggle_check_in_use_case),
):
    """Check-in si no hay sesión abierta; check-out si la hay. value=True => checked-in."""
    result = use_case.execute(ToggleCheckInInput(principal=principal, staff_id=staff_id))
    return envelope_response(result)


@router.get("/checkins/{staff_id}/last", response_model=Envelope[SessionRes])
def get_last_session(
    staff_id: int,
    principal: Principal = Depends(require_principal()),
    use_case: GetLastSessionUseCase = Depends(get_last_session_use_case),
):
    result = use_case.execute(GetLastSessionInput(principal=principal, staff_id=staff_id))
    return envelope_response(result, to_session_res)


@router.get("/checkins", response_model=Envelope[list[SessionRes]])
def list_sessions(
    start: datetime = Query(..., description="Inicio del rango (inclusive)"),
    end: datetime = Query(..., description="Fin del rango (inclusive)"),
    staff_id: int | None = Query(default=None),
    email: str | None = Query(default=None, max_length=320),
    principal: Principal = Depends(require_principal()),
    use_case: ListSessionsUseCase = Depends(get_list_sessions_use_case),
):
    """Reporte admin de sesiones por rango de fechas (todas / por staff / por email)."""
    result = use_case.execute(
        ListSessionsInput(
            principal=principal,
            start=start,
            end=end,
            staff_id=staff_id,
            email=email,
        )
    )
    return envelope_response(
        result, lambda sessions: [to_session_res(s) for s in sessions]
    )
