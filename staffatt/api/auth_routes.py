"""
===============================================================================
TARJETA CRC - staffatt/api/auth_routes.py (Autenticación)
===============================================================================

Responsabilidades:
  - Exponer login de kiosk (alias + PIN) y de administración (email + password).
  - Exponer cambio de password y /auth/me para identidades autenticadas.
  - Traducir HTTP <-> casos de uso; el body siempre es el envelope.

Patrones aplicados:
  - Adapter / Presentation Layer.
  - Fail-safe security: si la autenticación falla, se deniega por defecto.

Colaboradores:
  - application.usecases.auth (KioskLogin/AdminLogin/ChangePassword)
  - identity.auth_users.require_principal
  - interfaces.api.http.error_mapping.envelope_response
===============================================================================
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, field_validator

from ..application.usecases import (
    AdminLogin,
    AdminLoginInput,
    AdminLoginUseCase,
    ChangePasswordInput,
    ChangePasswordUseCase,
    KioskLogin,
    KioskLoginInput,
    KioskLoginUseCase,
)
from ..container import (
    get_admin_login_use_case,
    get_change_password_use_case,
    get_kiosk_login_use_case,
)
from ..crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from ..identity.auth_users import require_principal
from ..identity.users import Principal
from ..interfaces.api.http.error_mapping import envelope_response
from ..interfaces.api.http.schemas.envelope import Envelope

router = APIRouter(responses=OPENAPI_ERROR_RESPONSES, tags=["auth"])


# -----------------------------------------------------------------------------
# Modelos HTTP (DTOs)
# -----------------------------------------------------------------------------
# R: sin min_length: los vacíos llegan al caso de uso y vuelven como envelope.
# R: tipos JSON no-string (p.ej. "pin": 1234) se pasan a str por el mismo motivo.


def _as_text(v: Any) -> str:
    if v is None:
        return ""
    return v if isinstance(v, str) else str(v)


class KioskLoginRequest(BaseModel):
    alias: str = Field(default="", max_length=64)
    pin: str = Field(default="", max_length=32)

    @field_validator("alias", "pin", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        return _as_text(v)


class KioskTokenResponse(BaseModel):
    token: str
    subject_id: int
    token_type: str = "bearer"
    expires_in: int


class LoginRequest(BaseModel):
    email: str = Field(default="", max_length=320)
    password: str = Field(default="", max_length=512)

    @field_validator("email", "password", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        return _as_text(v)


class LoginResponse(BaseModel):
    token: str
    subject_id: int
    email: str
    roles: list[str]
    token_type: str = "bearer"
    expires_in: int


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(default="", max_length=512)
    new_password: str = Field(default="", max_length=512)


class PrincipalResponse(BaseModel):
    subject_id: int
    email: str
    roles: list[str]


def _to_kiosk_response(value: KioskLogin) -> KioskTokenResponse:
    return KioskTokenResponse(
        token=value.token,
        subject_id=value.subject_id,
        token_type=value.token_type,
        expires_in=value.expires_in,
    )


def _to_login_response(value: AdminLogin) -> LoginResponse:
    return LoginResponse(
        token=value.token,
        subject_id=value.subject_id,
        email=value.email,
        roles=list(value.roles),
        token_type=value.token_type,
        expires_in=value.expires_in,
    )


# -----------------------------------------------------------------------------
# Endpoints
# -----------------------------------------------------------------------------


@router.post("/auth/kiosk/token", response_model=Envelope[KioskTokenResponse])
def kiosk_token(
    req: KioskLoginRequest,
    use_case: KioskLoginUseCase = Depends(get_kiosk_login_use_case),
):
    """Login de kiosk. Alias desconocido y PIN incorrecto responden igual."""
    result = use_case.execute(KioskLoginInput(alias=req.alias, pin=req.pin))
    return envelope_response(result, _to_kiosk_response)


@router.post("/auth/login", response_model=Envelope[LoginResponse])
def login(
    req: LoginRequest,
    use_case: AdminLoginUseCase = Depends(get_admin_login_use_case),
):
    result = use_case.execute(AdminLoginInput(email=req.email, password=req.password))
    return envelope_response(result, _to_login_response)


@router.post("/auth/change-password", response_model=Envelope[None])
def change_password(
    req: ChangePasswordRequest,
    principal: Principal = Depends(require_principal()),
    use_case: ChangePasswordUseCase = Depends(get_change_password_use_case),
):
    result = use_case.execute(
        ChangePasswordInput(
            principal=principal,
            current_password=req.current_password,
            new_password=req.new_password,
        )
    )
    return envelope_response(result)


@router.get("/auth/me", response_model=PrincipalResponse)
def me(principal: Principal = Depends(require_principal())):
    """Introspección del token (sin tocar stores)."""
    return PrincipalResponse(
        subject_id=principal.subject_id,
        email=principal.email,
        roles=sorted(principal.roles),
    )
