"""
===============================================================================
TARJETA CRC - router.py (Router raíz v1)
===============================================================================

Responsabilidades:
  - Componer los routers por feature (auth + attendance).
  - Centralizar responses RFC7807 para OpenAPI.

Notas:
  - Se incluye desde staffatt/api/main.py con prefix="/v1".
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter

from ....api.auth_routes import router as auth_router
from ....crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from .routers.attendance import router as attendance_router


def build_router() -> APIRouter:
    """Construye el router raíz v1 (sin side effects al importar sub-módulos)."""
    api_router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)
    api_router.include_router(auth_router)
    api_router.include_router(attendance_router)
    return api_router


router = build_router()

__all__ = ["router", "build_router"]
