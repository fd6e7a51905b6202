"""
===============================================================================
TARJETA CRC - identity/auth_users.py
===============================================================================

Módulo:
    Dependencias FastAPI de autenticación (Bearer JWT)

Responsabilidades:
    - Extraer token desde `Authorization: Bearer <token>`.
    - Validarlo con TokenVerifier (sin consultar stores).
    - Exponer la dependencia FastAPI require_principal.
    - Traducir fallas de token a 401 RFC7807, distinto de cualquier fallo de
      negocio (que viaja en el envelope).

Colaboradores:
    - identity.tokens.TokenVerifier
    - container.get_token_verifier (factory; overridable en tests)
    - crosscutting.error_responses: unauthorized estándar (RFC7807).
===============================================================================
"""

from __future__ import annotations

from typing import Callable

from fastapi import Depends, Header, Request

from ..container import get_token_verifier
from ..crosscutting.error_responses import unauthorized
from ..crosscutting.logger import logger
from .tokens import TokenValidationError, TokenVerifier
from .users import Principal


def _extract_bearer_token(authorization: str | None) -> str | None:
    """Extrae token desde `Authorization: Bearer <token>`."""
    if not authorization:
        return None
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    token = parts[1].strip()
    return token or None


def require_principal() -> Callable:
    """Dependency FastAPI: requiere un access token válido."""

    async def dependency(
        request: Request,
        authorization: str | None = Header(None, alias="Authorization"),
        verifier: TokenVerifier = Depends(get_token_verifier),
    ) -> Principal:
        token = _extract_bearer_token(authorization)
        if not token:
            raise unauthorized("Missing bearer token.")

        try:
            principal = verifier.verify(token)
        except TokenValidationError as exc:
            logger.info("Token rejected", extra={"expired": exc.expired})
            raise unauthorized(exc.message) from exc

        request.state.principal = principal
        return principal

    return dependency

