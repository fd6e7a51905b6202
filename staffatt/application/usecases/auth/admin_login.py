"""
===============================================================================
USE CASE: Admin Login (email + password)
===============================================================================

Class:
    AdminLoginUseCase

Responsibilities:
    - Normalizar email (trim/lower) en el borde de identidad.
    - Verificar password (Argon2) de identidades ADMIN_PASSWORD.
    - No diferenciar "email inexistente" vs "password incorrecto".
    - Emitir access token con los roles de la identidad.

Collaborators:
    - CredentialStore.find_by_email
    - identity.passwords / identity.tokens.TokenIssuer
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger
from ....domain.entities import CredentialKind
from ....domain.repositories import CredentialStore
from ....identity.passwords import burn_verification, verify_secret
from ....identity.tokens import TokenIssuer
from ..results import STORE_UNAVAILABLE_MESSAGE, ErrorKind, Result

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials."


@dataclass(frozen=True)
class AdminLoginInput:
    email: str
    password: str


@dataclass(frozen=True, slots=True)
class AdminLogin:
    token: str
    subject_id: int
    email: str
    roles: tuple[str, ...]
    expires_in: int
    token_type: str = "bearer"


class AdminLoginUseCase:
    def __init__(self, credentials: CredentialStore, issuer: TokenIssuer) -> None:
        self._credentials = credentials
        self._issuer = issuer

    def execute(self, input_data: AdminLoginInput) -> Result[AdminLogin]:
        email = (input_data.email or "").strip().lower()
        password = input_data.password or ""
        if not email or not password:
            return Result.fail(
                ErrorKind.VALIDATION_ERROR, "Email and password are required."
            )

        try:
            record = self._credentials.find_by_email(email)
        except DatabaseError as exc:
            logger.warning("Admin login: store unavailable", extra={"error_id": exc.error_id})
            return Result.fail(ErrorKind.STORE_UNAVAILABLE, STORE_UNAVAILABLE_MESSAGE)

        if record is None or record.identity.credential_kind != CredentialKind.ADMIN_PASSWORD:
            burn_verification(password)
            logger.info("Admin login rejected")
            return Result.fail(ErrorKind.INVALID_CREDENTIALS, INVALID_CREDENTIALS_MESSAGE)

        if not verify_secret(password, record.verifier):
            logger.info("Admin login rejected")
            return Result.fail(ErrorKind.INVALID_CREDENTIALS, INVALID_CREDENTIALS_MESSAGE)

        identity = record.identity
        access = self._issuer.issue(identity.id, identity.email, identity.roles)
        logger.info("Admin login succeeded", extra={"subject_id": identity.id})

        return Result.success(
            AdminLogin(
                token=access.token,
                subject_id=identity.id,
                email=identity.email,
                roles=access.roles,
                expires_in=access.expires_in,
            )
        )
