"""
===============================================================================
USE CASE: Kiosk Login (alias + PIN)
===============================================================================

Business Goal:
    Autenticar a un miembro del staff desde el kiosk y emitir un access token
    cuyo subject es su staff id.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    KioskLoginUseCase

Responsibilities:
    - Validar forma del input (alias y PIN no vacíos, PIN numérico).
    - Resolver la identidad por alias (case-insensitive).
    - Verificar el PIN contra el verifier Argon2.
    - Responder igual ante alias desconocido o PIN incorrecto.
    - Emitir el token (sin escrituras: autenticar no tiene side effects).

Collaborators:
    - CredentialStore.find_by_alias
    - identity.passwords.verify_secret / burn_verification
    - identity.tokens.TokenIssuer

Error Mapping:
    - VALIDATION_ERROR: alias/PIN vacíos, PIN no numérico
    - INVALID_CREDENTIALS: alias desconocido o PIN incorrecto (mismo mensaje)
    - STORE_UNAVAILABLE: DatabaseError del store
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

INVALID_ALIAS_OR_PIN = "Invalid alias or PIN."


@dataclass(frozen=True)
class KioskLoginInput:
    alias: str
    pin: str


@dataclass(frozen=True, slots=True)
class KioskLogin:
    """Valor de éxito: token + staff id autenticado."""

    token: str
    subject_id: int
    expires_in: int
    token_type: str = "bearer"


class KioskLoginUseCase:
    def __init__(self, credentials: CredentialStore, issuer: TokenIssuer) -> None:
        self._credentials = credentials
        self._issuer = issuer

    def execute(self, input_data: KioskLoginInput) -> Result[KioskLogin]:
        alias = (input_data.alias or "").strip()
        pin = (input_data.pin or "").strip()

        if not alias or not pin:
            return Result.fail(ErrorKind.VALIDATION_ERROR, "Alias and PIN are required.")
        if not (pin.isascii() and pin.isdigit()):
            return Result.fail(ErrorKind.VALIDATION_ERROR, "PIN must be numeric.")

        try:
            record = self._credentials.find_by_alias(alias)
        except DatabaseError as exc:
            logger.warning("Kiosk login: store unavailable", extra={"error_id": exc.error_id})
            return Result.fail(ErrorKind.STORE_UNAVAILABLE, STORE_UNAVAILABLE_MESSAGE)

        if record is None or record.identity.credential_kind != CredentialKind.KIOSK_PIN:
            burn_verification(pin)
            return self._invalid_credentials()

        if not verify_secret(pin, record.verifier):
            return self._invalid_credentials()

        identity = record.identity
        access = self._issuer.issue(identity.id, identity.email, identity.roles)
        logger.info("Kiosk login succeeded", extra={"subject_id": identity.id})

        return Result.success(
            KioskLogin(
                token=access.token,
                subject_id=identity.id,
                expires_in=access.expires_in,
            )
        )

    @staticmethod
    def _invalid_credentials() -> Result[KioskLogin]:
        logger.info("Kiosk login rejected")
        return Result.fail(ErrorKind.INVALID_CREDENTIALS, INVALID_ALIAS_OR_PIN)
