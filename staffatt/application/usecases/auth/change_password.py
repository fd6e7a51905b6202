"""
===============================================================================
USE CASE: Change Password
===============================================================================

Business Goal:
    Permitir que un administrador autenticado cambie su password.

Orden de verificación:
    1) Password actual (INVALID_CREDENTIALS si no coincide).
    2) Política del password nuevo (VALIDATION_ERROR con el detalle).
    3) Persistir el nuevo verifier.

Collaborators:
    - CredentialStore.get_credential / update_verifier
    - identity.passwords (verify_secret, hash_secret, PasswordPolicy)
    - identity.users.Principal (actor explícito)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger
from ....domain.entities import CredentialKind
from ....domain.repositories import CredentialStore
from ....identity.passwords import PasswordPolicy, hash_secret, verify_secret
from ....identity.users import Principal
from ..results import STORE_UNAVAILABLE_MESSAGE, ErrorKind, Result


@dataclass(frozen=True)
class ChangePasswordInput:
    principal: Principal
    current_password: str
    new_password: str


class ChangePasswordUseCase:
    def __init__(self, credentials: CredentialStore, policy: PasswordPolicy) -> None:
        self._credentials = credentials
        self._policy = policy

    def execute(self, input_data: ChangePasswordInput) -> Result[None]:
        subject_id = input_data.principal.subject_id

        try:
            record = self._credentials.get_credential(subject_id)
            if record is None:
                return Result.fail(ErrorKind.NOT_FOUND, "Account not found.")
            if record.identity.credential_kind != CredentialKind.ADMIN_PASSWORD:
                return Result.fail(
                    ErrorKind.FORBIDDEN,
                    "Password change is only available for password accounts.",
                )

            if not verify_secret(input_data.current_password or "", record.verifier):
                logger.info("Password change rejected", extra={"subject_id": subject_id})
                return Result.fail(ErrorKind.INVALID_CREDENTIALS, "Incorrect password.")

            problems = self._policy.violations(input_data.new_password or "")
            if problems:
                return Result.fail(ErrorKind.VALIDATION_ERROR, " ".join(problems))

            if not self._credentials.update_verifier(
                subject_id, hash_secret(input_data.new_password)
            ):
                return Result.fail(ErrorKind.NOT_FOUND, "Account not found.")
        except DatabaseError as exc:
            logger.warning(
                "Password change: store unavailable", extra={"error_id": exc.error_id}
            )
            return Result.fail(ErrorKind.STORE_UNAVAILABLE, STORE_UNAVAILABLE_MESSAGE)

        logger.info("Password changed", extra={"subject_id": subject_id})
        return Result.success(None)
