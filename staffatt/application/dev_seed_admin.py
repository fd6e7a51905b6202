# =============================================================================
# FILE: application/dev_seed_admin.py
# =============================================================================
"""
===============================================================================
TASK: Dev Seed Admin (Local-only)
===============================================================================

Qué es:
    Asegura que exista una identidad Administrator (email + password) para
    desarrollo local cuando DEV_SEED_ADMIN=true.

Seguridad:
    - Guard estricto: solo corre con app_env == "local"; en otro ambiente
      falla en el arranque (ConfigurationError).

Patrones:
    - Dependency Injection (credential store + hasher)
    - Fail-fast guard
    - Idempotencia (ensure-create)
===============================================================================
"""

from __future__ import annotations

from typing import Callable

from ..crosscutting.config import Settings
from ..crosscutting.exceptions import ConfigurationError
from ..crosscutting.logger import logger
from ..domain.entities import CredentialKind, Identity
from ..domain.repositories import CredentialStore
from ..identity.passwords import hash_secret
from ..identity.users import Role


def _assert_allowed_environment(settings: Settings) -> None:
    env = (settings.app_env or "").strip().lower()
    if env != "local":
        raise ConfigurationError(
            f"DEV_SEED_ADMIN is enabled but APP_ENV is '{env}' (must be 'local')."
        )


def ensure_dev_admin(
    settings: Settings,
    *,
    credentials: CredentialStore,
    password_hasher: Callable[[str], str] = hash_secret,
) -> Identity | None:
    """
    Ensure a development administrator exists if configured.

    Returns the created identity, or None when disabled / already present.
    """
    if not settings.dev_seed_admin:
        return None

    _assert_allowed_environment(settings)

    email = (settings.dev_seed_admin_email or "").strip().lower()
    password = settings.dev_seed_admin_password or ""
    if not email or not password:
        raise ConfigurationError("Dev seed admin is enabled but email/password are empty")

    if credentials.find_by_email(email) is not None:
        logger.info("Dev seed admin: identity exists; skipping", extra={"email": email})
        return None

    identity = credentials.create_identity(
        display_name=settings.dev_seed_admin_display_name or email,
        email=email,
        credential_kind=CredentialKind.ADMIN_PASSWORD,
        verifier=password_hasher(password),
        roles=frozenset({Role.ADMINISTRATOR.value}),
    )
    logger.info(
        "Dev seed admin: identity created",
        extra={"email": email, "identity_id": identity.id},
    )
    return identity
