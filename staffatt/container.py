"""
===============================================================================
TARJETA CRC - staffatt/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer stores, emisor/verificador de tokens, lock table y casos de uso.
  - Exponer factories para FastAPI (Depends), overridables en tests.
  - Mantener singletons con caching (lru_cache).

Colaboradores:
  - staffatt.crosscutting.config.get_settings
  - staffatt.domain.repositories.* (puertos)
  - staffatt.infrastructure.repositories.* (implementaciones)
  - staffatt.application.usecases.* (casos de uso)

Notas:
  - Este archivo NO contiene lógica de negocio.
  - app_env test/testing/ci o STORE_BACKEND=memory => adapters in-memory.
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

from .application.keyed_locks import KeyedLockTable
from .application.usecases import (
    AdminLoginUseCase,
    ChangePasswordUseCase,
    GetLastSessionUseCase,
    KioskLoginUseCase,
    ListSessionsUseCase,
    ToggleCheckInUseCase,
)
from .crosscutting.config import get_settings
from .domain.repositories import CredentialStore, SessionStore
from .identity.passwords import PasswordPolicy
from .identity.tokens import TokenIssuer, TokenSettings, TokenVerifier
from .infrastructure.repositories import (
    InMemoryCredentialStore,
    InMemorySessionStore,
    PostgresCredentialStore,
    PostgresSessionStore,
)


def _use_memory_stores() -> bool:
    settings = get_settings()
    env = settings.app_env.strip().lower()
    return settings.store_backend == "memory" or env in {"test", "testing", "ci"}


# =============================================================================
# Stores (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_credential_store() -> CredentialStore:
    if _use_memory_stores():
        return InMemoryCredentialStore()
    return PostgresCredentialStore()


@lru_cache(maxsize=1)
def get_session_store() -> SessionStore:
    if _use_memory_stores():
        return InMemorySessionStore()
    return PostgresSessionStore()


@lru_cache(maxsize=1)
def get_lock_table() -> KeyedLockTable:
    return KeyedLockTable()


# =============================================================================
# Tokens
# =============================================================================


@lru_cache(maxsize=1)
def get_token_issuer() -> TokenIssuer:
    """Raises ConfigurationError if secret/issuer/audience are missing."""
    return TokenIssuer(TokenSettings.from_settings(get_settings()))


@lru_cache(maxsize=1)
def get_token_verifier() -> TokenVerifier:
    return TokenVerifier(TokenSettings.from_settings(get_settings()))


# =============================================================================
# Use cases
# =============================================================================


def get_kiosk_login_use_case() -> KioskLoginUseCase:
    return KioskLoginUseCase(get_credential_store(), get_token_issuer())


def get_admin_login_use_case() -> AdminLoginUseCase:
    return AdminLoginUseCase(get_credential_store(), get_token_issuer())


def get_change_password_use_case() -> ChangePasswordUseCase:
    policy = PasswordPolicy(min_length=get_settings().password_min_length)
    return ChangePasswordUseCase(get_credential_store(), policy)


def get_toggle_check_in_use_case() -> ToggleCheckInUseCase:
    return ToggleCheckInUseCase(
        get_session_store(),
        get_credential_store(),
        get_lock_table(),
        lock_timeout_seconds=get_settings().store_timeout_seconds,
    )


def get_last_session_use_case() -> GetLastSessionUseCase:
    return GetLastSessionUseCase(get_session_store(), get_credential_store())


def get_list_sessions_use_case() -> ListSessionsUseCase:
    return ListSessionsUseCase(get_session_store(), get_credential_store())


def reset_container() -> None:
    """Limpia singletons (tests / recarga de settings)."""
    for factory in (
        get_credential_store,
        get_session_store,
        get_lock_table,
        get_token_issuer,
        get_token_verifier,
    ):
        factory.cache_clear()
