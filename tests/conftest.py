"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure the test environment (in-memory stores, token settings)
  - Provide seeded credential/session stores and principals
  - Provide a token issuer/verifier pair bound to test settings

Collaborators:
  - pytest: Test framework
  - staffatt.infrastructure.repositories.in_memory: store fakes
  - staffatt.identity: tokens, passwords, principals

Notes:
  - Environment is set BEFORE importing staffatt (logger/settings read it)
  - Use @pytest.fixture(scope="function") for per-test isolation
"""

import os

os.environ["APP_ENV"] = "test"
os.environ["STORE_BACKEND"] = "memory"
os.environ.setdefault("JWT_SECRET", "test-secret-0123456789-abcdefghijklmnop")
os.environ.setdefault("JWT_ISSUER", "staffatt-tests")
os.environ.setdefault("JWT_AUDIENCE", "staffatt-clients")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest  # noqa: E402

from staffatt.crosscutting import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None

from staffatt.domain.entities import CredentialKind, Identity  # noqa: E402
from staffatt.identity.passwords import hash_secret  # noqa: E402
from staffatt.identity.tokens import (  # noqa: E402
    TokenIssuer,
    TokenSettings,
    TokenVerifier,
)
from staffatt.identity.users import Principal, Role  # noqa: E402
from staffatt.infrastructure.repositories import (  # noqa: E402
    InMemoryCredentialStore,
    InMemorySessionStore,
)

STAFF_ID = 42
STAFF_ALIAS = "ALICE"
STAFF_PIN = "1234"
STAFF_EMAIL = "alice@example.com"

ADMIN_ID = 1
ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "Admin#1234"


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )


# ============================================================================
# Tokens
# ============================================================================


@pytest.fixture
def token_settings() -> TokenSettings:
    return TokenSettings(
        secret="unit-secret-0123456789-abcdefghijklmnop",
        issuer="staffatt-tests",
        audience="staffatt-clients",
    )


@pytest.fixture
def token_issuer(token_settings: TokenSettings) -> TokenIssuer:
    return TokenIssuer(token_settings)


@pytest.fixture
def token_verifier(token_settings: TokenSettings) -> TokenVerifier:
    return TokenVerifier(token_settings)


# ============================================================================
# Stores
# ============================================================================


def seed_identities(credentials: InMemoryCredentialStore) -> tuple[Identity, Identity]:
    """R: Seed one kiosk staff member (id 42) and one administrator (id 1)."""
    staff = credentials.create_identity(
        display_name="Alice Kiosk",
        email=STAFF_EMAIL,
        credential_kind=CredentialKind.KIOSK_PIN,
        verifier=hash_secret(STAFF_PIN),
        roles=frozenset({Role.MEMBER.value}),
        alias=STAFF_ALIAS,
        identity_id=STAFF_ID,
    )
    admin = credentials.create_identity(
        display_name="Admin",
        email=ADMIN_EMAIL,
        credential_kind=CredentialKind.ADMIN_PASSWORD,
        verifier=hash_secret(ADMIN_PASSWORD),
        roles=frozenset({Role.ADMINISTRATOR.value}),
        identity_id=ADMIN_ID,
    )
    return staff, admin


@pytest.fixture
def seed():
    """R: Expose the seeding helper to tests that build their own stores."""
    return seed_identities


@pytest.fixture
def credentials() -> InMemoryCredentialStore:
    store = InMemoryCredentialStore()
    seed_identities(store)
    return store


@pytest.fixture
def sessions() -> InMemorySessionStore:
    return InMemorySessionStore()


# ============================================================================
# Principals
# ============================================================================


@pytest.fixture
def staff_principal() -> Principal:
    return Principal(
        subject_id=STAFF_ID,
        email=STAFF_EMAIL,
        roles=frozenset({Role.MEMBER.value}),
    )


@pytest.fixture
def admin_principal() -> Principal:
    return Principal(
        subject_id=ADMIN_ID,
        email=ADMIN_EMAIL,
        roles=frozenset({Role.ADMINISTRATOR.value}),
    )


@pytest.fixture
def other_principal() -> Principal:
    return Principal(subject_id=7, email="bob@example.com", roles=frozenset())
