"""
Name: Authentication Use Case Tests

Responsibilities:
  - Kiosk login (alias + PIN) and admin login (email + password)
  - Unknown identity and wrong secret produce the same failure
  - Change password: old password first, then the new-password policy
"""

from unittest.mock import Mock

import pytest

from staffatt.application.usecases import (
    AdminLoginInput,
    AdminLoginUseCase,
    ChangePasswordInput,
    ChangePasswordUseCase,
    ErrorKind,
    KioskLoginInput,
    KioskLoginUseCase,
)
from staffatt.crosscutting.exceptions import DatabaseError
from staffatt.identity.passwords import PasswordPolicy, verify_secret
from staffatt.identity.users import Principal


@pytest.fixture
def kiosk_login(credentials, token_issuer) -> KioskLoginUseCase:
    return KioskLoginUseCase(credentials, token_issuer)


@pytest.fixture
def admin_login(credentials, token_issuer) -> AdminLoginUseCase:
    return AdminLoginUseCase(credentials, token_issuer)


@pytest.fixture
def change_password(credentials) -> ChangePasswordUseCase:
    return ChangePasswordUseCase(credentials, PasswordPolicy(min_length=8))


@pytest.mark.unit
class TestKioskLogin:
    def test_valid_alias_and_pin_issue_token(self, kiosk_login, token_verifier):
        result = kiosk_login.execute(KioskLoginInput(alias="ALICE", pin="1234"))

        assert result.is_success
        assert result.value.subject_id == 42
        assert result.value.expires_in == 1800
        assert token_verifier.verify(result.value.token).subject_id == 42

    def test_alias_is_case_insensitive(self, kiosk_login):
        result = kiosk_login.execute(KioskLoginInput(alias="  alice ", pin="1234"))

        assert result.is_success
        assert result.value.subject_id == 42

    def test_unknown_alias_and_wrong_pin_are_indistinguishable(self, kiosk_login):
        unknown = kiosk_login.execute(KioskLoginInput(alias="NOBODY", pin="1234"))
        wrong_pin = kiosk_login.execute(KioskLoginInput(alias="ALICE", pin="9999"))

        assert unknown.error_kind is ErrorKind.INVALID_CREDENTIALS
        assert wrong_pin.error_kind is ErrorKind.INVALID_CREDENTIALS
        assert unknown.error_message == wrong_pin.error_message == "Invalid alias or PIN."

    @pytest.mark.parametrize("alias,pin", [("", "1234"), ("ALICE", ""), ("  ", "  ")])
    def test_blank_input_is_a_validation_error(self, kiosk_login, alias, pin):
        result = kiosk_login.execute(KioskLoginInput(alias=alias, pin=pin))

        assert result.error_kind is ErrorKind.VALIDATION_ERROR

    def test_non_numeric_pin_is_a_validation_error(self, kiosk_login):
        result = kiosk_login.execute(KioskLoginInput(alias="ALICE", pin="12ab"))

        assert result.error_kind is ErrorKind.VALIDATION_ERROR
        assert result.error_message == "PIN must be numeric."

    def test_admin_account_cannot_use_kiosk_login(self, credentials, token_issuer):
        credentials.find_by_alias = Mock(return_value=credentials.get_credential(1))
        use_case = KioskLoginUseCase(credentials, token_issuer)

        result = use_case.execute(KioskLoginInput(alias="ADMIN", pin="1234"))

        assert result.error_kind is ErrorKind.INVALID_CREDENTIALS

    def test_store_failure_is_store_unavailable(self, token_issuer):
        store = Mock()
        store.find_by_alias.side_effect = DatabaseError("timeout")

        result = KioskLoginUseCase(store, token_issuer).execute(
            KioskLoginInput(alias="ALICE", pin="1234")
        )

        assert result.error_kind is ErrorKind.STORE_UNAVAILABLE


@pytest.mark.unit
class TestAdminLogin:
    def test_valid_credentials_issue_token_with_roles(self, admin_login, token_verifier):
        result = admin_login.execute(
            AdminLoginInput(email="Admin@Example.com", password="Admin#1234")
        )

        assert result.is_success
        assert result.value.email == "admin@example.com"
        assert result.value.roles == ("Administrator",)
        assert token_verifier.verify(result.value.token).is_admin

    def test_unknown_email_and_wrong_password_are_indistinguishable(self, admin_login):
        unknown = admin_login.execute(AdminLoginInput(email="ghost@example.com", password="x"))
        wrong = admin_login.execute(AdminLoginInput(email="admin@example.com", password="x"))

        assert unknown.error_kind is wrong.error_kind is ErrorKind.INVALID_CREDENTIALS
        assert unknown.error_message == wrong.error_message

    def test_kiosk_account_cannot_use_password_login(self, admin_login):
        result = admin_login.execute(
            AdminLoginInput(email="alice@example.com", password="1234")
        )

        assert result.error_kind is ErrorKind.INVALID_CREDENTIALS

    def test_missing_fields_are_a_validation_error(self, admin_login):
        result = admin_login.execute(AdminLoginInput(email="", password=""))

        assert result.error_kind is ErrorKind.VALIDATION_ERROR


@pytest.mark.unit
class TestChangePassword:
    def test_change_password_updates_verifier(
        self, change_password, credentials, admin_principal
    ):
        result = change_password.execute(
            ChangePasswordInput(
                principal=admin_principal,
                current_password="Admin#1234",
                new_password="N3w#Secret",
            )
        )

        assert result.is_success
        assert result.value is None
        assert verify_secret("N3w#Secret", credentials.get_credential(1).verifier)

    def test_wrong_old_password_is_checked_before_policy(
        self, change_password, admin_principal
    ):
        result = change_password.execute(
            ChangePasswordInput(
                principal=admin_principal,
                current_password="wrong",
                new_password="weak",
            )
        )

        assert result.error_kind is ErrorKind.INVALID_CREDENTIALS

    def test_weak_new_password_is_a_validation_error(
        self, change_password, credentials, admin_principal
    ):
        result = change_password.execute(
            ChangePasswordInput(
                principal=admin_principal,
                current_password="Admin#1234",
                new_password="weak",
            )
        )

        assert result.error_kind is ErrorKind.VALIDATION_ERROR
        assert "at least 8 characters" in result.error_message
        assert verify_secret("Admin#1234", credentials.get_credential(1).verifier)

    def test_kiosk_account_is_forbidden(self, change_password, staff_principal):
        result = change_password.execute(
            ChangePasswordInput(
                principal=staff_principal,
                current_password="1234",
                new_password="N3w#Secret",
            )
        )

        assert result.error_kind is ErrorKind.FORBIDDEN

    def test_unknown_account_is_not_found(self, change_password):
        ghost = Principal(subject_id=999, email="ghost@example.com")

        result = change_password.execute(
            ChangePasswordInput(
                principal=ghost, current_password="x", new_password="N3w#Secret"
            )
        )

        assert result.error_kind is ErrorKind.NOT_FOUND

    def test_store_failure_is_store_unavailable(self, admin_principal):
        store = Mock()
        store.get_credential.side_effect = DatabaseError("timeout")

        result = ChangePasswordUseCase(store, PasswordPolicy()).execute(
            ChangePasswordInput(
                principal=admin_principal,
                current_password="Admin#1234",
                new_password="N3w#Secret",
            )
        )

        assert result.error_kind is ErrorKind.STORE_UNAVAILABLE
