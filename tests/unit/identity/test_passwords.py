"""
Name: Password / PIN Hashing and Policy Tests

Notes:
  - Argon2 verifiers never store the secret in clear text
"""

import pytest

from staffatt.identity.passwords import (
    PasswordPolicy,
    burn_verification,
    hash_secret,
    verify_secret,
)


@pytest.mark.unit
class TestHashing:
    def test_hash_and_verify(self):
        verifier = hash_secret("1234")

        assert verifier != "1234"
        assert verifier.startswith("$argon2")
        assert verify_secret("1234", verifier) is True
        assert verify_secret("4321", verifier) is False

    def test_verify_with_invalid_hash_returns_false(self):
        assert verify_secret("1234", "not-an-argon2-hash") is False

    def test_burn_verification_never_raises(self):
        assert burn_verification("anything") is None


@pytest.mark.unit
class TestPasswordPolicy:
    def test_strong_password_has_no_violations(self):
        assert PasswordPolicy(min_length=8).violations("Str0ng#Pass") == []

    @pytest.mark.parametrize(
        "password,fragment",
        [
            ("Sh0#rt", "at least 8 characters"),
            ("NoDigits#Here", "digit"),
            ("NOLOWER#123", "lowercase"),
            ("noupper#123", "uppercase"),
            ("NoSymbol123", "non-alphanumeric"),
        ],
    )
    def test_each_rule_is_reported(self, password, fragment):
        problems = PasswordPolicy(min_length=8).violations(password)

        assert len(problems) == 1
        assert fragment in problems[0]

    def test_empty_password_reports_every_rule(self):
        assert len(PasswordPolicy().violations("")) == 5
