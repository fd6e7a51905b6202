"""
Name: Token Issuer / Verifier Tests

Responsibilities:
  - Issued claims (sub, email, name, role, iss, aud) and the 30 minute TTL
  - Rejection of expired, tampered and foreign tokens
  - ConfigurationError when signing settings are incomplete
"""

import json
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from staffatt.crosscutting.config import Settings
from staffatt.crosscutting.exceptions import ConfigurationError
from staffatt.identity.tokens import (
    JWT_ALGORITHM,
    TokenIssuer,
    TokenSettings,
    TokenValidationError,
    TokenVerifier,
)


def _decode(token: str, settings: TokenSettings) -> dict:
    return jwt.decode(
        token,
        settings.secret,
        algorithms=[JWT_ALGORITHM],
        audience=settings.audience,
        issuer=settings.issuer,
    )


@pytest.mark.unit
class TestTokenIssuer:
    def test_issue_writes_expected_claims(self, token_issuer, token_settings):
        access = token_issuer.issue(42, "alice@example.com", ["Member"])

        claims = _decode(access.token, token_settings)
        assert claims["sub"] == "42"
        assert claims["email"] == "alice@example.com"
        assert claims["name"] == "alice@example.com"
        assert claims["role"] == ["Member"]
        assert claims["iss"] == "staffatt-tests"
        assert claims["aud"] == "staffatt-clients"

    def test_token_lifetime_is_thirty_minutes(self, token_issuer, token_settings):
        access = token_issuer.issue(42, "alice@example.com", [])

        claims = _decode(access.token, token_settings)
        assert claims["exp"] - claims["iat"] == 30 * 60
        assert access.expires_in == 1800
        assert access.expires_at - access.issued_at == timedelta(minutes=30)

    def test_roles_are_deduplicated_and_sorted(self, token_issuer):
        access = token_issuer.issue(1, "admin@example.com", ["Member", "Administrator", "Member"])

        assert access.roles == ("Administrator", "Member")

    @pytest.mark.parametrize(
        "secret,issuer,audience,missing",
        [
            ("", "iss", "aud", "JWT_SECRET"),
            ("secret", "", "aud", "JWT_ISSUER"),
            ("secret", "iss", "  ", "JWT_AUDIENCE"),
        ],
    )
    def test_incomplete_settings_raise_configuration_error(
        self, secret, issuer, audience, missing
    ):
        settings = TokenSettings(secret=secret, issuer=issuer, audience=audience)

        with pytest.raises(ConfigurationError, match=missing):
            TokenIssuer(settings)
        with pytest.raises(ConfigurationError, match=missing):
            TokenVerifier(settings)

    def test_from_settings_reads_jwt_fields(self):
        settings = Settings(
            store_backend="memory",
            jwt_secret="s" * 40,
            jwt_issuer="issuer-x",
            jwt_audience="audience-y",
        )

        token_settings = TokenSettings.from_settings(settings)

        assert token_settings.secret == "s" * 40
        assert token_settings.issuer == "issuer-x"
        assert token_settings.audience == "audience-y"
        assert token_settings.ttl_minutes == 30


@pytest.mark.unit
class TestTokenVerifier:
    def test_round_trip_returns_principal(self, token_issuer, token_verifier):
        access = token_issuer.issue(1, "admin@example.com", ["Administrator"])

        principal = token_verifier.verify(access.token)

        assert principal.subject_id == 1
        assert principal.email == "admin@example.com"
        assert principal.is_admin is True

    def test_expired_token_is_rejected(self, token_settings, token_verifier):
        past = datetime.now(timezone.utc) - timedelta(minutes=31)
        issuer = TokenIssuer(token_settings, clock=lambda: past)
        access = issuer.issue(42, "alice@example.com", [])

        with pytest.raises(TokenValidationError) as exc_info:
            token_verifier.verify(access.token)

        assert exc_info.value.expired is True

    def test_token_still_valid_before_thirty_minutes(self, token_settings, token_verifier):
        past = datetime.now(timezone.utc) - timedelta(minutes=29)
        issuer = TokenIssuer(token_settings, clock=lambda: past)
        access = issuer.issue(42, "alice@example.com", [])

        assert token_verifier.verify(access.token).subject_id == 42

    def test_tampered_token_is_rejected(self, token_issuer, token_verifier):
        access = token_issuer.issue(42, "alice@example.com", [])
        header, _payload, signature = access.token.split(".")
        forged = jwt.utils.base64url_encode(
            json.dumps({"sub": "1", "email": "alice@example.com", "role": ["Administrator"]}).encode()
        ).decode()
        tampered = ".".join([header, forged, signature])

        with pytest.raises(TokenValidationError) as exc_info:
            token_verifier.verify(tampered)

        assert exc_info.value.expired is False

    def test_wrong_secret_is_rejected(self, token_settings, token_verifier):
        other = TokenIssuer(
            TokenSettings(
                secret="another-secret-0123456789-abcdefghijkl",
                issuer=token_settings.issuer,
                audience=token_settings.audience,
            )
        )

        with pytest.raises(TokenValidationError):
            token_verifier.verify(other.issue(42, "alice@example.com", []).token)

    @pytest.mark.parametrize("field", ["issuer", "audience"])
    def test_foreign_issuer_or_audience_is_rejected(self, token_settings, token_verifier, field):
        values = {
            "secret": token_settings.secret,
            "issuer": token_settings.issuer,
            "audience": token_settings.audience,
        }
        values[field] = "someone-else"
        foreign = TokenIssuer(TokenSettings(**values))

        with pytest.raises(TokenValidationError):
            token_verifier.verify(foreign.issue(42, "alice@example.com", []).token)

    def test_missing_required_claim_is_rejected(self, token_settings, token_verifier):
        now = int(datetime.now(timezone.utc).timestamp())
        token = jwt.encode(
            {
                "sub": "42",
                "iss": token_settings.issuer,
                "aud": token_settings.audience,
                "iat": now,
                "exp": now + 60,
            },
            token_settings.secret,
            algorithm=JWT_ALGORITHM,
        )

        with pytest.raises(TokenValidationError):
            token_verifier.verify(token)

    def test_non_numeric_subject_is_rejected(self, token_settings, token_verifier):
        now = int(datetime.now(timezone.utc).timestamp())
        token = jwt.encode(
            {
                "sub": "alice",
                "email": "alice@example.com",
                "iss": token_settings.issuer,
                "aud": token_settings.audience,
                "iat": now,
                "exp": now + 60,
            },
            token_settings.secret,
            algorithm=JWT_ALGORITHM,
        )

        with pytest.raises(TokenValidationError):
            token_verifier.verify(token)

    def test_single_string_role_is_accepted(self, token_settings, token_verifier):
        now = int(datetime.now(timezone.utc).timestamp())
        token = jwt.encode(
            {
                "sub": "1",
                "email": "admin@example.com",
                "role": "Administrator",
                "iss": token_settings.issuer,
                "aud": token_settings.audience,
                "iat": now,
                "exp": now + 60,
            },
            token_settings.secret,
            algorithm=JWT_ALGORITHM,
        )

        assert token_verifier.verify(token).is_admin is True

    def test_garbage_is_rejected(self, token_verifier):
        with pytest.raises(TokenValidationError):
            token_verifier.verify("not-a-jwt")
