"""
Name: KioskApiClient Tests

Responsibilities:
  - Envelope bodies are rebuilt as Result (success and business failures)
  - Bearer token is stored after login and sent on later calls
  - Network failures become a failed Result (never an exception)

Notes:
  - httpx.MockTransport stands in for the API
"""

import json

import httpx
import pytest

from staffatt.application.usecases import ErrorKind
from staffatt.clients import KioskApiClient
from staffatt.clients.kiosk_client import INVALID_ALIAS_OR_PIN, NETWORK_ERROR, TOGGLE_FAILED


def _envelope(value=None, *, ok=True, message=None, code=None) -> dict:
    return {"is_success": ok, "value": value, "error_message": message, "error_code": code}


def _client(handler) -> KioskApiClient:
    return KioskApiClient("http://api.test", transport=httpx.MockTransport(handler))


_TOKEN_VALUE = {"token": "tok-42", "subject_id": 42, "token_type": "bearer", "expires_in": 1800}


@pytest.mark.unit
class TestKioskApiClient:
    def test_login_stores_token_and_sends_it(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            if request.url.path == "/v1/auth/kiosk/token":
                assert json.loads(request.content) == {"alias": "ALICE", "pin": "1234"}
                return httpx.Response(200, json=_envelope(_TOKEN_VALUE))
            return httpx.Response(200, json=_envelope(True))

        with _client(handler) as client:
            login = client.login("ALICE", "1234")
            toggled = client.toggle_check_in(42)

        assert login.is_success
        assert login.value.subject_id == 42
        assert client.is_authenticated
        assert toggled.value is True
        assert seen[1].headers["Authorization"] == "Bearer tok-42"
        assert seen[1].url.path == "/v1/checkins/42/toggle"

    def test_invalid_credentials_message(self):
        def handler(request):
            return httpx.Response(
                401,
                json=_envelope(ok=False, message="Invalid alias or PIN.", code="INVALID_CREDENTIALS"),
            )

        result = _client(handler).login("ALICE", "0000")

        assert result.error_kind is ErrorKind.INVALID_CREDENTIALS
        assert result.error_message == INVALID_ALIAS_OR_PIN

    def test_network_error_is_failed_result(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        result = _client(handler).toggle_check_in(42)

        assert result.is_failure
        assert result.error_kind is ErrorKind.STORE_UNAVAILABLE
        assert result.error_message == NETWORK_ERROR

    def test_timeout_is_failed_result(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        assert _client(handler).get_last_session(42).error_message == NETWORK_ERROR

    def test_business_failure_keeps_kind_and_message(self):
        def handler(request):
            return httpx.Response(
                403,
                json=_envelope(
                    ok=False,
                    message="You can only access your own attendance records.",
                    code="FORBIDDEN",
                ),
            )

        result = _client(handler).toggle_check_in(7)

        assert result.error_kind is ErrorKind.FORBIDDEN
        assert result.error_message == "You can only access your own attendance records."

    def test_expired_token_problem_clears_session(self):
        seen = []

        def handler(request):
            seen.append(request)
            if request.url.path == "/v1/auth/kiosk/token":
                return httpx.Response(200, json=_envelope(_TOKEN_VALUE))
            return httpx.Response(
                401,
                headers={"content-type": "application/problem+json"},
                content=json.dumps({"title": "Unauthorized", "status": 401, "code": "UNAUTHORIZED"}),
            )

        client = _client(handler)
        client.login("ALICE", "1234")
        expired = client.toggle_check_in(42)
        client.get_last_session(42)

        assert expired.error_kind is ErrorKind.INVALID_CREDENTIALS
        assert not client.is_authenticated
        assert "Authorization" in seen[1].headers
        assert "Authorization" not in seen[2].headers

    def test_non_envelope_error_uses_fallback_message(self):
        def handler(request):
            return httpx.Response(502, content=b"<html>bad gateway</html>")

        result = _client(handler).toggle_check_in(42)

        assert result.error_message == TOGGLE_FAILED
        assert result.error_kind is ErrorKind.STORE_UNAVAILABLE

    def test_last_session_absent_and_present(self):
        bodies = iter(
            [
                _envelope(None),
                _envelope(
                    {
                        "id": 3,
                        "staff_id": 42,
                        "check_in_at": "2026-03-02T08:00:00Z",
                        "check_out_at": None,
                        "is_open": True,
                    }
                ),
            ]
        )

        def handler(request):
            return httpx.Response(200, json=next(bodies))

        client = _client(handler)
        absent = client.get_last_session(42)
        present = client.get_last_session(42)

        assert absent.is_success and absent.value is None
        assert present.value.is_open is True
        assert present.value.staff_id == 42

    def test_malformed_toggle_value_is_rejected(self):
        def handler(request):
            return httpx.Response(200, json=_envelope("yes"))

        assert _client(handler).toggle_check_in(42).error_kind is ErrorKind.VALIDATION_ERROR
