"""
============================================================
TARJETA CRC - clients/kiosk_client.py
============================================================
Class: KioskApiClient

Responsibilities:
  - Cliente HTTP del kiosk: login alias + PIN, última sesión y toggle.
  - Guardar el Bearer token tras un login exitoso (y descartarlo ante un 401).
  - Reconstruir Result desde el envelope JSON del API.
  - Convertir fallas de red en un Result fallido (nunca propaga httpx).

Collaborators:
  - application.usecases.results (Result, ErrorKind)
  - interfaces.api.http.schemas.envelope (Envelope)
  - httpx (HTTP client)
============================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from ..application.usecases.results import ErrorKind, Result
from ..crosscutting.logger import logger
from ..interfaces.api.http.schemas.envelope import Envelope

INVALID_ALIAS_OR_PIN = "Invalid alias or PIN."
LOGIN_FAILED = "Login failed. Please try again."
NETWORK_ERROR = "Network error. Please try again."
LAST_SESSION_FAILED = "Unable to load last check-in."
TOGGLE_FAILED = "Unable to perform Check-In/Out."
MALFORMED_RESPONSE = "Malformed response."


class KioskSession(BaseModel):
    """Token emitido para el kiosk (value del envelope de /auth/kiosk/token)."""

    token: str
    subject_id: int
    token_type: str = "bearer"
    expires_in: int


class LastSession(BaseModel):
    id: int
    staff_id: int
    check_in_at: datetime
    check_out_at: datetime | None = None
    is_open: bool


class KioskApiClient:
    """
    Cliente sincrónico del API de asistencia para el kiosk.

    `transport` permite inyectar httpx.MockTransport en tests.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout_seconds: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self._client = httpx.Client(
            base_url=base_url,
            timeout=timeout_seconds,
            transport=transport,
        )
        self._token: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self._token is not None

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "KioskApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Operaciones
    # ------------------------------------------------------------------

    def login(self, alias: str, pin: str) -> Result[KioskSession]:
        """Login de kiosk; guarda el token si el API lo acepta."""
        result = self._call(
            "POST",
            "/v1/auth/kiosk/token",
            json={"alias": alias, "pin": pin},
            fallback_message=LOGIN_FAILED,
        )
        if result.is_failure:
            if result.error_kind == ErrorKind.INVALID_CREDENTIALS:
                return Result.fail(ErrorKind.INVALID_CREDENTIALS, INVALID_ALIAS_OR_PIN)
            return result

        try:
            session = KioskSession.model_validate(result.value)
        except ValidationError:
            logger.warning("Kiosk login: malformed token payload")
            return Result.fail(ErrorKind.VALIDATION_ERROR, MALFORMED_RESPONSE)

        self._token = session.token
        return Result.success(session)

    def logout(self) -> None:
        self._token = None

    def get_last_session(self, staff_id: int) -> Result[LastSession | None]:
        result = self._call(
            "GET",
            f"/v1/checkins/{staff_id}/last",
            fallback_message=LAST_SESSION_FAILED,
        )
        if result.is_failure or result.value is None:
            return result

        try:
            return Result.success(LastSession.model_validate(result.value))
        except ValidationError:
            logger.warning("Kiosk last session: malformed payload", extra={"staff_id": staff_id})
            return Result.fail(ErrorKind.VALIDATION_ERROR, MALFORMED_RESPONSE)

    def toggle_check_in(self, staff_id: int) -> Result[bool]:
        """value=True => quedó checked-in; False => quedó checked-out."""
        result = self._call(
            "POST",
            f"/v1/checkins/{staff_id}/toggle",
            fallback_message=TOGGLE_FAILED,
        )
        if result.is_failure:
            return result
        if not isinstance(result.value, bool):
            return Result.fail(ErrorKind.VALIDATION_ERROR, MALFORMED_RESPONSE)
        return Result.success(result.value)

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------

    def _headers(self) -> dict[str, str]:
        if not self._token:
            return {}
        return {"Authorization": f"Bearer {self._token}"}

    def _call(
        self,
        method: str,
        url: str,
        *,
        fallback_message: str,
        json: dict[str, Any] | None = None,
    ) -> Result[Any]:
        try:
            resp = self._client.request(method, url, json=json, headers=self._headers())
        except httpx.TransportError as exc:
            logger.warning(
                "Kiosk API unreachable",
                extra={
                    "url": url,
                    "reason": "timeout" if isinstance(exc, httpx.TimeoutException) else "transport",
                },
            )
            return Result.fail(ErrorKind.STORE_UNAVAILABLE, NETWORK_ERROR)

        if resp.status_code == 401 and _is_problem(resp):
            # Token vencido o rechazado: el kiosk debe volver a loguearse.
            self._token = None
        return _to_result(resp, fallback_message)


def _is_problem(resp: httpx.Response) -> bool:
    return resp.headers.get("content-type", "").startswith("application/problem+json")


def _to_result(resp: httpx.Response, fallback_message: str) -> Result[Any]:
    # 401 problem+json: token ausente/vencido (no es un fallo de negocio).
    if _is_problem(resp):
        if resp.status_code == 401:
            return Result.fail(ErrorKind.INVALID_CREDENTIALS, "Session expired. Please log in again.")
        return Result.fail(_kind_for_status(resp.status_code), fallback_message)

    try:
        envelope = Envelope[Any].model_validate(resp.json())
    except (ValueError, ValidationError):
        logger.warning("Kiosk API returned a non-envelope body", extra={"status": resp.status_code})
        return Result.fail(_kind_for_status(resp.status_code), fallback_message)

    if envelope.is_success:
        return Result.success(envelope.value)

    try:
        kind = ErrorKind(envelope.error_code)
    except ValueError:
        kind = _kind_for_status(resp.status_code)
    return Result.fail(kind, envelope.error_message or fallback_message)


def _kind_for_status(status_code: int) -> ErrorKind:
    if status_code == 401:
        return ErrorKind.INVALID_CREDENTIALS
    if status_code == 403:
        return ErrorKind.FORBIDDEN
    if status_code == 404:
        return ErrorKind.NOT_FOUND
    if status_code == 409:
        return ErrorKind.CONFLICT
    if status_code >= 500:
        return ErrorKind.STORE_UNAVAILABLE
    return ErrorKind.VALIDATION_ERROR
