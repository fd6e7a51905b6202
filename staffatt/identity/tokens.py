"""
===============================================================================
TARJETA CRC - identity/tokens.py
===============================================================================

Módulo:
    Emisión y verificación de access tokens (JWT HS256)

Responsabilidades:
    - Emitir JWT firmados con expiración fija de 30 minutos.
    - Verificar firma, issuer, audience, expiración y claims mínimos.
    - Construir Principal desde un token válido sin consultar stores.
    - Fallar en construcción (ConfigurationError) si falta secret/issuer/audience.

Colaboradores:
    - PyJWT (jwt.encode / jwt.decode)
    - crosscutting.config.Settings: secreto, issuer, audience.
    - identity.users.Principal

Claims:
    sub (id numérico como string), email, name (= email), role (lista,
    una entrada por rol), iss, aud, iat, nbf, exp.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Iterable

import jwt

from ..crosscutting.config import ACCESS_TOKEN_TTL_MINUTES, Settings
from ..crosscutting.exceptions import ConfigurationError
from .users import Principal

JWT_ALGORITHM: str = "HS256"

CLAIM_SUB: str = "sub"
CLAIM_EMAIL: str = "email"
CLAIM_NAME: str = "name"
CLAIM_ROLE: str = "role"
CLAIM_ISS: str = "iss"
CLAIM_AUD: str = "aud"
CLAIM_IAT: str = "iat"
CLAIM_NBF: str = "nbf"
CLAIM_EXP: str = "exp"

_REQUIRED_CLAIMS = [CLAIM_SUB, CLAIM_EMAIL, CLAIM_EXP, CLAIM_IAT, CLAIM_ISS, CLAIM_AUD]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenValidationError(Exception):
    """Token ausente, mal firmado, expirado o con claims inválidos."""

    def __init__(self, message: str, *, expired: bool = False):
        self.message = message
        self.expired = expired
        super().__init__(message)


@dataclass(frozen=True, slots=True)
class AccessToken:
    """Token emitido + los datos con los que se firmó."""

    token: str
    subject_id: int
    email: str
    roles: tuple[str, ...]
    issued_at: datetime
    expires_at: datetime

    @property
    def expires_in(self) -> int:
        return int((self.expires_at - self.issued_at).total_seconds())


@dataclass(frozen=True, slots=True)
class TokenSettings:
    """Snapshot validado de la configuración de firma."""

    secret: str
    issuer: str
    audience: str
    ttl_minutes: int = ACCESS_TOKEN_TTL_MINUTES

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenSettings":
        return cls(
            secret=settings.jwt_secret,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
            ttl_minutes=settings.jwt_access_ttl_minutes,
        )

    def ensure_complete(self) -> None:
        missing = [
            env_name
            for env_name, value in (
                ("JWT_SECRET", self.secret),
                ("JWT_ISSUER", self.issuer),
                ("JWT_AUDIENCE", self.audience),
            )
            if not (value or "").strip()
        ]
        if missing:
            raise ConfigurationError(
                f"Token settings are incomplete: {', '.join(missing)} must be set"
            )


class TokenIssuer:
    """Emite access tokens. `clock` es inyectable para tests de expiración."""

    def __init__(
        self,
        settings: TokenSettings,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        settings.ensure_complete()
        self._settings = settings
        self._clock = clock

    def issue(self, subject_id: int, email: str, roles: Iterable[str]) -> AccessToken:
        issued_at = self._clock().replace(microsecond=0)
        expires_at = issued_at + timedelta(minutes=self._settings.ttl_minutes)
        role_list = sorted(set(roles))

        payload: dict[str, object] = {
            CLAIM_SUB: str(subject_id),
            CLAIM_EMAIL: email,
            CLAIM_NAME: email,
            CLAIM_ROLE: role_list,
            CLAIM_ISS: self._settings.issuer,
            CLAIM_AUD: self._settings.audience,
            CLAIM_IAT: int(issued_at.timestamp()),
            CLAIM_NBF: int(issued_at.timestamp()),
            CLAIM_EXP: int(expires_at.timestamp()),
        }

        token = jwt.encode(payload, self._settings.secret, algorithm=JWT_ALGORITHM)
        return AccessToken(
            token=token,
            subject_id=subject_id,
            email=email,
            roles=tuple(role_list),
            issued_at=issued_at,
            expires_at=expires_at,
        )


class TokenVerifier:
    """Valida tokens y devuelve el Principal. No hace I/O."""

    def __init__(self, settings: TokenSettings) -> None:
        settings.ensure_complete()
        self._settings = settings

    def verify(self, token: str) -> Principal:
        try:
            payload = jwt.decode(
                token,
                self._settings.secret,
                algorithms=[JWT_ALGORITHM],
                audience=self._settings.audience,
                issuer=self._settings.issuer,
                options={"require": _REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenValidationError("Token expired.", expired=True) from exc
        except jwt.InvalidTokenError as exc:
            raise TokenValidationError("Invalid token.") from exc

        try:
            subject_id = int(payload[CLAIM_SUB])
        except (TypeError, ValueError) as exc:
            raise TokenValidationError("Invalid token.") from exc

        email = payload.get(CLAIM_EMAIL)
        if not isinstance(email, str) or not email:
            raise TokenValidationError("Invalid token.")

        return Principal(
            subject_id=subject_id,
            email=email,
            roles=_parse_roles(payload.get(CLAIM_ROLE)),
        )


def _parse_roles(raw: object) -> frozenset[str]:
    # R: emitimos lista; toleramos string suelto por interoperabilidad.
    if raw is None:
        return frozenset()
    if isinstance(raw, str):
        return frozenset({raw})
    if isinstance(raw, list) and all(isinstance(r, str) for r in raw):
        return frozenset(raw)
    raise TokenValidationError("Invalid token.")
