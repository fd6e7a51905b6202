"""
===============================================================================
TARJETA CRC - identity/passwords.py
===============================================================================

Responsabilidades:
    - Hashear/verificar PINs y passwords (Argon2).
    - Igualar el costo de "identidad inexistente" vs "secreto incorrecto"
      (burn_verification) para no permitir enumeración por tiempo.
    - Evaluar la política de passwords nuevos (PasswordPolicy).

Colaboradores:
    - argon2.PasswordHasher
    - application/usecases/auth/*: verificación y cambio de password.
    - application/dev_seed_admin.py: hashing del admin local.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

_password_hasher = PasswordHasher()

_DUMMY_SECRET = "staffatt-dummy-secret"


def hash_secret(secret: str) -> str:
    """Hashea un PIN o password usando Argon2."""
    return _password_hasher.hash(secret)


def verify_secret(secret: str, verifier: str) -> bool:
    """Verifica secreto vs hash almacenado. Nunca lanza por mismatch."""
    try:
        return _password_hasher.verify(verifier, secret)
    except (VerificationError, InvalidHashError):
        return False


@lru_cache(maxsize=1)
def _dummy_verifier() -> str:
    return _password_hasher.hash(_DUMMY_SECRET)


def burn_verification(secret: str) -> None:
    """Ejecuta una verificación descartable (identidad inexistente)."""
    verify_secret(secret, _dummy_verifier())


@dataclass(frozen=True, slots=True)
class PasswordPolicy:
    """
    Política para passwords nuevos de administradores.

    Reglas: largo mínimo, al menos un dígito, una minúscula, una mayúscula y
    un caracter no alfanumérico.
    """

    min_length: int = 8

    def violations(self, password: str) -> list[str]:
        problems: list[str] = []
        if len(password) < self.min_length:
            problems.append(
                f"Password must be at least {self.min_length} characters long."
            )
        if not any(c.isdigit() for c in password):
            problems.append("Password must contain at least one digit.")
        if not any(c.islower() for c in password):
            problems.append("Password must contain at least one lowercase letter.")
        if not any(c.isupper() for c in password):
            problems.append("Password must contain at least one uppercase letter.")
        if all(c.isalnum() for c in password):
            problems.append("Password must contain at least one non-alphanumeric character.")
        return problems
