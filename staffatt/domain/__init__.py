"""
Domain Layer

Entidades del núcleo de asistencia (Identity, AttendanceSession) y los
puertos de persistencia (CredentialStore, SessionStore). Sin dependencias
de infraestructura ni de HTTP.
"""

from .entities import AttendanceSession, CredentialKind, CredentialRecord, Identity
from .repositories import CredentialStore, SessionStore

__all__ = [
    "AttendanceSession",
    "CredentialKind",
    "CredentialRecord",
    "CredentialStore",
    "Identity",
    "SessionStore",
]
