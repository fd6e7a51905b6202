from .attendance_session import PostgresSessionStore
from .credential import PostgresCredentialStore

__all__ = ["PostgresCredentialStore", "PostgresSessionStore"]
