from .attendance_session import InMemorySessionStore
from .credential import InMemoryCredentialStore

__all__ = ["InMemoryCredentialStore", "InMemorySessionStore"]
