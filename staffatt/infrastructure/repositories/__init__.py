from .in_memory import InMemoryCredentialStore, InMemorySessionStore
from .postgres import PostgresCredentialStore, PostgresSessionStore

__all__ = [
    "InMemoryCredentialStore",
    "InMemorySessionStore",
    "PostgresCredentialStore",
    "PostgresSessionStore",
]
