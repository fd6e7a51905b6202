"""
Application Layer

Casos de uso de autenticación y asistencia, el envelope de resultado y la
tabla de locks por staff.
"""

from .keyed_locks import KeyedLockTable, LockTimeoutError

__all__ = ["KeyedLockTable", "LockTimeoutError"]
