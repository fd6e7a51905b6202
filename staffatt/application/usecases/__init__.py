"""
Use Cases

Authentication (kiosk login, admin login, change password) and attendance
(toggle check-in, last session, admin listing). All return Result[T].
"""

from .attendance import (
    GetLastSessionInput,
    GetLastSessionUseCase,
    ListSessionsInput,
    ListSessionsUseCase,
    ToggleCheckInInput,
    ToggleCheckInUseCase,
)
from .auth import (
    AdminLogin,
    AdminLoginInput,
    AdminLoginUseCase,
    ChangePasswordInput,
    ChangePasswordUseCase,
    KioskLogin,
    KioskLoginInput,
    KioskLoginUseCase,
)
from .results import ErrorKind, Result

__all__ = [
    "AdminLogin",
    "AdminLoginInput",
    "AdminLoginUseCase",
    "ChangePasswordInput",
    "ChangePasswordUseCase",
    "ErrorKind",
    "GetLastSessionInput",
    "GetLastSessionUseCase",
    "KioskLogin",
    "KioskLoginInput",
    "KioskLoginUseCase",
    "ListSessionsInput",
    "ListSessionsUseCase",
    "Result",
    "ToggleCheckInInput",
    "ToggleCheckInUseCase",
]
