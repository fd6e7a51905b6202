from .admin_login import AdminLogin, AdminLoginInput, AdminLoginUseCase
from .change_password import ChangePasswordInput, ChangePasswordUseCase
from .kiosk_login import KioskLogin, KioskLoginInput, KioskLoginUseCase

__all__ = [
    "AdminLogin",
    "AdminLoginInput",
    "AdminLoginUseCase",
    "ChangePasswordInput",
    "ChangePasswordUseCase",
    "KioskLogin",
    "KioskLoginInput",
    "KioskLoginUseCase",
]
