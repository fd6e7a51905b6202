from .get_last_session import GetLastSessionInput, GetLastSessionUseCase
from .list_sessions import ListSessionsInput, ListSessionsUseCase
from .toggle_check_in import ToggleCheckInInput, ToggleCheckInUseCase

__all__ = [
    "GetLastSessionInput",
    "GetLastSessionUseCase",
    "ListSessionsInput",
    "ListSessionsUseCase",
    "ToggleCheckInInput",
    "ToggleCheckInUseCase",
]
