from .attendance import SessionRes, to_session_res
from .envelope import Envelope

__all__ = ["Envelope", "SessionRes", "to_session_res"]
