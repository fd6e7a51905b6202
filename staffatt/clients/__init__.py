from .kiosk_client import KioskApiClient, KioskSession, LastSession

__all__ = ["KioskApiClient", "KioskSession", "LastSession"]
