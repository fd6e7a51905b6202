"""Staff attendance backend: kiosk/admin authentication and check-in sessions."""

__version__ = "0.1.0"
