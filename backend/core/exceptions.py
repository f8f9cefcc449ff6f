"""
Error taxonomy for the picker.

InvalidIdentifier never reaches an HTTP response: the service turns it into a
"skipped" entry or drops the value. TransportFailure is raised by the client
transport and delivered to pending read callers.
"""

from typing import Any, Optional


class PickerError(Exception):
    """Base class for picker errors."""


class InvalidIdentifier(PickerError):
    """Raised when a raw value cannot be coerced to an identifier."""

    def __init__(self, raw: Any, reason: str = "invalid identifier"):
        self.raw = raw
        self.reason = reason
        super().__init__(f"{reason}: {raw!r}")


class TransportFailure(PickerError):
    """Raised when a network exchange with the picker API fails."""

    def __init__(self, message: str, status: Optional[int] = None, path: Optional[str] = None):
        self.status = status
        self.path = path
        super().__init__(message)
