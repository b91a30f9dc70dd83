"""Error types raised by the exposure risk library."""
from typing import Iterable, Optional


class InvalidEnumError(ValueError):
    """An unrecognized category value reached a scoring function."""

    def __init__(self, field: str, value, allowed: Optional[Iterable[str]] = None):
        self.field = field
        self.value = value
        self.allowed = list(allowed) if allowed is not None else []
        message = f"Invalid {field}: {value!r}"
        if self.allowed:
            message += f" (expected one of: {', '.join(self.allowed)})"
        super().__init__(message)


class ExternalLookupError(Exception):
    """A geolocation, network or storage collaborator failed."""


class GeolocationError(ExternalLookupError):
    """Position sensor failure.

    The code mirrors the three failure modes a position sensor reports.
    """

    PERMISSION_DENIED = "permission_denied"
    POSITION_UNAVAILABLE = "position_unavailable"
    TIMEOUT = "timeout"

    def __init__(self, code: str, message: str = ""):
        self.code = code
        super().__init__(message or code)
