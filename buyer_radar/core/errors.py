"""
Exception hierarchy for buyer radar.

InvalidArgument is a bad request, DataIntegrityError is corrupt reference
data, ReferenceDataError means the reference data could not be loaded at all.
Callers (and the HTTP layer) need to tell these apart.
"""

from typing import Any


class BuyerRadarError(Exception):
    """Base exception for all buyer radar errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            return f"{self.message} | context={self.context}"
        return self.message


class InvalidArgument(BuyerRadarError):
    """Query parameter outside its accepted domain."""

    pass


class DataIntegrityError(BuyerRadarError):
    """A purchase event references a buyer or property that does not exist."""

    pass


class ReferenceDataError(BuyerRadarError):
    """Reference data is missing, unreachable, or malformed."""

    pass
