"""Booking error taxonomy.

Every failure the scheduler can report to a caller is a ``BookingError``
subclass carrying an HTTP status, a user-safe message and optional details.
The FastAPI exception handlers registered in ``main.py`` turn them into JSON.
"""

from typing import Any, Optional

from .config import IS_DEVELOPMENT


class BookingError(Exception):
    """Base class for errors surfaced to API callers"""

    status_code = 400

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        body = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(BookingError):
    """Malformed or out-of-range input. ``details`` is a list of field errors."""

    status_code = 400

    def __init__(self, errors: list[dict], message: str = "Invalid data"):
        super().__init__(message, details=errors)
        self.errors = errors


class ConflictError(BookingError):
    """The requested slot is no longer free"""

    status_code = 409


class ScheduleUnavailableError(BookingError):
    """No opening hours or slot exist for the requested day/time"""

    status_code = 422


class NotFoundError(BookingError):
    status_code = 404


class InvalidTransitionError(BookingError):
    """Appointment status change not permitted from the current status"""

    status_code = 409


class UpstreamUnavailableError(BookingError):
    """The database could not be reached or failed. Never retried internally."""

    status_code = 503

    def __init__(self, message: str, internal_detail: Optional[str] = None):
        super().__init__(message)
        self.internal_detail = internal_detail

    def to_dict(self) -> dict:
        body = super().to_dict()
        # Raw store errors may leak schema details
        if IS_DEVELOPMENT and self.internal_detail:
            body["details"] = self.internal_detail
        return body
