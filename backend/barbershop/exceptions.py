"""
Booking-related exceptions.

BookingError subclasses are rendered by the API as
{"message": ..., "errors": [...]} with their own HTTP status.
ConflictError belongs to the storage layer and never reaches HTTP directly.
"""


class BookingError(Exception):
    """Base exception for errors reported back to the caller."""
    status_code = 400
    message = "Bad request"

    def __init__(self, message: str | None = None, errors: list[str] | None = None):
        self.message = message or self.message
        self.errors = errors or []
        super().__init__(self.message)

    def to_payload(self) -> dict:
        payload = {"message": self.message}
        if self.errors:
            payload["errors"] = self.errors
        return payload


class BookingValidationError(BookingError):
    """Malformed or missing input fields."""


class ScheduleValidationError(BookingError):
    """Schedule configuration rejected by the validator."""
    message = "Invalid schedule data"


class SlotUnavailableError(BookingError):
    """Date closed, on vacation, or time outside the slot grid."""


class SlotConflictError(BookingError):
    """The (date, time) pair is already booked."""
    status_code = 409
    message = "This slot is no longer available. Please choose another date or time."


class AdminAuthError(BookingError):
    status_code = 403
    message = "Invalid or missing admin key."


class ConflictError(Exception):
    """Uniqueness violation on bookings(date, time), raised by the storage layer."""
