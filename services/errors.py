"""Error taxonomy for the booking engine.

Every error carries a user-facing message and the HTTP status the request
boundary answers with. None of them are retried by the engine.
"""


class BookingError(Exception):
    """Base error with a user-safe message and optional structured details."""

    status_code = 500

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        body = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(BookingError):
    """Malformed, missing or out-of-range input."""

    status_code = 400


class NotFoundError(BookingError):
    """Referenced court, booking or user does not exist."""

    status_code = 404


class ConflictError(BookingError):
    """Requested interval overlaps a booked slot on the same court."""

    status_code = 400


class StateError(BookingError):
    """Booking is terminal or too close to its start to be changed."""

    status_code = 400


class DuplicateError(BookingError):
    """A unique natural key is already taken, or a delete is blocked by live rows."""

    status_code = 409


class TransactionError(BookingError):
    """The database refused the commit; nothing from the request was kept."""

    status_code = 500
