"""Errors raised by the booking engine.

All of them are detected locally and carry a message meant for the API
caller. Persistence errors are not wrapped and propagate as they are.
"""


class BookingError(Exception):
    """Base class for booking rule violations."""


class NotFoundError(BookingError):
    """A referenced room or booking does not exist."""


class RoomNotFound(NotFoundError):
    pass


class BookingNotFound(NotFoundError):
    pass


class InvalidBookingOperation(BookingError):
    """The request breaks a business rule (inactive room, capacity, lifecycle)."""


class BookingConflictError(BookingError):
    """Raised when a room is busy for requested dates."""
