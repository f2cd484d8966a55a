"""Wiring of the booking engine to its Django collaborators."""

from __future__ import annotations

from apps.rooms.repositories import DjangoRoomDirectory
from shared.application.uow import DjangoUnitOfWork

from .application.booking_service import BookingService
from .repositories import DjangoBookingStore


def get_booking_service() -> BookingService:
    """Booking engine backed by the ORM; cheap to build per request."""

    return BookingService(
        rooms=DjangoRoomDirectory(),
        bookings=DjangoBookingStore(),
        uow_factory=DjangoUnitOfWork,
    )
