"""
Booking Engine

Use cases of the booking domain. The engine is stateless: rooms and bookings
are reached through the RoomDirectory and BookingStore it is constructed
with, and every write runs inside a unit of work.

Operations:
- is_available: Overlap check for a room and a date range
- create_booking: Reserve a room (starts in PENDING)
- get_booking_by_id / list_bookings: Reads with the room attached
- update_booking: Change dates, guests, requests or status
- cancel_booking: One-way transition to CANCELLED

Double booking prevention:
1. Start database transaction (unit of work)
2. Load the room with SELECT FOR UPDATE, so writers for the same room queue up
3. Look for a non-cancelled booking intersecting [check_in, check_out)
4. Write the booking before the transaction (and the room lock) is released
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, List, Mapping, Optional

from shared.application.uow import AbstractUnitOfWork, DjangoUnitOfWork
from apps.bookings.domain.exceptions import (
    BookingConflictError,
    BookingNotFound,
    InvalidBookingOperation,
    RoomNotFound,
)
from apps.bookings.domain.ports import BookingCriteria, BookingStore, RoomDirectory
from apps.bookings.domain.pricing import calculate_nights, calculate_total_price
from apps.bookings.models import Booking

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10

UPDATABLE_FIELDS = frozenset({
    "check_in",
    "check_out",
    "guests_count",
    "special_requests",
    "status",
})


# ===== Inputs and results =====

@dataclass
class CreateBookingCommand:
    room_id: int
    guest_name: str
    guest_email: str
    guest_phone: str
    check_in: date
    check_out: date
    guests_count: int = 1
    special_requests: str = ''


@dataclass
class BookingFilters:
    """List filters; every field is optional and they combine with AND."""
    status: Optional[str] = None
    room_id: Optional[int] = None
    guest_email: Optional[str] = None
    check_in_from: Optional[date] = None
    check_out_to: Optional[date] = None
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE

    def to_criteria(self) -> BookingCriteria:
        return BookingCriteria(
            status=self.status,
            room_id=self.room_id,
            guest_email=self.guest_email,
            check_in_from=self.check_in_from,
            check_out_to=self.check_out_to,
        )


@dataclass
class Pagination:
    page: int
    limit: int
    total: int
    total_pages: int


@dataclass
class BookingPage:
    bookings: List[Booking]
    pagination: Pagination


# ===== Engine =====

class BookingService:
    """Availability, pricing and lifecycle rules for room bookings."""

    def __init__(
        self,
        rooms: RoomDirectory,
        bookings: BookingStore,
        uow_factory: Callable[[], AbstractUnitOfWork] = DjangoUnitOfWork,
    ):
        self.rooms = rooms
        self.bookings = bookings
        self.uow_factory = uow_factory

    def is_available(self, room_id, check_in: date, check_out: date, exclude_booking_id=None) -> bool:
        """True if no non-cancelled booking of the room overlaps the range."""
        overlapping = self.bookings.find_overlapping(
            room_id,
            check_in,
            check_out,
            exclude_booking_id=exclude_booking_id,
        )
        if overlapping is not None:
            logger.debug(
                "Room %s busy for %s - %s (overlaps booking %s)",
                room_id, check_in, check_out, overlapping.pk,
            )
        return overlapping is None

    def create_booking(self, command: CreateBookingCommand) -> Booking:
        """
        Reserve a room

        Checks, first failure wins: room exists, room active, capacity,
        availability, at least one night.

        Raises:
            RoomNotFound, InvalidBookingOperation, BookingConflictError
        """
        logger.info(
            "Creating booking for room %s, dates %s - %s, guests %s",
            command.room_id, command.check_in, command.check_out, command.guests_count,
        )

        with self.uow_factory():
            room = self.rooms.find_by_id(command.room_id, lock=True)
            if room is None:
                raise RoomNotFound("Room not found")

            if not room.is_active:
                raise InvalidBookingOperation("Room is not available for booking")

            if command.guests_count > room.max_guests:
                raise InvalidBookingOperation(
                    f"Room can't accommodate more than {room.max_guests} guests"
                )

            if not self.is_available(room.pk, command.check_in, command.check_out):
                logger.info("Rejected booking for room %s: dates already taken", room.pk)
                raise BookingConflictError("Room is already booked for the selected dates")

            nights = calculate_nights(command.check_in, command.check_out)
            total_price = calculate_total_price(nights, room.price_per_night)

            booking = self.bookings.insert(
                room_id=room.pk,
                guest_name=command.guest_name,
                guest_email=command.guest_email,
                guest_phone=command.guest_phone,
                check_in=command.check_in,
                check_out=command.check_out,
                guests_count=command.guests_count,
                total_nights=nights,
                nightly_rate=room.price_per_night,
                total_price=total_price,
                status=Booking.Status.PENDING,
                special_requests=command.special_requests or '',
            )

        logger.info(
            "Booking %s created for room %s: %s nights, total %s",
            booking.pk, room.pk, nights, total_price,
        )
        return booking

    def get_booking_by_id(self, booking_id) -> Booking:
        booking = self.bookings.find_by_id(booking_id)
        if booking is None:
            raise BookingNotFound("Booking not found")
        return booking

    def list_bookings(self, filters: BookingFilters) -> BookingPage:
        if filters.page < 1:
            raise InvalidBookingOperation("Page must be at least 1")
        if filters.limit < 1:
            raise InvalidBookingOperation("Limit must be at least 1")

        criteria = filters.to_criteria()
        offset = (filters.page - 1) * filters.limit

        # Two independent reads; total may lag behind the page under concurrent writes.
        bookings = self.bookings.find_matching(criteria, offset=offset, limit=filters.limit)
        total = self.bookings.count_matching(criteria)

        return BookingPage(
            bookings=bookings,
            pagination=Pagination(
                page=filters.page,
                limit=filters.limit,
                total=total,
                total_pages=math.ceil(total / filters.limit),
            ),
        )

    def update_booking(self, booking_id, changes: Mapping[str, Any]) -> Booking:
        """
        Apply changes to a booking

        Date changes re-check availability (ignoring this booking) and
        re-price the stay with the rate stored on the booking, never the
        room's current rate. Locks are taken room first, then booking.
        """
        unsupported = set(changes) - UPDATABLE_FIELDS
        if unsupported:
            raise InvalidBookingOperation(
                f"Fields cannot be updated: {', '.join(sorted(unsupported))}"
            )

        dates_changed = "check_in" in changes or "check_out" in changes
        cancelling = changes.get("status") == Booking.Status.CANCELLED

        if dates_changed and cancelling:
            raise InvalidBookingOperation("Cannot change dates of a booking being cancelled")

        with self.uow_factory():
            if dates_changed:
                current = self.bookings.find_by_id(booking_id)
                if current is None:
                    raise BookingNotFound("Booking not found")
                self.rooms.find_by_id(current.room_id, lock=True)

            booking = self._find_for_write(booking_id)

            if booking.is_cancelled:
                raise InvalidBookingOperation("Cannot update a cancelled booking")

            if cancelling and booking.is_completed:
                raise InvalidBookingOperation("Cannot cancel a completed booking")

            updates = dict(changes)

            if dates_changed:
                new_check_in = changes.get("check_in") or booking.check_in
                new_check_out = changes.get("check_out") or booking.check_out

                if not self.is_available(
                    booking.room_id,
                    new_check_in,
                    new_check_out,
                    exclude_booking_id=booking.pk,
                ):
                    logger.info("Rejected date change for booking %s: dates already taken", booking.pk)
                    raise BookingConflictError("Room is not available for the updated dates")

                nights = calculate_nights(new_check_in, new_check_out)
                updates.update(
                    check_in=new_check_in,
                    check_out=new_check_out,
                    total_nights=nights,
                    total_price=calculate_total_price(nights, booking.nightly_rate),
                )

            for field_name, value in updates.items():
                setattr(booking, field_name, value)

            if self.bookings.update(booking, updates.keys()) is None:
                raise InvalidBookingOperation("Cannot update a cancelled booking")

        logger.info("Booking %s updated: %s", booking.pk, ", ".join(sorted(updates)))
        return self.get_booking_by_id(booking.pk)

    def cancel_booking(self, booking_id) -> Booking:
        with self.uow_factory():
            booking = self._find_for_write(booking_id)

            if booking.is_cancelled:
                raise InvalidBookingOperation("Booking is already cancelled")

            if booking.is_completed:
                raise InvalidBookingOperation("Cannot cancel a completed booking")

            booking.status = Booking.Status.CANCELLED
            if self.bookings.update(booking, ["status"]) is None:
                raise InvalidBookingOperation("Booking is already cancelled")

        logger.info("Booking %s cancelled", booking.pk)
        return self.get_booking_by_id(booking.pk)

    def _find_for_write(self, booking_id) -> Booking:
        booking = self.bookings.find_by_id(booking_id, lock=True)
        if booking is None:
            raise BookingNotFound("Booking not found")
        return booking
