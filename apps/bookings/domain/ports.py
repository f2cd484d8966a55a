"""
Collaborator interfaces of the booking engine

The engine never touches the ORM directly. It reads rooms through a
RoomDirectory and reads/writes bookings through a BookingStore; the Django
implementations live in ``apps.rooms.repositories`` and
``apps.bookings.repositories``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, Any, Iterable, List, Optional, Protocol

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from apps.bookings.models import Booking
    from apps.rooms.models import Room


@dataclass(frozen=True)
class BookingCriteria:
    """Conjunctive filter over bookings; None means "don't filter"."""

    status: Optional[str] = None
    room_id: Optional[int] = None
    guest_email: Optional[str] = None
    check_in_from: Optional[date] = None
    check_out_to: Optional[date] = None


class RoomDirectory(Protocol):
    def find_by_id(self, room_id: Any, *, lock: bool = False) -> Optional["Room"]:
        """Return the room or None.

        With ``lock=True`` the room stays exclusively locked until the
        surrounding transaction ends.
        """
        ...


class BookingStore(Protocol):
    def find_by_id(self, booking_id: Any, *, lock: bool = False) -> Optional["Booking"]:
        """Return the booking or None; ``lock=True`` as for RoomDirectory."""
        ...

    def find_overlapping(
        self,
        room_id: Any,
        check_in: date,
        check_out: date,
        *,
        exclude_booking_id: Any = None,
    ) -> Optional["Booking"]:
        """First non-cancelled booking of the room intersecting [check_in, check_out)."""
        ...

    def find_matching(self, criteria: BookingCriteria, *, offset: int, limit: int) -> List["Booking"]:
        """Matching bookings, newest first."""
        ...

    def count_matching(self, criteria: BookingCriteria) -> int:
        ...

    def insert(self, **fields: Any) -> "Booking":
        ...

    def update(self, booking: "Booking", fields: Iterable[str]) -> Optional["Booking"]:
        """Write the given fields back.

        Returns None without writing when the stored row is already cancelled.
        """
        ...
