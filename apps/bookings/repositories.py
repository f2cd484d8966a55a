"""Django-backed booking store used by the booking engine."""

from __future__ import annotations

from typing import Iterable, List

from django.db.models import Q  # type: ignore
from django.utils import timezone  # type: ignore

from apps.rooms.repositories import _lock_queryset_if_possible

from .domain.ports import BookingCriteria
from .models import Booking


class DjangoBookingStore:
    """Booking persistence on top of the Django ORM."""

    def _queryset(self):
        return Booking.objects.select_related("room")

    def find_by_id(self, booking_id, *, lock: bool = False) -> Booking | None:
        if lock:
            # Lock the booking row only; the room is locked separately when needed.
            return _lock_queryset_if_possible(Booking.objects.filter(pk=booking_id)).first()
        return self._queryset().filter(pk=booking_id).first()

    def find_overlapping(self, room_id, check_in, check_out, *, exclude_booking_id=None) -> Booking | None:
        overlapping_filter = Q(check_in__lt=check_out) & Q(check_out__gt=check_in)

        bookings_qs = (
            Booking.objects.filter(room_id=room_id)
            .exclude(status=Booking.Status.CANCELLED)
            .filter(overlapping_filter)
        )

        if exclude_booking_id is not None:
            bookings_qs = bookings_qs.exclude(pk=exclude_booking_id)

        return bookings_qs.order_by("check_in").first()

    def _filter(self, criteria: BookingCriteria):
        queryset = self._queryset()
        if criteria.status:
            queryset = queryset.filter(status=criteria.status)
        if criteria.room_id is not None:
            queryset = queryset.filter(room_id=criteria.room_id)
        if criteria.guest_email:
            queryset = queryset.filter(guest_email=criteria.guest_email.strip().lower())
        if criteria.check_in_from:
            queryset = queryset.filter(check_in__gte=criteria.check_in_from)
        if criteria.check_out_to:
            queryset = queryset.filter(check_out__lte=criteria.check_out_to)
        return queryset

    def find_matching(self, criteria: BookingCriteria, *, offset: int, limit: int) -> List[Booking]:
        queryset = self._filter(criteria).order_by("-created_at", "-id")
        return list(queryset[offset:offset + limit])

    def count_matching(self, criteria: BookingCriteria) -> int:
        return self._filter(criteria).count()

    def insert(self, **fields) -> Booking:
        booking = Booking.objects.create(**fields)
        # Re-read so the caller gets the room attached the same way as lookups do.
        return self._queryset().get(pk=booking.pk)

    def update(self, booking: Booking, fields: Iterable[str]) -> Booking | None:
        update_fields = set(fields)
        if not update_fields:
            return booking

        booking.updated_at = timezone.now()
        update_fields.add("updated_at")
        written = (
            Booking.objects.filter(pk=booking.pk)
            .exclude(status=Booking.Status.CANCELLED)
            .update(**{name: getattr(booking, name) for name in update_fields})
        )
        if not written:
            return None
        return booking
