"""Night and price arithmetic for bookings."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from shared.domain.value_objects import DateRange

from .exceptions import InvalidBookingOperation


def calculate_nights(check_in: date, check_out: date) -> int:
    """Number of nights between check-in and check-out, partial days rounded up."""
    try:
        return DateRange(check_in, check_out).nights
    except ValueError:
        raise InvalidBookingOperation("Check-out date must be after check-in date") from None


def calculate_total_price(nights: int, nightly_rate) -> Decimal:
    """Total is always nights times the rate stored on the booking."""
    return Decimal(nights) * Decimal(nightly_rate)
