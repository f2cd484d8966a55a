"""Celery tasks for the booking domain."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore
from django.utils import timezone  # type: ignore

from .models import Booking

logger = logging.getLogger(__name__)


# ============================================================================
# PERIODIC TASKS (scheduled through Celery Beat)
# ============================================================================

@shared_task(name="bookings.complete_finished_bookings")
def complete_finished_bookings() -> dict[str, int]:
    """
    Complete bookings once the guest has checked out.

    Confirmed bookings whose check_out is today or earlier move to COMPLETED.
    Pending bookings are left alone; nobody confirmed them.

    Runs every hour.

    Returns:
        dict: {"completed": number of completed bookings}
    """
    today = timezone.localdate()
    completed_count = 0

    bookings_to_complete = Booking.objects.filter(
        status=Booking.Status.CONFIRMED,
        check_out__lte=today,
    )

    for booking in bookings_to_complete:
        booking.status = Booking.Status.COMPLETED
        booking.save(update_fields=["status", "updated_at"])
        completed_count += 1
        logger.info(f"Booking {booking.pk} completed")

    if completed_count > 0:
        logger.info(f"Completed {completed_count} bookings")

    return {"completed": completed_count}
