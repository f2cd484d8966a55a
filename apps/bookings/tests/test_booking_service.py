from datetime import date, timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from apps.bookings.application.booking_service import (
    BookingFilters,
    BookingService,
    CreateBookingCommand,
)
from apps.bookings.domain.exceptions import (
    BookingConflictError,
    BookingNotFound,
    InvalidBookingOperation,
    RoomNotFound,
)
from apps.bookings.models import Booking
from apps.bookings.repositories import DjangoBookingStore
from apps.bookings.services import get_booking_service
from apps.rooms.models import Room
from apps.rooms.repositories import DjangoRoomDirectory
from shared.application.uow import AbstractUnitOfWork


@pytest.fixture
def room():
    return Room.objects.create(
        room_number="201",
        room_type="double",
        price_per_night=Decimal("1000.00"),
        max_guests=2,
    )


@pytest.fixture
def service():
    return get_booking_service()


@pytest.fixture
def jan_1():
    return date(timezone.localdate().year + 1, 1, 1)


def command(room, check_in, check_out, **overrides):
    data = dict(
        room_id=room.pk,
        guest_name="Asha Verma",
        guest_email="asha@example.com",
        guest_phone="+919876543210",
        check_in=check_in,
        check_out=check_out,
        guests_count=2,
    )
    data.update(overrides)
    return CreateBookingCommand(**data)


@pytest.mark.django_db
def test_new_year_scenario(service, room, jan_1):
    first = service.create_booking(command(room, jan_1, jan_1 + timedelta(days=2)))

    assert first.total_nights == 2
    assert first.total_price == Decimal("2000")
    assert first.status == Booking.Status.PENDING
    assert first.room.room_number == "201"

    with pytest.raises(BookingConflictError):
        service.create_booking(command(room, jan_1 + timedelta(days=1), jan_1 + timedelta(days=3)))

    service.cancel_booking(first.pk)

    second = service.create_booking(command(room, jan_1 + timedelta(days=1), jan_1 + timedelta(days=3)))
    assert second.status == Booking.Status.PENDING


@pytest.mark.django_db
def test_availability_uses_half_open_ranges(service, room, jan_1):
    booking = service.create_booking(command(room, jan_1, jan_1 + timedelta(days=3)))

    assert service.is_available(room.pk, jan_1 + timedelta(days=3), jan_1 + timedelta(days=5))
    assert service.is_available(room.pk, jan_1 - timedelta(days=2), jan_1)
    assert not service.is_available(room.pk, jan_1 + timedelta(days=2), jan_1 + timedelta(days=4))
    assert not service.is_available(room.pk, jan_1 - timedelta(days=1), jan_1 + timedelta(days=5))
    assert service.is_available(room.pk, jan_1, jan_1 + timedelta(days=3), exclude_booking_id=booking.pk)


@pytest.mark.django_db
def test_confirmed_and_completed_bookings_still_block(service, room, jan_1):
    booking = service.create_booking(command(room, jan_1, jan_1 + timedelta(days=2)))

    for blocking_status in (Booking.Status.CONFIRMED, Booking.Status.COMPLETED):
        Booking.objects.filter(pk=booking.pk).update(status=blocking_status)
        assert not service.is_available(room.pk, jan_1, jan_1 + timedelta(days=1))


@pytest.mark.django_db
def test_create_checks_run_in_order(service, room, jan_1):
    with pytest.raises(RoomNotFound):
        service.create_booking(command(room, jan_1, jan_1 + timedelta(days=1), room_id=room.pk + 100))

    room.is_active = False
    room.save()
    # Inactive wins over the capacity problem.
    with pytest.raises(InvalidBookingOperation, match="not available for booking"):
        service.create_booking(command(room, jan_1, jan_1 + timedelta(days=1), guests_count=5))

    room.is_active = True
    room.save()
    with pytest.raises(InvalidBookingOperation, match="more than 2 guests"):
        service.create_booking(command(room, jan_1, jan_1 + timedelta(days=1), guests_count=3))


@pytest.mark.django_db
def test_inverted_range_is_rejected(service, room, jan_1):
    with pytest.raises(InvalidBookingOperation, match="Check-out date must be after check-in date"):
        service.create_booking(command(room, jan_1 + timedelta(days=2), jan_1))

    assert Booking.objects.count() == 0


@pytest.mark.django_db
def test_room_price_change_never_touches_existing_booking(service, room, jan_1):
    booking = service.create_booking(command(room, jan_1, jan_1 + timedelta(days=2)))
    room.price_per_night = Decimal("5000.00")
    room.save()

    updated = service.update_booking(booking.pk, {"check_in": jan_1 + timedelta(days=1), "check_out": jan_1 + timedelta(days=5)})

    assert updated.nightly_rate == Decimal("1000")
    assert updated.total_nights == 4
    assert updated.total_price == Decimal("4000")


@pytest.mark.django_db
def test_update_with_single_date_falls_back_to_stored_value(service, room, jan_1):
    booking = service.create_booking(command(room, jan_1, jan_1 + timedelta(days=2)))

    updated = service.update_booking(booking.pk, {"check_out": jan_1 + timedelta(days=4)})

    assert updated.check_in == jan_1
    assert updated.total_nights == 4

    with pytest.raises(InvalidBookingOperation):
        service.update_booking(booking.pk, {"check_in": jan_1 + timedelta(days=6)})


@pytest.mark.django_db
def test_completed_booking_is_still_updatable(service, room, jan_1):
    booking = service.create_booking(command(room, jan_1, jan_1 + timedelta(days=2)))
    Booking.objects.filter(pk=booking.pk).update(status=Booking.Status.COMPLETED)

    updated = service.update_booking(booking.pk, {"special_requests": "Invoice to company"})

    assert updated.special_requests == "Invoice to company"
    assert updated.status == Booking.Status.COMPLETED

    with pytest.raises(InvalidBookingOperation, match="Cannot cancel a completed booking"):
        service.update_booking(booking.pk, {"status": Booking.Status.CANCELLED})


@pytest.mark.django_db
def test_update_rejects_unknown_fields(service, room, jan_1):
    booking = service.create_booking(command(room, jan_1, jan_1 + timedelta(days=2)))

    with pytest.raises(InvalidBookingOperation, match="nightly_rate"):
        service.update_booking(booking.pk, {"nightly_rate": Decimal("1")})


@pytest.mark.django_db
def test_lifecycle_errors(service, room, jan_1):
    with pytest.raises(BookingNotFound):
        service.get_booking_by_id(12345)
    with pytest.raises(BookingNotFound):
        service.update_booking(12345, {"guests_count": 1})
    with pytest.raises(BookingNotFound):
        service.cancel_booking(12345)

    booking = service.create_booking(command(room, jan_1, jan_1 + timedelta(days=2)))
    service.cancel_booking(booking.pk)

    with pytest.raises(InvalidBookingOperation, match="already cancelled"):
        service.cancel_booking(booking.pk)
    with pytest.raises(InvalidBookingOperation, match="Cannot update a cancelled booking"):
        service.update_booking(booking.pk, {"guests_count": 1})


@pytest.mark.django_db
def test_list_pagination(service, room, jan_1):
    for i in range(15):
        check_in = jan_1 + timedelta(days=2 * i)
        service.create_booking(command(room, check_in, check_in + timedelta(days=1)))

    page = service.list_bookings(BookingFilters(room_id=room.pk, limit=10, page=2))

    assert len(page.bookings) == 5
    assert page.pagination.total == 15
    assert page.pagination.total_pages == 2

    with pytest.raises(InvalidBookingOperation):
        service.list_bookings(BookingFilters(page=0))


class RecordingUnitOfWork(AbstractUnitOfWork):
    log = []

    def commit(self):
        self.log.append("commit")

    def rollback(self):
        self.log.append("rollback")


@pytest.mark.django_db
def test_writes_run_inside_unit_of_work(room, jan_1):
    RecordingUnitOfWork.log = []
    service = BookingService(
        rooms=DjangoRoomDirectory(),
        bookings=DjangoBookingStore(),
        uow_factory=RecordingUnitOfWork,
    )

    service.create_booking(command(room, jan_1, jan_1 + timedelta(days=2)))
    with pytest.raises(BookingConflictError):
        service.create_booking(command(room, jan_1, jan_1 + timedelta(days=2)))

    assert RecordingUnitOfWork.log == ["commit", "rollback"]


class CancelledAfterReadStore(DjangoBookingStore):
    """Cancels the row right after the locked read, like a racing cancel would."""

    def find_by_id(self, booking_id, *, lock=False):
        booking = super().find_by_id(booking_id, lock=lock)
        if lock and booking is not None:
            Booking.objects.filter(pk=booking.pk).update(status=Booking.Status.CANCELLED)
        return booking


@pytest.fixture
def racing_service():
    # No savepoint, so the simulated cancel survives the failed write.
    return BookingService(
        rooms=DjangoRoomDirectory(),
        bookings=CancelledAfterReadStore(),
        uow_factory=RecordingUnitOfWork,
    )


@pytest.mark.django_db
def test_update_never_writes_onto_a_cancelled_row(service, racing_service, room, jan_1):
    booking = service.create_booking(command(room, jan_1, jan_1 + timedelta(days=2)))

    with pytest.raises(InvalidBookingOperation, match="Cannot update a cancelled booking"):
        racing_service.update_booking(booking.pk, {"check_out": jan_1 + timedelta(days=5)})

    booking.refresh_from_db()
    assert booking.status == Booking.Status.CANCELLED
    assert booking.check_out == jan_1 + timedelta(days=2)
    assert booking.total_nights == 2
    assert booking.total_price == Decimal("2000")


@pytest.mark.django_db
def test_cancel_reports_a_cancel_that_won_the_race(service, racing_service, room, jan_1):
    booking = service.create_booking(command(room, jan_1, jan_1 + timedelta(days=2)))

    with pytest.raises(InvalidBookingOperation, match="already cancelled"):
        racing_service.cancel_booking(booking.pk)


@pytest.mark.django_db
def test_cancelling_with_new_dates_is_rejected(service, room, jan_1):
    booking = service.create_booking(command(room, jan_1, jan_1 + timedelta(days=2)))
    service.create_booking(command(room, jan_1 + timedelta(days=2), jan_1 + timedelta(days=4)))

    with pytest.raises(InvalidBookingOperation, match="Cannot change dates"):
        service.update_booking(
            booking.pk,
            {"status": Booking.Status.CANCELLED, "check_out": jan_1 + timedelta(days=4)},
        )

    booking.refresh_from_db()
    assert booking.status == Booking.Status.PENDING

    cancelled = service.update_booking(booking.pk, {"status": Booking.Status.CANCELLED})
    assert cancelled.status == Booking.Status.CANCELLED


class RecordingRoomDirectory(DjangoRoomDirectory):
    def __init__(self, calls):
        self.calls = calls

    def find_by_id(self, room_id, *, lock=False):
        self.calls.append(("room", lock))
        return super().find_by_id(room_id, lock=lock)


class RecordingBookingStore(DjangoBookingStore):
    def __init__(self, calls):
        self.calls = calls

    def find_by_id(self, booking_id, *, lock=False):
        self.calls.append(("booking", lock))
        return super().find_by_id(booking_id, lock=lock)


@pytest.mark.django_db
def test_writes_lock_room_before_booking(room, jan_1):
    calls = []
    service = BookingService(rooms=RecordingRoomDirectory(calls), bookings=RecordingBookingStore(calls))

    booking = service.create_booking(command(room, jan_1, jan_1 + timedelta(days=2)))
    assert calls == [("room", True)]

    calls.clear()
    service.update_booking(booking.pk, {"check_out": jan_1 + timedelta(days=3)})
    assert calls[:3] == [("booking", False), ("room", True), ("booking", True)]

    calls.clear()
    service.update_booking(booking.pk, {"special_requests": "Late arrival"})
    assert calls[0] == ("booking", True)
    assert ("room", True) not in calls

    calls.clear()
    service.cancel_booking(booking.pk)
    assert calls[0] == ("booking", True)
