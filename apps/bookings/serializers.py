"""Serializers for the booking domain."""

from __future__ import annotations

from django.utils import timezone  # type: ignore

from rest_framework import serializers  # type: ignore

from apps.rooms.serializers import RoomSummarySerializer

from .application.booking_service import DEFAULT_PAGE_SIZE, BookingFilters, CreateBookingCommand
from .models import Booking

PHONE_REGEX = r"^\+?[1-9]\d{1,14}$"
MAX_GUESTS_PER_BOOKING = 10
MAX_PAGE_SIZE = 100


def _ensure_not_in_past(value):
    if value < timezone.localdate():
        raise serializers.ValidationError("Check-in date must not be in the past.")
    return value


class BookingCreateSerializer(serializers.Serializer):
    """Validates a new booking request and turns it into an engine command."""

    room = serializers.IntegerField(min_value=1)
    guest_name = serializers.CharField(min_length=2, max_length=100, trim_whitespace=True)
    guest_email = serializers.EmailField()
    guest_phone = serializers.RegexField(
        PHONE_REGEX,
        error_messages={"invalid": "Invalid phone number format."},
    )
    check_in = serializers.DateField()
    check_out = serializers.DateField()
    guests_count = serializers.IntegerField(min_value=1, max_value=MAX_GUESTS_PER_BOOKING, default=1)
    special_requests = serializers.CharField(max_length=200, required=False, allow_blank=True, default="")

    def validate_check_in(self, value):  # type: ignore
        return _ensure_not_in_past(value)

    def validate(self, attrs):  # type: ignore
        if attrs["check_out"] <= attrs["check_in"]:
            raise serializers.ValidationError({"check_out": "Check-out date must be after check-in date."})
        return attrs

    def to_command(self) -> CreateBookingCommand:
        data = self.validated_data
        return CreateBookingCommand(
            room_id=data["room"],
            guest_name=data["guest_name"],
            guest_email=data["guest_email"],
            guest_phone=data["guest_phone"],
            check_in=data["check_in"],
            check_out=data["check_out"],
            guests_count=data["guests_count"],
            special_requests=data["special_requests"],
        )


class BookingUpdateSerializer(serializers.Serializer):
    """Partial update of a booking; only supplied fields reach the engine."""

    check_in = serializers.DateField(required=False)
    check_out = serializers.DateField(required=False)
    guests_count = serializers.IntegerField(min_value=1, max_value=MAX_GUESTS_PER_BOOKING, required=False)
    special_requests = serializers.CharField(max_length=500, required=False, allow_blank=True)
    status = serializers.ChoiceField(choices=Booking.Status.choices, required=False)

    def validate_check_in(self, value):  # type: ignore
        return _ensure_not_in_past(value)

    def validate(self, attrs):  # type: ignore
        if not attrs:
            raise serializers.ValidationError("No changes supplied.")
        check_in = attrs.get("check_in")
        check_out = attrs.get("check_out")
        if check_in and check_out and check_out <= check_in:
            raise serializers.ValidationError({"check_out": "Check-out date must be after check-in date."})
        return attrs


class BookingQuerySerializer(serializers.Serializer):
    """Query string of the booking list."""

    status = serializers.ChoiceField(choices=Booking.Status.choices, required=False)
    room = serializers.IntegerField(min_value=1, required=False)
    guest_email = serializers.EmailField(required=False)
    check_in = serializers.DateField(required=False)
    check_out = serializers.DateField(required=False)
    page = serializers.IntegerField(min_value=1, default=1)
    limit = serializers.IntegerField(min_value=1, max_value=MAX_PAGE_SIZE, default=DEFAULT_PAGE_SIZE)

    def to_filters(self) -> BookingFilters:
        data = self.validated_data
        return BookingFilters(
            status=data.get("status"),
            room_id=data.get("room"),
            guest_email=data.get("guest_email"),
            check_in_from=data.get("check_in"),
            check_out_to=data.get("check_out"),
            page=data["page"],
            limit=data["limit"],
        )


class BookingSerializer(serializers.ModelSerializer):
    """Booking with its room attached."""

    room = RoomSummarySerializer(read_only=True)

    class Meta:
        model = Booking
        fields = [
            "id",
            "room",
            "guest_name",
            "guest_email",
            "guest_phone",
            "check_in",
            "check_out",
            "guests_count",
            "total_nights",
            "nightly_rate",
            "total_price",
            "status",
            "special_requests",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
