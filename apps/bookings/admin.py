"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "room",
        "guest_name",
        "guest_email",
        "status",
        "check_in",
        "check_out",
        "total_price",
        "created_at",
    )
    list_filter = ("status", "check_in", "check_out")
    search_fields = ("guest_name", "guest_email", "room__room_number")
    readonly_fields = (
        "created_at",
        "updated_at",
        "total_price",
        "total_nights",
        "nightly_rate",
    )
