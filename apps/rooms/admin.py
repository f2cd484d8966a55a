"""Admin registration for rooms."""

from __future__ import annotations

from django.contrib import admin

from .models import Room


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = (
        "room_number",
        "room_type",
        "price_per_night",
        "max_guests",
        "is_active",
        "updated_at",
    )
    list_filter = ("is_active", "room_type")
    search_fields = ("room_number", "room_type")
    readonly_fields = ("created_at", "updated_at")
