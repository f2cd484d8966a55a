"""Serializers for the room inventory."""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers  # type: ignore

from .models import Room


class RoomSerializer(serializers.ModelSerializer):
    price_per_night = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=Decimal("0.01"),
    )
    max_guests = serializers.IntegerField(min_value=1, max_value=32767)

    class Meta:
        model = Room
        fields = [
            "id",
            "room_number",
            "room_type",
            "price_per_night",
            "max_guests",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]


class RoomSummarySerializer(serializers.ModelSerializer):
    """Compact room details attached to booking payloads."""

    class Meta:
        model = Room
        fields = [
            "id",
            "room_number",
            "room_type",
            "price_per_night",
            "max_guests",
            "is_active",
        ]
        read_only_fields = fields
