"""FilterSet definitions for room listing."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Room


class RoomFilterSet(django_filters.FilterSet):
    """Filters for the public room list."""

    room_type = django_filters.CharFilter(field_name="room_type", lookup_expr="iexact")
    guests = django_filters.NumberFilter(field_name="max_guests", lookup_expr="gte")
    price_min = django_filters.NumberFilter(field_name="price_per_night", lookup_expr="gte")
    price_max = django_filters.NumberFilter(field_name="price_per_night", lookup_expr="lte")

    class Meta:
        model = Room
        fields = [
            "is_active",
            "room_type",
        ]
