"""Room inventory models."""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Room(models.Model):
    """Hotel room offered for nightly booking."""

    room_number = models.CharField(max_length=20, unique=True)
    room_type = models.CharField(
        max_length=50,
        help_text=_("Free-form category, e.g. single, double, suite."),
    )
    price_per_night = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    max_guests = models.PositiveSmallIntegerField(
        default=1,
        validators=[MinValueValidator(1)],
    )
    is_active = models.BooleanField(
        default=True,
        help_text=_("Inactive rooms reject new bookings."),
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Room")
        verbose_name_plural = _("Rooms")
        ordering = ["room_number"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price_per_night__gt=0),
                name="room_positive_price",
            ),
            models.CheckConstraint(
                condition=models.Q(max_guests__gte=1),
                name="room_min_one_guest",
            ),
        ]

    def __str__(self) -> str:
        return f"Room {self.room_number}"
