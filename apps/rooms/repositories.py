"""Django-backed room directory used by the booking engine."""

from __future__ import annotations

from django.db import transaction  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore

from .models import Room


def _lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection(queryset.db).in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


class DjangoRoomDirectory:
    """Looks rooms up by primary key.

    ``lock=True`` takes a row lock on the room for the rest of the current
    transaction; booking writes for the same room serialize on it.
    """

    def find_by_id(self, room_id, *, lock: bool = False) -> Room | None:
        queryset = Room.objects.filter(pk=room_id)
        if lock:
            queryset = _lock_queryset_if_possible(queryset)
        return queryset.first()
