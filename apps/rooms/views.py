"""Room API views."""

from __future__ import annotations

import logging

from django.db.models import ProtectedError  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import status, viewsets  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore
from rest_framework.response import Response  # type: ignore

from .filters import RoomFilterSet
from .models import Room
from .serializers import RoomSerializer

logger = logging.getLogger(__name__)


class RoomViewSet(viewsets.ModelViewSet):
    """CRUD over the room inventory."""

    queryset = Room.objects.all()
    serializer_class = RoomSerializer
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = RoomFilterSet
    ordering_fields = [
        "price_per_night",
        "room_number",
        "max_guests",
    ]

    def destroy(self, request, *args, **kwargs):  # type: ignore
        room: Room = self.get_object()  # type: ignore
        try:
            room.delete()
        except ProtectedError:
            return Response(
                {"detail": "Room has bookings and cannot be deleted. Deactivate it instead."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        logger.info("Room %s deleted", room.room_number)
        return Response(status=status.HTTP_204_NO_CONTENT)
