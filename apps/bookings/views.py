"""API views for the booking domain."""

from __future__ import annotations

from dataclasses import asdict

from rest_framework import exceptions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from .domain.exceptions import BookingConflictError, BookingError, NotFoundError
from .serializers import (
    BookingCreateSerializer,
    BookingQuerySerializer,
    BookingSerializer,
    BookingUpdateSerializer,
)
from .services import get_booking_service


class BookingRejected(exceptions.APIException):
    """A booking rule or an overlap turned the request down."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Booking request rejected."
    default_code = "invalid"


class BookingViewSet(viewsets.ViewSet):
    """Create, read, update and cancel bookings.

    Thin HTTP adapter: requests are validated here and handed to the booking
    engine, whose errors are mapped onto 404 / 400 responses.
    """

    lookup_value_regex = r"\d+"

    def get_service(self):
        return get_booking_service()

    def handle_exception(self, exc):  # type: ignore
        if isinstance(exc, NotFoundError):
            exc = exceptions.NotFound(str(exc))
        elif isinstance(exc, BookingConflictError):
            exc = BookingRejected(str(exc), code="conflict")
        elif isinstance(exc, BookingError):
            exc = BookingRejected(str(exc))
        return super().handle_exception(exc)

    def list(self, request):  # type: ignore
        query = BookingQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        page = self.get_service().list_bookings(query.to_filters())
        return Response(
            {
                "bookings": BookingSerializer(page.bookings, many=True).data,
                "pagination": asdict(page.pagination),
            }
        )

    def create(self, request):  # type: ignore
        serializer = BookingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = self.get_service().create_booking(serializer.to_command())
        return Response(BookingSerializer(booking).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):  # type: ignore
        booking = self.get_service().get_booking_by_id(pk)
        return Response(BookingSerializer(booking).data)

    def partial_update(self, request, pk=None):  # type: ignore
        serializer = BookingUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = self.get_service().update_booking(pk, serializer.validated_data)
        return Response(BookingSerializer(booking).data)

    def destroy(self, request, pk=None):  # type: ignore
        # Bookings are never deleted; DELETE is a cancellation.
        return self.cancel(request, pk=pk)

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):  # type: ignore
        booking = self.get_service().cancel_booking(pk)
        return Response(BookingSerializer(booking).data, status=status.HTTP_200_OK)
