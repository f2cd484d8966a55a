"""Rooms app package.

Holds the hotel room inventory: room numbers, capacity, nightly rates and
whether a room currently accepts bookings. The booking engine reads rooms
through the directory in ``repositories`` and never writes them.
"""
