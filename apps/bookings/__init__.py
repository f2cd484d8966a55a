"""Bookings app package.

This app encapsulates the booking domain: the booking model, the booking
engine (availability checks, night and price computation, lifecycle
transitions) and the REST endpoints in front of it. Writes for a room are
serialized by locking the room row inside the booking transaction.
"""
