"""Data access layer repositories."""

from . import bookings, tasks, working_hours

__all__ = [
    "bookings",
    "tasks",
    "working_hours",
]
