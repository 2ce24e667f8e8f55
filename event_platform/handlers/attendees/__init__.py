"""
Attendee CQRS APIs

Queries: listing of an event's attendees and single lookups by email.
Commands: self-service and manual registration, detail updates,
verification and deletion.
"""

from .queries import AttendeeReadApi
from .commands import AttendeeWriteApi

__all__ = [
    "AttendeeReadApi",
    "AttendeeWriteApi",
]
