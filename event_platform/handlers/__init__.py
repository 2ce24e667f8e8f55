"""
Domain APIs

Each subpackage exposes a read API (queries) and a write API (commands)
built on the gateways held by Dependencies.

- events: event records in the FAD and EVENT partitions
- attendees: attendee registrations and lifecycle
- participants: participant registrations
- files: quiz documents and uploads in the bucket
- attendee_counter: stream processor for attendeeCount
"""

from .events import EventReadApi, EventWriteApi
from .attendees import AttendeeReadApi, AttendeeWriteApi
from .participants import ParticipantReadApi, ParticipantWriteApi
from .files import FileReadApi, FileWriteApi
from .attendee_counter import AttendeeCounterProcessor, BatchSummary

__all__ = [
    "EventReadApi",
    "EventWriteApi",
    "AttendeeReadApi",
    "AttendeeWriteApi",
    "ParticipantReadApi",
    "ParticipantWriteApi",
    "FileReadApi",
    "FileWriteApi",
    "AttendeeCounterProcessor",
    "BatchSummary",
]
