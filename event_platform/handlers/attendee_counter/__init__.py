"""Stream processor keeping each event's attendeeCount in step with its attendee records."""

from .processor import AttendeeCounterProcessor, BatchSummary

__all__ = [
    "AttendeeCounterProcessor",
    "BatchSummary",
]
