"""
Test helpers for the event platform.

Builders for API Gateway HTTP API events, DynamoDB Stream records and
multipart bodies, plus shortcuts for seeding the mocked table.
"""

from .events import (
    api_event,
    multipart_body,
    response_json,
    stream_record,
)
from .seed import (
    seed_attendee,
    seed_event,
)

__all__ = [
    'api_event',
    'multipart_body',
    'response_json',
    'stream_record',
    'seed_attendee',
    'seed_event',
]
