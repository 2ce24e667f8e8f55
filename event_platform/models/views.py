"""
Read-Optimized View Models

Projections returned by the list endpoints. Table keys are dropped and
records written before ``registrationType`` existed read as self-service.
"""

from typing import Any, Dict, Optional

from pydantic import ConfigDict, Field

from .base import CamelModel, DynamoDBMixin


class _RegistrationView(DynamoDBMixin, CamelModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    event_slug: Optional[str] = None
    event_type: Optional[str] = None
    payment_screenshot_key: Optional[str] = None
    attendance_status: Optional[str] = None
    registration_date: Optional[str] = None
    registration_type: str = Field("self-service", description="Missing on legacy records")
    registered_by: Optional[str] = None

    model_config = ConfigDict(extra='ignore')

    def to_response(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class AttendeeView(_RegistrationView):
    """Attendee as listed by ``GET /events/{eventSlug}/attendees``."""

    profession: Optional[str] = None


class ParticipantView(_RegistrationView):
    """Participant as listed by ``GET /events/{eventSlug}/participants``."""
