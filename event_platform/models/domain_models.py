"""
Domain Models for the Event Platform

Core entities stored in the single platform table. Every record is addressed
by ``pk`` + ``sk``:

| Entity      | pk                        | sk                       |
|-------------|---------------------------|--------------------------|
| Event       | ``FAD`` or ``EVENT``      | ``{slug}#{creationDate}``|
| Attendee    | ``{eventSlug}#ATTENDEE``  | ``{email}``              |
| Participant | ``{eventSlug}#PARTICIPANT``| ``{email}``             |

Organized by domain:
1. Enums and key builders
2. Event Models
3. Registration Models (attendees and participants)
"""

from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional

from pydantic import Field

from ..exceptions import ValidationError
from .base import CamelModel, DynamoDBMixin

ATTENDEE_SUFFIX = "#ATTENDEE"
PARTICIPANT_SUFFIX = "#PARTICIPANT"


# =============================================================================
# Enums and key builders
# =============================================================================

class EventType(str, Enum):
    """Event partitions. Path parameters arrive lower-case (``fad``)."""
    FAD = "FAD"
    EVENT = "EVENT"

    @classmethod
    def parse(cls, value: Optional[str], parameter: str = "eventType") -> "EventType":
        """Upper-case and coerce a request value into an EventType.

        Raises:
            ValidationError: The value is missing or not one of fad/event
        """
        try:
            return cls((value or "").strip().upper())
        except ValueError as e:
            raise ValidationError(
                f"Invalid {parameter} parameter. Must be 'fad' or 'event'",
                errors={parameter: value},
                original_error=e
            ) from e

    @classmethod
    def probe_order(cls, preferred: Optional[str] = None) -> List["EventType"]:
        """Partitions to search for an event, the preferred one first when valid."""
        order = [cls.FAD, cls.EVENT]
        try:
            hint = cls((preferred or "").upper())
        except ValueError:
            return order
        return [hint] + [event_type for event_type in order if event_type is not hint]


class AttendanceStatus(str, Enum):
    PENDING = "PENDING"
    VERIFIED = "VERIFIED"


class RegistrationType(str, Enum):
    SELF_SERVICE = "self-service"
    MANUAL = "manual"


def event_sort_key(slug: str, creation_date: str) -> str:
    return f"{slug}#{creation_date}"


def event_sort_key_prefix(slug: str) -> str:
    """Prefix matching every sort key of one event and no other slug."""
    return f"{slug}#"


def attendee_partition_key(event_slug: str) -> str:
    return f"{event_slug}{ATTENDEE_SUFFIX}"


def participant_partition_key(event_slug: str) -> str:
    return f"{event_slug}{PARTICIPANT_SUFFIX}"


def slug_from_attendee_partition_key(pk: Optional[str]) -> Optional[str]:
    """Event slug of an attendee partition key, or None for any other record."""
    if not isinstance(pk, str) or not pk.endswith(ATTENDEE_SUFFIX):
        return None
    return pk[:-len(ATTENDEE_SUFFIX)] or None


# =============================================================================
# Event Models
# =============================================================================

class EventScheduleItem(CamelModel):
    time: Optional[str] = Field(None, description="Slot time, e.g. '09:00'")
    title: Optional[str] = Field(None, description="Slot title")


class EventReferee(CamelModel):
    title: Optional[str] = Field(None, description="Referee title, e.g. 'Dr.'")
    full_name: Optional[str] = Field(None, description="Referee full name")
    linkedin_url: Optional[str] = Field(None, description="LinkedIn profile URL")


class EventExtraInfo(CamelModel):
    room_reservation: Optional[bool] = Field(None, description="Room reservation offered")
    air_transfer: Optional[bool] = Field(None, description="Airport transfer offered")
    dinner_confirmation: Optional[bool] = Field(None, description="Dinner confirmation required")


class Event(DynamoDBMixin, CamelModel):
    """
    Core domain model for an event record.

    ``attendee_count`` is owned by the attendee counter; creation starts it at
    zero and nothing else in the request path writes it.
    """

    pk: EventType = Field(..., description="Event partition (FAD or EVENT)")
    sk: str = Field(..., description="'{slug}#{creationDate}'")

    event_type: EventType = Field(..., description="Same value as pk")
    slug: str = Field(..., description="URL-safe event identifier")
    creation_date: str = Field(..., description="Creation date chosen by the client")
    title: str = Field(..., description="Event title")
    description: Optional[str] = Field(None, description="Event description")

    from_: Optional[str] = Field(None, alias="from", description="Start date/time")
    to: Optional[str] = Field(None, description="End date/time")
    location: Optional[str] = Field(None, description="Venue")
    asset_url: Optional[str] = Field(None, description="Cover asset URL")
    training_url: Optional[str] = Field(None, description="Training material URL")
    credit_number: Optional[Decimal] = Field(None, description="Credits awarded for attendance")

    event_schedule: List[EventScheduleItem] = Field(default_factory=list, description="Agenda")
    referees: List[EventReferee] = Field(default_factory=list, description="Speakers")
    extra_info: Optional[EventExtraInfo] = Field(None, description="Logistics flags")

    attendee_count: int = Field(0, ge=0, description="Denormalized number of attendee records")

    updated_date: Optional[str] = Field(None, description="Last update timestamp")
    updated_by: Optional[str] = Field(None, description="User who last updated the event")

    @classmethod
    def key_for(cls, event_type: EventType, slug: str, creation_date: str) -> Dict[str, str]:
        return {'pk': EventType(event_type).value, 'sk': event_sort_key(slug, creation_date)}


# =============================================================================
# Registration Models
# =============================================================================

class Attendee(DynamoDBMixin, CamelModel):
    """
    An attendee of one event, keyed by email within the event's attendee partition.

    Status only moves PENDING → VERIFIED; manual registrations start VERIFIED.
    """

    pk: str = Field(..., description="'{eventSlug}#ATTENDEE'")
    sk: str = Field(..., description="Attendee email")

    first_name: str = Field(..., description="First name")
    last_name: str = Field(..., description="Last name")
    email: str = Field(..., description="Email, also the sort key")
    phone: Optional[str] = Field(None, description="Phone number")
    profession: Optional[str] = Field(None, description="Profession")

    event_slug: str = Field(..., description="Slug of the owning event")
    event_type: Optional[EventType] = Field(None, description="Partition of the owning event")
    payment_screenshot_key: Optional[str] = Field(None, description="S3 key of the payment proof")

    attendance_status: AttendanceStatus = Field(AttendanceStatus.PENDING, description="PENDING or VERIFIED")
    registration_date: str = Field(..., description="Registration timestamp")
    registration_type: RegistrationType = Field(RegistrationType.SELF_SERVICE, description="How the attendee registered")
    registered_by: Optional[str] = Field(None, description="Admin who registered a manual attendee")

    updated_date: Optional[str] = Field(None, description="Last update timestamp")
    updated_by: Optional[str] = Field(None, description="User who last updated the record")
    verified_date: Optional[str] = Field(None, description="Verification timestamp")
    verified_by: Optional[str] = Field(None, description="User who verified the attendee")

    @classmethod
    def key_for(cls, event_slug: str, email: str) -> Dict[str, str]:
        return {'pk': attendee_partition_key(event_slug), 'sk': email}


class Participant(DynamoDBMixin, CamelModel):
    """A participant of one event. Mirrors Attendee without profession or payment proof."""

    pk: str = Field(..., description="'{eventSlug}#PARTICIPANT'")
    sk: str = Field(..., description="Participant email")

    first_name: str = Field(..., description="First name")
    last_name: str = Field(..., description="Last name")
    email: str = Field(..., description="Email, also the sort key")
    phone: Optional[str] = Field(None, description="Phone number")

    event_slug: str = Field(..., description="Slug of the owning event")
    event_type: Optional[EventType] = Field(None, description="Partition of the owning event")

    attendance_status: AttendanceStatus = Field(AttendanceStatus.VERIFIED, description="PENDING or VERIFIED")
    registration_date: str = Field(..., description="Registration timestamp")
    registration_type: RegistrationType = Field(RegistrationType.MANUAL, description="How the participant registered")
    registered_by: Optional[str] = Field(None, description="Admin who registered the participant")

    updated_date: Optional[str] = Field(None, description="Last update timestamp")
    updated_by: Optional[str] = Field(None, description="User who last updated the record")

    @classmethod
    def key_for(cls, event_slug: str, email: str) -> Dict[str, str]:
        return {'pk': participant_partition_key(event_slug), 'sk': email}
