"""
Write-Optimized DTOs (Data Transfer Objects)

These models represent the write side of the API: request bodies validated
before anything touches the table.

- Create/registration DTOs enforce required fields and formats
- Update DTOs are explicit allow-lists. Identity and server-managed fields are
  dropped silently; any other unknown key is rejected
- Error types ``invalid_email``, ``invalid_event_type`` and ``no_update_fields``
  carry the message returned to the caller verbatim
"""

from decimal import Decimal
from typing import Any, ClassVar, Dict, FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_core import PydanticCustomError

from ..utils import is_valid_email, to_dynamodb_value
from .base import CamelModel
from .domain_models import EventExtraInfo, EventReferee, EventScheduleItem, EventType


def _validate_email(value: str) -> str:
    if not is_valid_email(value):
        raise PydanticCustomError('invalid_email', "Invalid email format")
    return value


def _validate_event_type(value: Any) -> EventType:
    try:
        return EventType(str(value).strip().upper())
    except ValueError:
        raise PydanticCustomError('invalid_event_type', "Invalid eventType. Must be 'fad' or 'event'")


# =============================================================================
# Event DTOs
# =============================================================================

class EventCreate(CamelModel):
    """
    Body of ``POST /events/{eventType}``.

    ``eventType`` is accepted for compatibility with clients that echo it, but
    the stored value always comes from the path.
    """

    slug: str = Field(..., min_length=1, max_length=256, description="URL-safe event identifier")
    creation_date: str = Field(..., min_length=1, description="Creation date, second half of the sort key")
    title: str = Field(..., min_length=1, description="Event title")
    event_type: Optional[str] = Field(None, description="Ignored, the path decides the partition")

    description: Optional[str] = None
    from_: Optional[str] = Field(None, alias="from")
    to: Optional[str] = None
    location: Optional[str] = None
    asset_url: Optional[str] = None
    training_url: Optional[str] = None
    credit_number: Optional[Decimal] = Field(None, ge=0)

    event_schedule: List[EventScheduleItem] = Field(default_factory=list)
    referees: List[EventReferee] = Field(default_factory=list)
    extra_info: Optional[EventExtraInfo] = None

    model_config = ConfigDict(extra='forbid')

    @field_validator('slug')
    @classmethod
    def validate_slug(cls, v: str) -> str:
        """The slug is the first segment of the sort key and of attendee partition keys."""
        if '#' in v or '/' in v:
            raise ValueError("slug must not contain '#' or '/'")
        return v


class _AllowListUpdate(CamelModel):
    """Shared behaviour of update bodies.

    Subclasses list the attribute names the server owns in ``protected_fields``;
    those are removed before validation, everything else must be a declared field.
    """

    protected_fields: ClassVar[FrozenSet[str]] = frozenset()

    model_config = ConfigDict(extra='forbid')

    @model_validator(mode='before')
    @classmethod
    def drop_protected_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        remaining = {k: v for k, v in data.items() if k not in cls.protected_fields}
        if not remaining:
            raise PydanticCustomError('no_update_fields', "No valid fields to update")
        return remaining

    def to_updates(self) -> Dict[str, Any]:
        """Stored attribute name → DynamoDB value for every field the caller sent."""
        return to_dynamodb_value(self.model_dump(by_alias=True, exclude_unset=True, exclude_none=True))


class EventUpdate(_AllowListUpdate):
    """Body of ``PUT /events/{eventType}/{eventSlug}``."""

    protected_fields: ClassVar[FrozenSet[str]] = frozenset({
        'pk', 'sk', 'eventType', 'slug', 'creationDate', 'attendeeCount',
        'updatedDate', 'updatedBy',
    })

    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    from_: Optional[str] = Field(None, alias="from")
    to: Optional[str] = None
    location: Optional[str] = None
    asset_url: Optional[str] = None
    training_url: Optional[str] = None
    credit_number: Optional[Decimal] = Field(None, ge=0)
    event_schedule: Optional[List[EventScheduleItem]] = None
    referees: Optional[List[EventReferee]] = None
    extra_info: Optional[EventExtraInfo] = None


# =============================================================================
# Registration DTOs
# =============================================================================

class _RegistrationBase(CamelModel):
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)

    model_config = ConfigDict(extra='ignore')

    @field_validator('email')
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _validate_email(v)

    @field_validator('event_type', mode='before', check_fields=False)
    @classmethod
    def validate_event_type(cls, v: Any) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            raise PydanticCustomError('missing', "Field required")
        return _validate_event_type(v)


class AttendeeRegistration(_RegistrationBase):
    """Self-service form of ``POST /events/{eventSlug}/attendees/register``."""

    event_type: EventType = Field(..., description="Partition of the event registered for")
    phone: Optional[str] = None
    profession: Optional[str] = None


class ManualAttendeeRegistration(_RegistrationBase):
    """Admin body of ``POST /events/{eventSlug}/attendees``."""

    phone: str = Field(..., min_length=1)
    profession: str = Field(..., min_length=1)
    event_type: EventType = Field(..., description="Partition of the event registered for")


class ParticipantRegistration(_RegistrationBase):
    """Admin body of ``POST /events/{eventSlug}/participants``."""

    phone: str = Field(..., min_length=1)
    event_type: EventType = Field(..., description="Partition of the event registered for")


class AttendeeUpdate(_AllowListUpdate):
    """Body of ``PUT /events/{eventSlug}/attendees/{attendeeId}``."""

    protected_fields: ClassVar[FrozenSet[str]] = frozenset({
        'pk', 'sk', 'email', 'attendanceStatus', 'eventSlug', 'eventType',
        'registrationDate', 'registrationType', 'registeredBy', 'paymentScreenshotKey',
        'updatedDate', 'updatedBy', 'verifiedDate', 'verifiedBy',
    })

    first_name: Optional[str] = Field(None, min_length=1)
    last_name: Optional[str] = Field(None, min_length=1)
    phone: Optional[str] = None
    profession: Optional[str] = None


# =============================================================================
# Blob DTOs
# =============================================================================

class QuizUpload(BaseModel):
    """Body of ``POST /quiz/{eventSlug}``. The whole document is stored."""

    quiz: Dict[str, Any] = Field(..., description="Quiz definition")

    model_config = ConfigDict(extra='allow')


class UploadedFile(BaseModel):
    """One file part of a multipart request, buffered in memory."""

    field_name: str
    file_name: Optional[str] = None
    content: bytes = b""
