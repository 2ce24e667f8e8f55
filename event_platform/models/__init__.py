# Base mixins
from .base import (
    CamelModel,
    DynamoDBMixin,
)

# Core domain models
from .domain_models import (
    ATTENDEE_SUFFIX,
    PARTICIPANT_SUFFIX,
    EventType,
    AttendanceStatus,
    RegistrationType,
    Event,
    EventScheduleItem,
    EventReferee,
    EventExtraInfo,
    Attendee,
    Participant,
    event_sort_key,
    event_sort_key_prefix,
    attendee_partition_key,
    participant_partition_key,
    slug_from_attendee_partition_key,
)

# Read and write side models
from .views import (
    AttendeeView,
    ParticipantView,
)
from .dtos import (
    EventCreate,
    EventUpdate,
    AttendeeRegistration,
    ManualAttendeeRegistration,
    ParticipantRegistration,
    AttendeeUpdate,
    QuizUpload,
    UploadedFile,
)

__all__ = [
    "CamelModel",
    "DynamoDBMixin",
    "ATTENDEE_SUFFIX",
    "PARTICIPANT_SUFFIX",
    "EventType",
    "AttendanceStatus",
    "RegistrationType",
    "Event",
    "EventScheduleItem",
    "EventReferee",
    "EventExtraInfo",
    "Attendee",
    "Participant",
    "event_sort_key",
    "event_sort_key_prefix",
    "attendee_partition_key",
    "participant_partition_key",
    "slug_from_attendee_partition_key",
    "AttendeeView",
    "ParticipantView",
    "EventCreate",
    "EventUpdate",
    "AttendeeRegistration",
    "ManualAttendeeRegistration",
    "ParticipantRegistration",
    "AttendeeUpdate",
    "QuizUpload",
    "UploadedFile",
]
