from .config import PlatformConfig
from .exceptions import (
    ConflictError,
    ConnectionError,
    EventPlatformError,
    ItemNotFoundError,
    NotFoundError,
    RetryableError,
    StoreRequestError,
    ValidationError,
)
from .models import (
    # Domain models
    Event,
    Attendee,
    Participant,
    # Enums
    EventType,
    AttendanceStatus,
    RegistrationType,
    # Views
    AttendeeView,
    ParticipantView,
    # DTOs
    EventCreate,
    EventUpdate,
    AttendeeRegistration,
    ManualAttendeeRegistration,
    ParticipantRegistration,
    AttendeeUpdate,
    QuizUpload,
)
from .core import (
    TableGateway,
    BlobGateway,
    Dependencies,
    build_dependencies,
)
from .handlers import (
    EventReadApi,
    EventWriteApi,
    AttendeeReadApi,
    AttendeeWriteApi,
    ParticipantReadApi,
    ParticipantWriteApi,
    FileReadApi,
    FileWriteApi,
    AttendeeCounterProcessor,
)

__version__ = "1.0.0"
__all__ = [
    # Configuration
    "PlatformConfig",
    # Exceptions
    "EventPlatformError",
    "ConflictError",
    "ConnectionError",
    "ItemNotFoundError",
    "NotFoundError",
    "RetryableError",
    "StoreRequestError",
    "ValidationError",
    # Models
    "Event",
    "Attendee",
    "Participant",
    "EventType",
    "AttendanceStatus",
    "RegistrationType",
    "AttendeeView",
    "ParticipantView",
    "EventCreate",
    "EventUpdate",
    "AttendeeRegistration",
    "ManualAttendeeRegistration",
    "ParticipantRegistration",
    "AttendeeUpdate",
    "QuizUpload",
    # Gateways and dependencies
    "TableGateway",
    "BlobGateway",
    "Dependencies",
    "build_dependencies",
    # Domain APIs
    "EventReadApi",
    "EventWriteApi",
    "AttendeeReadApi",
    "AttendeeWriteApi",
    "ParticipantReadApi",
    "ParticipantWriteApi",
    "FileReadApi",
    "FileWriteApi",
    "AttendeeCounterProcessor",
]
