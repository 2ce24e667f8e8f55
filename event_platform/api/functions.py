"""
Route functions.

One function per API route. Each takes the parsed request and the
per-process Dependencies, validates input, delegates to a domain API and
returns an API Gateway response. Errors are turned into responses by
``api_function``.
"""

import logging
from typing import Any, Dict

from ..core import Dependencies
from ..handlers import (
    AttendeeReadApi,
    AttendeeWriteApi,
    EventReadApi,
    EventWriteApi,
    FileReadApi,
    FileWriteApi,
    ParticipantReadApi,
    ParticipantWriteApi,
)
from ..exceptions import ValidationError
from ..models import (
    AttendeeRegistration,
    AttendeeUpdate,
    EventCreate,
    EventType,
    EventUpdate,
    ManualAttendeeRegistration,
    ParticipantRegistration,
    QuizUpload,
    RegistrationType,
)
from ..utils import validate_model
from .multipart import parse_multipart
from .request import ApiRequest
from .responses import api_function, json_response

logger = logging.getLogger(__name__)

PAYMENT_SCREENSHOT_FIELD = 'paymentScreenshot'


def _without_keys(item: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in item.items() if k not in ('pk', 'sk')}


# =============================================================================
# Events
# =============================================================================

@api_function
def list_events(request: ApiRequest, deps: Dependencies) -> Dict[str, Any]:
    """GET /events?type=fad|event"""
    event_type = EventType.parse(request.query_param('type'), parameter='type')
    return json_response(EventReadApi(deps.table).list_events(event_type))


@api_function
def get_event_details(request: ApiRequest, deps: Dependencies) -> Dict[str, Any]:
    """GET /events/{eventType}/{eventSlug}"""
    event_type = EventType.parse(request.path_param('eventType'))
    slug = request.path_param('eventSlug')
    return json_response(EventReadApi(deps.table).get_event_records(event_type, slug))


@api_function
def create_event(request: ApiRequest, deps: Dependencies) -> Dict[str, Any]:
    """POST /events/{eventType}"""
    event_type = EventType.parse(request.path_param('eventType'))
    event_data = validate_model(EventCreate, request.json_body())
    event = EventWriteApi(deps.table).create_event(event_type, event_data)
    return json_response(event.to_dynamodb_item())


@api_function
def update_event(request: ApiRequest, deps: Dependencies) -> Dict[str, Any]:
    """PUT /events/{eventType}/{eventSlug}"""
    event_type = EventType.parse(request.path_param('eventType'))
    slug = request.path_param('eventSlug')
    update = validate_model(EventUpdate, request.json_body())

    attributes = EventWriteApi(deps.table).update_event(event_type, slug, update, request.caller)
    return json_response({
        'status': 'OK',
        'message': 'Event updated successfully',
        'updatedEvent': {'eventType': event_type.value, 'eventSlug': slug, **_without_keys(attributes)},
    })


@api_function
def delete_event(request: ApiRequest, deps: Dependencies) -> Dict[str, Any]:
    """DELETE /events/{eventType}/{eventSlug}"""
    event_type = EventType.parse(request.path_param('eventType'))
    slug = request.path_param('eventSlug')

    key = EventWriteApi(deps.table).delete_event(event_type, slug)
    return json_response({
        'status': 'OK',
        'message': 'Event deleted successfully',
        'deletedEvent': {'eventType': event_type.value, 'eventSlug': slug, 'sk': key['sk']},
    })


# =============================================================================
# Attendees
# =============================================================================

@api_function
def list_attendees(request: ApiRequest, deps: Dependencies) -> Dict[str, Any]:
    """GET /events/{eventSlug}/attendees"""
    slug = request.path_param('eventSlug')
    attendees = [view.to_response() for view in AttendeeReadApi(deps.table).list_attendees(slug)]
    return json_response({
        'status': 'OK',
        'eventSlug': slug,
        'attendeeCount': len(attendees),
        'attendees': attendees,
    })


@api_function
def register_attendee(request: ApiRequest, deps: Dependencies) -> Dict[str, Any]:
    """POST /events/{eventSlug}/attendees/register (public, multipart or JSON)"""
    slug = request.path_param('eventSlug')

    screenshot = None
    if request.is_multipart:
        form = parse_multipart(request)
        registration = validate_model(AttendeeRegistration, form.fields)
        screenshot = form.file(PAYMENT_SCREENSHOT_FIELD)
    else:
        registration = validate_model(AttendeeRegistration, request.json_body())

    write_api = AttendeeWriteApi(deps.table, files=FileWriteApi(deps.blobs) if screenshot else None)
    attendee = write_api.register_self_service(slug, registration, screenshot)
    return json_response({
        'status': 'OK',
        'message': 'Registration successful',
        'paymentScreenshotKey': attendee.payment_screenshot_key,
        'attendeeId': attendee.email,
        'registrationType': RegistrationType.SELF_SERVICE.value,
    })


@api_function
def register_attendee_manually(request: ApiRequest, deps: Dependencies) -> Dict[str, Any]:
    """POST /events/{eventSlug}/attendees"""
    slug = request.path_param('eventSlug')
    registration = validate_model(ManualAttendeeRegistration, request.json_body())

    attendee = AttendeeWriteApi(deps.table).register_manually(slug, registration, request.caller)
    return json_response({
        'status': 'OK',
        'message': 'Manual registration successful',
        'attendeeId': attendee.email,
        'registrationType': RegistrationType.MANUAL.value,
        'registeredBy': attendee.registered_by,
    })


@api_function
def update_attendee(request: ApiRequest, deps: Dependencies) -> Dict[str, Any]:
    """PUT /events/{eventSlug}/attendees/{attendeeId}"""
    slug = request.path_param('eventSlug')
    attendee_id = request.path_param('attendeeId')
    update = validate_model(AttendeeUpdate, request.json_body())

    attributes = AttendeeWriteApi(deps.table).update_details(slug, attendee_id, update, request.caller)
    return json_response({
        'status': 'OK',
        'message': 'Attendee details updated successfully',
        'updatedAttendee': {
            'eventSlug': slug,
            'attendeeId': attendee_id,
            **{name: attributes.get(name) for name in (
                'firstName', 'lastName', 'email', 'phone', 'profession',
                'attendanceStatus', 'updatedDate', 'updatedBy',
            )},
        },
    })


@api_function
def verify_attendee(request: ApiRequest, deps: Dependencies) -> Dict[str, Any]:
    """PATCH /events/{eventSlug}/attendees/{attendeeId}/verify"""
    slug = request.path_param('eventSlug')
    attendee_id = request.path_param('attendeeId')

    attributes = AttendeeWriteApi(deps.table).verify(slug, attendee_id, request.caller)
    return json_response({
        'status': 'OK',
        'message': 'Attendee status updated to VERIFIED successfully',
        'updatedAttendee': {
            'eventSlug': slug,
            'attendeeId': attendee_id,
            **{name: attributes.get(name) for name in (
                'firstName', 'lastName', 'email', 'attendanceStatus', 'verifiedDate', 'verifiedBy',
            )},
        },
    })


@api_function
def delete_attendee(request: ApiRequest, deps: Dependencies) -> Dict[str, Any]:
    """DELETE /events/{eventSlug}/attendees/{attendeeId}"""
    slug = request.path_param('eventSlug')
    attendee_id = request.path_param('attendeeId')

    deleted = AttendeeWriteApi(deps.table).delete(slug, attendee_id)
    return json_response({
        'status': 'OK',
        'message': 'Attendee deleted successfully',
        'deletedAttendee': {
            'eventSlug': slug,
            'email': attendee_id,
            'firstName': deleted.get('firstName'),
            'lastName': deleted.get('lastName'),
        },
        'deletedBy': request.caller,
    })


# =============================================================================
# Participants
# =============================================================================

@api_function
def list_participants(request: ApiRequest, deps: Dependencies) -> Dict[str, Any]:
    """GET /events/{eventSlug}/participants"""
    slug = request.path_param('eventSlug')
    participants = [view.to_response() for view in ParticipantReadApi(deps.table).list_participants(slug)]
    return json_response({
        'status': 'OK',
        'eventSlug': slug,
        'participantCount': len(participants),
        'participants': participants,
    })


@api_function
def register_participant(request: ApiRequest, deps: Dependencies) -> Dict[str, Any]:
    """POST /events/{eventSlug}/participants"""
    slug = request.path_param('eventSlug')
    registration = validate_model(ParticipantRegistration, request.json_body())

    participant = ParticipantWriteApi(deps.table).register(slug, registration, request.caller)
    return json_response({
        'status': 'OK',
        'message': 'Manual registration successful',
        'participantId': participant.email,
        'registrationType': RegistrationType.MANUAL.value,
        'registeredBy': participant.registered_by,
    })


# =============================================================================
# Quiz and files
# =============================================================================

@api_function
def upload_quiz(request: ApiRequest, deps: Dependencies) -> Dict[str, Any]:
    """POST /quiz/{eventSlug}"""
    slug = request.path_param('eventSlug')
    quiz = validate_model(QuizUpload, request.json_body())

    key = FileWriteApi(deps.blobs).upload_quiz(slug, quiz)
    return json_response({
        'status': 'OK',
        'message': 'Quiz uploaded successfully',
        'key': key,
        'eventSlug': slug,
    })


@api_function
def get_quiz(request: ApiRequest, deps: Dependencies) -> Dict[str, Any]:
    """GET /quiz/{eventSlug}"""
    slug = request.path_param('eventSlug')
    return json_response(FileReadApi(deps.blobs).get_quiz(slug))


@api_function
def upload_file(request: ApiRequest, deps: Dependencies) -> Dict[str, Any]:
    """POST /files (multipart, first file part)"""
    upload = parse_multipart(request).first_file()
    if upload is None:
        raise ValidationError("No file provided")

    key, url = FileWriteApi(deps.blobs).upload_file(upload)
    return json_response({'status': 'OK', 'key': key, 'url': url})


@api_function
def list_files(request: ApiRequest, deps: Dependencies) -> Dict[str, Any]:
    """GET /files"""
    return json_response({'status': 'OK', 'files': FileReadApi(deps.blobs).list_files()})
