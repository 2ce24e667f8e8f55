"""
Tests for the event routes and the Event CQRS APIs.
"""

from unittest.mock import patch

import pytest

from event_platform.exceptions import ConflictError, ItemNotFoundError
from event_platform.handlers import EventReadApi, EventWriteApi
from event_platform.lambda_handler import api_handler
from event_platform.models import EventCreate, EventType, EventUpdate
from tests.helpers import api_event, response_json, seed_attendee, seed_event

ADMIN = {'username': 'alice'}


def _create(deps, event_type, body):
    event = api_event(
        'POST', f"/events/{event_type}",
        route_key='POST /events/{eventType}',
        path_parameters={'eventType': event_type},
        body=body, claims=ADMIN,
    )
    return api_handler(event, None, deps=deps)


class TestCreateEvent:

    def test_create_stores_keys_from_path(self, deps, platform_table):
        response = _create(deps, 'FAD', {'slug': 'summit', 'creationDate': '2024-01-01', 'title': 'Summit'})

        assert response['statusCode'] == 200
        body = response_json(response)
        assert body['pk'] == 'FAD'
        assert body['sk'] == 'summit#2024-01-01'
        assert body['attendeeCount'] == 0

        item = platform_table.get_item(Key={'pk': 'FAD', 'sk': 'summit#2024-01-01'})['Item']
        assert item['eventType'] == 'FAD'
        assert item['title'] == 'Summit'
        assert item['attendeeCount'] == 0

    def test_lowercase_path_type_is_upper_cased(self, deps, platform_table):
        response = _create(deps, 'event', {
            'slug': 'meetup', 'creationDate': '2024-02-02', 'title': 'Meetup',
            'eventType': 'FAD', 'from': '2024-03-01', 'creditNumber': 1.5,
            'eventSchedule': [{'time': '09:00', 'title': 'Opening'}],
            'referees': [{'title': 'Dr.', 'fullName': 'Grace Hopper', 'linkedinUrl': 'https://example.com/gh'}],
            'extraInfo': {'roomReservation': True, 'airTransfer': False, 'dinnerConfirmation': True},
        })

        assert response['statusCode'] == 200
        item = platform_table.get_item(Key={'pk': 'EVENT', 'sk': 'meetup#2024-02-02'})['Item']
        assert item['eventType'] == 'EVENT'
        assert item['from'] == '2024-03-01'
        assert str(item['creditNumber']) == '1.5'
        assert item['eventSchedule'] == [{'time': '09:00', 'title': 'Opening'}]
        assert item['referees'][0]['fullName'] == 'Grace Hopper'
        assert item['extraInfo']['roomReservation'] is True

    def test_invalid_event_type(self, deps):
        response = _create(deps, 'bogus', {'slug': 's', 'creationDate': 'd', 'title': 't'})

        assert response['statusCode'] == 400
        assert response_json(response)['message'] == "Invalid eventType parameter. Must be 'fad' or 'event'"

    def test_missing_required_field(self, deps):
        response = _create(deps, 'FAD', {'slug': 'summit', 'creationDate': '2024-01-01'})

        assert response['statusCode'] == 400
        assert response_json(response)['message'] == "Missing required field: title"

    def test_unknown_field_rejected(self, deps):
        response = _create(deps, 'FAD', {'slug': 's', 'creationDate': 'd', 'title': 't', 'attendeeCount': 99})

        assert response['statusCode'] == 400
        assert response_json(response)['message'] == "Unknown field: attendeeCount"

    def test_malformed_json(self, deps):
        response = _create(deps, 'FAD', '{not json')

        assert response['statusCode'] == 400
        assert response_json(response)['message'] == "Invalid JSON format"

    def test_duplicate_event_conflicts(self, deps):
        body = {'slug': 'summit', 'creationDate': '2024-01-01', 'title': 'Summit'}
        _create(deps, 'FAD', body)

        response = _create(deps, 'FAD', body)

        assert response['statusCode'] == 409
        assert response_json(response)['message'] == "Event already exists"


class TestReadEvents:

    def test_list_events_by_type(self, deps, platform_table):
        seed_event(platform_table, 'FAD', 'a')
        seed_event(platform_table, 'FAD', 'b')
        seed_event(platform_table, 'EVENT', 'c')

        response = api_handler(
            api_event('GET', '/events', route_key='GET /events', query={'type': 'fad'}), None, deps=deps
        )

        assert response['statusCode'] == 200
        body = response_json(response)
        assert sorted(item['slug'] for item in body) == ['a', 'b']

    def test_list_events_invalid_type(self, deps):
        response = api_handler(api_event('GET', '/events', route_key='GET /events'), None, deps=deps)

        assert response['statusCode'] == 400
        assert response_json(response)['message'] == "Invalid type parameter. Must be 'fad' or 'event'"

    def test_event_details_match_slug_prefix_only(self, deps, platform_table):
        seed_event(platform_table, 'FAD', 'summit')
        seed_event(platform_table, 'FAD', 'summit-2')

        response = api_handler(api_event('GET', '/events/fad/summit'), None, deps=deps)

        assert response['statusCode'] == 200
        body = response_json(response)
        assert [item['sk'] for item in body] == ['summit#2024-01-01']

    def test_resolve_event_probe_order(self, deps, platform_table):
        seed_event(platform_table, 'EVENT', 'meetup')
        read_api = EventReadApi(deps.table)

        event_type, item = read_api.resolve_event('meetup')

        assert event_type is EventType.EVENT
        assert item['sk'] == 'meetup#2024-01-01'
        assert read_api.resolve_event('nothing') is None


class TestUpdateEvent:

    def _update(self, deps, event_type, slug, body):
        event = api_event(
            'PUT', f"/events/{event_type}/{slug}",
            route_key='PUT /events/{eventType}/{eventSlug}',
            path_parameters={'eventType': event_type, 'eventSlug': slug},
            body=body, claims=ADMIN,
        )
        return api_handler(event, None, deps=deps)

    def test_update_never_touches_identity(self, deps, platform_table):
        seed_event(platform_table, 'FAD', 'summit', attendeeCount=7)

        response = self._update(deps, 'fad', 'summit', {
            'title': 'Renamed', 'location': 'Berlin',
            'pk': 'EVENT', 'sk': 'hijack', 'eventType': 'EVENT', 'attendeeCount': 0,
        })

        assert response['statusCode'] == 200
        body = response_json(response)
        assert body['updatedEvent']['title'] == 'Renamed'
        assert body['updatedEvent']['updatedBy'] == 'alice'

        item = platform_table.get_item(Key={'pk': 'FAD', 'sk': 'summit#2024-01-01'})['Item']
        assert item['title'] == 'Renamed'
        assert item['location'] == 'Berlin'
        assert item['eventType'] == 'FAD'
        assert item['attendeeCount'] == 7
        assert item['updatedBy'] == 'alice'
        assert 'updatedDate' in item
        assert 'Item' not in platform_table.get_item(Key={'pk': 'EVENT', 'sk': 'hijack'})

    def test_only_protected_fields_is_rejected(self, deps, platform_table):
        seed_event(platform_table, 'FAD', 'summit')

        response = self._update(deps, 'fad', 'summit', {'pk': 'x', 'slug': 'y'})

        assert response['statusCode'] == 400
        assert response_json(response)['message'] == "No valid fields to update"

    def test_unknown_field_is_rejected(self, deps, platform_table):
        seed_event(platform_table, 'FAD', 'summit')

        response = self._update(deps, 'fad', 'summit', {'title': 'ok', 'maxAttendees': 10})

        assert response['statusCode'] == 400
        assert response_json(response)['message'] == "Unknown field: maxAttendees"

    def test_missing_event(self, deps):
        response = self._update(deps, 'fad', 'ghost', {'title': 'x'})

        assert response['statusCode'] == 404
        assert response_json(response)['message'] == "Event not found"

    def test_write_api_update_returns_attributes(self, deps, platform_table):
        seed_event(platform_table, 'EVENT', 'meetup')
        update = EventUpdate.model_validate({'description': 'Hands-on'})

        attributes = EventWriteApi(deps.table).update_event(EventType.EVENT, 'meetup', update, 'bob')

        assert attributes['description'] == 'Hands-on'
        assert attributes['updatedBy'] == 'bob'


class TestDeleteEvent:

    def _delete(self, deps, event_type, slug):
        event = api_event(
            'DELETE', f"/events/{event_type}/{slug}",
            route_key='DELETE /events/{eventType}/{eventSlug}',
            path_parameters={'eventType': event_type, 'eventSlug': slug},
            claims=ADMIN,
        )
        return api_handler(event, None, deps=deps)

    def test_delete_bogus_type(self, deps):
        response = self._delete(deps, 'bogus', 'summit')

        assert response['statusCode'] == 400
        assert response_json(response)['message'].startswith("Invalid eventType parameter")

    def test_delete_missing_event(self, deps):
        response = self._delete(deps, 'fad', 'ghost')

        assert response['statusCode'] == 404

    def test_delete_does_not_cascade(self, deps, platform_table):
        """Attendee records outlive their event."""
        seed_event(platform_table, 'FAD', 'summit')
        seed_attendee(platform_table, 'summit', 'ada@example.com')

        response = self._delete(deps, 'fad', 'summit')

        assert response['statusCode'] == 200
        assert response_json(response)['deletedEvent']['sk'] == 'summit#2024-01-01'
        assert 'Item' not in platform_table.get_item(Key={'pk': 'FAD', 'sk': 'summit#2024-01-01'})
        assert 'Item' in platform_table.get_item(Key={'pk': 'summit#ATTENDEE', 'sk': 'ada@example.com'})


class TestEventWriteApi:

    def test_create_conflict_raises(self, deps):
        api = EventWriteApi(deps.table)
        data = EventCreate.model_validate({'slug': 'x', 'creationDate': 'd', 'title': 't'})
        api.create_event(EventType.FAD, data)

        with pytest.raises(ConflictError):
            api.create_event(EventType.FAD, data)

    def test_delete_missing_raises(self, deps):
        with pytest.raises(ItemNotFoundError, match="Event not found"):
            EventWriteApi(deps.table).delete_event(EventType.FAD, 'ghost')

    def test_delete_race_reports_missing_event(self, deps, platform_table):
        seed_event(platform_table, 'FAD', 'summit')
        api = EventWriteApi(deps.table)

        with patch.object(deps.table, 'delete_item', side_effect=ConflictError("Conditional check failed")):
            with pytest.raises(ItemNotFoundError, match="Event not found"):
                api.delete_event(EventType.FAD, 'summit')
