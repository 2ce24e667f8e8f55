"""
Tests for the models, the DTO validation messages and the shared utilities.
"""

from decimal import Decimal

import pytest

from event_platform.exceptions import ValidationError
from event_platform.models import (
    AttendeeRegistration,
    AttendeeUpdate,
    Event,
    EventCreate,
    EventType,
    EventUpdate,
    ManualAttendeeRegistration,
    slug_from_attendee_partition_key,
)
from event_platform.utils import (
    build_set_expression,
    json_default,
    sanitize_file_name,
    sniff_file_type,
    utc_now_iso,
    validate_model,
)


class TestEventType:

    @pytest.mark.parametrize('value,expected', [
        ('fad', EventType.FAD), ('FAD', EventType.FAD), (' event ', EventType.EVENT),
    ])
    def test_parse(self, value, expected):
        assert EventType.parse(value) is expected

    @pytest.mark.parametrize('value', [None, '', 'party'])
    def test_parse_rejects(self, value):
        with pytest.raises(ValidationError, match="Invalid eventType parameter"):
            EventType.parse(value)

    def test_probe_order(self):
        assert EventType.probe_order() == [EventType.FAD, EventType.EVENT]
        assert EventType.probe_order('event') == [EventType.EVENT, EventType.FAD]
        assert EventType.probe_order('nope') == [EventType.FAD, EventType.EVENT]


class TestKeys:

    def test_slug_from_attendee_partition_key(self):
        assert slug_from_attendee_partition_key('summit#ATTENDEE') == 'summit'
        assert slug_from_attendee_partition_key('summit#PARTICIPANT') is None
        assert slug_from_attendee_partition_key('FAD') is None
        assert slug_from_attendee_partition_key('#ATTENDEE') is None
        assert slug_from_attendee_partition_key(None) is None

    def test_event_item_uses_stored_names(self):
        event = Event(
            pk=EventType.FAD, sk='summit#2024-01-01', event_type=EventType.FAD,
            slug='summit', creation_date='2024-01-01', title='Summit',
            from_='2024-03-01', credit_number=1.5,
        )

        item = event.to_dynamodb_item()

        assert item['pk'] == 'FAD'
        assert item['from'] == '2024-03-01'
        assert item['creationDate'] == '2024-01-01'
        assert item['creditNumber'] == Decimal('1.5')
        assert item['attendeeCount'] == 0
        assert 'description' not in item


class TestValidationMessages:

    def test_missing_sorted_before_invalid(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_model(AttendeeRegistration, {'email': 'bad', 'lastName': 'L', 'eventType': 'fad'})

        assert exc_info.value.message == "Missing required field: firstName"

    def test_blank_string_is_missing(self):
        with pytest.raises(ValidationError, match="Missing required field: title"):
            validate_model(EventCreate, {'slug': 's', 'creationDate': 'd', 'title': '   '})

    def test_slug_with_separator(self):
        with pytest.raises(ValidationError, match="Invalid value for field slug"):
            validate_model(EventCreate, {'slug': 'a#b', 'creationDate': 'd', 'title': 't'})

    def test_body_must_be_object(self):
        with pytest.raises(ValidationError, match="Request body must be a JSON object"):
            validate_model(EventCreate, ['not', 'a', 'dict'])

    def test_event_type_normalized(self):
        registration = validate_model(ManualAttendeeRegistration, {
            'firstName': ' Grace ', 'lastName': 'Hopper', 'email': 'g@example.com',
            'phone': '1', 'profession': 'Engineer', 'eventType': 'event',
        })

        assert registration.event_type == 'EVENT'
        assert registration.first_name == 'Grace'

    def test_update_drops_protected_fields(self):
        update = validate_model(EventUpdate, {'title': 'New', 'pk': 'EVENT', 'attendeeCount': 3})

        assert update.to_updates() == {'title': 'New'}

    def test_attendee_update_rejects_unknown(self):
        with pytest.raises(ValidationError, match="Unknown field: nickname"):
            validate_model(AttendeeUpdate, {'phone': '1', 'nickname': 'x'})


class TestUtils:

    def test_timestamp_format(self):
        stamp = utc_now_iso()

        assert stamp.endswith('Z')
        assert len(stamp) == len('2024-01-01T10:00:00.000Z')

    def test_json_default(self):
        assert json_default(Decimal('3')) == 3
        assert json_default(Decimal('1.5')) == 1.5
        assert json_default({'b', 'a'}) == ['a', 'b']
        with pytest.raises(TypeError):
            json_default(object())

    @pytest.mark.parametrize('name,expected', [
        ('C:\\Users\\me\\Photo 1.JPG', 'photo_1.jpg'),
        ('../etc/passwd', 'passwd'),
        ('', ''),
        (None, ''),
    ])
    def test_sanitize_file_name(self, name, expected):
        assert sanitize_file_name(name) == expected

    def test_sniff_file_type(self):
        assert sniff_file_type(b'\x89PNG\r\n\x1a\n' + b'\x00' * 16) == ('png', 'image/png')
        assert sniff_file_type(b'hello') is None
        assert sniff_file_type(b'') is None

    def test_build_set_expression(self):
        expression, names, values = build_set_expression({'from': '2024', 'rating': 4.5})

        assert expression == "SET #f0 = :v0, #f1 = :v1"
        assert names == {'#f0': 'from', '#f1': 'rating'}
        assert values == {':v0': '2024', ':v1': Decimal('4.5')}

    def test_build_set_expression_needs_updates(self):
        with pytest.raises(ValidationError, match="No valid fields to update"):
            build_set_expression({})
