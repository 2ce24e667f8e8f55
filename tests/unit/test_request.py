"""
Tests for ApiRequest and multipart decoding.
"""

import pytest

from event_platform.api import ApiRequest, parse_multipart
from event_platform.exceptions import ValidationError
from tests.helpers import api_event, multipart_body


class TestApiRequest:

    def test_basic_attributes(self):
        event = api_event(
            'post', '/events/fad', route_key='POST /events/{eventType}',
            path_parameters={'eventType': 'fad'}, query={'type': 'event'},
            headers={'Content-Type': 'application/json'},
        )

        request = ApiRequest(event)

        assert request.method == 'POST'
        assert request.path == '/events/fad'
        assert request.route_key == 'POST /events/{eventType}'
        assert request.path_param('eventType') == 'fad'
        assert request.query_param('type') == 'event'
        assert request.query_param('missing', 'x') == 'x'
        assert request.content_type == 'application/json'
        assert not request.is_multipart

    def test_missing_path_parameter(self):
        with pytest.raises(ValidationError, match="Missing eventSlug path parameter"):
            ApiRequest(api_event('GET', '/')).path_param('eventSlug')

    def test_matched_parameters_override_event(self):
        request = ApiRequest(api_event('GET', '/', path_parameters={'eventSlug': 'a'}), path_parameters={'eventSlug': 'b'})

        assert request.path_param('eventSlug') == 'b'

    @pytest.mark.parametrize('claims,expected', [
        (None, 'admin'),
        ({}, 'admin'),
        ({'username': 'alice', 'email': 'a@example.com'}, 'alice'),
        ({'cognito:username': 'bob'}, 'bob'),
        ({'email': 'carol@example.com'}, 'carol@example.com'),
    ])
    def test_caller(self, claims, expected):
        assert ApiRequest(api_event('GET', '/', claims=claims)).caller == expected

    def test_json_body(self):
        assert ApiRequest(api_event('POST', '/', body={'a': 1})).json_body() == {'a': 1}

    def test_base64_json_body(self):
        assert ApiRequest(api_event('POST', '/', body=b'{"a": 2}')).json_body() == {'a': 2}

    @pytest.mark.parametrize('body,message', [
        (None, "Request body is required"),
        ('', "Request body is required"),
        ('{oops', "Invalid JSON format"),
        ('[1, 2]', "Request body must be a JSON object"),
    ])
    def test_json_body_errors(self, body, message):
        with pytest.raises(ValidationError) as exc_info:
            ApiRequest(api_event('POST', '/', body=body)).json_body()

        assert exc_info.value.message == message

    def test_invalid_base64(self):
        event = api_event('POST', '/', body='***not base64***', is_base64=True)

        with pytest.raises(ValidationError, match="Invalid base64 request body"):
            ApiRequest(event).raw_body


class TestParseMultipart:

    def test_fields_and_files(self):
        body, headers = multipart_body(
            {'firstName': 'Ada', 'email': 'ada@example.com'},
            files=[('paymentScreenshot', 'receipt.png', b'\x89PNG data', 'image/png')],
        )

        form = parse_multipart(ApiRequest(api_event('POST', '/', body=body, headers=headers)))

        assert form.fields == {'firstName': 'Ada', 'email': 'ada@example.com'}
        upload = form.file('paymentScreenshot')
        assert upload.file_name == 'receipt.png'
        assert upload.content == b'\x89PNG data'
        assert form.first_file() is upload
        assert form.file('other') is None

    def test_requires_multipart_content_type(self):
        with pytest.raises(ValidationError, match="multipart/form-data"):
            parse_multipart(ApiRequest(api_event('POST', '/', body={'a': 1})))

    def test_content_type_header_case_is_ignored(self):
        body, headers = multipart_body({'x': '1'})
        headers = {'Content-Type': headers['content-type']}

        form = parse_multipart(ApiRequest(api_event('POST', '/', body=body, headers=headers)))

        assert form.fields == {'x': '1'}
        assert form.first_file() is None
