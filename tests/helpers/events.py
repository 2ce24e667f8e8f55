"""Builders for Lambda input events."""

import base64
import json
from typing import Any, Dict, Iterable, Optional, Tuple

from boto3.dynamodb.types import TypeSerializer

_serializer = TypeSerializer()

BOUNDARY = "----eventplatformtestboundary"


def api_event(
    method: str,
    path: str,
    route_key: Optional[str] = None,
    path_parameters: Optional[Dict[str, str]] = None,
    query: Optional[Dict[str, str]] = None,
    body: Any = None,
    headers: Optional[Dict[str, str]] = None,
    claims: Optional[Dict[str, str]] = None,
    is_base64: bool = False,
) -> Dict[str, Any]:
    """API Gateway HTTP API (payload 2.0) event.

    Dict and list bodies are JSON-encoded; bytes bodies are base64-encoded.
    """
    if isinstance(body, (dict, list)):
        body = json.dumps(body)
    if isinstance(body, bytes):
        body = base64.b64encode(body).decode('ascii')
        is_base64 = True

    request_context: Dict[str, Any] = {'http': {'method': method, 'path': path}}
    if claims is not None:
        request_context['authorizer'] = {'jwt': {'claims': claims, 'scopes': None}}

    return {
        'version': '2.0',
        'routeKey': route_key or '$default',
        'rawPath': path,
        'headers': headers or {'content-type': 'application/json'},
        'queryStringParameters': query,
        'pathParameters': path_parameters,
        'requestContext': request_context,
        'body': body,
        'isBase64Encoded': is_base64,
    }


def response_json(response: Dict[str, Any]) -> Any:
    return json.loads(response['body'])


def multipart_body(
    fields: Dict[str, str],
    files: Iterable[Tuple[str, str, bytes, str]] = (),
) -> Tuple[bytes, Dict[str, str]]:
    """multipart/form-data body and headers.

    Args:
        fields: Text fields
        files: (field name, file name, content, content type) tuples
    """
    parts = []
    for name, value in fields.items():
        parts.append(
            f'--{BOUNDARY}\r\nContent-Disposition: form-data; name="{name}"\r\n\r\n{value}\r\n'.encode('utf-8')
        )
    for field_name, file_name, content, content_type in files:
        header = (
            f'--{BOUNDARY}\r\nContent-Disposition: form-data; name="{field_name}"; filename="{file_name}"\r\n'
            f'Content-Type: {content_type}\r\n\r\n'
        ).encode('utf-8')
        parts.append(header + content + b'\r\n')
    body = b''.join(parts) + f'--{BOUNDARY}--\r\n'.encode('utf-8')
    return body, {'content-type': f'multipart/form-data; boundary={BOUNDARY}'}


def _image(item: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if item is None:
        return None
    return {name: _serializer.serialize(value) for name, value in item.items()}


def stream_record(
    event_name: str,
    keys: Dict[str, Any],
    new_image: Optional[Dict[str, Any]] = None,
    old_image: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """DynamoDB Stream record in the wire (typed attribute) format."""
    dynamodb: Dict[str, Any] = {'Keys': _image(keys), 'StreamViewType': 'NEW_AND_OLD_IMAGES'}
    if new_image is not None:
        dynamodb['NewImage'] = _image(new_image)
    if old_image is not None:
        dynamodb['OldImage'] = _image(old_image)
    return {
        'eventID': '1',
        'eventName': event_name,
        'eventSource': 'aws:dynamodb',
        'dynamodb': dynamodb,
    }
