"""
API Gateway HTTP API (payload 2.0) request wrapper.

Gives route functions one place to read path and query parameters, headers,
the decoded body and the caller identity from the JWT authorizer claims.
"""

import base64
import binascii
import json
import logging
from typing import Any, Dict, Optional
from urllib.parse import unquote

from ..exceptions import ValidationError

logger = logging.getLogger(__name__)

DEFAULT_CALLER = "admin"
CALLER_CLAIMS = ('username', 'cognito:username', 'email')


class ApiRequest:
    """A parsed API Gateway event plus the path parameters the router matched."""

    def __init__(self, event: Dict[str, Any], path_parameters: Optional[Dict[str, str]] = None):
        self.event = event or {}
        request_context = self.event.get('requestContext') or {}
        http = request_context.get('http') or {}

        self.method = (http.get('method') or self.event.get('httpMethod') or 'GET').upper()
        self.path = self.event.get('rawPath') or http.get('path') or self.event.get('path') or '/'
        self.route_key = self.event.get('routeKey')
        self.headers = {k.lower(): v for k, v in (self.event.get('headers') or {}).items()}
        self.query_parameters = self.event.get('queryStringParameters') or {}
        self.path_parameters = dict(self.event.get('pathParameters') or {})
        if path_parameters:
            self.path_parameters.update(path_parameters)

        self._claims = ((request_context.get('authorizer') or {}).get('jwt') or {}).get('claims') or {}

    def path_param(self, name: str) -> str:
        """
        Required path parameter.

        Raises:
            ValidationError: The parameter is missing or empty
        """
        value = self.path_parameters.get(name)
        if not value:
            raise ValidationError(f"Missing {name} path parameter")
        return unquote(value)

    def query_param(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.query_parameters.get(name, default)

    @property
    def content_type(self) -> str:
        return self.headers.get('content-type', '')

    @property
    def is_multipart(self) -> bool:
        return self.content_type.lower().startswith('multipart/form-data')

    @property
    def raw_body(self) -> bytes:
        """Body bytes, base64-decoded when API Gateway flagged it."""
        body = self.event.get('body')
        if body is None:
            return b""
        if self.event.get('isBase64Encoded'):
            try:
                return base64.b64decode(body)
            except (binascii.Error, ValueError) as e:
                raise ValidationError("Invalid base64 request body", original_error=e) from e
        return body.encode('utf-8') if isinstance(body, str) else body

    def json_body(self) -> Dict[str, Any]:
        """
        Body parsed as a JSON object.

        Raises:
            ValidationError: The body is missing, malformed or not an object
        """
        raw = self.raw_body
        if not raw:
            raise ValidationError("Request body is required")
        try:
            data = json.loads(raw)
        except (ValueError, UnicodeDecodeError) as e:
            raise ValidationError("Invalid JSON format", original_error=e) from e
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        return data

    @property
    def caller(self) -> str:
        """Identity of the authenticated caller, ``admin`` when there are no claims."""
        for claim in CALLER_CLAIMS:
            value = self._claims.get(claim)
            if value:
                return str(value)
        return DEFAULT_CALLER
