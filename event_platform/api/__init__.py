"""
HTTP layer for API Gateway HTTP API (payload 2.0) events.

- ApiRequest: parameters, body, caller identity
- parse_multipart: multipart/form-data bodies
- json_response / api_function: responses and the error boundary
- Router / ROUTES: route table and dispatch
"""

from .request import ApiRequest
from .multipart import MultipartForm, parse_multipart
from .responses import api_function, error_response, json_response
from .router import ROUTES, Route, Router, default_router

__all__ = [
    "ApiRequest",
    "MultipartForm",
    "parse_multipart",
    "api_function",
    "error_response",
    "json_response",
    "ROUTES",
    "Route",
    "Router",
    "default_router",
]
