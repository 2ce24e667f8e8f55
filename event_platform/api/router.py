"""
Route table and dispatch for the single API entry point.

API Gateway HTTP API events name the matched route in ``routeKey``
(``"PUT /events/{eventType}/{eventSlug}"``). When the key is absent or is
``$default`` the request path is matched against the templates instead;
among matching templates the one with literal segments earliest wins, so
``/events/{eventSlug}/attendees`` beats ``/events/{eventType}/{eventSlug}``.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..core import Dependencies
from . import functions
from .request import ApiRequest
from .responses import error_response

logger = logging.getLogger(__name__)

RouteFunction = Callable[[ApiRequest, Dependencies], Dict[str, Any]]


def _segments(path: str) -> List[str]:
    return [segment for segment in path.strip('/').split('/') if segment]


def _is_parameter(segment: str) -> bool:
    return segment.startswith('{') and segment.endswith('}')


class Route:
    """One ``METHOD /template`` pair bound to a route function."""

    def __init__(self, method: str, template: str, function: RouteFunction):
        self.method = method.upper()
        self.template = template
        self.function = function
        self.segments = _segments(template)

    @property
    def route_key(self) -> str:
        return f"{self.method} {self.template}"

    @property
    def specificity(self) -> Tuple[bool, ...]:
        return tuple(not _is_parameter(segment) for segment in self.segments)

    def match(self, method: str, path: str) -> Optional[Dict[str, str]]:
        """Path parameters when method and path fit this route, else None."""
        if method.upper() != self.method:
            return None
        parts = _segments(path)
        if len(parts) != len(self.segments):
            return None

        parameters = {}
        for template_segment, part in zip(self.segments, parts):
            if _is_parameter(template_segment):
                parameters[template_segment[1:-1]] = part
            elif template_segment != part:
                return None
        return parameters


ROUTES: List[Route] = [
    Route('GET', '/events', functions.list_events),
    Route('GET', '/events/{eventType}/{eventSlug}', functions.get_event_details),
    Route('POST', '/events/{eventType}', functions.create_event),
    Route('PUT', '/events/{eventType}/{eventSlug}', functions.update_event),
    Route('DELETE', '/events/{eventType}/{eventSlug}', functions.delete_event),
    Route('GET', '/events/{eventSlug}/attendees', functions.list_attendees),
    Route('POST', '/events/{eventSlug}/attendees', functions.register_attendee_manually),
    Route('POST', '/events/{eventSlug}/attendees/register', functions.register_attendee),
    Route('PUT', '/events/{eventSlug}/attendees/{attendeeId}', functions.update_attendee),
    Route('DELETE', '/events/{eventSlug}/attendees/{attendeeId}', functions.delete_attendee),
    Route('PATCH', '/events/{eventSlug}/attendees/{attendeeId}/verify', functions.verify_attendee),
    Route('GET', '/events/{eventSlug}/participants', functions.list_participants),
    Route('POST', '/events/{eventSlug}/participants', functions.register_participant),
    Route('POST', '/quiz/{eventSlug}', functions.upload_quiz),
    Route('GET', '/quiz/{eventSlug}', functions.get_quiz),
    Route('POST', '/files', functions.upload_file),
    Route('GET', '/files', functions.list_files),
]


class Router:
    """Resolves API Gateway events to route functions."""

    def __init__(self, routes: List[Route]):
        self.routes = routes
        self._by_key = {route.route_key: route for route in routes}

    def resolve(self, request: ApiRequest) -> Optional[Tuple[Route, Dict[str, str]]]:
        """
        Find the route for a request.

        Returns:
            (route, path parameters from template matching), or None
        """
        route = self._by_key.get(request.route_key or '')
        if route is not None:
            return route, {}

        matches = []
        for candidate in self.routes:
            parameters = candidate.match(request.method, request.path)
            if parameters is not None:
                matches.append((candidate, parameters))
        if not matches:
            return None
        return max(matches, key=lambda match: match[0].specificity)

    def dispatch(self, event: Dict[str, Any], deps: Dependencies) -> Dict[str, Any]:
        request = ApiRequest(event)
        resolved = self.resolve(request)
        if resolved is None:
            logger.warning(f"No route for {request.method} {request.path} (routeKey={request.route_key!r})")
            return error_response("Route not found", 404)

        route, parameters = resolved
        if parameters:
            request = ApiRequest(event, path_parameters=parameters)
        logger.info(f"{route.route_key} -> {route.function.__name__}")
        return route.function(request, deps)


default_router = Router(ROUTES)
