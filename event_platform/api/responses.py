"""
JSON responses and the error boundary of every route function.
"""

import functools
import json
import logging
from typing import Any, Callable, Dict

from ..exceptions import EventPlatformError
from ..utils import json_default

logger = logging.getLogger(__name__)

RESPONSE_HEADERS = {
    'Content-Type': 'application/json',
    'Access-Control-Allow-Origin': '*',
}

INTERNAL_ERROR_MESSAGE = "Internal server error"


def json_response(body: Any, status_code: int = 200) -> Dict[str, Any]:
    """API Gateway proxy response with a JSON body."""
    return {
        'statusCode': status_code,
        'headers': dict(RESPONSE_HEADERS),
        'body': json.dumps(body, default=json_default),
    }


def error_response(message: str, status_code: int) -> Dict[str, Any]:
    return json_response({'status': 'Error', 'message': message}, status_code)


def api_function(func: Callable[..., Dict[str, Any]]) -> Callable[..., Dict[str, Any]]:
    """
    Turn exceptions escaping a route function into JSON error responses.

    Domain errors map to their ``status_code``. Client errors (4xx) return
    the error message; server errors and anything unexpected are logged with
    the traceback and answered with a generic message.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> Dict[str, Any]:
        try:
            return func(*args, **kwargs)
        except EventPlatformError as e:
            if e.status_code >= 500:
                logger.exception(f"{func.__name__} failed: {e}")
                return error_response(INTERNAL_ERROR_MESSAGE, e.status_code)
            logger.warning(f"{func.__name__} rejected request ({e.status_code}): {e.message}")
            return error_response(e.message, e.status_code)
        except Exception as e:
            logger.exception(f"Unexpected error in {func.__name__}: {e}")
            return error_response(INTERNAL_ERROR_MESSAGE, 500)

    return wrapper
