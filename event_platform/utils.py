"""
Event Platform Utilities

Small helpers shared by the models, the domain APIs and the HTTP layer:

- timestamps in the stored ISO-8601 ``...Z`` format
- DynamoDB value conversion (float -> Decimal on the way in, Decimal -> number for JSON)
- pydantic validation with platform error messages
- file naming and magic-byte type detection for uploads
"""

import logging
import re
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Optional, Tuple, Type, TypeVar

import filetype
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ValidationError

logger = logging.getLogger(__name__)

ModelT = TypeVar('ModelT', bound=BaseModel)

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')


# =============================================================================
# Timestamps
# =============================================================================

def utc_now_iso() -> str:
    """Current UTC time as ``2024-01-01T10:00:00.000Z``."""
    return datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


# =============================================================================
# DynamoDB value conversion
# =============================================================================

def to_dynamodb_value(obj: Any) -> Any:
    """Recursively convert Python values into types boto3 accepts.

    boto3 rejects ``float``; floats become Decimal via their string form so
    ``0.1`` is stored as ``0.1`` and not its binary expansion.
    """
    if isinstance(obj, dict):
        return {k: to_dynamodb_value(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_dynamodb_value(v) for v in obj]
    if isinstance(obj, bool):
        return obj
    if isinstance(obj, float):
        return Decimal(str(obj))
    return obj


def json_default(obj: Any) -> Any:
    """``json.dumps`` hook for values read back from DynamoDB."""
    if isinstance(obj, Decimal):
        return int(obj) if obj == obj.to_integral_value() else float(obj)
    if isinstance(obj, (set, frozenset)):
        return sorted(obj)
    if isinstance(obj, datetime):
        return obj.isoformat()
    if isinstance(obj, bytes):
        return obj.decode('utf-8', errors='replace')
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


# =============================================================================
# Validation
# =============================================================================

_MISSING_ERROR_TYPES = ('missing', 'string_too_short')
_VERBATIM_ERROR_TYPES = ('invalid_email', 'invalid_event_type', 'no_update_fields')


def _field_name(error: Dict[str, Any]) -> str:
    return ".".join(str(part) for part in error.get('loc', ())) or "body"


def _error_message(error: Dict[str, Any]) -> str:
    error_type = error.get('type')
    field = _field_name(error)
    if error_type in _MISSING_ERROR_TYPES:
        return f"Missing required field: {field}"
    if error_type == 'extra_forbidden':
        return f"Unknown field: {field}"
    if error_type in _VERBATIM_ERROR_TYPES:
        return error['msg']
    return f"Invalid value for field {field}: {error.get('msg')}"


def validate_model(model_class: Type[ModelT], data: Any) -> ModelT:
    """Validate request data into a pydantic model.

    Missing-field errors are reported before any other error so the message
    names the first absent field, then the first invalid one.

    Raises:
        ValidationError: With a message naming the offending field
    """
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    try:
        return model_class.model_validate(data)
    except PydanticValidationError as e:
        errors = e.errors()
        errors.sort(key=lambda err: err.get('type') not in _MISSING_ERROR_TYPES)
        first = errors[0]
        raise ValidationError(
            _error_message(first),
            errors={_field_name(err): err.get('msg') for err in errors},
            original_error=e
        ) from e


def is_valid_email(value: str) -> bool:
    return bool(value) and EMAIL_PATTERN.match(value) is not None


# =============================================================================
# File handling
# =============================================================================

def sanitize_file_name(name: Optional[str]) -> str:
    """Strip any directory part, replace unsafe characters and lower-case."""
    if not name:
        return ""
    base = re.sub(r'^.*[\\/]', '', name)
    return re.sub(r'[^\w.-]', '_', base).lower()


def extension_from_name(name: Optional[str]) -> Optional[str]:
    if not name or '.' not in name:
        return None
    return name.rsplit('.', 1)[1] or None


def sniff_file_type(content: bytes) -> Optional[Tuple[str, str]]:
    """Detect ``(extension, mime)`` from the payload's magic bytes.

    Returns:
        The detected type, or None when the signature is unknown
    """
    kind = filetype.guess(content) if content else None
    if kind is None:
        return None
    logger.debug(f"Detected upload type {kind.mime} (.{kind.extension})")
    return kind.extension, kind.mime


# =============================================================================
# Expression building
# =============================================================================

def build_set_expression(updates: Dict[str, Any]) -> Tuple[str, Dict[str, str], Dict[str, Any]]:
    """Build a ``SET`` UpdateExpression with placeholder names and values.

    Placeholders are positional (``#f0``/``:v0``) so attribute names that are
    reserved words (``from``, ``to``, ``location``) are always safe.

    Returns:
        (update_expression, expression_attribute_names, expression_attribute_values)
    """
    if not updates:
        raise ValidationError("No valid fields to update")

    parts = []
    names: Dict[str, str] = {}
    values: Dict[str, Any] = {}
    for index, (attribute, value) in enumerate(updates.items()):
        names[f"#f{index}"] = attribute
        values[f":v{index}"] = to_dynamodb_value(value)
        parts.append(f"#f{index} = :v{index}")
    return "SET " + ", ".join(parts), names, values
