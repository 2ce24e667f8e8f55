"""
Domain-Specific Exceptions for the Event Platform

Every exception extends EventPlatformError and carries the HTTP status the
API layer responds with when it escapes a route function.

Organized by category:
1. Input Validation Errors
2. Resource Not Found Errors
3. Conflict and Conditional Errors
4. Infrastructure and Retry Errors
"""

from typing import Any, Dict, Optional

from .base import EventPlatformError


# =============================================================================
# Input Validation Errors
# =============================================================================

class ValidationError(EventPlatformError):
    """Raised when request or model data is invalid.

    Used for:
    - Malformed JSON or multipart bodies
    - Missing required path parameters or body fields
    - Invalid enumerated values (e.g. eventType) and email formats
    - Unknown keys in update bodies
    """

    status_code = 400

    def __init__(self, message: str, errors: Optional[Dict[str, Any]] = None, original_error: Optional[Exception] = None):
        """Initialize validation error.

        Args:
            message: Human-readable error message, naming the offending field
            errors: Dictionary of field-level validation errors
            original_error: The original exception that caused this error
        """
        self.errors = errors or {}
        context = {}
        if self.errors:
            context['validation_errors'] = self.errors
        super().__init__(message, original_error, context)


# =============================================================================
# Resource Not Found Errors
# =============================================================================

class ItemNotFoundError(EventPlatformError):
    """Raised when a specific record or blob does not exist.

    The message is what API callers see, e.g. "Attendee not found".
    """

    status_code = 404

    def __init__(self, message: str, key: Optional[Dict[str, Any]] = None, original_error: Optional[Exception] = None):
        """Initialize item not found error.

        Args:
            message: Human-readable error message
            key: The key (or blob location) that was not found
            original_error: The original exception that caused this error
        """
        self.key = key or {}
        context = {'key': self.key} if self.key else {}
        super().__init__(message, original_error, context)


class NotFoundError(EventPlatformError):
    """Raised when an infrastructure resource (table, bucket) is missing.

    A deployment fault rather than a bad request: API callers get a 500.
    """

    status_code = 500

    def __init__(self, message: str, resource_type: Optional[str] = None, resource_name: Optional[str] = None, original_error: Optional[Exception] = None):
        self.resource_type = resource_type
        self.resource_name = resource_name
        context = {}
        if resource_type:
            context['resource_type'] = resource_type
        if resource_name:
            context['resource_name'] = resource_name
        super().__init__(message, original_error, context)


# =============================================================================
# Conflict and Conditional Errors
# =============================================================================

class ConflictError(EventPlatformError):
    """Raised when a conditional write fails.

    Used for:
    - ConditionalCheckFailedException from DynamoDB
    - Duplicate attendee registrations and duplicate event creation
    - The attendee counter floor guard (handled locally by the processor)
    """

    status_code = 409

    def __init__(self, message: str, resource_id: Optional[str] = None, original_error: Optional[Exception] = None):
        """Initialize conflict error.

        Args:
            message: Human-readable error message
            resource_id: ID of the conflicting resource (e.g. "FAD/summit#2024-01-01")
            original_error: The original exception that caused this error
        """
        self.resource_id = resource_id
        context = {}
        if resource_id:
            context['resource_id'] = resource_id
        super().__init__(message, original_error, context)


# =============================================================================
# Infrastructure and Retry Errors
# =============================================================================

class ConnectionError(EventPlatformError):
    """Raised when AWS cannot be reached or rejects our credentials."""

    def __init__(self, message: str, original_error: Optional[Exception] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, original_error, context)


class RetryableError(EventPlatformError):
    """Raised when an operation failed for a temporary reason (throttling, service errors).

    Never retried inside this package: API callers get a 500 and the stream
    consumer retries the whole batch.
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(message, original_error)


class StoreRequestError(EventPlatformError):
    """Raised when DynamoDB rejects a request this package built.

    Request bodies are validated before any store call, so a store-side
    ValidationException is a server fault and never reaches callers as a 400.
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(message, original_error)
