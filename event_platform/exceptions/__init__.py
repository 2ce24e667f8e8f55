# Base exception class
from .base import EventPlatformError

# Domain-specific exceptions
from .domain_exceptions import (
    ValidationError,
    ItemNotFoundError,
    NotFoundError,
    ConflictError,
    ConnectionError,
    RetryableError,
    StoreRequestError,
)

__all__ = [
    # Base exception
    "EventPlatformError",

    # Domain exceptions (alphabetically ordered)
    "ConflictError",
    "ConnectionError",
    "ItemNotFoundError",
    "NotFoundError",
    "RetryableError",
    "StoreRequestError",
    "ValidationError",
]
