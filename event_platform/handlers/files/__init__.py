"""
Blob APIs over the platform bucket

Queries: quiz documents, object listing.
Commands: quiz upload, payment screenshots, generic file uploads.
"""

from .commands import FileWriteApi
from .queries import FileReadApi

__all__ = [
    "FileReadApi",
    "FileWriteApi",
]
