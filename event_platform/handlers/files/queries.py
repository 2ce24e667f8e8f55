"""
Blob Read API

Reads from the platform bucket: per-event quiz documents and the flat
listing of every stored object.
"""

import json
import logging
from typing import Any, Dict, List

from ...core import BlobGateway
from ...exceptions import ItemNotFoundError
from .commands import quiz_key

logger = logging.getLogger(__name__)


class FileReadApi:
    """Read-only API over the platform bucket."""

    def __init__(self, blobs: BlobGateway):
        self.blobs = blobs

    def get_quiz(self, event_slug: str) -> Dict[str, Any]:
        """
        Load the quiz document stored for an event.

        Raises:
            ItemNotFoundError: No quiz has been uploaded for the event
        """
        key = quiz_key(event_slug)
        try:
            payload = self.blobs.get_object(key)
        except ItemNotFoundError as e:
            raise ItemNotFoundError("Quiz not found", {'key': key}, original_error=e) from e
        return json.loads(payload)

    def list_files(self) -> List[Dict[str, Any]]:
        """Every object in the bucket as ``{key, size, lastModified, etag}``."""
        files = [
            {
                'key': entry['Key'],
                'size': entry.get('Size', 0),
                'lastModified': entry['LastModified'].isoformat() if entry.get('LastModified') else None,
                'etag': (entry.get('ETag') or '').strip('"'),
            }
            for entry in self.blobs.list_objects()
        ]
        logger.debug(f"Listed {len(files)} objects in {self.blobs.bucket_name}")
        return files
