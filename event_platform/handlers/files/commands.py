"""
Blob Write API

Objects are written once under deterministic or generated keys:

- ``{eventSlug}/quiz.json``: pretty-printed quiz document
- ``{eventSlug}/payments/{uuid4}.{ext}``: payment screenshots of self-service registrations
- ``{sanitized file name}`` or ``upload.{ext}``: generic uploads

Content types come from the payload's magic bytes, not from what the client claims.
"""

import json
import logging
import mimetypes
import uuid
from typing import Tuple

from ...core import BlobGateway
from ...models import QuizUpload, UploadedFile
from ...utils import extension_from_name, sanitize_file_name, sniff_file_type

logger = logging.getLogger(__name__)

SCREENSHOT_DEFAULT_TYPE = ('png', 'image/png')
FILE_DEFAULT_TYPE = ('bin', 'application/octet-stream')


def quiz_key(event_slug: str) -> str:
    return f"{event_slug}/quiz.json"


def payment_screenshot_key(event_slug: str, extension: str) -> str:
    return f"{event_slug}/payments/{uuid.uuid4()}.{extension}"


class FileWriteApi:
    """Write-only API over the platform bucket."""

    def __init__(self, blobs: BlobGateway):
        self.blobs = blobs

    def upload_quiz(self, event_slug: str, quiz: QuizUpload) -> str:
        """
        Store the quiz document, replacing any previous upload.

        Returns:
            The object key
        """
        key = quiz_key(event_slug)
        body = json.dumps(quiz.model_dump(), indent=2).encode('utf-8')
        self.blobs.put_object(key, body, 'application/json')
        logger.info(f"Uploaded quiz for {event_slug} ({len(body)} bytes)")
        return key

    def store_payment_screenshot(self, event_slug: str, screenshot: UploadedFile) -> str:
        """
        Store a payment screenshot under a fresh key.

        Unrecognised payloads are stored as PNG.

        Returns:
            The object key
        """
        extension, content_type = sniff_file_type(screenshot.content) or SCREENSHOT_DEFAULT_TYPE
        key = payment_screenshot_key(event_slug, extension)
        self.blobs.put_object(key, screenshot.content, content_type)
        return key

    def upload_file(self, upload: UploadedFile) -> Tuple[str, str]:
        """
        Store a generic upload.

        The type is taken from magic bytes, then from the client file name's
        extension, then falls back to ``bin``.

        Returns:
            (key, public url)
        """
        detected = sniff_file_type(upload.content)
        if detected:
            extension, content_type = detected
        else:
            extension = extension_from_name(sanitize_file_name(upload.file_name))
            if extension:
                content_type = mimetypes.guess_type(f"file.{extension}")[0] or FILE_DEFAULT_TYPE[1]
            else:
                extension, content_type = FILE_DEFAULT_TYPE

        key = sanitize_file_name(upload.file_name) or f"upload.{extension}"
        self.blobs.put_object(key, upload.content, content_type)
        logger.info(f"Uploaded file {key} ({content_type})")
        return key, self.blobs.object_url(key)
