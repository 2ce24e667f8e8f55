"""
multipart/form-data decoding for API Gateway bodies.

Parts are buffered in memory; Lambda payloads are capped well below the
size where streaming to disk would matter.
"""

import io
import logging
from typing import Dict, List, Optional

import python_multipart
from python_multipart.exceptions import FormParserError

from ..exceptions import ValidationError
from ..models import UploadedFile
from .request import ApiRequest

logger = logging.getLogger(__name__)


class MultipartForm:
    """Text fields and file parts of one multipart request."""

    def __init__(self, fields: Dict[str, str], files: List[UploadedFile]):
        self.fields = fields
        self.files = files

    def file(self, field_name: str) -> Optional[UploadedFile]:
        """First file part submitted under ``field_name``."""
        for upload in self.files:
            if upload.field_name == field_name:
                return upload
        return None

    def first_file(self) -> Optional[UploadedFile]:
        return self.files[0] if self.files else None


def _decode(value: Optional[bytes]) -> str:
    if value is None:
        return ""
    return value.decode('utf-8', errors='replace') if isinstance(value, bytes) else str(value)


def parse_multipart(request: ApiRequest) -> MultipartForm:
    """
    Decode a multipart/form-data request body.

    Raises:
        ValidationError: Not a multipart request, or the body cannot be parsed
    """
    if not request.is_multipart:
        raise ValidationError("Content-Type must be multipart/form-data")

    body = request.raw_body
    fields: Dict[str, str] = {}
    files: List[UploadedFile] = []

    def on_field(field) -> None:
        name = _decode(field.field_name)
        fields.setdefault(name, _decode(field.value))

    def on_file(file) -> None:
        file_object = file.file_object
        file_object.seek(0)
        files.append(UploadedFile(
            field_name=_decode(file.field_name),
            file_name=_decode(file.file_name) or None,
            content=file_object.read(),
        ))

    headers = {
        'Content-Type': request.content_type,
        'Content-Length': str(len(body)),
    }
    try:
        python_multipart.parse_form(headers, io.BytesIO(body), on_field, on_file)
    except (FormParserError, ValueError) as e:
        raise ValidationError(f"Invalid multipart body: {e}", original_error=e) from e

    logger.debug(f"Parsed multipart body: fields={sorted(fields)} files={[f.field_name for f in files]}")
    return MultipartForm(fields, files)
