"""Encoding of local files into inline attachments and back.

An attachment travels as a small JSON object whose ``content`` is a base64
data URL::

    {"type": "file", "name": "report.csv", "content": "data:text/csv;base64,..."}

Example:
    ```python
    from attachment_bridge.files.processors import decode_attachment, file_to_attachment

    descriptor = file_to_attachment("/tmp/demo/report.csv")
    assert decode_attachment(descriptor.model_dump()) == open(
        "/tmp/demo/report.csv", "rb"
    ).read()
    ```
"""

import base64
import binascii
import logging
import mimetypes
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError

from attachment_bridge.exceptions import (
    AttachmentDecodeError,
    AttachmentFormatError,
    AttachmentIOError,
    AttachmentValidationError,
)

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"


class AttachmentDescriptor(BaseModel):
    """Wire representation of a single file attachment.

    Attributes:
        type: Always ``"file"``.
        name: Base file name, never a path.
        content: ``data:<mime>;base64,<payload>`` data URL.
    """

    type: Literal["file"] = Field(default="file", description="Attachment kind")
    name: str = Field(description="Base file name without directory components")
    content: str = Field(description="Base64 data URL carrying the file bytes")


@dataclass(frozen=True)
class DataUrl:
    """Parsed ``data:<mime>;base64,<payload>`` string.

    The MIME type is carried as declared; it is not checked against the payload.
    """

    mime_type: str
    payload: str

    def __str__(self) -> str:
        return f"data:{self.mime_type};base64,{self.payload}"

    @classmethod
    def parse(cls, data_url: str) -> "DataUrl":
        """Split a data URL into MIME type and payload.

        Raises:
            AttachmentFormatError: If either separator is missing.
        """
        head_and_rest = data_url.split(";", 1)
        if len(head_and_rest) < 2:
            raise AttachmentFormatError(
                f"Invalid data URL format: {_preview(data_url)}"
            )
        head, rest = head_and_rest

        scheme_and_mime = head.split(":", 1)
        if len(scheme_and_mime) < 2:
            raise AttachmentFormatError(
                f"Invalid MIME type in data URL: {_preview(data_url)}"
            )

        marker_and_payload = rest.split(",", 1)
        if len(marker_and_payload) < 2:
            raise AttachmentFormatError(
                f"Invalid base64 data in data URL: {_preview(data_url)}"
            )

        return cls(mime_type=scheme_and_mime[1], payload=marker_and_payload[1])

    def decode(self) -> bytes:
        """Decode the payload with the standard base64 alphabet.

        Raises:
            AttachmentDecodeError: On characters outside the alphabet or bad padding.
        """
        try:
            return base64.b64decode(self.payload, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise AttachmentDecodeError(
                f"Invalid base64 payload: {exc}", original_error=exc
            ) from exc


def _preview(data_url: str, limit: int = 64) -> str:
    # Payloads can be megabytes long; keep error messages readable.
    if len(data_url) <= limit:
        return data_url
    return f"{data_url[:limit]}..."


def guess_mime_type(path: str | Path) -> str:
    """Guess a MIME type from the file extension, defaulting to octet-stream."""
    guessed_type, _ = mimetypes.guess_type(str(path))
    return guessed_type or DEFAULT_MIME_TYPE


def _read_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        raise AttachmentIOError(
            f"Could not read file {path}: {exc}", path=path, original_error=exc
        ) from exc


def file_to_data_url(path: str | Path) -> str:
    """Read a file and encode it as a base64 data URL.

    Raises:
        AttachmentIOError: If the file cannot be read.
    """
    file_path = Path(path)
    content = _read_bytes(file_path)
    encoded = base64.b64encode(content).decode("ascii")
    return str(DataUrl(mime_type=guess_mime_type(file_path), payload=encoded))


def file_to_attachment(path: str | Path) -> AttachmentDescriptor:
    """Encode a local file into an attachment descriptor.

    Args:
        path: Path of the file to encode.

    Returns:
        Descriptor named after the file's base name.

    Raises:
        AttachmentValidationError: If the path has no file-name component.
        AttachmentIOError: If the file cannot be read.
    """
    file_path = Path(path)
    if str(path) == "" or not file_path.name:
        raise AttachmentValidationError(
            f"Invalid file name for path '{path}'", path=path
        )

    descriptor = AttachmentDescriptor(
        name=file_path.name, content=file_to_data_url(file_path)
    )
    logger.debug("Encoded %s as attachment '%s'", file_path, descriptor.name)
    return descriptor


def files_to_attachments(paths: Iterable[str | Path]) -> list[AttachmentDescriptor]:
    """Encode several files, stopping at the first failure."""
    return [file_to_attachment(path) for path in paths]


def coerce_descriptor(
    attachment: AttachmentDescriptor | Mapping[str, Any],
) -> AttachmentDescriptor:
    """Validate a received wire object into an ``AttachmentDescriptor``.

    Raises:
        AttachmentFormatError: If ``name`` or ``content`` is missing or not a string.
    """
    if isinstance(attachment, AttachmentDescriptor):
        return attachment

    try:
        return AttachmentDescriptor.model_validate(attachment)
    except ValidationError as exc:
        errors = [
            f"{'.'.join(str(loc) for loc in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        ]
        missing = [
            str(error["loc"][0])
            for error in exc.errors()
            if error["type"] == "missing" and error["loc"]
        ]
        if missing:
            message = f"Attachment missing {', '.join(missing)} field"
        else:
            message = "Attachment descriptor is malformed"
        raise AttachmentFormatError(message, validation_errors=errors) from exc


def decode_attachment(attachment: AttachmentDescriptor | Mapping[str, Any]) -> bytes:
    """Decode the bytes carried by an attachment.

    Args:
        attachment: Descriptor model or raw wire mapping.

    Returns:
        The decoded file content.

    Raises:
        AttachmentFormatError: If the descriptor or its data URL is malformed.
        AttachmentDecodeError: If the payload is not valid base64.
    """
    descriptor = coerce_descriptor(attachment)
    data_url = DataUrl.parse(descriptor.content)
    try:
        return data_url.decode()
    except AttachmentDecodeError as exc:
        exc.name = descriptor.name
        raise
