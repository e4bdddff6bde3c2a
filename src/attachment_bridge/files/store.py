"""Persistence of received attachments to the local filesystem."""

import logging
import ntpath
import os
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from attachment_bridge.exceptions import (
    AttachmentDecodeError,
    AttachmentIOError,
    AttachmentValidationError,
)
from attachment_bridge.files.processors import (
    AttachmentDescriptor,
    DataUrl,
    coerce_descriptor,
)

logger = logging.getLogger(__name__)


def default_attachment_dir() -> Path:
    """Return ``<home>/.codex/attachments``, or ``./.codex/attachments`` without a home."""
    try:
        home_dir = Path.home()
    except (RuntimeError, KeyError):
        home_dir = Path(".")
    return home_dir / ".codex" / "attachments"


def _check_filename(filename: str) -> None:
    """Reject names that would place the file outside the target directory."""
    base = os.path.basename(ntpath.basename(filename))
    if not base or base != filename or base in (".", ".."):
        raise AttachmentValidationError(
            f"Attachment name '{filename}' must be a plain file name", path=filename
        )


def save_data_url_to_file(data_url: str, filename: str, save_dir: str | Path) -> Path:
    """Decode a data URL and write it to ``save_dir/filename``.

    An existing file at the destination is overwritten.

    Raises:
        AttachmentFormatError: If the data URL is malformed.
        AttachmentDecodeError: If the payload is not valid base64.
        AttachmentValidationError: If ``filename`` carries directory components.
        AttachmentIOError: If the directory or file cannot be written.
    """
    logger.debug("Saving data URL to file: %s", filename)
    _check_filename(filename)
    try:
        decoded = DataUrl.parse(data_url).decode()
    except AttachmentDecodeError as exc:
        exc.name = filename
        raise

    directory = Path(save_dir)
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise AttachmentIOError(
            f"Could not create attachment directory {directory}: {exc}",
            path=directory,
            original_error=exc,
        ) from exc

    file_path = directory / filename
    try:
        file_path.write_bytes(decoded)
    except OSError as exc:
        raise AttachmentIOError(
            f"Could not write attachment {file_path}: {exc}",
            path=file_path,
            original_error=exc,
        ) from exc

    logger.debug("Saved attachment to: %s", file_path)
    return file_path


def save_attachment(
    attachment: AttachmentDescriptor | Mapping[str, Any],
    save_dir: str | Path | None = None,
) -> Path:
    """Decode one received attachment and persist it.

    Args:
        attachment: Descriptor model or raw wire mapping.
        save_dir: Target directory; defaults to ``default_attachment_dir()``.

    Returns:
        Path of the written file.
    """
    descriptor = coerce_descriptor(attachment)
    target = Path(save_dir) if save_dir is not None else default_attachment_dir()
    return save_data_url_to_file(descriptor.content, descriptor.name, target)


def save_attachments(
    attachments: Iterable[AttachmentDescriptor | Mapping[str, Any]],
    save_dir: str | Path | None = None,
) -> list[Path]:
    """Persist a batch of attachments, stopping at the first failure.

    Files written before the failing attachment stay on disk, but no paths are
    returned for them.
    """
    file_paths = [save_attachment(attachment, save_dir) for attachment in attachments]
    logger.info("Saved %d attachment(s)", len(file_paths))
    return file_paths
