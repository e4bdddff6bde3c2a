"""Outbound and inbound attachment flows around a transport."""

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from attachment_bridge.exceptions import ProviderException
from attachment_bridge.files.capabilities import is_remote_eligible
from attachment_bridge.files.detection import FileReference, detect_local_file_paths
from attachment_bridge.files.policy import (
    AlwaysUploadPolicy,
    HandlingDecision,
    HandlingPolicy,
)
from attachment_bridge.files.processors import AttachmentDescriptor, files_to_attachments
from attachment_bridge.files.store import save_attachments
from attachment_bridge.files.substitution import SubstitutionPair, substitute_file_paths
from attachment_bridge.transport import AttachmentTransport
from attachment_bridge.utils.config import get_attachment_dir

logger = logging.getLogger(__name__)


@dataclass
class OutboundResult:
    """Structured result of preparing a message for the remote side."""

    text: str
    decision: HandlingDecision
    references: list[FileReference] = field(default_factory=list)
    uploaded: dict[Path, str] = field(default_factory=dict)
    skipped: list[Path] = field(default_factory=list)
    saved: list[Path] = field(default_factory=list)


class AttachmentPipeline:
    """Detects local files in messages, uploads them and rewrites the text."""

    def __init__(
        self,
        transport: AttachmentTransport,
        policy: HandlingPolicy | None = None,
        attachment_dir: str | Path | None = None,
        link_format: Callable[[str, str], str] | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            transport: Delivers descriptors and returns assigned URLs
            policy: Batch handling strategy (default: always upload)
            attachment_dir: Where received attachments are saved
                (default: ``get_attachment_dir()``)
            link_format: Builds the replacement from ``(path, url)``, for
                example ``markdown_link`` (default: the bare URL)
        """
        self.transport = transport
        self.policy = policy or AlwaysUploadPolicy()
        self.attachment_dir = Path(attachment_dir) if attachment_dir else None
        self.link_format = link_format

    def _target_dir(self, target_dir: str | Path | None) -> Path:
        if target_dir is not None:
            return Path(target_dir)
        if self.attachment_dir is not None:
            return self.attachment_dir
        return get_attachment_dir()

    def prepare_outbound(self, text: str) -> OutboundResult:
        """Upload the files mentioned in ``text`` and replace them with URLs.

        Args:
            text: Message about to be sent

        Returns:
            The rewritten text with details of what was uploaded or skipped

        Raises:
            AttachmentIOError: If an eligible file can no longer be read
            ProviderException: If the transport fails, or returns a URL count
                that does not match the files sent and no attachments
        """
        references = detect_local_file_paths(text)
        if not references:
            return OutboundResult(text=text, decision=HandlingDecision.UPLOAD)

        decision = self.policy.decide(references)
        result = OutboundResult(text=text, decision=decision, references=references)
        if decision is not HandlingDecision.UPLOAD:
            logger.info("Not uploading %d file(s): %s", len(references), decision.value)
            return result

        # Cross-grammar duplicates collapse here, keyed by resolved path.
        unique_paths = list(dict.fromkeys(ref.resolved_path for ref in references))
        eligible = [path for path in unique_paths if is_remote_eligible(path)]
        result.skipped = [path for path in unique_paths if path not in eligible]
        if not eligible:
            return result

        descriptors = files_to_attachments(eligible)
        response = self.transport.send(descriptors)

        if response.attachments:
            result.saved = save_attachments(
                response.attachments, self._target_dir(None)
            )
        if not response.urls and response.attachments:
            return result

        if len(response.urls) != len(eligible):
            raise ProviderException(
                f"Transport returned {len(response.urls)} URL(s) "
                f"for {len(eligible)} attachment(s)"
            )
        result.uploaded = dict(zip(eligible, response.urls, strict=True))

        pairs: dict[str, SubstitutionPair] = {}
        for ref in references:
            url = result.uploaded.get(ref.resolved_path)
            if url is None or ref.matched_text in pairs:
                continue
            if self.link_format is not None:
                url = self.link_format(ref.matched_text, url)
            pairs[ref.matched_text] = SubstitutionPair(ref.matched_text, url)

        result.text = substitute_file_paths(text, pairs.values())
        return result

    def receive(
        self,
        attachments: Iterable[AttachmentDescriptor | Mapping[str, Any]],
        target_dir: str | Path | None = None,
    ) -> list[Path]:
        """Decode attachments returned by the remote side and save them.

        Returns:
            Paths of the written files, in input order
        """
        return save_attachments(attachments, self._target_dir(target_dir))
