"""Local file detection, encoding, persistence and path rewriting."""

from .capabilities import MAX_REMOTE_FILE_SIZE, is_remote_eligible
from .detection import (
    FileReference,
    GrammarKind,
    detect_local_file_paths,
    strip_urls,
)
from .policy import (
    AlwaysUploadPolicy,
    FixedDecisionPolicy,
    HandlingDecision,
    HandlingPolicy,
    decision_from_reply,
    format_local_path_notice,
)
from .processors import (
    AttachmentDescriptor,
    DataUrl,
    decode_attachment,
    file_to_attachment,
    file_to_data_url,
    files_to_attachments,
    guess_mime_type,
)
from .store import (
    default_attachment_dir,
    save_attachment,
    save_attachments,
    save_data_url_to_file,
)
from .substitution import SubstitutionPair, markdown_link, substitute_file_paths

__all__ = [
    # Detection
    "FileReference",
    "GrammarKind",
    "detect_local_file_paths",
    "strip_urls",
    # Policy
    "HandlingDecision",
    "HandlingPolicy",
    "AlwaysUploadPolicy",
    "FixedDecisionPolicy",
    "decision_from_reply",
    "format_local_path_notice",
    "MAX_REMOTE_FILE_SIZE",
    "is_remote_eligible",
    # Codec
    "AttachmentDescriptor",
    "DataUrl",
    "decode_attachment",
    "file_to_attachment",
    "file_to_data_url",
    "files_to_attachments",
    "guess_mime_type",
    # Store
    "default_attachment_dir",
    "save_attachment",
    "save_attachments",
    "save_data_url_to_file",
    # Substitution
    "SubstitutionPair",
    "markdown_link",
    "substitute_file_paths",
]
