"""Attachment Bridge - local file attachments for remote model endpoints."""

__version__ = "0.1.0"

# Custom exceptions
from .exceptions import (
    AttachmentBridgeException,
    AttachmentDecodeError,
    AttachmentFormatError,
    AttachmentIOError,
    AttachmentValidationError,
    ConfigurationException,
    ProviderException,
)

# File detection, codec and persistence
from .files import (
    AlwaysUploadPolicy,
    AttachmentDescriptor,
    FileReference,
    GrammarKind,
    HandlingDecision,
    HandlingPolicy,
    SubstitutionPair,
    decode_attachment,
    default_attachment_dir,
    detect_local_file_paths,
    file_to_attachment,
    files_to_attachments,
    is_remote_eligible,
    save_attachment,
    save_attachments,
    substitute_file_paths,
)

# Orchestration
from .pipeline import AttachmentPipeline, OutboundResult
from .transport import AttachmentTransport, HttpAttachmentTransport, TransportResponse

# Configuration utilities
from .utils import (
    create_http_transport,
    get_attachment_dir,
    get_available_providers,
    load_environment,
)

__all__ = [
    "__version__",
    "AlwaysUploadPolicy",
    "AttachmentDescriptor",
    "AttachmentPipeline",
    "AttachmentTransport",
    "FileReference",
    "GrammarKind",
    "HandlingDecision",
    "HandlingPolicy",
    "HttpAttachmentTransport",
    "OutboundResult",
    "SubstitutionPair",
    "TransportResponse",
    "decode_attachment",
    "default_attachment_dir",
    "detect_local_file_paths",
    "file_to_attachment",
    "files_to_attachments",
    "is_remote_eligible",
    "save_attachment",
    "save_attachments",
    "substitute_file_paths",
    "create_http_transport",
    "get_attachment_dir",
    "get_available_providers",
    "load_environment",
    # Exceptions
    "AttachmentBridgeException",
    "AttachmentDecodeError",
    "AttachmentFormatError",
    "AttachmentIOError",
    "AttachmentValidationError",
    "ConfigurationException",
    "ProviderException",
]
