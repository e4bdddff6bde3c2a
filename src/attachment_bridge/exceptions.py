"""Custom exceptions for the attachment bridge."""

from pathlib import Path


class AttachmentBridgeException(Exception):
    """Base exception for the attachment bridge.

    All custom exceptions in this package should inherit from this base class.
    """

    pass


class AttachmentIOError(AttachmentBridgeException):
    """Raised when the filesystem refuses a read or write.

    This exception is raised when:
    - A detected or requested file can no longer be read
    - The target attachment directory cannot be created
    - A decoded attachment cannot be written to its destination

    Attributes:
        path: The path involved in the failing operation
        original_error: The underlying ``OSError``
    """

    def __init__(
        self,
        message: str,
        path: str | Path | None = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message)
        self.path = path
        self.original_error = original_error


class AttachmentValidationError(AttachmentBridgeException):
    """Raised when an attachment or path fails validation.

    This exception is raised when:
    - A path has no extractable file-name component (root or empty path)
    - A received descriptor name carries directory components

    Attributes:
        path: The offending path or name
    """

    def __init__(self, message: str, path: str | Path | None = None):
        super().__init__(message)
        self.path = path


class AttachmentFormatError(AttachmentValidationError):
    """Raised when a wire descriptor or data URL is structurally malformed.

    This exception is raised when:
    - The ``name`` or ``content`` field of a descriptor is missing
    - The data URL lacks the ``;`` or ``,`` separator
    - The data URL lacks the ``data:`` scheme separator

    Attributes:
        validation_errors: List of validation error details
    """

    def __init__(
        self,
        message: str,
        path: str | Path | None = None,
        validation_errors: list[str] | None = None,
    ):
        super().__init__(message, path=path)
        self.validation_errors = validation_errors or []


class AttachmentDecodeError(AttachmentBridgeException):
    """Raised when a data URL payload is not valid base64.

    Attributes:
        name: Name of the attachment whose payload failed to decode
        original_error: The underlying decoding error
    """

    def __init__(
        self,
        message: str,
        name: str | None = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message)
        self.name = name
        self.original_error = original_error


class ProviderException(AttachmentBridgeException):
    """Raised when the remote attachment endpoint fails.

    This exception is raised when:
    - API authentication fails
    - The account has run out of credits
    - Rate limits or server errors persist after retries
    - The endpoint cannot be reached or returns an unusable response

    Attributes:
        provider: The provider that caused the error
        status_code: HTTP status code, when a response was received
        original_error: The original exception from the transport
    """

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        status_code: int | None = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code
        self.original_error = original_error


class ConfigurationException(AttachmentBridgeException):
    """Raised when configuration errors occur.

    This exception is raised when:
    - A provider's API key environment variable is unset or blank
    - An unknown provider name is requested

    Attributes:
        config_key: The configuration key that caused the error
        config_value: The invalid configuration value
    """

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        config_value: str | None = None,
    ):
        super().__init__(message)
        self.config_key = config_key
        self.config_value = config_value
