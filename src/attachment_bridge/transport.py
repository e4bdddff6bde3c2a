"""Delivery of attachment descriptors to a remote model-serving endpoint."""

import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

import requests
from pydantic import BaseModel, Field

from attachment_bridge.exceptions import ProviderException
from attachment_bridge.files.processors import AttachmentDescriptor

logger = logging.getLogger(__name__)

_CREDIT_MARKERS = ("insufficient credits", "out of credits", "credit limit")


class TransportResponse(BaseModel):
    """Outcome of sending a batch of descriptors.

    Attributes:
        urls: One assigned URL per sent descriptor, in the same order.
        attachments: Descriptors returned for local decoding instead of URLs.
    """

    urls: list[str] = Field(default_factory=list)
    attachments: list[AttachmentDescriptor] = Field(default_factory=list)


class AttachmentTransport(ABC):
    """Abstract base class for attachment transports."""

    @abstractmethod
    def send(self, descriptors: Sequence[AttachmentDescriptor]) -> TransportResponse:
        """Send descriptors to the remote side.

        Args:
            descriptors: Attachments to deliver

        Returns:
            Assigned URLs, or attachments to be decoded locally
        """
        pass


def mask_api_key(api_key: str | None) -> str:
    """Mask an API key for logs and error messages."""
    if not api_key:
        return "<none>"
    if len(api_key) <= 8:
        return "***"
    return f"{api_key[:4]}...{api_key[-4:]}"


class HttpAttachmentTransport(AttachmentTransport):
    """Uploads each descriptor as JSON to ``{base_url}/attachments``.

    Rate limiting (429) and server errors (5xx) are retried with linear
    back-off; every other failure is raised as ``ProviderException``.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str | None = None,
        provider: str | None = None,
        timeout: float = 30.0,
        max_retries: int = 3,
        retry_delay: float = 1.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.provider = provider
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_delay = retry_delay

    def __repr__(self) -> str:
        return (
            f"HttpAttachmentTransport(base_url={self.base_url!r}, "
            f"api_key={mask_api_key(self.api_key)!r})"
        )

    @property
    def upload_url(self) -> str:
        return f"{self.base_url}/attachments"

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def send(self, descriptors: Sequence[AttachmentDescriptor]) -> TransportResponse:
        urls = [self.upload(descriptor) for descriptor in descriptors]
        logger.info("Uploaded %d attachment(s) to %s", len(urls), self.base_url)
        return TransportResponse(urls=urls)

    def upload(self, descriptor: AttachmentDescriptor) -> str:
        """Upload one descriptor and return the URL assigned to it."""
        attempt = 0
        while True:
            try:
                response = requests.post(
                    self.upload_url,
                    json=descriptor.model_dump(),
                    headers=self._headers(),
                    timeout=self.timeout,
                )
            except (requests.ConnectionError, requests.Timeout) as exc:
                raise ProviderException(
                    "Network error: could not connect to the attachment endpoint "
                    f"at {self.base_url}. Please check your connection and try again.",
                    provider=self.provider,
                    original_error=exc,
                ) from exc
            except requests.RequestException as exc:
                raise ProviderException(
                    f"Attachment upload failed: {exc}",
                    provider=self.provider,
                    original_error=exc,
                ) from exc

            status = response.status_code
            if (status == 429 or status >= 500) and attempt < self.max_retries:
                attempt += 1
                delay = self.retry_delay * attempt
                logger.warning(
                    "Upload of '%s' got HTTP %d, retrying in %.1fs (attempt %d/%d)",
                    descriptor.name,
                    status,
                    delay,
                    attempt,
                    self.max_retries,
                )
                time.sleep(delay)
                continue

            return self._assigned_url(response, descriptor)

    def _assigned_url(
        self, response: requests.Response, descriptor: AttachmentDescriptor
    ) -> str:
        status = response.status_code
        if status in (401, 403):
            raise ProviderException(
                "Authentication failed. Please check your API key "
                f"({mask_api_key(self.api_key)}).",
                provider=self.provider,
                status_code=status,
            )

        body = self._json_body(response)
        error_text = body.get("error") if isinstance(body, dict) else None
        if status == 402 or (
            isinstance(error_text, str)
            and any(marker in error_text for marker in _CREDIT_MARKERS)
        ):
            raise ProviderException(
                "Insufficient credits. Your account has run out of credits. "
                "Please add more credits to your account and try again.",
                provider=self.provider,
                status_code=status,
            )

        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            raise ProviderException(
                f"Attachment upload of '{descriptor.name}' failed: {exc}",
                provider=self.provider,
                status_code=status,
                original_error=exc,
            ) from exc

        url = body.get("url") if isinstance(body, dict) else None
        if not isinstance(url, str) or not url:
            raise ProviderException(
                f"Attachment endpoint returned no URL for '{descriptor.name}'",
                provider=self.provider,
                status_code=status,
            )

        logger.debug("Uploaded '%s' as %s", descriptor.name, url)
        return url

    @staticmethod
    def _json_body(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return None
