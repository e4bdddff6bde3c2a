"""Shared pytest configuration and fixtures for the test suite."""

from collections.abc import Sequence
from pathlib import Path

import pytest

from attachment_bridge.files.processors import AttachmentDescriptor
from attachment_bridge.transport import AttachmentTransport, TransportResponse


class RecordingTransport(AttachmentTransport):
    """Transport double that assigns sequential URLs and records what it sent."""

    def __init__(
        self,
        base_url: str = "https://files.example",
        returned_attachments: list[AttachmentDescriptor] | None = None,
        assign_urls: bool = True,
    ) -> None:
        self.base_url = base_url
        self.returned_attachments = returned_attachments or []
        self.assign_urls = assign_urls
        self.sent: list[AttachmentDescriptor] = []

    def send(self, descriptors: Sequence[AttachmentDescriptor]) -> TransportResponse:
        start = len(self.sent) + 1
        self.sent.extend(descriptors)
        urls = (
            [f"{self.base_url}/{start + i}" for i in range(len(descriptors))]
            if self.assign_urls
            else []
        )
        return TransportResponse(urls=urls, attachments=self.returned_attachments)


@pytest.fixture
def recording_transport() -> RecordingTransport:
    """Transport double assigning https://files.example/<n> URLs."""
    return RecordingTransport()


@pytest.fixture
def transport_factory() -> type[RecordingTransport]:
    """The transport double class, for tests needing custom behaviour."""
    return RecordingTransport


@pytest.fixture
def home_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the home directory at a temporary directory."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    return home


@pytest.fixture
def sample_api_key() -> str:
    """Sample API key for testing."""
    return "test-api-key-12345"


# Pytest configuration
pytest_plugins: list[str] = []
