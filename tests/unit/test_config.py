"""Unit tests for configuration utilities."""

from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from attachment_bridge.exceptions import ConfigurationException
from attachment_bridge.transport import HttpAttachmentTransport
from attachment_bridge.utils.config import (
    ModelProviderInfo,
    WireApi,
    built_in_model_providers,
    create_http_transport,
    get_attachment_dir,
    get_available_providers,
    get_provider,
    is_devin_model,
    is_devin_model_supported,
    load_environment,
)


class TestConfigurationUtils:
    """Test configuration utility functions."""

    @pytest.mark.unit
    @patch("attachment_bridge.utils.config.load_dotenv")
    def test_load_environment(self, mock_load_dotenv: Any) -> None:
        """Test loading environment variables."""
        load_environment()
        mock_load_dotenv.assert_called_once()

    @pytest.mark.unit
    def test_built_in_providers(self) -> None:
        """Test the static provider table."""
        providers = built_in_model_providers()

        assert set(providers) == {
            "openai",
            "openrouter",
            "gemini",
            "ollama",
            "mistral",
            "deepseek",
            "xai",
            "groq",
            "devin",
        }
        assert providers["devin"].base_url == "https://api.devin.ai/v1"
        assert providers["devin"].wire_api is WireApi.DEVIN
        assert providers["openai"].wire_api is WireApi.RESPONSES
        assert providers["ollama"].env_key is None

    @pytest.mark.unit
    def test_get_unknown_provider_raises(self) -> None:
        """Test that unknown providers raise ConfigurationException."""
        with pytest.raises(ConfigurationException, match="Unknown model provider") as exc:
            get_provider("nope")

        assert exc.value.config_value == "nope"

    @pytest.mark.unit
    def test_api_key_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test reading a provider key from the environment."""
        monkeypatch.setenv("DEVIN_API_KEY", "apk_from_env")
        assert get_provider("devin").api_key() == "apk_from_env"

    @pytest.mark.unit
    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_api_key_missing_or_blank(
        self, monkeypatch: pytest.MonkeyPatch, value: str | None
    ) -> None:
        """Test that unset or blank keys raise with instructions."""
        if value is None:
            monkeypatch.delenv("DEVIN_API_KEY", raising=False)
        else:
            monkeypatch.setenv("DEVIN_API_KEY", value)

        with pytest.raises(ConfigurationException, match="DEVIN_API_KEY") as exc:
            get_provider("devin").api_key()

        assert exc.value.config_key == "DEVIN_API_KEY"
        assert "docs.devin.ai" in str(exc.value)

    @pytest.mark.unit
    def test_keyless_provider(self) -> None:
        """Test that providers without env_key need no API key."""
        info = ModelProviderInfo(name="Local", base_url="http://localhost")
        assert info.api_key() is None

    @pytest.mark.unit
    @patch("attachment_bridge.utils.config.load_dotenv")
    def test_get_available_providers(
        self, mock_load_dotenv: Any, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test provider availability reflects the environment."""
        for info in built_in_model_providers().values():
            if info.env_key:
                monkeypatch.delenv(info.env_key, raising=False)
        monkeypatch.setenv("DEVIN_API_KEY", "apk_test")
        monkeypatch.setenv("GROQ_API_KEY", " ")

        available = get_available_providers()

        assert available["devin"] is True
        assert available["ollama"] is True
        assert available["groq"] is False
        assert available["openai"] is False

    @pytest.mark.unit
    def test_devin_model_helpers(self) -> None:
        """Test Devin model name checks."""
        assert is_devin_model("devin-standard")
        assert is_devin_model("devin-experimental")
        assert not is_devin_model("gpt-4")
        assert is_devin_model_supported("devin-deep")
        assert not is_devin_model_supported("devin-experimental")


class TestAttachmentDirectory:
    """Test attachment directory configuration."""

    @pytest.mark.unit
    @patch("attachment_bridge.utils.config.load_dotenv")
    def test_env_override(
        self, mock_load_dotenv: Any, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        """Test ATTACHMENT_BRIDGE_DIR overrides the default."""
        monkeypatch.setenv("ATTACHMENT_BRIDGE_DIR", str(tmp_path / "inbox"))
        assert get_attachment_dir() == tmp_path / "inbox"

    @pytest.mark.unit
    @patch("attachment_bridge.utils.config.load_dotenv")
    def test_default(
        self, mock_load_dotenv: Any, monkeypatch: pytest.MonkeyPatch, home_dir: Path
    ) -> None:
        """Test the default directory under the home directory."""
        monkeypatch.delenv("ATTACHMENT_BRIDGE_DIR", raising=False)
        assert get_attachment_dir() == home_dir / ".codex" / "attachments"


class TestCreateHttpTransport:
    """Test transport factory."""

    @pytest.mark.unit
    @patch("attachment_bridge.utils.config.load_dotenv")
    def test_with_env_key(
        self, mock_load_dotenv: Any, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test creating a transport with the environment API key."""
        monkeypatch.setenv("DEVIN_API_KEY", "apk_env_key")

        transport = create_http_transport()

        assert isinstance(transport, HttpAttachmentTransport)
        assert transport.base_url == "https://api.devin.ai/v1"
        assert transport.api_key == "apk_env_key"
        assert transport.provider == "devin"

    @pytest.mark.unit
    @patch("attachment_bridge.utils.config.load_dotenv")
    def test_with_explicit_key(self, mock_load_dotenv: Any) -> None:
        """Test an explicit key wins over the environment."""
        transport = create_http_transport(
            "openai", api_key="explicit-key", timeout=3.0, max_retries=0
        )

        assert transport.base_url == "https://api.openai.com/v1"
        assert transport.api_key == "explicit-key"
        assert transport.timeout == 3.0
        assert transport.max_retries == 0

    @pytest.mark.unit
    @patch("attachment_bridge.utils.config.load_dotenv")
    def test_missing_key_raises(
        self, mock_load_dotenv: Any, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that a missing key raises ConfigurationException."""
        monkeypatch.delenv("DEVIN_API_KEY", raising=False)

        with pytest.raises(ConfigurationException):
            create_http_transport("devin")

    @pytest.mark.unit
    @patch("attachment_bridge.utils.config.load_dotenv")
    def test_keyless_provider(self, mock_load_dotenv: Any) -> None:
        """Test local providers need no key."""
        transport = create_http_transport("ollama")
        assert transport.api_key is None
