"""Configuration utilities for environment-based setup."""

import os
from enum import Enum
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel

from attachment_bridge.exceptions import ConfigurationException
from attachment_bridge.files.store import default_attachment_dir
from attachment_bridge.transport import HttpAttachmentTransport

ATTACHMENT_DIR_ENV = "ATTACHMENT_BRIDGE_DIR"

DEVIN_MODELS = ("devin-standard", "devin-deep")


class WireApi(str, Enum):
    """Wire protocol spoken by a provider endpoint."""

    RESPONSES = "responses"
    CHAT = "chat"
    DEVIN = "devin"


class ModelProviderInfo(BaseModel):
    """Endpoint and credential settings for one model provider.

    Attributes:
        name: Display name of the provider
        base_url: Base URL of the provider API
        env_key: Environment variable holding the API key, if one is needed
        env_key_instructions: Hint shown when the key is missing
        wire_api: Wire protocol spoken by the endpoint
    """

    name: str
    base_url: str
    env_key: str | None = None
    env_key_instructions: str | None = None
    wire_api: WireApi = WireApi.RESPONSES

    def api_key(self) -> str | None:
        """Read the provider's API key from the environment.

        Returns:
            The key, or None if the provider does not need one

        Raises:
            ConfigurationException: If the key variable is unset or blank
        """
        if self.env_key is None:
            return None

        value = os.getenv(self.env_key)
        if value is None or not value.strip():
            message = f"Missing environment variable: {self.env_key}."
            if self.env_key_instructions:
                message = f"{message} {self.env_key_instructions}"
            raise ConfigurationException(message, config_key=self.env_key)
        return value


def load_environment() -> None:
    """Load environment variables from .env file if it exists."""
    load_dotenv()


def built_in_model_providers() -> dict[str, ModelProviderInfo]:
    """Return the built-in provider table keyed by provider id."""
    return {
        "openai": ModelProviderInfo(
            name="OpenAI",
            base_url="https://api.openai.com/v1",
            env_key="OPENAI_API_KEY",
            env_key_instructions=(
                "Create an API key (https://platform.openai.com) and export it "
                "as an environment variable."
            ),
            wire_api=WireApi.RESPONSES,
        ),
        "openrouter": ModelProviderInfo(
            name="OpenRouter",
            base_url="https://openrouter.ai/api/v1",
            env_key="OPENROUTER_API_KEY",
            wire_api=WireApi.CHAT,
        ),
        "gemini": ModelProviderInfo(
            name="Gemini",
            base_url="https://generativelanguage.googleapis.com/v1beta/openai",
            env_key="GEMINI_API_KEY",
            wire_api=WireApi.CHAT,
        ),
        "ollama": ModelProviderInfo(
            name="Ollama",
            base_url="http://localhost:11434/v1",
            wire_api=WireApi.CHAT,
        ),
        "mistral": ModelProviderInfo(
            name="Mistral",
            base_url="https://api.mistral.ai/v1",
            env_key="MISTRAL_API_KEY",
            wire_api=WireApi.CHAT,
        ),
        "deepseek": ModelProviderInfo(
            name="DeepSeek",
            base_url="https://api.deepseek.com",
            env_key="DEEPSEEK_API_KEY",
            wire_api=WireApi.CHAT,
        ),
        "xai": ModelProviderInfo(
            name="xAI",
            base_url="https://api.x.ai/v1",
            env_key="XAI_API_KEY",
            wire_api=WireApi.CHAT,
        ),
        "groq": ModelProviderInfo(
            name="Groq",
            base_url="https://api.groq.com/openai/v1",
            env_key="GROQ_API_KEY",
            wire_api=WireApi.CHAT,
        ),
        "devin": ModelProviderInfo(
            name="Devin",
            base_url="https://api.devin.ai/v1",
            env_key="DEVIN_API_KEY",
            env_key_instructions=(
                "Create a Devin API key (https://docs.devin.ai/api-reference) "
                "and export it as an environment variable."
            ),
            wire_api=WireApi.DEVIN,
        ),
    }


def get_provider(provider: str) -> ModelProviderInfo:
    """Look up a built-in provider.

    Raises:
        ConfigurationException: If the provider is unknown
    """
    providers = built_in_model_providers()
    try:
        return providers[provider]
    except KeyError:
        raise ConfigurationException(
            f"Unknown model provider '{provider}'. "
            f"Known providers: {', '.join(sorted(providers))}.",
            config_key="provider",
            config_value=provider,
        ) from None


def get_available_providers() -> dict[str, bool]:
    """Check which providers have API keys available.

    Providers that need no key are always available.

    Returns:
        Dictionary mapping provider ids to availability status
    """
    load_environment()

    available: dict[str, bool] = {}
    for provider_id, info in built_in_model_providers().items():
        if info.env_key is None:
            available[provider_id] = True
        else:
            value = os.getenv(info.env_key)
            available[provider_id] = value is not None and bool(value.strip())
    return available


def is_devin_model(model: str) -> bool:
    """Return True if the model name belongs to the Devin family."""
    return model.startswith("devin-")


def is_devin_model_supported(model: str) -> bool:
    """Return True if the model is one of the known Devin models."""
    return model in DEVIN_MODELS


def get_attachment_dir() -> Path:
    """Directory where received attachments are saved.

    ``ATTACHMENT_BRIDGE_DIR`` overrides the default ``~/.codex/attachments``.
    """
    load_environment()

    override = os.getenv(ATTACHMENT_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return default_attachment_dir()


def create_http_transport(
    provider: str = "devin",
    api_key: str | None = None,
    timeout: float = 30.0,
    max_retries: int = 3,
) -> HttpAttachmentTransport:
    """Create an HTTP attachment transport with environment-based configuration.

    Args:
        provider: Built-in provider id (default: 'devin')
        api_key: API key (if None, loads from the provider's env var)
        timeout: Per-request timeout in seconds
        max_retries: Retries for rate-limited or failed uploads

    Returns:
        Configured HttpAttachmentTransport

    Raises:
        ConfigurationException: If the provider is unknown or its key is missing
    """
    load_environment()

    info = get_provider(provider)
    if api_key is None:
        api_key = info.api_key()

    return HttpAttachmentTransport(
        base_url=info.base_url,
        api_key=api_key,
        provider=provider,
        timeout=timeout,
        max_retries=max_retries,
    )
