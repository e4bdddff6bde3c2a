"""Utility functions for configuration and provider lookup."""

from .config import (
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

__all__ = [
    "load_environment",
    "ModelProviderInfo",
    "WireApi",
    "built_in_model_providers",
    "create_http_transport",
    "get_attachment_dir",
    "get_available_providers",
    "get_provider",
    "is_devin_model",
    "is_devin_model_supported",
]
