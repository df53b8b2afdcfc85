"""Provider factory and registry for hot-swappable rewrite backends."""

from __future__ import annotations

import logging

from ...config import LoggingConfig, ProviderConfig, get_api_key
from .base import HttpRewriteProvider
from .gemini import GeminiProvider
from .groq import GroqProvider
from .ollama import OllamaProvider


ProviderBuilder = type[HttpRewriteProvider]

_PROVIDER_REGISTRY: dict[str, ProviderBuilder] = {
    "groq": GroqProvider,
    "ollama": OllamaProvider,
    "gemini": GeminiProvider,
}


def available_providers() -> list[str]:
    """Return the set of registered provider names."""
    return sorted(_PROVIDER_REGISTRY.keys())


def create_provider(
    provider_cfg: ProviderConfig,
    log_cfg: LoggingConfig,
    llm_logger: logging.Logger | None = None,
) -> HttpRewriteProvider:
    """Build a provider instance from runtime config.

    The API key is resolved here, from the inline config or the provider's
    environment variable, and handed to the provider constructor.
    """
    name = provider_cfg.name.lower().strip()
    builder = _PROVIDER_REGISTRY.get(name)
    if builder is None:
        supported = ", ".join(available_providers())
        raise ValueError(f"Unsupported provider: {provider_cfg.name}. Supported: {supported}")
    api_key = get_api_key(provider_cfg, builder.api_key_env)
    return builder(provider_cfg, api_key, log_cfg, llm_logger)
