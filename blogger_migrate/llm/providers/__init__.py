"""Rewrite provider implementations."""

from .base import HttpRewriteProvider, RewriteProvider
from .factory import available_providers, create_provider
from .gemini import GeminiProvider
from .groq import GroqProvider
from .ollama import OllamaProvider

__all__ = [
    "RewriteProvider",
    "HttpRewriteProvider",
    "GroqProvider",
    "OllamaProvider",
    "GeminiProvider",
    "available_providers",
    "create_provider",
]
