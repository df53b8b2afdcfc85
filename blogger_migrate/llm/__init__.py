"""LLM rewriting and observability."""

from .prompts import build_rewrite_prompt
from .providers import (
    GeminiProvider,
    GroqProvider,
    OllamaProvider,
    RewriteProvider,
    available_providers,
    create_provider,
)
from .tracing import flush, record_span_error, set_span_output, setup_langfuse, start_span

__all__ = [
    "RewriteProvider",
    "GroqProvider",
    "OllamaProvider",
    "GeminiProvider",
    "create_provider",
    "available_providers",
    "build_rewrite_prompt",
    "setup_langfuse",
    "flush",
    "start_span",
    "set_span_output",
    "record_span_error",
]
