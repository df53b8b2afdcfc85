"""Tests for rewrite providers and the provider factory."""

from datetime import datetime, timezone

import httpx
import pytest

from blogger_migrate.config import LoggingConfig, ProviderConfig
from blogger_migrate.core.types import Entry
from blogger_migrate.errors import RewriteError
from blogger_migrate.llm.prompts import build_rewrite_prompt
from blogger_migrate.llm.providers.factory import available_providers, create_provider
from blogger_migrate.llm.providers.gemini import GeminiProvider, _extract_text
from blogger_migrate.llm.providers.groq import GroqProvider
from blogger_migrate.llm.providers.ollama import OllamaProvider, sanitize_response


def _sample_entry(content: str = "<b>hi</b>") -> Entry:
    stamp = datetime(2020, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    return Entry(
        id="tag:1",
        published=stamp,
        updated=stamp,
        is_draft=False,
        title="Hello World",
        content=content,
    )


def test_available_providers_contains_expected_backends():
    assert available_providers() == ["gemini", "groq", "ollama"]


def test_create_provider_groq_with_inline_key():
    provider = create_provider(ProviderConfig(name="groq", api_key="test-key"), LoggingConfig())
    assert isinstance(provider, GroqProvider)
    assert provider.model == "llama-3.3-70b-versatile"


def test_create_provider_reads_key_from_environment(monkeypatch):
    monkeypatch.setenv("GOOGLE_API_KEY", "env-key")
    provider = create_provider(ProviderConfig(name="Gemini"), LoggingConfig())
    assert isinstance(provider, GeminiProvider)
    assert provider.api_key == "env-key"


def test_create_provider_ollama_needs_no_key():
    provider = create_provider(ProviderConfig(name="ollama"), LoggingConfig())
    assert isinstance(provider, OllamaProvider)
    assert provider.base_url == "http://localhost:11434"


def test_create_provider_missing_key(monkeypatch):
    monkeypatch.delenv("GROQ_API_KEY", raising=False)
    with pytest.raises(ValueError, match="GROQ_API_KEY"):
        create_provider(ProviderConfig(name="groq"), LoggingConfig())


def test_create_provider_rejects_unknown_backend():
    with pytest.raises(ValueError, match="Unsupported provider"):
        create_provider(ProviderConfig(name="unknown-provider", api_key="k"), LoggingConfig())


def test_rewrite_prompt_is_instructions_then_content():
    prompt = build_rewrite_prompt("<b>hi</b>")
    assert prompt.startswith("You are an expert in Markdown and HTML.")
    assert "[Gist](https://gist.github.com/" in prompt
    assert prompt.endswith("The code is as follows:\n<b>hi</b>")


def test_groq_rewrite_sends_prompt_and_returns_text(monkeypatch):
    provider = GroqProvider(ProviderConfig(api_key="test-key"), "test-key", LoggingConfig())
    captured = {}

    def fake_post(url, payload, headers=None, params=None):
        captured.update(url=url, payload=payload, headers=headers)
        return {"choices": [{"message": {"content": "**hi**"}}]}

    monkeypatch.setattr(provider, "_post", fake_post)

    assert provider.rewrite(_sample_entry()) == "**hi**"
    assert captured["url"] == "https://api.groq.com/openai/v1/chat/completions"
    assert captured["headers"] == {"Authorization": "Bearer test-key"}
    assert captured["payload"]["max_tokens"] == 2000
    assert captured["payload"]["messages"] == [
        {"role": "user", "content": build_rewrite_prompt("<b>hi</b>")}
    ]


def test_rewrite_wraps_http_errors(monkeypatch):
    provider = GroqProvider(ProviderConfig(), "test-key", LoggingConfig())

    def fake_post(url, payload, headers=None, params=None):
        raise httpx.ConnectError("connection refused")

    monkeypatch.setattr(provider, "_post", fake_post)

    with pytest.raises(RewriteError, match="Hello World"):
        provider.rewrite(_sample_entry())


def test_rewrite_wraps_malformed_response(monkeypatch):
    provider = GroqProvider(ProviderConfig(), "test-key", LoggingConfig())
    monkeypatch.setattr(provider, "_post", lambda *args, **kwargs: {"choices": []})

    with pytest.raises(RewriteError):
        provider.rewrite(_sample_entry())


def test_rewrite_rejects_empty_response(monkeypatch):
    provider = GroqProvider(ProviderConfig(), "test-key", LoggingConfig())
    monkeypatch.setattr(
        provider, "_post", lambda *args, **kwargs: {"choices": [{"message": {"content": "  "}}]}
    )

    with pytest.raises(RewriteError, match="empty"):
        provider.rewrite(_sample_entry())


def test_ollama_rewrite_sanitizes_response(monkeypatch):
    provider = OllamaProvider(ProviderConfig(base_url="http://ollama:11434/"), None, LoggingConfig())
    captured = {}

    def fake_post(url, payload, headers=None, params=None):
        captured.update(url=url, payload=payload)
        return {"message": {"content": "<think>plan</think>```markdown\n# Title\nBody\n```"}}

    monkeypatch.setattr(provider, "_post", fake_post)

    assert provider.rewrite(_sample_entry()) == "# Title\nBody"
    assert captured["url"] == "http://ollama:11434/api/chat"
    assert captured["payload"]["stream"] is False
    assert captured["payload"]["model"] == "qwen2.5-coder:7b"
    assert captured["payload"]["messages"][0]["role"] == "system"


def test_sanitize_response_leaves_plain_text():
    assert sanitize_response("# Title\nBody") == "# Title\nBody"
    assert sanitize_response("single line") == "single line"


def test_sanitize_response_removes_multiline_think_block():
    assert sanitize_response("<think>\nstep 1\nstep 2\n</think>Answer") == "Answer"


def test_gemini_extract_text_joins_non_thought_parts():
    data = {
        "candidates": [
            {
                "content": {
                    "parts": [
                        {"thought": True, "text": "internal reasoning"},
                        {"text": "Hello "},
                        {"text": "world"},
                    ]
                }
            }
        ]
    }
    assert _extract_text(data) == "Hello world"


def test_gemini_rewrite_passes_key_as_param(monkeypatch):
    provider = GeminiProvider(ProviderConfig(name="gemini", model="gemini-test"), "g-key", LoggingConfig())
    captured = {}

    def fake_post(url, payload, headers=None, params=None):
        captured.update(url=url, params=params)
        return {"candidates": [{"content": {"parts": [{"text": "done"}]}}]}

    monkeypatch.setattr(provider, "_post", fake_post)

    assert provider.rewrite(_sample_entry()) == "done"
    assert captured["url"].endswith("/v1beta/models/gemini-test:generateContent")
    assert captured["params"] == {"key": "g-key"}


def test_gemini_rewrite_wraps_malformed_parts(monkeypatch):
    provider = GeminiProvider(ProviderConfig(name="gemini"), "g-key", LoggingConfig())
    monkeypatch.setattr(
        provider,
        "_post",
        lambda *args, **kwargs: {"candidates": [{"content": {"parts": ["not-a-dict"]}}]},
    )

    with pytest.raises(RewriteError, match="gemini failed rewriting"):
        provider.rewrite(_sample_entry())
