"""Groq provider using the OpenAI-compatible chat completions endpoint."""

from __future__ import annotations

from typing import Any

from .base import HttpRewriteProvider


class GroqProvider(HttpRewriteProvider):
    """Groq-hosted chat model for post rewriting."""

    name = "groq"
    default_model = "llama-3.3-70b-versatile"
    default_base_url = "https://api.groq.com/openai/v1"
    api_key_env = "GROQ_API_KEY"

    def _generate(self, prompt: str) -> str:
        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": self.cfg.max_tokens,
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}
        data = self._post(f"{self.base_url}/chat/completions", payload, headers=headers)
        return _extract_text(data)


def _extract_text(data: dict[str, Any]) -> str:
    return data["choices"][0]["message"]["content"]
