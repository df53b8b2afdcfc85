"""Google Gemini provider for post rewriting."""

from __future__ import annotations

from typing import Any

from .base import HttpRewriteProvider


class GeminiProvider(HttpRewriteProvider):
    """Gemini-backed rewrite via the generateContent endpoint."""

    name = "gemini"
    default_model = "gemini-2.5-flash"
    default_base_url = "https://generativelanguage.googleapis.com"
    api_key_env = "GOOGLE_API_KEY"

    def _generate(self, prompt: str) -> str:
        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {"temperature": 0.2, "maxOutputTokens": self.cfg.max_tokens},
        }
        url = f"{self.base_url}/v1beta/models/{self.model}:generateContent"
        data = self._post(url, payload, params={"key": self.api_key})
        return _extract_text(data)


def _extract_text(data: dict[str, Any]) -> str:
    """Join the text parts of the first candidate, skipping thought parts."""
    parts = data["candidates"][0]["content"]["parts"]
    return "".join(part.get("text", "") for part in parts if not part.get("thought"))
