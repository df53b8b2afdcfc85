"""Ollama provider for rewriting posts with a locally served model."""

from __future__ import annotations

import re
from typing import Any

from .base import HttpRewriteProvider


_THINK_RE = re.compile(r"<think>.*?</think>", re.DOTALL)

SYSTEM_PROMPT = "You are an expert code analyzer."


class OllamaProvider(HttpRewriteProvider):
    """Local Ollama chat model. No API key is needed."""

    name = "ollama"
    default_model = "qwen2.5-coder:7b"
    default_base_url = "http://localhost:11434"
    requires_api_key = False

    def _generate(self, prompt: str) -> str:
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "stream": False,
        }
        data = self._post(f"{self.base_url}/api/chat", payload)
        return sanitize_response(_extract_text(data))


def _extract_text(data: dict[str, Any]) -> str:
    return data["message"]["content"]


def sanitize_response(response: str) -> str:
    """Strip reasoning blocks and a wrapping markdown fence from model output.

    Reasoning models emit ``<think>...</think>`` before the answer, and
    coder models tend to wrap the whole answer in a fenced markdown block.
    """
    text = _THINK_RE.sub("", response)
    return _strip_markdown_fence(text)


def _strip_markdown_fence(text: str) -> str:
    lines = text.split("\n")
    if len(lines) < 2:
        return text
    if "```markdown" not in lines[0]:
        return text
    # Drops the opening fence and the last line, which holds the closing fence.
    return "\n".join(lines[1:-1])
