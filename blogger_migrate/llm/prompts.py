"""Prompt loading and rendering helpers for rewrite providers."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path


_PROMPT_DIR = Path(__file__).resolve().parent.parent / "prompts"


@lru_cache(maxsize=None)
def _load_template(name: str) -> str:
    path = _PROMPT_DIR / f"{name}.md"
    return path.read_text(encoding="utf-8").strip()


def build_rewrite_prompt(content: str) -> str:
    """Return the fixed rewrite instructions followed by the raw post body."""
    return f"{_load_template('rewrite')}\n{content}"
