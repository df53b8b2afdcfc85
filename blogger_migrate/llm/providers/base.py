"""Interfaces and shared HTTP plumbing for rewrite providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
import logging
from typing import Any

import httpx

from ...config import LoggingConfig, ProviderConfig
from ...core.types import Entry
from ...errors import RewriteError
from ...utils.logging import log_event, redact_text, redact_value, truncate_text
from ..prompts import build_rewrite_prompt
from ..tracing import record_span_error, set_span_output, start_span


class RewriteProvider(ABC):
    """Provider interface for rewriting an entry body."""

    @abstractmethod
    def rewrite(self, entry: Entry, entry_logger: logging.Logger | None = None) -> str:
        """Return the rewritten body of ``entry``.

        Raises:
            RewriteError: If the provider fails or returns no usable text
        """
        raise NotImplementedError


class HttpRewriteProvider(RewriteProvider):
    """Rewrite provider backed by a single JSON-over-HTTP request.

    Subclasses set the class-level defaults and implement ``_generate``,
    which sends the prompt and returns the response text. Transport errors
    and malformed responses are converted to ``RewriteError`` here.
    """

    name = ""
    default_model = ""
    default_base_url = ""
    api_key_env: str | None = None
    requires_api_key = True

    def __init__(
        self,
        cfg: ProviderConfig,
        api_key: str | None,
        log_cfg: LoggingConfig,
        llm_logger: logging.Logger | None = None,
    ):
        if self.requires_api_key and not api_key:
            env_name = cfg.api_key_env or self.api_key_env
            raise ValueError(f"Missing {self.name} API key (set {env_name} or pass --api-key)")
        self.cfg = cfg
        self.api_key = api_key
        self.log_cfg = log_cfg
        self.llm_logger = llm_logger

    @property
    def model(self) -> str:
        return self.cfg.model or self.default_model

    @property
    def base_url(self) -> str:
        return (self.cfg.base_url or self.default_base_url).rstrip("/")

    def rewrite(self, entry: Entry, entry_logger: logging.Logger | None = None) -> str:
        prompt = build_rewrite_prompt(entry.content)
        with start_span(
            f"{self.name}.rewrite",
            kind="llm",
            input_value=prompt,
            attributes={
                "llm.model": self.model,
                "llm.provider": self.name,
                "entry.title": entry.title,
                "entry.id": entry.id,
            },
        ) as span:
            try:
                content = self._generate(prompt)
            except (
                httpx.HTTPError,
                ValueError,
                KeyError,
                IndexError,
                TypeError,
                AttributeError,
            ) as exc:
                record_span_error(span, exc)
                self._log_llm_response(entry, "provider_error", str(exc), prompt, entry_logger)
                raise RewriteError(
                    f"{self.name} failed rewriting {entry.title!r}: {type(exc).__name__}: {exc}"
                ) from exc
            if not content or not content.strip():
                self._log_llm_response(entry, "empty_response", "", prompt, entry_logger)
                raise RewriteError(f"{self.name} returned an empty rewrite for {entry.title!r}")
            set_span_output(span, content)
            self._log_llm_response(entry, "ok", content, prompt, entry_logger)
            return content

    @abstractmethod
    def _generate(self, prompt: str) -> str:
        raise NotImplementedError

    def _post(
        self,
        url: str,
        payload: dict[str, Any],
        headers: dict[str, str] | None = None,
        params: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        with httpx.Client(timeout=self.cfg.timeout_seconds, trust_env=self.cfg.trust_env) as client:
            resp = client.post(url, params=params, headers=headers, json=payload)
            resp.raise_for_status()
            return resp.json()

    def _log_llm_response(
        self,
        entry: Entry,
        status: str,
        content: str,
        prompt: str,
        logger: logging.Logger | None = None,
    ) -> None:
        active_logger = logger or self.llm_logger
        if active_logger is None:
            return
        detail = self.log_cfg.llm_log_detail
        redaction = self.log_cfg.llm_log_redaction
        payload = {
            "event": "llm_rewrite_response",
            "status": status,
            "provider": self.name,
            "model": self.model,
            "entry_id": entry.id,
            "entry_title": entry.title,
            "author": redact_value(entry.author.name, redaction),
        }
        if detail == "prompt_response":
            payload["raw_prompt"] = truncate_text(redact_text(prompt, redaction))
        payload["raw_response"] = truncate_text(redact_text(content, redaction))
        log_event(active_logger, "LLM response", **payload)
