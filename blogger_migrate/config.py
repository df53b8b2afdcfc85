"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- ProviderConfig: Rewrite provider settings
- PacingConfig: Delay between rewrite calls
- OutputConfig: Output file settings
- LoggingConfig: Logging behavior
- LangfuseConfig: Langfuse tracing settings
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from typing import Any

import yaml


@dataclass
class ProviderConfig:
    """Configuration for the rewrite provider.

    Attributes:
        name: Provider name ("groq", "ollama" or "gemini")
        model: Model identifier; None uses the provider's default model
        api_key: Optional inline API key (overrides env var)
        api_key_env: Environment variable holding the API key; None uses
            the provider's default variable
        base_url: Base URL for the provider API; None uses the provider default
        timeout_seconds: HTTP timeout for a single rewrite request
        max_tokens: Upper bound on generated tokens per rewrite
        trust_env: Whether to respect system proxy settings for API requests
    """

    name: str = "groq"
    model: str | None = None
    api_key: str | None = None
    api_key_env: str | None = None
    base_url: str | None = None
    timeout_seconds: float = 120.0
    max_tokens: int = 2000
    trust_env: bool = True


@dataclass
class PacingConfig:
    """Configuration for request pacing.

    Attributes:
        delay_seconds: Pause after each written post, to stay under the
            provider's request-rate limit
    """

    delay_seconds: float = 20.0


@dataclass
class OutputConfig:
    """Configuration for output generation.

    Attributes:
        extension: Suffix of the written post files
    """

    extension: str = ".md"


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        directory: Directory for log files; None disables file logging
        format: Log file format ("jsonl" or "plain")
        filename: Name of the main log file
        llm_log_enabled: Whether to enable separate LLM interaction logging
        llm_log_detail: LLM log detail level ("response_only", "prompt_response")
        llm_log_redaction: Redaction mode for LLM logs ("none", "redact_content", "redact_urls_authors")
        llm_log_file: Name of the LLM log file
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    directory: str | None = None
    format: str = "jsonl"
    filename: str = "migration.jsonl"
    llm_log_enabled: bool = False
    llm_log_detail: str = "response_only"
    llm_log_redaction: str = "redact_urls_authors"
    llm_log_file: str = "llm.jsonl"


@dataclass
class LangfuseConfig:
    """Configuration for Langfuse tracing.

    Attributes:
        enabled: Whether to enable Langfuse tracing
        public_key: Langfuse public key (optional)
        secret_key: Langfuse secret key (optional)
        host: Langfuse host URL (optional)
        redaction: Redaction mode for prompt/response payloads
        max_text_chars: Maximum characters for prompt/response payloads
    """

    enabled: bool = False
    public_key: str | None = None
    secret_key: str | None = None
    host: str | None = None
    redaction: str = "redact_urls_authors"
    max_text_chars: int = 20000


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    provider: ProviderConfig = field(default_factory=ProviderConfig)
    pacing: PacingConfig = field(default_factory=PacingConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    langfuse: LangfuseConfig = field(default_factory=LangfuseConfig)


_SECTIONS = {
    "provider": ProviderConfig,
    "pacing": PacingConfig,
    "output": OutputConfig,
    "logging": LoggingConfig,
    "langfuse": LangfuseConfig,
}


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig.

    Unknown sections are ignored; unknown keys inside a section raise
    ``TypeError`` from the dataclass constructor.
    """
    data = {name: dict(vars(getattr(base, name))) for name in _SECTIONS}
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict):
            data[key].update(value)
    return AppConfig(**{name: cls(**data[name]) for name, cls in _SECTIONS.items()})


def get_api_key(cfg: ProviderConfig, default_env: str | None = None) -> str | None:
    """Get API key from inline config or environment variable."""
    if cfg.api_key:
        return cfg.api_key
    env_name = cfg.api_key_env or default_env
    if not env_name:
        return None
    return os.getenv(env_name)
