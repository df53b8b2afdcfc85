"""
Logging setup for migration runs.

Run progress goes to the ``blogger_migrate`` logger: a Rich console handler
and, when ``logging.file`` is set, a file under ``logging.directory``.
Rewrite responses can go to a separate ``blogger_migrate.llm`` JSONL log
with URLs and author names redacted.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
import re
from typing import Any

from rich.logging import RichHandler

from ..config import LoggingConfig


_URL_RE = re.compile(r"https?://\S+")

LOGGER_NAME = "blogger_migrate"
LLM_LOGGER_NAME = f"{LOGGER_NAME}.llm"


def setup_logging(cfg: LoggingConfig) -> logging.Logger:
    """Configure the run logger from ``cfg``, replacing earlier handlers."""
    level = _level_from_string(cfg.level)
    logger = _reset_logger(LOGGER_NAME, level)

    if cfg.console:
        console_handler = RichHandler(rich_tracebacks=True, show_time=False, show_level=True)
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(console_handler)

    if cfg.file and cfg.directory:
        formatter = JsonlFormatter() if cfg.format == "jsonl" else _PLAIN_FORMATTER
        logger.addHandler(_file_handler(Path(cfg.directory) / cfg.filename, level, formatter))

    return logger


def setup_llm_logger(cfg: LoggingConfig) -> logging.Logger | None:
    """Return the rewrite-response logger, or None when it is disabled.

    The log needs a directory; without ``logging.directory`` nothing is
    recorded even if ``llm_log_enabled`` is set.
    """
    if not cfg.llm_log_enabled or not cfg.directory:
        return None
    level = _level_from_string(cfg.level)
    logger = _reset_logger(LLM_LOGGER_NAME, level)
    logger.addHandler(_file_handler(Path(cfg.directory) / cfg.llm_log_file, level, JsonlFormatter()))
    return logger


def log_event(logger: logging.Logger | None, message: str, **fields: Any) -> None:
    if logger is None:
        return
    logger.info(message, extra=fields)


def redact_text(text: str, mode: str) -> str:
    """Apply a redaction mode to free text such as a prompt or a rewrite."""
    if mode == "redact_content":
        return ""
    if mode == "redact_urls_authors":
        return _URL_RE.sub("[REDACTED_URL]", text)
    return text


def redact_value(value: str | None, mode: str) -> str | None:
    """Apply a redaction mode to a single identifying field (an author name)."""
    if value is None or mode == "redact_content":
        return None
    if mode == "redact_urls_authors":
        return "[REDACTED]"
    return value


def truncate_text(text: str, max_chars: int = 20000) -> str:
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + "...(truncated)"


class JsonlFormatter(logging.Formatter):
    """One JSON object per record, with ``log_event`` fields inlined."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            (key, value) for key, value in record.__dict__.items() if key not in _RESERVED_ATTRS
        )
        return json.dumps(payload, ensure_ascii=True, default=str)


_RESERVED_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message"}

_PLAIN_FORMATTER = logging.Formatter("%(asctime)s %(levelname)s %(message)s")


def _reset_logger(name: str, level: int) -> logging.Logger:
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(level)
    logger.propagate = False
    return logger


def _file_handler(path: Path, level: int, formatter: logging.Formatter) -> logging.FileHandler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _level_from_string(level: str) -> int:
    return getattr(logging, level.upper(), logging.INFO)
