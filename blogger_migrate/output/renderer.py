"""
Rendering of migrated entries into Hugo content files.

A document is a TOML front matter block between ``+++`` lines followed by
a blank line and the rewritten body:

    +++
    title = "Hello World"
    date = '2020-01-02T03:04:05Z'
    updated = '2020-01-02T03:04:05Z'
    tags = ["go"]
    draft = true
    +++

    Body text

``tags`` appears only when the entry has label tags, and ``draft`` only
for drafts; published entries get no ``draft`` line at all.
"""

from __future__ import annotations

from datetime import datetime
import json
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..core.filters import label_names
from ..core.types import Entry


DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def hugo_date(value: datetime) -> str:
    """Format a timestamp with a literal ``Z`` suffix.

    The wall-clock time of the source value is kept as-is; its UTC offset
    is not applied.
    """
    return value.strftime(DATE_FORMAT)


def toml_string(value: str) -> str:
    """Quote a value as a TOML basic string."""
    return json.dumps(value, ensure_ascii=False)


def _build_environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(Path(__file__).resolve().parent.parent / "templates")),
        autoescape=False,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )
    env.filters["hugo_date"] = hugo_date
    env.filters["toml_string"] = toml_string
    return env


_ENV = _build_environment()


def render_document(entry: Entry) -> str:
    """Render an entry whose content has already been rewritten.

    Identical entries always render to identical text.
    """
    template = _ENV.get_template("post.md")
    return template.render(
        title=entry.title,
        published=entry.published,
        updated=entry.updated,
        tags=label_names(entry),
        draft=entry.is_draft,
        extra=entry.extra.strip(),
        content=entry.content,
    )
