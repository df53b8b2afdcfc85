"""
Core data types for the blog migration.

This module defines the structures decoded from a Blogger export:
- Tag: A (term, scheme) category attached to an entry
- Author: The entry author, carried through unchanged
- Entry: One candidate blog post
- Export: The ordered list of entries in one export file
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class Tag:
    """A category element of an export entry.

    Attributes:
        name: The category term (a label, or a kind URI)
        scheme: The scheme URI telling what kind of category this is
    """
    name: str
    scheme: str


@dataclass(frozen=True)
class Author:
    name: str = ""
    uri: str = ""


@dataclass
class Entry:
    """Represents one entry of a Blogger export.

    Attributes:
        id: Opaque identifier from the export, for reference only
        published: Publication timestamp
        updated: Last update timestamp
        is_draft: True if the entry is an unpublished draft
        title: The entry title, possibly empty
        content: The entry body. Holds the original HTML until the rewrite
            step replaces it with the rewritten text.
        tags: Categories in document order (kind and label tags alike)
        author: The entry author
        extra: Run-scoped metadata appended to the front matter
    """
    id: str
    published: datetime
    updated: datetime
    is_draft: bool
    title: str
    content: str
    tags: list[Tag] = field(default_factory=list)
    author: Author = field(default_factory=Author)
    extra: str = ""


@dataclass
class Export:
    """All entries of an export file, in source order."""
    entries: list[Entry] = field(default_factory=list)
