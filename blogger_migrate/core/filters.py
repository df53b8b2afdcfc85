"""
Classification of export entries by their Blogger category tags.

A Blogger export mixes posts with comments, pages and settings records.
Each record carries a "kind" category; only records of the post kind are
migrated. Label categories are the user-facing topic tags.
"""

from __future__ import annotations

from .types import Entry


KIND_SCHEME = "http://schemas.google.com/g/2005#kind"
POST_KIND = "http://schemas.google.com/blogger/2008/kind#post"
LABEL_SCHEME = "http://www.blogger.com/atom/ns#"


def is_post(entry: Entry) -> bool:
    """Return True if the entry carries the post kind category."""
    return any(tag.name == POST_KIND and tag.scheme == KIND_SCHEME for tag in entry.tags)


def label_names(entry: Entry) -> list[str]:
    """Return the entry's label tag names in document order."""
    return [tag.name for tag in entry.tags if tag.scheme == LABEL_SCHEME]
