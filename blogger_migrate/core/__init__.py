"""
Core domain models and business logic.

This package contains the entry data types, post classification and
output file naming, independent of parsing, rewriting and rendering.
"""

from .types import Author, Entry, Export, Tag
from .entry import DEFAULT_EXTENSION, PostFile, slugify
from .filters import KIND_SCHEME, LABEL_SCHEME, POST_KIND, is_post, label_names

__all__ = [
    "Author",
    "Entry",
    "Export",
    "Tag",
    "DEFAULT_EXTENSION",
    "PostFile",
    "slugify",
    "KIND_SCHEME",
    "LABEL_SCHEME",
    "POST_KIND",
    "is_post",
    "label_names",
]
