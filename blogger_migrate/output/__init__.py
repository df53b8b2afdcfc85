"""Output rendering for migrated posts."""

from .renderer import render_document

__all__ = ["render_document"]
