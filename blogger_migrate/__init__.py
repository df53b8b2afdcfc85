"""
Blogger Migrate - LLM-assisted Blogger to Hugo migration.

This package converts a Blogger Atom export into one Hugo content file
per post, rewriting each post body through an LLM provider on the way.

Main entry point is the CLI via the `blogger-migrate` command.

Example:
    $ blogger-migrate blog-export.xml content/posts --extra 'author = "me"'
"""

__all__ = ["__version__", "parse_export", "PostFile", "slugify", "render_document", "run_pipeline"]
__version__ = "0.1.0"

from .core.entry import PostFile, slugify
from .input.atom_parser import parse_export
from .output.renderer import render_document
from .runner import run_pipeline
