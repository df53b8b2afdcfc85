"""Error types raised by the migration pipeline.

Every error here is fatal to a run. Nothing is retried; files written
before the failure stay on disk, and re-running the pipeline against the
same output directory resumes from the first unwritten post.
"""

from __future__ import annotations


class MigrationError(Exception):
    """Base class for fatal migration failures."""


class ParseError(MigrationError):
    """The export is malformed or carries an invalid timestamp or draft flag."""


class DirectoryError(MigrationError):
    """The output path is not a directory or cannot be created."""


class RewriteError(MigrationError):
    """The rewrite provider failed to return rewritten content."""


class WriteError(MigrationError):
    """A rendered post could not be written to disk."""
