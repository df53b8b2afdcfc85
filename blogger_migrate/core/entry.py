"""Output file naming and presence checks for migrated posts.

Each post is written to ``<output_dir>/<slug><extension>`` where the slug
is derived from the title alone. A post whose file already exists is
treated as migrated, which makes re-running the pipeline idempotent.
"""

from __future__ import annotations

import re
from pathlib import Path

from blogger_migrate.core.types import Entry
from blogger_migrate.errors import WriteError


_WHITESPACE_RE = re.compile(r"\s+")
_SLUG_PUNCTUATION = frozenset("._-")

DEFAULT_EXTENSION = ".md"


def slugify(text: str) -> str:
    """Convert a title to a filesystem-safe slug.

    The title is trimmed and lowercased, every character other than a
    letter, digit, ``.``, ``_``, ``-`` or whitespace is dropped, and the
    remaining whitespace runs become a single hyphen. Trimming happens
    before the drop, so ``"! Hello"`` keeps its leading hyphen. Never
    fails; a blank title yields an empty slug.

    Examples:
        >>> slugify("Social Media")
        'social-media'
        >>> slugify("  C++ & Go!  ")
        'c-go'
    """
    kept = "".join(ch for ch in text.strip().lower() if ch.isspace() or _is_slug_char(ch))
    return _WHITESPACE_RE.sub("-", kept)


def _is_slug_char(ch: str) -> bool:
    return ch.isalpha() or ch.isdecimal() or ch in _SLUG_PUNCTUATION


class PostFile:
    """The output file of a single entry.

    Identity is the title slug, not the export id, so two entries that
    share a title map to the same file.
    """

    def __init__(self, output_dir: Path, entry: Entry, extension: str = DEFAULT_EXTENSION):
        """Initialize the PostFile.

        Args:
            output_dir: Directory holding the migrated posts
            entry: The entry this file belongs to
            extension: File suffix including the leading dot
        """
        self._output_dir = output_dir
        self._entry = entry
        self._extension = extension

    @property
    def path(self) -> Path:
        """Returns the target path ``<output_dir>/<slug><extension>``."""
        return self._output_dir / f"{slugify(self._entry.title)}{self._extension}"

    def exists(self) -> bool:
        """Report whether something is already present at the target path."""
        return self.path.exists()

    def write(self, text: str) -> Path:
        """Write the rendered document to the target path.

        Raises:
            WriteError: If the file cannot be created or written
        """
        path = self.path
        try:
            # An unencodable body must not leave an empty file on disk.
            data = text.encode("utf-8")
            path.write_bytes(data)
        except (OSError, UnicodeError) as exc:
            raise WriteError(f"Failed writing post {self._entry.title!r} to {path}: {exc}") from exc
        return path
