"""
Parser for Blogger's Atom export format.

A Blogger export is an Atom ``<feed>`` whose ``<entry>`` children are posts,
comments, pages and settings records. Each entry looks like:

    <entry>
      <id>tag:blogger.com,1999:blog-1.post-2</id>
      <published>2020-01-02T03:04:05.000+01:00</published>
      <updated>2020-01-02T03:04:05.000+01:00</updated>
      <app:control><app:draft>yes</app:draft></app:control>
      <category scheme="http://schemas.google.com/g/2005#kind"
                term="http://schemas.google.com/blogger/2008/kind#post"/>
      <category scheme="http://www.blogger.com/atom/ns#" term="golang"/>
      <title type="text">Hello</title>
      <content type="html">&lt;p&gt;Body&lt;/p&gt;</content>
      <author><name>Jane</name><uri>https://example.com</uri></author>
    </entry>

Elements are matched by local name, so namespace prefixes do not matter.
Anything not listed above is ignored.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
import re
import xml.etree.ElementTree as ET

from ..core.types import Author, Entry, Export, Tag
from ..errors import ParseError


# Matches "2006-01-02T15:04:05.000-07:00": exactly three fractional digits
# and a numeric offset with a colon. ASCII digits only, nothing around it.
TIMESTAMP_RE = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}[+-]\d{2}:\d{2}", re.ASCII)
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%f%z"

DRAFT_VALUES = {"yes": True, "no": False}


def parse_timestamp(text: str) -> datetime:
    """Parse an export timestamp into an offset-aware datetime.

    Args:
        text: Timestamp such as ``2020-01-02T03:04:05.000+00:00``

    Returns:
        The parsed datetime, keeping the source UTC offset

    Raises:
        ParseError: If the text does not match the export timestamp format
    """
    if not TIMESTAMP_RE.fullmatch(text):
        raise ParseError(f"Invalid timestamp: {text!r}")
    try:
        return datetime.strptime(text, TIMESTAMP_FORMAT)
    except ValueError as exc:
        raise ParseError(f"Invalid timestamp: {text!r}") from exc


def parse_draft(text: str) -> bool:
    """Map the export's draft control value to a boolean.

    Raises:
        ParseError: If the value is neither ``yes`` nor ``no``
    """
    if text not in DRAFT_VALUES:
        raise ParseError(f"Unknown value for draft boolean: {text!r}")
    return DRAFT_VALUES[text]


def parse_export(data: bytes | str) -> Export:
    """Decode a complete Blogger export.

    Args:
        data: The raw export document

    Returns:
        An Export with every entry in document order

    Raises:
        ParseError: If the document is not well-formed, is not a feed, or
            any entry has an invalid timestamp or draft flag
    """
    try:
        root = ET.fromstring(data)
    except ET.ParseError as exc:
        raise ParseError(f"Malformed export document: {exc}") from exc

    if _local_name(root.tag) != "feed":
        raise ParseError(f"Expected a <feed> document, found <{_local_name(root.tag)}>")

    entries = [_parse_entry(element) for element in _children(root, "entry")]
    return Export(entries=entries)


def load_export(path: Path) -> Export:
    """Read and decode an export file.

    Raises:
        ParseError: If the file cannot be read, cannot be decoded, or holds
            no entries at all
    """
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise ParseError(f"Cannot read export {path}: {exc}") from exc
    export = parse_export(data)
    if not export.entries:
        raise ParseError("No blog entries found!")
    return export


def _parse_entry(element: ET.Element) -> Entry:
    published = _child(element, "published")
    updated = _child(element, "updated")
    if published is None or updated is None:
        raise ParseError(
            f"Entry {_text(_child(element, 'id'))!r} is missing its published/updated timestamp"
        )

    draft_element = None
    control = _child(element, "control")
    if control is not None:
        draft_element = _child(control, "draft")

    return Entry(
        id=_text(_child(element, "id")),
        published=parse_timestamp(_text(published)),
        updated=parse_timestamp(_text(updated)),
        is_draft=parse_draft(_text(draft_element)) if draft_element is not None else False,
        title=_text(_child(element, "title")),
        content=_text(_child(element, "content")),
        tags=[
            Tag(name=category.get("term", ""), scheme=category.get("scheme", ""))
            for category in _children(element, "category")
        ],
        author=_parse_author(_child(element, "author")),
    )


def _parse_author(element: ET.Element | None) -> Author:
    if element is None:
        return Author()
    return Author(name=_text(_child(element, "name")), uri=_text(_child(element, "uri")))


def _local_name(tag: str) -> str:
    """Strip the ``{namespace}`` prefix ElementTree puts on qualified tags."""
    return tag.rsplit("}", 1)[-1]


def _children(element: ET.Element, name: str) -> list[ET.Element]:
    return [child for child in element if _local_name(child.tag) == name]


def _child(element: ET.Element, name: str) -> ET.Element | None:
    for child in element:
        if _local_name(child.tag) == name:
            return child
    return None


def _text(element: ET.Element | None) -> str:
    if element is None:
        return ""
    return "".join(element.itertext())
