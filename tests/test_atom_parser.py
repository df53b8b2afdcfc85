"""Tests for the Blogger Atom export parser."""

from datetime import datetime, timedelta, timezone
from html import escape
from pathlib import Path

import pytest

from blogger_migrate.core.filters import KIND_SCHEME, LABEL_SCHEME, POST_KIND
from blogger_migrate.errors import ParseError
from blogger_migrate.input.atom_parser import (
    load_export,
    parse_draft,
    parse_export,
    parse_timestamp,
)


def _entry_xml(
    title: str,
    *,
    published: str = "2020-01-02T03:04:05.000+00:00",
    updated: str = "2020-01-03T04:05:06.000+00:00",
    draft: str | None = None,
    content: str = "<p>Body</p>",
) -> str:
    control = f"<app:control><app:draft>{draft}</app:draft></app:control>" if draft is not None else ""
    return (
        "<entry>"
        f"<id>tag:blogger.com,1999:blog-1.post-{title}</id>"
        f"<published>{published}</published>"
        f"<updated>{updated}</updated>"
        f"{control}"
        f'<category scheme="{KIND_SCHEME}" term="{POST_KIND}"/>'
        f'<category scheme="{LABEL_SCHEME}" term="golang"/>'
        f'<title type="text">{escape(title)}</title>'
        f'<content type="html">{escape(content)}</content>'
        '<link rel="alternate" href="https://example.blogspot.com/post.html"/>'
        "<author><name>Jane</name><uri>https://example.com/jane</uri></author>"
        "</entry>"
    )


def _feed(*entries: str) -> bytes:
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<feed xmlns="http://www.w3.org/2005/Atom" xmlns:app="http://purl.org/atom/app#">'
        "<title>My blog</title>"
        + "".join(entries)
        + "</feed>"
    ).encode("utf-8")


def test_parse_timestamp_keeps_offset():
    value = parse_timestamp("2020-01-02T03:04:05.000+02:00")
    assert value == datetime(2020, 1, 2, 3, 4, 5, tzinfo=timezone(timedelta(hours=2)))


@pytest.mark.parametrize(
    "text",
    [
        "2020-01-02T03:04:05+00:00",  # no fractional seconds
        "2020-01-02T03:04:05.000Z",  # letter offset
        "2020-01-02T03:04:05.000000+00:00",  # six fractional digits
        "2020-01-02 03:04:05.000+00:00",
        "2020-13-02T03:04:05.000+00:00",  # month out of range
        " 2020-01-02T03:04:05.000+00:00",  # leading space
        "2020-01-02T03:04:05.000+00:00\n",  # trailing newline
        "\u0662\u0660\u0662\u0660-01-02T03:04:05.000+00:00",  # Arabic-Indic digits
        "",
    ],
)
def test_parse_timestamp_rejects_other_formats(text):
    with pytest.raises(ParseError):
        parse_timestamp(text)


def test_parse_draft_values():
    assert parse_draft("yes") is True
    assert parse_draft("no") is False


def test_parse_draft_rejects_unknown_value():
    with pytest.raises(ParseError, match="maybe"):
        parse_draft("maybe")


def test_parse_export_decodes_entry_fields():
    export = parse_export(_feed(_entry_xml("Hello World", draft="yes", content="<b>hi</b>")))

    assert len(export.entries) == 1
    entry = export.entries[0]
    assert entry.id == "tag:blogger.com,1999:blog-1.post-Hello World"
    assert entry.title == "Hello World"
    assert entry.content == "<b>hi</b>"
    assert entry.is_draft is True
    assert entry.published == datetime(2020, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    assert entry.updated == datetime(2020, 1, 3, 4, 5, 6, tzinfo=timezone.utc)
    assert [(tag.name, tag.scheme) for tag in entry.tags] == [
        (POST_KIND, KIND_SCHEME),
        ("golang", LABEL_SCHEME),
    ]
    assert entry.author.name == "Jane"
    assert entry.author.uri == "https://example.com/jane"
    assert entry.extra == ""


def test_parse_export_without_control_is_published():
    export = parse_export(_feed(_entry_xml("Published")))
    assert export.entries[0].is_draft is False


def test_parse_export_preserves_order():
    titles = ["Zeta", "Alpha", "Mu"]
    export = parse_export(_feed(*(_entry_xml(title) for title in titles)))
    assert [entry.title for entry in export.entries] == titles


def test_parse_export_rejects_malformed_document():
    with pytest.raises(ParseError):
        parse_export(b"<feed><entry></feed>")


def test_parse_export_rejects_non_feed_root():
    with pytest.raises(ParseError, match="feed"):
        parse_export(b"<rss><channel/></rss>")


def test_parse_export_rejects_bad_timestamp():
    with pytest.raises(ParseError, match="Invalid timestamp"):
        parse_export(_feed(_entry_xml("Broken", published="2020-01-02")))


def test_parse_export_rejects_missing_timestamp():
    xml = _feed(_entry_xml("No date")).replace(
        b"<updated>2020-01-03T04:05:06.000+00:00</updated>", b""
    )
    with pytest.raises(ParseError):
        parse_export(xml)


def test_parse_export_rejects_bad_draft_value():
    with pytest.raises(ParseError, match="maybe"):
        parse_export(_feed(_entry_xml("Draft?", draft="maybe")))


def test_load_export_rejects_empty_feed(tmp_path: Path):
    path = tmp_path / "empty.xml"
    path.write_bytes(_feed())
    with pytest.raises(ParseError, match="No blog entries found"):
        load_export(path)


def test_load_export_missing_file(tmp_path: Path):
    with pytest.raises(ParseError):
        load_export(tmp_path / "missing.xml")


@pytest.mark.parametrize("text", [" yes ", "yes\n", "Yes", "NO", ""])
def test_parse_draft_rejects_padded_or_recased_values(text):
    with pytest.raises(ParseError):
        parse_draft(text)


def test_parse_export_rejects_padded_timestamp_element():
    xml = _feed(_entry_xml("Padded", published="\n  2020-01-02T03:04:05.000+00:00\n"))
    with pytest.raises(ParseError, match="Invalid timestamp"):
        parse_export(xml)
