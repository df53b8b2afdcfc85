"""Input parsers for blog export formats."""

from .atom_parser import load_export, parse_draft, parse_export, parse_timestamp

__all__ = ["load_export", "parse_export", "parse_timestamp", "parse_draft"]
