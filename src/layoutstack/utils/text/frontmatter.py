"""YAML front-matter parsing for layout and page files.

The front matter is delimited by '---' markers at the start of the file:

    ---
    layout: base
    title: Hello
    ---
    <article>{{ body }}</article>
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict

import yaml


# Matches content between the first pair of '---' markers
FRONTMATTER_PATTERN = re.compile(
    r"^---[ \t]*\n(?:(.*?)\n)?---[ \t]*(?:\n|$)",
    re.DOTALL,
)


@dataclass
class ParsedDocument:
    """Result of parsing a document with YAML front matter.

    Attributes:
        frontmatter: Parsed YAML front matter as a dictionary
        content: The body after the front matter
        raw_frontmatter: The raw YAML string (for debugging)
    """
    frontmatter: Dict[str, Any]
    content: str
    raw_frontmatter: str


def parse_frontmatter(content: str) -> ParsedDocument:
    """Split ``content`` into front matter and body.

    Raises:
        ValueError: If the front matter is not valid YAML or not a mapping

    Example:
        >>> doc = parse_frontmatter("---\\nlayout: base\\n---\\nHello")
        >>> doc.frontmatter["layout"], doc.content
        ('base', 'Hello')
    """
    match = FRONTMATTER_PATTERN.match(content)

    if not match:
        return ParsedDocument(frontmatter={}, content=content, raw_frontmatter="")

    raw_yaml = match.group(1) or ""
    remaining = content[match.end():]

    try:
        parsed = yaml.safe_load(raw_yaml)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in frontmatter: {e}") from e
    if parsed is None:
        parsed = {}
    if not isinstance(parsed, dict):
        raise ValueError(f"Frontmatter must be a YAML mapping, got {type(parsed).__name__}")

    return ParsedDocument(frontmatter=parsed, content=remaining, raw_frontmatter=raw_yaml)


def has_frontmatter(content: str) -> bool:
    """Return True if ``content`` starts with a '---' front-matter block."""
    return bool(FRONTMATTER_PATTERN.match(content))


__all__ = [
    "FRONTMATTER_PATTERN",
    "ParsedDocument",
    "parse_frontmatter",
    "has_frontmatter",
]
