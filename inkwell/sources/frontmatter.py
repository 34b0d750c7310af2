from __future__ import annotations

import re
from datetime import date
from typing import Optional

from .base import PostRecord, site_settings

# opening and closing delimiters must be lines of exactly three hyphens
FRONTMATTER_RE = re.compile(r"\A---\n(?:(?P<meta>.*?)\n)?---(?:\n|\Z)", re.DOTALL)
EXCERPT_LENGTH = 150
QUOTES = ("'", '"')


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] in QUOTES and value[0] == value[-1]:
        return value[1:-1]
    return value


def parse_metadata(block: str) -> dict[str, str]:
    """Parse the restricted ``key: value`` frontmatter syntax.

    One entry per line, split at the first colon. No nesting, no lists;
    lines without a colon are skipped.
    """
    meta: dict[str, str] = {}
    for line in block.split("\n"):
        if ":" not in line:
            continue
        key, value = line.split(":", 1)
        key = key.strip()
        if not key:
            continue
        meta[key] = _strip_quotes(value.strip())
    return meta


def strip_extension(filename: str, extension: str = ".md") -> str:
    if extension and filename.endswith(extension):
        return filename[: -len(extension)]
    return filename


def parse_markdown(
    text: str,
    category: str,
    filename: str,
    *,
    site: Optional[dict] = None,
    today: Optional[date] = None,
) -> Optional[PostRecord]:
    """Turn one raw document into a PostRecord.

    Returns None when the document does not open with a ``---`` delimited
    metadata block; callers drop such documents from their results.
    """
    settings = site_settings(site)
    clean = text.lstrip("\ufeff").replace("\r\n", "\n")
    match = FRONTMATTER_RE.match(clean)
    if not match:
        return None

    meta = parse_metadata(match.group("meta") or "")
    body = clean[match.end():].strip()
    today = today or date.today()
    placeholder = settings["placeholder_image"]

    return PostRecord(
        id=strip_extension(filename, settings["extension"]),
        category=category,
        title=meta.get("title") or "",
        date=meta.get("date") or today.isoformat(),
        author=meta.get("author") or settings["author"],
        image=meta.get("image") or placeholder,
        cover=meta.get("cover") or meta.get("image") or placeholder,
        excerpt=meta.get("excerpt") or body[:EXCERPT_LENGTH],
        body=body,
        metadata=meta,
    )
