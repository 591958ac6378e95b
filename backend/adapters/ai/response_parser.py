"""
Parsing of free-form model output into a structured article.

Models do not always honor the requested output format, so parsing falls
through three strategies in order:

1. a JSON object, fenced (```json ... ```) or bare
2. ``key: value`` blocks (title, content, metaDescription, keywords, headings)
3. the first Markdown H1 as the title and everything after it as the body
"""

import json
import re
from dataclasses import dataclass, field
from typing import List, Optional

DEFAULT_TITLE = "AI 생성 글"

_FENCE_OPEN = re.compile(r"```(?:json)?\s*(?=\{)", re.IGNORECASE)
_DECODER = json.JSONDecoder()
_KEY_LINE = re.compile(
    r"^\s*(title|content|metaDescription|keywords|headings)\s*:\s*(.*)$",
    re.IGNORECASE,
)
_H1 = re.compile(r"^#\s+(.+)$", re.MULTILINE)
_HEADING = re.compile(r"^(#{1,6})\s+(.+)$")
_LIST_SPLIT = re.compile(r"[,|\n]")
_LIST_BULLET = re.compile(r"^[-*\s]+")


@dataclass
class ParsedArticle:
    """Structured article extracted from model output."""

    title: str
    content: str
    meta_description: Optional[str] = None
    keywords: List[str] = field(default_factory=list)
    headings: Optional[List[str]] = None


def _string_list(value) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if item]


def _split_list(text: str) -> List[str]:
    items = (_LIST_BULLET.sub("", part).strip() for part in _LIST_SPLIT.split(text))
    return [item for item in items if item]


def _first_line(text: str) -> str:
    return text.splitlines()[0].strip() if text else ""


def _parse_json(text: str) -> Optional[ParsedArticle]:
    # Decode from the opening brace; the body may contain its own ``` fences
    fence = _FENCE_OPEN.search(text)
    if fence:
        start = fence.end()
    elif text.startswith("{"):
        start = 0
    else:
        return None

    try:
        obj, _ = _DECODER.raw_decode(text, start)
    except ValueError:
        return None
    if not isinstance(obj, dict):
        return None

    title = str(obj.get("title") or "")
    content = str(obj.get("content") or "")
    if not (title or content):
        return None

    headings = obj.get("headings")
    return ParsedArticle(
        title=title,
        content=content,
        meta_description=str(obj["metaDescription"]) if obj.get("metaDescription") else None,
        keywords=_string_list(obj.get("keywords")),
        headings=_string_list(headings) if isinstance(headings, list) else None,
    )


def _parse_key_values(lines: List[str]) -> Optional[ParsedArticle]:
    values: dict = {}
    current_key = None
    buffer: List[str] = []

    def flush():
        if current_key is not None:
            values[current_key] = "\n".join(buffer).strip()

    for line in lines:
        match = _KEY_LINE.match(line)
        if match:
            flush()
            current_key = match.group(1).lower()
            buffer = [match.group(2)] if match.group(2) else []
        elif current_key is not None:
            buffer.append(line)
    flush()

    title = _first_line(values.get("title", ""))
    content = values.get("content", "")
    if not (title or content):
        return None

    headings = _split_list(values["headings"]) if values.get("headings") else None
    return ParsedArticle(
        title=title,
        content=content,
        meta_description=_first_line(values.get("metadescription", "")) or None,
        keywords=_split_list(values.get("keywords", "")),
        headings=headings or None,
    )


def parse_generated_text(raw: str) -> ParsedArticle:
    """Parse model output into a ParsedArticle. Never raises."""
    text = raw.strip()

    parsed = _parse_json(text)
    if parsed:
        return parsed

    parsed = _parse_key_values(text.splitlines())
    if parsed:
        return parsed

    h1 = _H1.search(text)
    if h1:
        return ParsedArticle(title=h1.group(1).strip(), content=text[h1.end():].strip())
    return ParsedArticle(title=DEFAULT_TITLE, content=text)


def extract_headings(markdown: str) -> List[str]:
    """Text of every Markdown heading (levels 1-6), in document order."""
    headings = []
    for line in markdown.splitlines():
        match = _HEADING.match(line)
        if match:
            headings.append(match.group(2).strip())
    return headings
