"""Reading aids: read-time estimate and heading index for a post body.

Both are computed on the rendered markdown, so headings or words inside
fenced code blocks are not mistaken for content structure.
"""

from __future__ import annotations

import html
import math
import re
from dataclasses import dataclass

import markdown as md
from bs4 import BeautifulSoup

from .models import Heading

DEFAULT_WORDS_PER_MINUTE = 200
MAX_HEADING_LEVEL = 3

_NON_ANCHOR_CHARS = re.compile(r"[^A-Za-z0-9_\s-]")
_WHITESPACE = re.compile(r"\s+")


def heading_anchor(value: str, separator: str = "-") -> str:
    """Anchor id for a heading, as the page renderer assigns it.

    Lowercase, drop everything but ASCII word characters, whitespace and
    hyphens, then collapse whitespace runs into `separator`.
    """
    value = _NON_ANCHOR_CHARS.sub("", value.strip().lower())
    return _WHITESPACE.sub(separator, value)


@dataclass
class BodyAnalysis:
    html: str
    word_count: int
    headings: list[Heading]


def _flatten_toc(tokens: list[dict]) -> list[Heading]:
    headings = []
    for token in tokens:
        headings.append(
            Heading(
                level=int(token["level"]),
                text=html.unescape(token["name"]),
                id=token["id"],
            )
        )
        headings.extend(_flatten_toc(token.get("children", [])))
    return headings


def analyze_body(markdown_text: str) -> BodyAnalysis:
    """Render `markdown_text` once and collect words and headings."""
    converter = md.Markdown(
        extensions=["tables", "fenced_code", "toc"],
        extension_configs={
            "toc": {"slugify": heading_anchor, "toc_depth": MAX_HEADING_LEVEL},
        },
    )
    body_html = converter.convert(markdown_text or "")
    text = BeautifulSoup(body_html, "lxml").get_text(separator=" ", strip=True)
    return BodyAnalysis(
        html=body_html,
        word_count=len(text.split()),
        headings=_flatten_toc(getattr(converter, "toc_tokens", [])),
    )


def read_time_from_words(word_count: int, words_per_minute: int = DEFAULT_WORDS_PER_MINUTE) -> int:
    """Whole minutes, rounded up, never below one."""
    return max(1, math.ceil(word_count / max(words_per_minute, 1)))


def estimate_read_time(markdown_text: str, words_per_minute: int = DEFAULT_WORDS_PER_MINUTE) -> int:
    """Estimated reading time in minutes for a markdown body."""
    return read_time_from_words(analyze_body(markdown_text).word_count, words_per_minute)


def extract_headings(markdown_text: str) -> list[Heading]:
    """Level 1-3 headings in document order, with their anchors."""
    return analyze_body(markdown_text).headings
