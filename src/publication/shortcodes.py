"""Shortcode resolver: affiliate tokens to tracked markdown links.

Post bodies embed affiliate partners as `[[affiliate:<name>]]`. Before
rendering, each token naming a known affiliate becomes a markdown link:

    [[affiliate:Amazon]]  ->  [Amazon](https://amazon.com/x?ref=tn21)

Names are matched literally and case-sensitively. The body is scanned once,
left to right, and replacement text is never rescanned, so one affiliate's
link can never trigger another affiliate's token.
"""

from __future__ import annotations

import re
from typing import Iterable
from urllib.parse import quote

from src.common.models import Affiliate

TOKEN_PREFIX = "[[affiliate:"
TOKEN_SUFFIX = "]]"

# Ref used when an affiliate has no tracking code ("direct link")
DEFAULT_FALLBACK_REF = "technest"

_ANY_TOKEN = re.compile(r"\[\[affiliate:(.+?)\]\]")


def build_affiliate_url(affiliate: Affiliate, fallback_ref: str = DEFAULT_FALLBACK_REF) -> str:
    """Base URL with the `ref` tracking parameter appended."""
    ref = affiliate.affiliate_code.strip() if affiliate.has_tracking_code else fallback_ref
    separator = "&" if "?" in affiliate.base_url else "?"
    return f"{affiliate.base_url}{separator}ref={quote(ref, safe='')}"


def build_affiliate_link(affiliate: Affiliate, fallback_ref: str = DEFAULT_FALLBACK_REF) -> str:
    """Inline markdown link labelled with the affiliate name."""
    return f"[{affiliate.name}]({build_affiliate_url(affiliate, fallback_ref)})"


def resolve_shortcodes(
    body: str,
    affiliates: Iterable[Affiliate],
    fallback_ref: str = DEFAULT_FALLBACK_REF,
) -> str:
    """Replace every known `[[affiliate:<name>]]` token in `body`.

    Args:
        body: Raw post markdown.
        affiliates: Currently known affiliates. With duplicate names the
            first one wins.
        fallback_ref: `ref` value for affiliates without a tracking code.

    Returns:
        The body with known tokens replaced. Unknown tokens are left as-is.
    """
    links: dict[str, str] = {}
    for affiliate in affiliates:
        if affiliate.name and affiliate.name not in links:
            links[affiliate.name] = build_affiliate_link(affiliate, fallback_ref)

    if not links or TOKEN_PREFIX not in body:
        return body

    # Longest first, so "Amazon UK" is preferred over "Amazon" at one position
    names = sorted(links, key=len, reverse=True)
    parts: list[str] = []
    cursor = 0
    while True:
        start = body.find(TOKEN_PREFIX, cursor)
        if start == -1:
            break
        name_start = start + len(TOKEN_PREFIX)
        for name in names:
            if body.startswith(name + TOKEN_SUFFIX, name_start):
                parts.append(body[cursor:start])
                parts.append(links[name])
                cursor = name_start + len(name) + len(TOKEN_SUFFIX)
                break
        else:
            parts.append(body[cursor:name_start])
            cursor = name_start
    parts.append(body[cursor:])
    return "".join(parts)


def find_unresolved_shortcodes(body: str) -> list[str]:
    """Names of affiliate tokens still present in `body`, in order, unique."""
    seen: list[str] = []
    for match in _ANY_TOKEN.finditer(body):
        name = match.group(1)
        if name not in seen:
            seen.append(name)
    return seen
