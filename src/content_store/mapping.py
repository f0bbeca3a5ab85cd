"""Row mapping: Supabase response rows to typed models.

PostgREST nested selects come back in ad hoc shapes, e.g. a post fetched with
`categories:post_categories(category:categories(*))` carries
`{"categories": [{"category": {...}}, ...]}`. Everything is normalized here,
once, so pipeline code only ever sees `Post`, `Category` and `Affiliate`.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable, Optional

from pydantic import ValidationError

from src.common.models import Affiliate, Category, Post, Review, SiteSettings

logger = logging.getLogger(__name__)


def _text(value: Any) -> Optional[str]:
    """Stringify a scalar column, keeping None as None."""
    if value is None:
        return None
    return str(value)


def category_from_row(row: dict) -> Category | None:
    """Map a `categories` row; rows without a name are dropped."""
    if not row or not row.get("name"):
        return None
    return Category(
        id=str(row.get("id", "")),
        name=row["name"],
        slug=row.get("slug") or "",
        description=row.get("description"),
        created_at=_text(row.get("created_at")),
    )


def categories_from_links(links: Iterable[Any] | None) -> list[Category]:
    """Flatten `post_categories` join rows into categories, keeping order.

    Accepts both the nested join shape (`{"category": {...}}`) and plain
    category dicts, which the fixture pool uses.
    """
    categories = []
    for link in links or []:
        if not isinstance(link, dict):
            continue
        raw = link.get("category", link)
        category = category_from_row(raw) if isinstance(raw, dict) else None
        if category is not None:
            categories.append(category)
    return categories


def review_from_value(value: Any, slug: str = "") -> Review | None:
    """Parse the `review` column (JSONB object or JSON text)."""
    if not value:
        return None
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError:
            logger.warning("Ignoring unparseable review JSON on post '%s'", slug)
            return None
    if not isinstance(value, dict):
        return None
    try:
        return Review.model_validate(value)
    except ValidationError as e:
        logger.warning("Ignoring invalid review on post '%s': %s", slug, e.error_count())
        return None


def post_from_row(row: dict) -> Post:
    """Map a `posts` row (optionally with nested categories) to a Post."""
    slug = row.get("slug") or ""
    return Post(
        id=str(row["id"]),
        slug=slug,
        title=row.get("title") or "",
        excerpt=row.get("excerpt"),
        content=row.get("content") or "",
        featured_image=row.get("featured_image"),
        meta_title=row.get("meta_title"),
        meta_description=row.get("meta_description"),
        author_id=_text(row.get("author_id")),
        published=bool(row.get("published", False)),
        featured=bool(row.get("featured", False)),
        published_at=_text(row.get("published_at")),
        created_at=_text(row.get("created_at")) or "",
        updated_at=_text(row.get("updated_at")) or "",
        review=review_from_value(row.get("review"), slug),
        categories=categories_from_links(row.get("categories")),
    )


def affiliate_from_row(row: dict) -> Affiliate | None:
    """Map an `affiliates` row; rows without a name or URL are dropped."""
    if not row.get("name") or not row.get("base_url"):
        return None
    code = row.get("affiliate_code")
    return Affiliate(
        id=str(row.get("id", "")),
        name=row["name"],
        base_url=row["base_url"],
        affiliate_code=code if code else None,
        description=row.get("description"),
    )


def settings_from_rows(
    rows: Iterable[dict],
    base: SiteSettings | None = None,
) -> SiteSettings:
    """Map `settings` key/value rows over the site defaults."""
    return SiteSettings.from_rows(rows, base=base)
