"""Shared Pydantic data models for the TechNest publication engine.

These models define the data contract between the content store adapters
and the publication pipeline. Raw store rows are mapped into them once, in
src/content_store/mapping.py.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)


# === Content ===

class Category(BaseModel):
    """A blog category (many-to-many with posts)."""
    id: str
    name: str
    slug: str
    description: Optional[str] = None
    created_at: Optional[str] = None


class Review(BaseModel):
    """Optional review block embedded in a post."""
    rating: float = Field(ge=0, le=10)
    pros: list[str] = Field(default_factory=list)
    cons: list[str] = Field(default_factory=list)
    verdict: str = ""
    product_name: str = Field(default="", alias="productName")

    model_config = ConfigDict(populate_by_name=True)


class Affiliate(BaseModel):
    """Affiliate partner; `name` is the shortcode key."""
    id: str = ""
    name: str
    base_url: str
    affiliate_code: Optional[str] = None
    description: Optional[str] = None

    @property
    def has_tracking_code(self) -> bool:
        return bool(self.affiliate_code and self.affiliate_code.strip())


class Post(BaseModel):
    """A blog post as stored in the `posts` table.

    Timestamps are the raw ISO-8601 strings returned by the store. They are
    never parsed here, so a malformed value reaches the structured data
    exactly as stored.
    """
    id: str
    slug: str
    title: str
    excerpt: Optional[str] = None
    content: str = ""
    featured_image: Optional[str] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    author_id: Optional[str] = None
    published: bool = False
    featured: bool = False
    published_at: Optional[str] = None
    created_at: str = ""
    updated_at: str = ""
    review: Optional[Review] = None
    categories: list[Category] = Field(default_factory=list)

    @property
    def primary_category(self) -> Category | None:
        """First linked category, used to scope related content."""
        return self.categories[0] if self.categories else None

    @property
    def display_date(self) -> str:
        return self.published_at or self.created_at

    def in_category(self, category_id: str) -> bool:
        return any(c.id == category_id for c in self.categories)

    def with_publication_state(
        self,
        published: bool,
        now: datetime | None = None,
    ) -> Post:
        """Return a copy with the publication flag applied.

        `published_at` is stamped on the unpublished -> published transition,
        kept while the post stays published, and cleared on unpublish.
        """
        if not published:
            return self.model_copy(update={"published": False, "published_at": None})
        if self.published and self.published_at:
            return self.model_copy()
        stamp = (now or datetime.now(timezone.utc)).isoformat()
        return self.model_copy(update={"published": True, "published_at": stamp})


def recency_key(post: Post) -> str:
    """Sort key for newest-first ordering (use with reverse=True)."""
    return post.published_at or post.created_at or ""


def sort_by_recency(posts: Iterable[Post]) -> list[Post]:
    """Most recently published first; ties broken by id ascending."""
    by_id = sorted(posts, key=lambda p: p.id)
    return sorted(by_id, key=recency_key, reverse=True)


# === Global settings ===

class SiteSettings(BaseModel):
    """Global site settings (the `settings` key/value table).

    Unknown keys are ignored so new admin settings never break the reader.
    """
    site_title: str = "TechNest"
    site_description: str = "Smart tech picks for modern work"
    site_url: str = "https://technest.vercel.app"
    google_analytics_id: str = ""
    meta_title_template: str = "%title% | TechNest"
    indexing_active: bool = True
    sitemap_frequency: str = "weekly"
    og_image_path: str = "/og-image.jpg"
    logo_path: str = "/logo.png"

    model_config = ConfigDict(extra="ignore")

    @classmethod
    def from_rows(
        cls,
        rows: Iterable[dict[str, Any]],
        base: SiteSettings | None = None,
    ) -> SiteSettings:
        """Merge `{key, value}` rows over `base` (or the defaults).

        A row whose value does not validate is skipped, keeping the default.
        """
        current = base or cls()
        for row in rows:
            key = row.get("key")
            if key not in cls.model_fields or row.get("value") is None:
                continue
            try:
                current = cls.model_validate({**current.model_dump(), key: row["value"]})
            except ValidationError:
                logger.warning("Ignoring invalid value for setting '%s'", key)
        return current

    def absolute_url(self, path: str = "") -> str:
        """Join the site URL and a path with exactly one separator."""
        base = self.site_url.rstrip("/")
        if not path:
            return base
        if path.startswith(("http://", "https://")):
            return path
        return f"{base}/{path.lstrip('/')}"

    @property
    def og_image_url(self) -> str:
        return self.absolute_url(self.og_image_path)

    @property
    def logo_url(self) -> str:
        return self.absolute_url(self.logo_path)
