"""Content sources: read interface over posts, categories, affiliates, settings.

Three implementations share one interface:
- SupabaseContentStore (supabase_store.py): the primary store
- FixtureContentSource: an in-process pool (demo content, tests)
- TieredContentSource: primary first, fallback pool when the primary
  misses or is unavailable

Usage:
    source = TieredContentSource(
        primary=SupabaseContentStore(),
        fallback=FixtureContentSource.demo(),
    )
    post = source.get_post_by_slug("keychron-q1-pro-review")
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable

from src.common.logging import setup_logging
from src.common.models import (
    Affiliate,
    Category,
    Post,
    SiteSettings,
    sort_by_recency,
)

from .demo_data import get_demo_categories, get_demo_posts
from .errors import StoreUnavailableError

logger = setup_logging(module_name="content_store.sources")


class ContentSource(ABC):
    """Read-only content store contract.

    Misses return None or an empty list. Failures to reach the backing store
    raise StoreUnavailableError.
    """

    @abstractmethod
    def get_post_by_slug(self, slug: str, published_only: bool = True) -> Post | None:
        """Single post by slug, optionally restricted to published posts."""
        ...

    @abstractmethod
    def list_affiliates(self) -> list[Affiliate]:
        """All known affiliates."""
        ...

    @abstractmethod
    def list_posts_by_category(
        self,
        category_id: str,
        exclude_post_id: str | None = None,
        limit: int = 3,
    ) -> list[Post]:
        """Published posts linked to a category, newest first."""
        ...

    @abstractmethod
    def get_settings(self) -> SiteSettings:
        """Global site settings merged over defaults."""
        ...

    @abstractmethod
    def get_category_by_slug(self, slug: str) -> Category | None:
        ...

    @abstractmethod
    def list_categories(self) -> list[Category]:
        ...

    @abstractmethod
    def list_latest_posts(self, limit: int = 6) -> list[Post]:
        """Most recently published posts."""
        ...

    @abstractmethod
    def list_published_posts(self) -> list[Post]:
        """Every published post, newest first (sitemaps, static params)."""
        ...

    @abstractmethod
    def search_posts(self, query: str, limit: int = 5) -> list[Post]:
        """Published posts matching `query`, newest first. Blank query → []."""
        ...


class FixtureContentSource(ContentSource):
    """In-process content pool; never raises StoreUnavailableError."""

    def __init__(
        self,
        posts: Iterable[Post] = (),
        categories: Iterable[Category] = (),
        affiliates: Iterable[Affiliate] = (),
        settings: SiteSettings | None = None,
    ):
        self._posts = list(posts)
        self._categories = list(categories)
        self._affiliates = list(affiliates)
        self._settings = settings or SiteSettings()

    @classmethod
    def demo(cls, settings: SiteSettings | None = None) -> FixtureContentSource:
        """The built-in TechNest demo pool."""
        return cls(
            posts=get_demo_posts(),
            categories=get_demo_categories(),
            settings=settings,
        )

    @classmethod
    def empty(cls, settings: SiteSettings | None = None) -> FixtureContentSource:
        return cls(settings=settings)

    def _published(self) -> list[Post]:
        return sort_by_recency(p for p in self._posts if p.published)

    def get_post_by_slug(self, slug: str, published_only: bool = True) -> Post | None:
        for post in self._posts:
            if post.slug == slug and (post.published or not published_only):
                return post
        return None

    def list_affiliates(self) -> list[Affiliate]:
        return list(self._affiliates)

    def list_posts_by_category(
        self,
        category_id: str,
        exclude_post_id: str | None = None,
        limit: int = 3,
    ) -> list[Post]:
        matches = [
            p for p in self._published()
            if p.id != exclude_post_id and p.in_category(category_id)
        ]
        return matches[:limit]

    def get_settings(self) -> SiteSettings:
        return self._settings

    def get_category_by_slug(self, slug: str) -> Category | None:
        return next((c for c in self._categories if c.slug == slug), None)

    def list_categories(self) -> list[Category]:
        return list(self._categories)

    def list_latest_posts(self, limit: int = 6) -> list[Post]:
        return self._published()[:limit]

    def list_published_posts(self) -> list[Post]:
        return self._published()

    def search_posts(self, query: str, limit: int = 5) -> list[Post]:
        # Title or excerpt, case-insensitive
        needle = (query or "").strip().lower()
        if not needle:
            return []
        matches = [
            p for p in self._published()
            if needle in p.title.lower() or needle in (p.excerpt or "").lower()
        ]
        return matches[:limit]


def _found(result: Any) -> bool:
    return result is not None


def _non_empty(result: Any) -> bool:
    return bool(result)


class TieredContentSource(ContentSource):
    """Primary store with a fallback pool, selected per read.

    Each read goes to the primary first. If it raises StoreUnavailableError,
    or returns nothing, the same read is answered by the fallback tier.
    Settings are the exception to the "nothing" rule: an empty settings
    table still yields defaults from the primary.
    """

    def __init__(self, primary: ContentSource, fallback: ContentSource):
        self.primary = primary
        self.fallback = fallback

    def _read(
        self,
        operation: str,
        *args: Any,
        accept: Callable[[Any], bool] = _non_empty,
        **kwargs: Any,
    ) -> Any:
        try:
            result = getattr(self.primary, operation)(*args, **kwargs)
        except StoreUnavailableError as e:
            logger.warning("%s; serving fallback content", e)
        else:
            if accept(result):
                return result
            logger.debug("Primary store returned nothing for %s; trying fallback", operation)
        return getattr(self.fallback, operation)(*args, **kwargs)

    def get_post_by_slug(self, slug: str, published_only: bool = True) -> Post | None:
        return self._read(
            "get_post_by_slug", slug, published_only=published_only, accept=_found
        )

    def list_affiliates(self) -> list[Affiliate]:
        return self._read("list_affiliates")

    def list_posts_by_category(
        self,
        category_id: str,
        exclude_post_id: str | None = None,
        limit: int = 3,
    ) -> list[Post]:
        return self._read(
            "list_posts_by_category",
            category_id,
            exclude_post_id=exclude_post_id,
            limit=limit,
        )

    def get_settings(self) -> SiteSettings:
        return self._read("get_settings", accept=_found)

    def get_category_by_slug(self, slug: str) -> Category | None:
        return self._read("get_category_by_slug", slug, accept=_found)

    def list_categories(self) -> list[Category]:
        return self._read("list_categories")

    def list_latest_posts(self, limit: int = 6) -> list[Post]:
        return self._read("list_latest_posts", limit=limit)

    def list_published_posts(self) -> list[Post]:
        return self._read("list_published_posts")

    def search_posts(self, query: str, limit: int = 5) -> list[Post]:
        if not (query or "").strip():
            return []
        return self._read("search_posts", query, limit=limit)
