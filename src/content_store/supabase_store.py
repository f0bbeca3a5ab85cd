"""Supabase Content Store: read posts, categories, affiliates and settings.

Primary content store for the public site. Reads the Supabase tables that
the admin CMS writes (`posts`, `categories`, `post_categories`, `affiliates`,
`settings`) and maps every row to the shared models at this boundary.

Prerequisites:
    - NEXT_PUBLIC_SUPABASE_URL / NEXT_PUBLIC_SUPABASE_ANON_KEY in .env
      (or SUPABASE_URL / SUPABASE_ANON_KEY)

Usage:
    from src.content_store.supabase_store import SupabaseContentStore

    store = SupabaseContentStore()
    post = store.get_post_by_slug("keychron-q1-pro-review")
"""

from __future__ import annotations

import threading
from typing import Any, Callable, Optional

from pydantic import ValidationError

from src.common.config import settings
from src.common.logging import setup_logging
from src.common.models import Affiliate, Category, Post, SiteSettings, sort_by_recency

from .errors import StoreUnavailableError
from .mapping import (
    affiliate_from_row,
    category_from_row,
    post_from_row,
    settings_from_rows,
)
from .sources import ContentSource

logger = setup_logging(module_name="content_store.supabase")

# Post rows always come with their categories, in link order
POST_SELECT = "*, categories:post_categories(category:categories(*))"

# Inner-joined link rows used only to filter posts by category
CATEGORY_FILTER = "category_filter:post_categories!inner(category_id)"

DEFAULT_SEARCH_LIMIT = 5


class SupabaseContentStore(ContentSource):
    """Reads blog content from a Supabase project.

    The client is created lazily on the first read. Any failure, including
    missing credentials, surfaces as StoreUnavailableError so callers can
    degrade to the fallback pool.
    """

    def __init__(
        self,
        supabase_url: Optional[str] = None,
        supabase_key: Optional[str] = None,
        client: Any = None,
        site_defaults: SiteSettings | None = None,
    ):
        self._url = supabase_url if supabase_url is not None else settings.supabase.url
        self._key = supabase_key if supabase_key is not None else settings.supabase.key
        self._client = client
        self._site_defaults = site_defaults or settings.site
        self._client_lock = threading.Lock()

    def _get_client(self):
        """Lazy-initialize Supabase client."""
        with self._client_lock:
            if self._client is not None:
                return self._client
            if not self._url or not self._key:
                raise ValueError(
                    "NEXT_PUBLIC_SUPABASE_URL / NEXT_PUBLIC_SUPABASE_ANON_KEY "
                    "must be set in .env. See config/.env.example."
                )
            from supabase import create_client

            self._client = create_client(self._url, self._key)
            logger.info("Connected to content store: %s", self._url)
            return self._client

    def _run(self, operation: str, build: Callable[[Any], Any]) -> list[dict]:
        """Execute a query built against the client and return its rows."""
        try:
            client = self._get_client()
            response = build(client).execute()
        except Exception as e:
            raise StoreUnavailableError(operation, str(e)) from e
        return list(response.data or [])

    @staticmethod
    def _map_posts(rows: list[dict]) -> list[Post]:
        posts = []
        for row in rows:
            try:
                posts.append(post_from_row(row))
            except (KeyError, ValidationError) as e:
                logger.warning("Skipping malformed post row %r: %s", row.get("slug"), e)
        return posts

    @staticmethod
    def _map_rows(rows: list[dict], mapper: Callable[[dict], Any], kind: str) -> list:
        """Map rows with `mapper`, skipping rows that fail validation or map to None."""
        mapped = []
        for row in rows:
            try:
                item = mapper(row)
            except ValidationError as e:
                logger.warning("Skipping malformed %s row %r: %s", kind, row.get("name"), e)
                continue
            if item is not None:
                mapped.append(item)
        return mapped

    # --- Posts ---

    def get_post_by_slug(self, slug: str, published_only: bool = True) -> Post | None:
        def query(client):
            q = client.table("posts").select(POST_SELECT).eq("slug", slug)
            if published_only:
                q = q.eq("published", True)
            return q.limit(1)

        posts = self._map_posts(self._run("get_post_by_slug", query))
        return posts[0] if posts else None

    def list_posts_by_category(
        self,
        category_id: str,
        exclude_post_id: str | None = None,
        limit: int = 3,
    ) -> list[Post]:
        if limit <= 0:
            return []

        def query(client):
            q = (
                client.table("posts")
                .select(f"{POST_SELECT}, {CATEGORY_FILTER}")
                .eq("category_filter.category_id", category_id)
                .eq("published", True)
            )
            if exclude_post_id is not None:
                q = q.neq("id", exclude_post_id)
            return q.order("published_at", desc=True).limit(limit)

        posts = self._map_posts(self._run("list_posts_by_category", query))
        return sort_by_recency(posts)[:limit]

    def search_posts(self, query: str, limit: int = DEFAULT_SEARCH_LIMIT) -> list[Post]:
        """Published posts whose title contains `query` (case-insensitive)."""
        term = (query or "").strip()
        if not term or limit <= 0:
            return []
        rows = self._run(
            "search_posts",
            lambda client: (
                client.table("posts")
                .select(POST_SELECT)
                .eq("published", True)
                .ilike("title", f"%{term}%")
                .order("published_at", desc=True)
                .limit(limit)
            ),
        )
        return sort_by_recency(self._map_posts(rows))[:limit]

    def list_latest_posts(self, limit: int = 6) -> list[Post]:
        if limit <= 0:
            return []
        rows = self._run(
            "list_latest_posts",
            lambda client: (
                client.table("posts")
                .select(POST_SELECT)
                .eq("published", True)
                .order("published_at", desc=True)
                .limit(limit)
            ),
        )
        return sort_by_recency(self._map_posts(rows))[:limit]

    def list_published_posts(self) -> list[Post]:
        rows = self._run(
            "list_published_posts",
            lambda client: (
                client.table("posts")
                .select(POST_SELECT)
                .eq("published", True)
                .order("published_at", desc=True)
            ),
        )
        return sort_by_recency(self._map_posts(rows))

    # --- Categories ---

    def get_category_by_slug(self, slug: str) -> Category | None:
        rows = self._run(
            "get_category_by_slug",
            lambda client: client.table("categories").select("*").eq("slug", slug).limit(1),
        )
        categories = self._map_rows(rows, category_from_row, "category")
        return categories[0] if categories else None

    def list_categories(self) -> list[Category]:
        rows = self._run(
            "list_categories",
            lambda client: client.table("categories").select("*").order("name"),
        )
        return self._map_rows(rows, category_from_row, "category")

    # --- Affiliates & settings ---

    def list_affiliates(self) -> list[Affiliate]:
        rows = self._run(
            "list_affiliates",
            lambda client: client.table("affiliates").select("*").order("created_at"),
        )
        return self._map_rows(rows, affiliate_from_row, "affiliate")

    def get_settings(self) -> SiteSettings:
        rows = self._run(
            "get_settings",
            lambda client: client.table("settings").select("key, value"),
        )
        return settings_from_rows(rows, base=self._site_defaults)
