"""Publication pipeline: content store reads to render-ready pages.

Orchestrates the post page flow:
post lookup → (affiliates | settings | related, concurrently)
→ shortcode resolution → reading aids → metadata → breadcrumbs

Usage:
    pipeline = build_pipeline()
    page = pipeline.build_post_page("keychron-q1-pro-review")

CLI:
    python -m src.publication.pipeline --slug keychron-q1-pro-review
    python -m src.publication.pipeline --category keyboards
    python -m src.publication.pipeline --home
    python -m src.publication.pipeline --sitemap
    python -m src.publication.pipeline --robots
    python -m src.publication.pipeline --search keychron
"""

from __future__ import annotations

import argparse
import json
import sys
from concurrent.futures import ThreadPoolExecutor

from src.common.config import AppSettings, settings
from src.common.logging import setup_logging
from src.common.models import Affiliate, Post, SiteSettings
from src.content_store.errors import StoreUnavailableError
from src.content_store.settings_cache import CachedSettingsProvider
from src.content_store.sources import (
    ContentSource,
    FixtureContentSource,
    TieredContentSource,
)
from src.content_store.supabase_store import SupabaseContentStore

from .metadata import DEFAULT_AUTHOR, post_path, synthesize_page_metadata, synthesize_post_metadata
from .models import Breadcrumb, CategoryPage, HomePage, PostPage
from .reading import DEFAULT_WORDS_PER_MINUTE, analyze_body, read_time_from_words
from .related import DEFAULT_RELATED_LIMIT, RelatedContentSelector
from .shortcodes import DEFAULT_FALLBACK_REF, find_unresolved_shortcodes, resolve_shortcodes
from .sitemap import build_sitemap_entries, render_robots_txt, render_sitemap_xml

logger = setup_logging(module_name="publication.pipeline")

DEFAULT_LATEST_LIMIT = 6
DEFAULT_SEARCH_LIMIT = 5
CATEGORY_PAGE_LIMIT = 100


class PostNotFoundError(LookupError):
    """No published post with the requested slug."""

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f"Post not found: {slug}")


class CategoryNotFoundError(LookupError):
    """No category with the requested slug."""

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f"Category not found: {slug}")


class PublicationPipeline:
    """Builds the public pages from a content source.

    Steps for a post page:
    1. Resolve the published post by slug (miss → PostNotFoundError)
    2. Load affiliates, site settings and related posts concurrently
    3. Replace affiliate shortcodes in the body
    4. Compute read time and heading index from the resolved body
    5. Synthesize page metadata and breadcrumbs

    Affiliates, settings and related posts are enrichment: if any of them
    fails the page is still built, with no links, default settings or no
    related posts respectively.
    """

    def __init__(
        self,
        source: ContentSource,
        settings_provider: CachedSettingsProvider | None = None,
        related_limit: int = DEFAULT_RELATED_LIMIT,
        latest_limit: int = DEFAULT_LATEST_LIMIT,
        fallback_ref: str = DEFAULT_FALLBACK_REF,
        words_per_minute: int = DEFAULT_WORDS_PER_MINUTE,
        author_name: str = DEFAULT_AUTHOR,
    ):
        self.source = source
        self.settings_provider = settings_provider or CachedSettingsProvider(source)
        self.related = RelatedContentSelector(source, limit=related_limit)
        self.latest_limit = latest_limit
        self.fallback_ref = fallback_ref
        self.words_per_minute = words_per_minute
        self.author_name = author_name

    # --- Pages ---

    def build_post_page(self, slug: str) -> PostPage:
        """Assemble the /blog/<slug> page.

        Args:
            slug: URL slug of a published post.

        Returns:
            PostPage ready for rendering.

        Raises:
            PostNotFoundError: No published post has this slug in either tier.
        """
        post = self.source.get_post_by_slug(slug, published_only=True)
        if post is None:
            raise PostNotFoundError(slug)

        with ThreadPoolExecutor(max_workers=3, thread_name_prefix="post-page") as pool:
            affiliates_future = pool.submit(self._load_affiliates)
            settings_future = pool.submit(self.settings_provider.get)
            related_future = pool.submit(self._load_related, post)
            affiliates = affiliates_future.result()
            site = settings_future.result()
            related = related_future.result()

        content = resolve_shortcodes(post.content, affiliates, self.fallback_ref)
        unresolved = find_unresolved_shortcodes(content)
        if unresolved:
            logger.warning(
                "Unresolved affiliate shortcodes in %s: %s", post.slug, ", ".join(unresolved)
            )

        analysis = analyze_body(content)
        page = PostPage(
            post=post,
            content=content,
            read_time_minutes=read_time_from_words(analysis.word_count, self.words_per_minute),
            headings=analysis.headings,
            metadata=synthesize_post_metadata(post, site, author_name=self.author_name),
            related=related,
            breadcrumbs=self._post_breadcrumbs(post),
            unresolved_shortcodes=unresolved,
        )
        logger.info(
            "Built post page %s: %d min read, %d headings, %d related",
            post.slug,
            page.read_time_minutes,
            len(page.headings),
            len(page.related),
        )
        return page

    def build_category_page(self, slug: str) -> CategoryPage:
        """Assemble the /category/<slug> index.

        Raises:
            CategoryNotFoundError: Unknown category slug in either tier.
        """
        category = self.source.get_category_by_slug(slug)
        if category is None:
            raise CategoryNotFoundError(slug)

        posts = self.source.list_posts_by_category(category.id, limit=CATEGORY_PAGE_LIMIT)
        site = self.settings_provider.get()
        metadata = synthesize_page_metadata(
            site,
            title=category.name,
            description=category.description
            or f"Browse all {category.name} reviews and recommendations",
            path=f"/category/{category.slug}",
        )
        logger.info("Built category page %s: %d posts", category.slug, len(posts))
        return CategoryPage(category=category, posts=posts, metadata=metadata)

    def build_home_page(self) -> HomePage:
        """Latest published guides for /."""
        posts = self.source.list_latest_posts(limit=self.latest_limit)
        metadata = synthesize_page_metadata(self.settings_provider.get())
        return HomePage(posts=posts, metadata=metadata)

    # --- Static generation ---

    def list_post_slugs(self) -> list[str]:
        return [p.slug for p in self.source.list_published_posts()]

    def list_category_slugs(self) -> list[str]:
        return [c.slug for c in self.source.list_categories()]

    def build_sitemap(self) -> str:
        """sitemap.xml for the current site settings."""
        site = self.settings_provider.get()
        return render_sitemap_xml(build_sitemap_entries(self.source, site))

    def build_robots(self) -> str:
        return render_robots_txt(self.settings_provider.get())

    # --- Search ---

    def search_posts(self, query: str, limit: int = DEFAULT_SEARCH_LIMIT) -> list[Post]:
        """Published posts matching `query` for the search overlay."""
        results = self.source.search_posts(query, limit=limit)
        logger.debug("Search %r: %d results", query, len(results))
        return results

    # --- Enrichment ---

    def _load_affiliates(self) -> list[Affiliate]:
        try:
            return self.source.list_affiliates()
        except StoreUnavailableError as e:
            logger.warning("%s; rendering without affiliate links", e)
            return []

    def _load_related(self, post: Post) -> list[Post]:
        try:
            return self.related.select(post)
        except StoreUnavailableError as e:
            logger.warning("%s; rendering without related posts", e)
            return []

    def _post_breadcrumbs(self, post: Post) -> list[Breadcrumb]:
        crumbs = [Breadcrumb(label="Blog", href="/blog")]
        category = post.primary_category
        if category is not None:
            crumbs.append(Breadcrumb(label=category.name, href=f"/category/{category.slug}"))
        crumbs.append(Breadcrumb(label=post.title, href=post_path(post)))
        return crumbs


def build_pipeline(app_settings: AppSettings = settings) -> PublicationPipeline:
    """Wire the Supabase store, the demo fallback pool and the settings cache."""
    site_defaults: SiteSettings = app_settings.site
    publication = app_settings.publication

    primary = SupabaseContentStore(
        supabase_url=app_settings.supabase.url,
        supabase_key=app_settings.supabase.key,
        site_defaults=site_defaults,
    )
    if publication.fallback_enabled:
        fallback = FixtureContentSource.demo(settings=site_defaults)
    else:
        fallback = FixtureContentSource.empty(settings=site_defaults)

    # Settings are read from the primary store only, so a failed load is never cached
    settings_provider = CachedSettingsProvider(
        primary,
        ttl_seconds=publication.settings_ttl_seconds,
        defaults=site_defaults,
    )
    return PublicationPipeline(
        source=TieredContentSource(primary=primary, fallback=fallback),
        settings_provider=settings_provider,
        related_limit=publication.related_limit,
        latest_limit=publication.latest_limit,
        fallback_ref=publication.affiliate_fallback_ref,
        words_per_minute=publication.words_per_minute,
        author_name=publication.author_name,
    )


def _emit(text: str, output: str | None) -> None:
    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(text)
        logger.info("Output written to %s", output)
    else:
        print(text)


def _dump(data: dict) -> str:
    return json.dumps(data, ensure_ascii=False, indent=2)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="TechNest page publication pipeline")
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--slug", type=str, help="Build the post page for this slug")
    target.add_argument("--category", type=str, help="Build the category page for this slug")
    target.add_argument("--home", action="store_true", help="Build the home page")
    target.add_argument("--sitemap", action="store_true", help="Render sitemap.xml")
    target.add_argument("--robots", action="store_true", help="Render robots.txt")
    target.add_argument("--search", type=str, help="Search published post titles")
    parser.add_argument(
        "--head-tags",
        action="store_true",
        help="[slug/category/home] Print the <head> tags instead of JSON",
    )
    parser.add_argument("--output", type=str, help="Output file path")

    args = parser.parse_args(argv)
    pipeline = build_pipeline()

    try:
        if args.sitemap:
            _emit(pipeline.build_sitemap(), args.output)
            return 0
        if args.robots:
            _emit(pipeline.build_robots(), args.output)
            return 0
        if args.search is not None:
            results = [
                {"id": p.id, "slug": p.slug, "title": p.title, "excerpt": p.excerpt}
                for p in pipeline.search_posts(args.search)
            ]
            _emit(json.dumps(results, ensure_ascii=False, indent=2), args.output)
            return 0

        if args.slug:
            page = pipeline.build_post_page(args.slug)
        elif args.category:
            page = pipeline.build_category_page(args.category)
        else:
            page = pipeline.build_home_page()
    except (PostNotFoundError, CategoryNotFoundError) as e:
        logger.error("%s (404)", e)
        return 1

    if args.head_tags:
        _emit(page.metadata.to_html_tags(), args.output)
    else:
        _emit(_dump(page.to_dict()), args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
