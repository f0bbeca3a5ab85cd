"""Sitemap and robots.txt generation for the public routes.

Covers `/`, every `/category/<slug>` and every published `/blog/<slug>`.
The admin surface is always disallowed for crawlers.
"""

from __future__ import annotations

from src.common.models import SiteSettings
from src.content_store.sources import ContentSource

from .metadata import get_template_env
from .models import SitemapEntry

DISALLOWED_PATHS = ("/admin",)


def build_sitemap_entries(source: ContentSource, site: SiteSettings) -> list[SitemapEntry]:
    """All indexable URLs; empty when indexing is switched off."""
    if not site.indexing_active:
        return []

    frequency = site.sitemap_frequency
    entries = [SitemapEntry(loc=site.absolute_url("/"), changefreq=frequency, priority=1.0)]
    for category in source.list_categories():
        entries.append(
            SitemapEntry(
                loc=site.absolute_url(f"/category/{category.slug}"),
                changefreq=frequency,
                priority=0.6,
            )
        )
    for post in source.list_published_posts():
        entries.append(
            SitemapEntry(
                loc=site.absolute_url(f"/blog/{post.slug}"),
                changefreq=frequency,
                lastmod=post.updated_at or post.display_date,
                priority=0.8,
            )
        )
    return entries


def render_sitemap_xml(entries: list[SitemapEntry]) -> str:
    """sitemap.xml document for `entries`."""
    template = get_template_env().get_template("sitemap.xml")
    return template.render(entries=entries)


def render_robots_txt(site: SiteSettings) -> str:
    """robots.txt honoring the indexing toggle."""
    lines = ["User-agent: *"]
    if site.indexing_active:
        lines.append("Allow: /")
        lines.extend(f"Disallow: {path}" for path in DISALLOWED_PATHS)
        lines.append("")
        lines.append(f"Sitemap: {site.absolute_url('/sitemap.xml')}")
    else:
        lines.append("Disallow: /")
    return "\n".join(lines) + "\n"
