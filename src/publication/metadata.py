"""Metadata synthesizer: page title, description, social tags and JSON-LD.

Pure functions of a post and the global site settings; nothing here reads
from the content store.

Resolution rules for a post page:
- title:        meta_title -> title -> site title (template applied only
                when the title comes from the post)
- description:  meta_description -> excerpt -> site description
- canonical:    site_url + /blog/<slug>
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from src.common.models import Post, SiteSettings

from .models import (
    OpenGraph,
    OpenGraphImage,
    OpenGraphType,
    PageMetadata,
    TwitterCard,
)

TEMPLATES_DIR = Path(__file__).parent / "templates"

DEFAULT_AUTHOR = "TechNest Team"
TITLE_PLACEHOLDER = "%title%"
SITENAME_PLACEHOLDER = "%sitename%"


@lru_cache(maxsize=1)
def get_template_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )


# --- Field resolution ---

def apply_title_template(title: str, site: SiteSettings) -> str:
    """Embed a page title in the site's title template."""
    template = site.meta_title_template or ""
    if TITLE_PLACEHOLDER not in template:
        return f"{title} | {site.site_title}"
    return template.replace(TITLE_PLACEHOLDER, title).replace(
        SITENAME_PLACEHOLDER, site.site_title
    )


def resolve_title(post: Post, site: SiteSettings) -> str:
    own_title = post.meta_title or post.title
    if not own_title:
        return site.site_title
    return apply_title_template(own_title, site)


def resolve_description(post: Post, site: SiteSettings) -> str:
    return post.meta_description or post.excerpt or site.site_description


def post_path(post: Post) -> str:
    return f"/blog/{post.slug}"


def canonical_url(site: SiteSettings, path: str) -> str:
    return site.absolute_url(path)


def robots_directive(site: SiteSettings) -> str:
    return "index, follow" if site.indexing_active else "noindex, nofollow"


# --- Structured data ---

def build_article_schema(
    post: Post,
    site: SiteSettings,
    url: str,
    author_name: str = DEFAULT_AUTHOR,
) -> dict[str, Any]:
    """schema.org Article record for a post.

    Dates are passed through exactly as stored.
    """
    return {
        "@context": "https://schema.org",
        "@type": "Article",
        "headline": post.title,
        "description": post.excerpt or "",
        "image": post.featured_image or "",
        "datePublished": post.published_at or post.created_at,
        "dateModified": post.updated_at,
        "author": {
            "@type": "Person",
            "name": author_name,
        },
        "publisher": {
            "@type": "Organization",
            "name": site.site_title,
            "logo": {
                "@type": "ImageObject",
                "url": site.logo_url,
            },
        },
        "mainEntityOfPage": {
            "@type": "WebPage",
            "@id": url,
        },
    }


def dump_json_ld(data: dict[str, Any]) -> str:
    """JSON for a <script type="application/ld+json"> block."""
    return json.dumps(data, ensure_ascii=False).replace("</", "<\\/")


# --- Assembly ---

def build_page_metadata(
    title: str,
    description: str,
    url: str,
    site: SiteSettings,
    image: Optional[str] = None,
    og_type: OpenGraphType = OpenGraphType.WEBSITE,
    structured_data: Optional[dict[str, Any]] = None,
) -> PageMetadata:
    """Bundle resolved fields into the Open Graph / Twitter contract."""
    image_url = image or site.og_image_url
    return PageMetadata(
        title=title,
        description=description,
        canonical_url=url,
        open_graph=OpenGraph(
            title=title,
            description=description,
            url=url,
            site_name=site.site_title,
            images=[OpenGraphImage(url=image_url)],
            type=og_type,
        ),
        twitter=TwitterCard(
            title=title,
            description=description,
            images=[image_url],
        ),
        robots=robots_directive(site),
        structured_data=structured_data,
        google_analytics_id=site.google_analytics_id,
    )


def synthesize_post_metadata(
    post: Post,
    site: SiteSettings,
    path: str | None = None,
    author_name: str = DEFAULT_AUTHOR,
) -> PageMetadata:
    """Full page metadata for a single post."""
    url = canonical_url(site, path or post_path(post))
    return build_page_metadata(
        title=resolve_title(post, site),
        description=resolve_description(post, site),
        url=url,
        site=site,
        image=post.featured_image,
        og_type=OpenGraphType.ARTICLE,
        structured_data=build_article_schema(post, site, url, author_name),
    )


def synthesize_page_metadata(
    site: SiteSettings,
    title: str | None = None,
    description: str | None = None,
    path: str = "/",
) -> PageMetadata:
    """Metadata for listing pages (home, category index)."""
    return build_page_metadata(
        title=apply_title_template(title, site) if title else site.site_title,
        description=description or site.site_description,
        url=canonical_url(site, path),
        site=site,
    )


def render_head_tags(metadata: PageMetadata) -> str:
    """Render title, meta, Open Graph, Twitter, canonical and JSON-LD tags."""
    template = get_template_env().get_template("head_tags.html")
    json_ld = dump_json_ld(metadata.structured_data) if metadata.structured_data else ""
    return template.render(meta=metadata, json_ld=json_ld).strip()
