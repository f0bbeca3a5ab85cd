# Publication: post pages, metadata, shortcodes, related content, sitemap
"""
Publication module for the TechNest public site.

Turns content-store records into render-ready pages: affiliate shortcode
resolution, reading aids, page metadata (Open Graph, Twitter, JSON-LD),
related posts, breadcrumbs, sitemap and robots.txt.
"""

from .metadata import render_head_tags, synthesize_page_metadata, synthesize_post_metadata
from .models import (
    Breadcrumb,
    CategoryPage,
    Heading,
    HomePage,
    OpenGraph,
    OpenGraphType,
    PageMetadata,
    PostPage,
    SitemapEntry,
    TwitterCard,
)
from .pipeline import (
    CategoryNotFoundError,
    PostNotFoundError,
    PublicationPipeline,
    build_pipeline,
)
from .reading import estimate_read_time, extract_headings
from .related import RelatedContentSelector
from .shortcodes import resolve_shortcodes

__all__ = [
    "Breadcrumb",
    "CategoryNotFoundError",
    "CategoryPage",
    "Heading",
    "HomePage",
    "OpenGraph",
    "OpenGraphType",
    "PageMetadata",
    "PostNotFoundError",
    "PostPage",
    "PublicationPipeline",
    "RelatedContentSelector",
    "SitemapEntry",
    "TwitterCard",
    "build_pipeline",
    "estimate_read_time",
    "extract_headings",
    "render_head_tags",
    "resolve_shortcodes",
    "synthesize_page_metadata",
    "synthesize_post_metadata",
]
