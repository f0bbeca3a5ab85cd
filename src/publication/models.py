"""Data models for the publication module."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Optional

from src.common.models import Category, Post


class OpenGraphType(str, Enum):
    """Open Graph object types used by the site."""
    ARTICLE = "article"
    WEBSITE = "website"


@dataclass
class Heading:
    """One entry of a post's heading index."""
    level: int  # 1-3
    text: str
    id: str  # Anchor, matches the id on the rendered heading


@dataclass
class Breadcrumb:
    label: str
    href: str


@dataclass
class OpenGraphImage:
    url: str
    width: int = 1200
    height: int = 630


@dataclass
class OpenGraph:
    """Open Graph fields for social previews."""
    title: str
    description: str
    url: str
    site_name: str
    images: list[OpenGraphImage] = field(default_factory=list)
    locale: str = "en_US"
    type: OpenGraphType = OpenGraphType.WEBSITE


@dataclass
class TwitterCard:
    title: str
    description: str
    images: list[str] = field(default_factory=list)
    card: str = "summary_large_image"


@dataclass
class PageMetadata:
    """External page-metadata contract for one page."""
    title: str
    description: str
    canonical_url: str
    open_graph: OpenGraph
    twitter: TwitterCard
    robots: str = "index, follow"
    structured_data: Optional[dict[str, Any]] = None  # schema.org JSON-LD
    google_analytics_id: str = ""

    def to_dict(self) -> dict:
        data = asdict(self)
        data["open_graph"]["type"] = self.open_graph.type.value
        return data

    def to_html_tags(self) -> str:
        """Render the <head> tags for this page."""
        from .metadata import render_head_tags

        return render_head_tags(self)


@dataclass
class PostPage:
    """Everything the page renderer needs for /blog/<slug>."""
    post: Post
    content: str  # Body with shortcodes resolved (markdown)
    read_time_minutes: int
    headings: list[Heading]
    metadata: PageMetadata
    related: list[Post] = field(default_factory=list)
    breadcrumbs: list[Breadcrumb] = field(default_factory=list)
    unresolved_shortcodes: list[str] = field(default_factory=list)

    @property
    def primary_category(self) -> Category | None:
        return self.post.primary_category

    def to_dict(self) -> dict:
        return {
            "post": self.post.model_dump(mode="json", exclude={"content"}),
            "content": self.content,
            "read_time_minutes": self.read_time_minutes,
            "headings": [asdict(h) for h in self.headings],
            "metadata": self.metadata.to_dict(),
            "related": [
                {"id": p.id, "slug": p.slug, "title": p.title, "excerpt": p.excerpt}
                for p in self.related
            ],
            "breadcrumbs": [asdict(b) for b in self.breadcrumbs],
            "unresolved_shortcodes": list(self.unresolved_shortcodes),
        }


@dataclass
class CategoryPage:
    """Category index for /category/<slug>."""
    category: Category
    posts: list[Post]
    metadata: PageMetadata

    def to_dict(self) -> dict:
        return {
            "category": self.category.model_dump(mode="json"),
            "posts": [{"id": p.id, "slug": p.slug, "title": p.title} for p in self.posts],
            "metadata": self.metadata.to_dict(),
        }


@dataclass
class HomePage:
    """Latest guides for /."""
    posts: list[Post]
    metadata: PageMetadata

    def to_dict(self) -> dict:
        return {
            "posts": [{"id": p.id, "slug": p.slug, "title": p.title} for p in self.posts],
            "metadata": self.metadata.to_dict(),
        }


@dataclass
class SitemapEntry:
    loc: str
    changefreq: str = "weekly"
    lastmod: str = ""
    priority: float = 0.7
