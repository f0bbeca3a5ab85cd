"""Shared test fixtures for the TechNest publication engine."""

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Ensure src is importable
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.common.models import Affiliate, Category, Post, SiteSettings
from src.content_store.demo_data import get_demo_categories, get_demo_posts
from src.content_store.sources import FixtureContentSource

FIXED_NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def demo_posts() -> list[Post]:
    """The demo pool, published relative to a fixed clock."""
    return get_demo_posts(now=FIXED_NOW)


@pytest.fixture
def demo_categories() -> list[Category]:
    return get_demo_categories()


@pytest.fixture
def site() -> SiteSettings:
    return SiteSettings()


@pytest.fixture
def amazon() -> Affiliate:
    return Affiliate(
        id="aff-1",
        name="Amazon",
        base_url="https://amazon.com/x",
        affiliate_code="tn21",
    )


@pytest.fixture
def fixture_source(demo_posts, demo_categories, amazon, site) -> FixtureContentSource:
    """In-process source over the demo pool plus one affiliate."""
    return FixtureContentSource(
        posts=demo_posts,
        categories=demo_categories,
        affiliates=[amazon],
        settings=site,
    )


@pytest.fixture
def sample_post() -> Post:
    """A minimal published post in one category."""
    return Post(
        id="p-100",
        slug="sample-post",
        title="Sample Post",
        excerpt="A short excerpt.",
        content="# Sample\n\nBody text.",
        published=True,
        published_at="2026-02-01T09:00:00+00:00",
        created_at="2026-01-30T09:00:00+00:00",
        updated_at="2026-02-02T09:00:00+00:00",
        categories=[Category(id="cat-9", name="Gadgets", slug="gadgets")],
    )
