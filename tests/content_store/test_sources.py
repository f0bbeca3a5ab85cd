"""Tests for the fixture pool and the two-tier content source."""

from unittest.mock import MagicMock

import pytest

from src.common.models import Affiliate, Category, Post, SiteSettings
from src.content_store.errors import StoreUnavailableError
from src.content_store.sources import (
    ContentSource,
    FixtureContentSource,
    TieredContentSource,
)


# === Fixtures ===


@pytest.fixture
def primary() -> MagicMock:
    return MagicMock(spec=ContentSource)


@pytest.fixture
def tiered(primary, fixture_source) -> TieredContentSource:
    return TieredContentSource(primary=primary, fallback=fixture_source)


def _unavailable(operation: str):
    return StoreUnavailableError(operation, "connection refused")


# === Fixture source ===


class TestFixtureContentSource:
    def test_demo_pool(self):
        source = FixtureContentSource.demo()
        assert len(source.list_published_posts()) == 6
        assert len(source.list_categories()) == 5
        assert source.list_affiliates() == []

    def test_empty_pool(self):
        source = FixtureContentSource.empty()
        assert source.get_post_by_slug("keychron-q1-pro-review") is None
        assert source.list_latest_posts() == []
        assert source.get_settings() == SiteSettings()

    def test_get_post_by_slug(self, fixture_source):
        post = fixture_source.get_post_by_slug("keychron-q1-pro-review")
        assert post.id == "post-1"

    def test_unpublished_hidden_unless_requested(self):
        draft = Post(id="d", slug="draft", title="Draft")
        source = FixtureContentSource(posts=[draft])
        assert source.get_post_by_slug("draft") is None
        assert source.get_post_by_slug("draft", published_only=False) is draft

    def test_latest_posts_newest_first(self, fixture_source):
        latest = fixture_source.list_latest_posts(limit=3)
        assert [p.id for p in latest] == ["post-1", "post-2", "post-3"]

    def test_posts_by_category_excludes_post(self, fixture_source):
        posts = fixture_source.list_posts_by_category("cat-5", exclude_post_id="post-4")
        assert [p.id for p in posts] == ["post-6"]

    def test_posts_by_category_limit(self, fixture_source):
        assert len(fixture_source.list_posts_by_category("cat-5", limit=1)) == 1

    def test_category_by_slug(self, fixture_source):
        assert fixture_source.get_category_by_slug("monitors").id == "cat-4"
        assert fixture_source.get_category_by_slug("nope") is None

    def test_search_matches_title_case_insensitively(self, fixture_source):
        posts = fixture_source.search_posts("DESK")
        assert [p.id for p in posts] == ["post-4", "post-6"]

    def test_search_matches_excerpt(self, fixture_source):
        posts = fixture_source.search_posts("noise cancellation")
        assert [p.id for p in posts] == ["post-5"]

    @pytest.mark.parametrize("query", ["", "   "])
    def test_blank_search(self, fixture_source, query):
        assert fixture_source.search_posts(query) == []

    def test_search_capped_at_five(self, fixture_source):
        assert len(fixture_source.search_posts("e")) == 5
        assert len(fixture_source.search_posts("e", limit=2)) == 2

    def test_search_skips_drafts(self):
        draft = Post(id="d", slug="draft", title="Desk draft")
        assert FixtureContentSource(posts=[draft]).search_posts("desk") == []


# === Tiered source ===


class TestTieredContentSource:
    def test_primary_hit_is_returned(self, tiered, primary):
        post = Post(id="db-1", slug="keychron-q1-pro-review", title="From DB", published=True)
        primary.get_post_by_slug.return_value = post
        assert tiered.get_post_by_slug("keychron-q1-pro-review") is post

    def test_primary_miss_uses_fallback(self, tiered, primary):
        primary.get_post_by_slug.return_value = None
        post = tiered.get_post_by_slug("keychron-q1-pro-review")
        assert post.id == "post-1"

    def test_unknown_slug_in_both_tiers(self, tiered, primary):
        primary.get_post_by_slug.return_value = None
        assert tiered.get_post_by_slug("does-not-exist") is None

    def test_primary_failure_uses_fallback(self, tiered, primary):
        primary.list_posts_by_category.side_effect = _unavailable("list_posts_by_category")
        posts = tiered.list_posts_by_category("cat-5", exclude_post_id="post-4", limit=3)
        assert [p.id for p in posts] == ["post-6"]

    def test_empty_primary_list_uses_fallback(self, tiered, primary):
        primary.list_latest_posts.return_value = []
        assert len(tiered.list_latest_posts(limit=6)) == 6

    def test_arguments_forwarded(self, tiered, primary):
        primary.list_posts_by_category.return_value = [
            Post(id="x", slug="x", title="X", published=True)
        ]
        tiered.list_posts_by_category("cat-1", exclude_post_id="post-1", limit=3)
        primary.list_posts_by_category.assert_called_once_with(
            "cat-1", exclude_post_id="post-1", limit=3
        )

    def test_affiliates_fall_back(self, tiered, primary, amazon):
        primary.list_affiliates.side_effect = _unavailable("list_affiliates")
        assert tiered.list_affiliates() == [amazon]

    def test_primary_affiliates_win(self, tiered, primary):
        ebay = Affiliate(name="eBay", base_url="https://ebay.com")
        primary.list_affiliates.return_value = [ebay]
        assert tiered.list_affiliates() == [ebay]

    def test_settings_from_primary(self, tiered, primary):
        primary.get_settings.return_value = SiteSettings(site_title="Gear Lab")
        assert tiered.get_settings().site_title == "Gear Lab"

    def test_category_fallback(self, tiered, primary):
        primary.get_category_by_slug.side_effect = _unavailable("get_category_by_slug")
        assert tiered.get_category_by_slug("keyboards") == Category(
            id="cat-1",
            name="Keyboards",
            slug="keyboards",
            description="Mechanical, wireless, and ergonomic keyboards for coding and typing.",
        )

    def test_search_primary_results_win(self, tiered, primary):
        hit = Post(id="db-1", slug="keychron", title="Keychron from DB", published=True)
        primary.search_posts.return_value = [hit]
        assert tiered.search_posts("keychron") == [hit]
        primary.search_posts.assert_called_once_with("keychron", limit=5)

    def test_search_empty_primary_uses_fallback(self, tiered, primary):
        primary.search_posts.return_value = []
        assert [p.id for p in tiered.search_posts("keychron")] == ["post-1"]

    def test_search_primary_failure_uses_fallback(self, tiered, primary):
        primary.search_posts.side_effect = _unavailable("search_posts")
        assert [p.id for p in tiered.search_posts("desk", limit=1)] == ["post-4"]

    def test_blank_search_reads_neither_tier(self, tiered, primary):
        assert tiered.search_posts("  ") == []
        primary.search_posts.assert_not_called()


class TestStoreUnavailableError:
    def test_message(self):
        error = StoreUnavailableError("list_affiliates", "timeout")
        assert str(error) == "Content store unavailable during list_affiliates: timeout"
        assert error.operation == "list_affiliates"
