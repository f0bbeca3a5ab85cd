"""Tests for shared common modules: models, config, logging."""

import logging
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from src.common.config import AppSettings, PublicationSettings, SupabaseSettings
from src.common.logging import setup_logging
from src.common.models import (
    Affiliate,
    Category,
    Post,
    Review,
    SiteSettings,
    sort_by_recency,
)


def _post(post_id: str, published_at: str | None = None, created_at: str = "") -> Post:
    return Post(
        id=post_id,
        slug=post_id,
        title=post_id.title(),
        published=True,
        published_at=published_at,
        created_at=created_at,
    )


# === Content models ===


class TestPost:
    def test_primary_category_is_first_link(self):
        post = Post(
            id="1",
            slug="s",
            title="T",
            categories=[
                Category(id="a", name="A", slug="a"),
                Category(id="b", name="B", slug="b"),
            ],
        )
        assert post.primary_category.id == "a"
        assert post.in_category("b")
        assert not post.in_category("c")

    def test_no_categories(self):
        post = Post(id="1", slug="s", title="T")
        assert post.primary_category is None

    def test_display_date_prefers_published_at(self):
        post = _post("1", published_at="2026-02-01", created_at="2026-01-01")
        assert post.display_date == "2026-02-01"
        assert _post("2", created_at="2026-01-01").display_date == "2026-01-01"

    def test_review_accepts_camel_case_product_name(self):
        review = Review.model_validate({"rating": 9.2, "productName": "Keychron Q1 Pro"})
        assert review.product_name == "Keychron Q1 Pro"

    def test_review_rating_bounds(self):
        with pytest.raises(ValidationError):
            Review(rating=11)


class TestPublicationState:
    NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)

    def test_publish_stamps_published_at(self):
        draft = Post(id="1", slug="s", title="T")
        published = draft.with_publication_state(True, now=self.NOW)
        assert published.published is True
        assert published.published_at == self.NOW.isoformat()
        assert draft.published is False  # original untouched

    def test_resave_keeps_original_stamp(self):
        post = Post(
            id="1", slug="s", title="T",
            published=True, published_at="2026-01-01T00:00:00+00:00",
        )
        again = post.with_publication_state(True, now=self.NOW)
        assert again.published_at == "2026-01-01T00:00:00+00:00"

    def test_unpublish_clears_stamp(self):
        post = Post(
            id="1", slug="s", title="T",
            published=True, published_at="2026-01-01T00:00:00+00:00",
        )
        draft = post.with_publication_state(False)
        assert draft.published is False
        assert draft.published_at is None


class TestSortByRecency:
    def test_newest_first(self):
        posts = [
            _post("a", published_at="2026-01-01"),
            _post("b", published_at="2026-03-01"),
            _post("c", published_at="2026-02-01"),
        ]
        assert [p.id for p in sort_by_recency(posts)] == ["b", "c", "a"]

    def test_falls_back_to_created_at(self):
        posts = [
            _post("a", published_at="2026-01-01"),
            _post("b", created_at="2026-02-01"),
        ]
        assert [p.id for p in sort_by_recency(posts)] == ["b", "a"]

    def test_ties_broken_by_id(self):
        posts = [
            _post("c", published_at="2026-01-01"),
            _post("a", published_at="2026-01-01"),
            _post("b", published_at="2026-01-01"),
        ]
        assert [p.id for p in sort_by_recency(posts)] == ["a", "b", "c"]


class TestAffiliate:
    def test_tracking_code(self, amazon):
        assert amazon.has_tracking_code

    @pytest.mark.parametrize("code", [None, "", "   "])
    def test_blank_code_is_not_tracking(self, code):
        affiliate = Affiliate(name="Direct", base_url="https://x.com", affiliate_code=code)
        assert not affiliate.has_tracking_code


# === Site settings ===


class TestSiteSettings:
    def test_defaults(self):
        site = SiteSettings()
        assert site.site_title == "TechNest"
        assert site.site_url == "https://technest.vercel.app"
        assert site.indexing_active is True

    def test_from_rows_overrides(self):
        site = SiteSettings.from_rows([
            {"key": "site_title", "value": "Gear Lab"},
            {"key": "indexing_active", "value": "false"},
        ])
        assert site.site_title == "Gear Lab"
        assert site.indexing_active is False
        assert site.site_description == "Smart tech picks for modern work"

    def test_from_rows_ignores_unknown_and_null(self):
        site = SiteSettings.from_rows([
            {"key": "newsletter_provider", "value": "buttondown"},
            {"key": "site_title", "value": None},
        ])
        assert site == SiteSettings()

    def test_from_rows_skips_invalid_value(self):
        site = SiteSettings.from_rows([{"key": "indexing_active", "value": "sometimes"}])
        assert site.indexing_active is True

    def test_from_rows_merges_over_base(self):
        base = SiteSettings(site_url="https://staging.technest.dev")
        site = SiteSettings.from_rows([{"key": "site_title", "value": "X"}], base=base)
        assert site.site_url == "https://staging.technest.dev"
        assert site.site_title == "X"

    @pytest.mark.parametrize(
        "site_url, path, expected",
        [
            ("https://technest.vercel.app", "/blog/a", "https://technest.vercel.app/blog/a"),
            ("https://technest.vercel.app/", "/blog/a", "https://technest.vercel.app/blog/a"),
            ("https://technest.vercel.app/", "blog/a", "https://technest.vercel.app/blog/a"),
            ("https://technest.vercel.app/", "", "https://technest.vercel.app"),
            ("https://technest.vercel.app", "https://cdn.x/img.jpg", "https://cdn.x/img.jpg"),
        ],
    )
    def test_absolute_url(self, site_url, path, expected):
        assert SiteSettings(site_url=site_url).absolute_url(path) == expected

    def test_asset_urls(self):
        site = SiteSettings()
        assert site.og_image_url == "https://technest.vercel.app/og-image.jpg"
        assert site.logo_url == "https://technest.vercel.app/logo.png"


# === Config ===


class TestConfig:
    def test_load_defaults_when_file_missing(self, tmp_path):
        settings = AppSettings.load(tmp_path / "missing.yaml")
        assert settings.publication.related_limit == 3
        assert settings.publication.latest_limit == 6
        assert settings.publication.affiliate_fallback_ref == "technest"
        assert settings.site.site_title == "TechNest"

    def test_load_from_yaml(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text(
            "publication:\n"
            "  related_limit: 5\n"
            "  fallback_enabled: false\n"
            "site:\n"
            "  site_url: https://example.org\n",
            encoding="utf-8",
        )
        settings = AppSettings.load(path)
        assert settings.publication.related_limit == 5
        assert settings.publication.fallback_enabled is False
        assert settings.publication.words_per_minute == 200
        assert settings.site.site_url == "https://example.org"

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("", encoding="utf-8")
        assert AppSettings.load(path).publication == PublicationSettings()

    def test_negative_limit_rejected(self):
        with pytest.raises(ValidationError):
            PublicationSettings(related_limit=-1)

    def test_supabase_env_precedence(self, monkeypatch):
        monkeypatch.setenv("NEXT_PUBLIC_SUPABASE_URL", "https://public.supabase.co")
        monkeypatch.setenv("SUPABASE_URL", "https://other.supabase.co")
        monkeypatch.delenv("NEXT_PUBLIC_SUPABASE_ANON_KEY", raising=False)
        monkeypatch.setenv("SUPABASE_ANON_KEY", "anon")
        supabase = SupabaseSettings()
        assert supabase.url == "https://public.supabase.co"
        assert supabase.key == "anon"


# === Logging ===


class TestLogging:
    def test_setup_logging_is_idempotent(self):
        first = setup_logging(module_name="technest.test")
        second = setup_logging(module_name="technest.test")
        assert first is second
        assert len(first.handlers) == 1

    def test_level_from_env(self, monkeypatch):
        monkeypatch.setenv("TECHNEST_LOG_LEVEL", "DEBUG")
        logger = setup_logging(module_name="technest.test.debug")
        assert logger.level == logging.DEBUG
