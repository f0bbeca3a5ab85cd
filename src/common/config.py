"""Project configuration and paths.

Loads settings from config/settings.yaml and environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .models import SiteSettings

# === Paths ===
PROJECT_ROOT = Path(__file__).parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"

# Load .env from project root
load_dotenv(PROJECT_ROOT / ".env")


def _env(*names: str) -> str:
    """First non-empty environment variable among `names`."""
    for name in names:
        value = os.getenv(name, "")
        if value:
            return value
    return ""


class SupabaseSettings(BaseModel):
    """Supabase project connection (read-only anon access is enough)."""
    url: str = Field(
        default_factory=lambda: _env("NEXT_PUBLIC_SUPABASE_URL", "SUPABASE_URL")
    )
    key: str = Field(
        default_factory=lambda: _env(
            "NEXT_PUBLIC_SUPABASE_ANON_KEY", "SUPABASE_ANON_KEY", "SUPABASE_SERVICE_KEY"
        )
    )


class PublicationSettings(BaseModel):
    """Knobs for the page publication pipeline."""
    related_limit: int = Field(default=3, ge=0)
    latest_limit: int = Field(default=6, ge=0)
    affiliate_fallback_ref: str = "technest"
    words_per_minute: int = Field(default=200, gt=0)
    fallback_enabled: bool = True
    settings_ttl_seconds: float = Field(default=300.0, ge=0)
    author_name: str = "TechNest Team"


class AppSettings(BaseModel):
    """Top-level application settings."""
    supabase: SupabaseSettings = Field(default_factory=SupabaseSettings)
    publication: PublicationSettings = Field(default_factory=PublicationSettings)
    site: SiteSettings = Field(default_factory=SiteSettings)

    @classmethod
    def load(cls, path: Path | None = None) -> AppSettings:
        """Load settings from config/settings.yaml, falling back to defaults."""
        settings_path = path or CONFIG_DIR / "settings.yaml"
        if settings_path.exists():
            with open(settings_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            return cls(**data)
        return cls()


# Singleton settings instance
settings = AppSettings.load()
