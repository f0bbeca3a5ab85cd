# Common utilities and shared modules
"""
Shared components used by the content store and the publication pipeline:
- Data models (Pydantic schemas)
- Logging configuration
- Project configuration
"""

from .config import settings, AppSettings, PROJECT_ROOT, CONFIG_DIR
from .logging import setup_logging
from .models import Affiliate, Category, Post, Review, SiteSettings

__all__ = [
    "settings",
    "AppSettings",
    "PROJECT_ROOT",
    "CONFIG_DIR",
    "setup_logging",
    "Affiliate",
    "Category",
    "Post",
    "Review",
    "SiteSettings",
]
