# Content Store: Supabase reads, demo fallback pool, settings cache
"""
Content store module for the public site.

All reads go through the ContentSource interface. The tiered source answers
from Supabase first and from the built-in demo pool when Supabase misses or
is unreachable.
"""

from .errors import StoreUnavailableError
from .settings_cache import CachedSettingsProvider
from .sources import ContentSource, FixtureContentSource, TieredContentSource
from .supabase_store import SupabaseContentStore

__all__ = [
    "CachedSettingsProvider",
    "ContentSource",
    "FixtureContentSource",
    "StoreUnavailableError",
    "SupabaseContentStore",
    "TieredContentSource",
]
