"""Site settings provider with a time-to-live cache."""

from __future__ import annotations

import threading
import time
from typing import Callable

from src.common.logging import setup_logging
from src.common.models import SiteSettings

from .errors import StoreUnavailableError
from .sources import ContentSource

logger = setup_logging(module_name="content_store.settings")


class CachedSettingsProvider:
    """Loads global site settings at most once per TTL window.

    On a failed load the last good value (or the defaults) is served and
    nothing is cached, so the next request retries the store.

    Args:
        source: Content source to read settings from.
        ttl_seconds: Cache lifetime. 0 reloads on every call.
        defaults: Served when the store has never been reachable.
        clock: Monotonic time source (injectable for tests).
    """

    def __init__(
        self,
        source: ContentSource,
        ttl_seconds: float = 300.0,
        defaults: SiteSettings | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._source = source
        self._ttl = ttl_seconds
        self._defaults = defaults or SiteSettings()
        self._clock = clock
        self._cached: SiteSettings | None = None
        self._loaded_at: float = 0.0
        self._lock = threading.Lock()

    def get(self) -> SiteSettings:
        """Current settings, reloading when the cache has expired."""
        with self._lock:
            now = self._clock()
            if self._cached is not None and now - self._loaded_at < self._ttl:
                return self._cached
            try:
                loaded = self._source.get_settings()
            except StoreUnavailableError as e:
                logger.warning("%s; using %s settings", e, "cached" if self._cached else "default")
                return self._cached or self._defaults
            self._cached = loaded
            self._loaded_at = now
            return loaded

    def invalidate(self) -> None:
        """Drop the cached value (e.g. after the admin saves settings)."""
        with self._lock:
            self._cached = None
