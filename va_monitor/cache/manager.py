"""Cache manager for the parsed component table.

Holds the last successfully parsed table in memory with a freshness window
and falls back to stale data when a refresh fails, as long as that data is
younger than the hard maximum age.
"""

import time
import asyncio
import logging
from datetime import datetime, timezone
from typing import Awaitable, Callable, Dict, Optional

from va_monitor.config import MAX_CACHE_AGE_MS
from va_monitor.schemas import ComponentRecord

logger = logging.getLogger(__name__)

ComponentTable = Dict[str, ComponentRecord]
TableLoader = Callable[[], Awaitable[ComponentTable]]
Clock = Callable[[], float]


class CacheManager:
    """Manages the in-memory component table for one monitor instance."""

    def __init__(
        self,
        loader: TableLoader,
        freshness_window_ms: int,
        max_age_ms: int = MAX_CACHE_AGE_MS,
        clock: Clock = time.time,
    ):
        """Initialize cache manager.

        Args:
            loader: Coroutine function fetching and parsing a fresh table
            freshness_window_ms: Age below which the table is served without a fetch
            max_age_ms: Hard ceiling; older tables are never served, even as fallback
            clock: Returns the current time in seconds (injectable for tests)
        """
        self.loader = loader
        self.max_age_ms = max_age_ms
        self.freshness_window_ms = min(freshness_window_ms, max_age_ms)
        self.clock = clock

        self.table: ComponentTable = {}
        self.fetched_at: Optional[float] = None

        self._refresh_lock = asyncio.Lock()

    def age_ms(self) -> Optional[float]:
        """Age of the cached table in milliseconds, or None if never loaded."""
        if self.fetched_at is None:
            return None
        return (self.clock() - self.fetched_at) * 1000

    def is_fresh(self) -> bool:
        """True when a non-empty table is inside the freshness window."""
        age = self.age_ms()
        return bool(self.table) and age is not None and age < self.freshness_window_ms

    def is_usable_fallback(self) -> bool:
        """True when a non-empty table is inside the hard ceiling."""
        age = self.age_ms()
        return bool(self.table) and age is not None and age < self.max_age_ms

    @property
    def last_updated(self) -> Optional[str]:
        """ISO timestamp of the last successful load."""
        if self.fetched_at is None:
            return None
        return datetime.fromtimestamp(self.fetched_at, tz=timezone.utc).isoformat()

    async def get_table(self, force_refresh: bool = False) -> ComponentTable:
        """Return the component table, refreshing it when stale or forced.

        Refreshes are serialized; a caller that waited on an in-flight refresh
        reuses its result instead of fetching again (unless forced).

        Args:
            force_refresh: Always attempt a fetch

        Returns:
            Component table (fresh, or stale within the hard ceiling on failure)

        Raises:
            Whatever the loader raised, when no usable fallback exists
        """
        if not force_refresh and self.is_fresh():
            logger.info(f"Using cached data ({round(self.age_ms() / 1000)}s old, {len(self.table)} components)")
            return self.table

        async with self._refresh_lock:
            if not force_refresh and self.is_fresh():
                return self.table

            try:
                table = await self.loader()
            except Exception as e:
                if self.is_usable_fallback():
                    logger.warning(
                        f"Using cached data due to fetch error: {e} "
                        f"(age {round(self.age_ms() / 1000)}s, {len(self.table)} components)"
                    )
                    return self.table
                logger.error(f"Failed to fetch components and no valid cache available: {e}")
                raise

            # Swap table and timestamp together
            self.table, self.fetched_at = table, self.clock()
            logger.info(f"Successfully loaded {len(self.table)} components")
            return self.table

    def invalidate(self) -> None:
        """Drop the cached table."""
        self.table = {}
        self.fetched_at = None
