"""
Redis-backed store for chart layout snapshots.

Layouts are saved as opaque JSON under a single key. When Redis is not
reachable the store falls back to an in-process dictionary.
"""

import logging
from typing import Optional

import redis.asyncio as redis

from forexchart.core.config import settings
from forexchart.schemas.layout import ChartLayout

logger = logging.getLogger(__name__)

# Global Redis connection pool
_redis_pool: Optional[redis.Redis] = None


async def init_redis() -> Optional[redis.Redis]:
    """
    Initialize Redis connection pool.
    Called on application startup.
    """
    global _redis_pool

    if _redis_pool is not None:
        return _redis_pool

    try:
        _redis_pool = redis.from_url(
            settings.redis_url,
            encoding="utf-8",
            decode_responses=True,
        )
        # Test connection
        await _redis_pool.ping()
        logger.info(f"Redis connected: {settings.redis_url}")
        return _redis_pool
    except Exception as e:
        logger.warning(f"Redis connection failed: {e}. Using in-memory fallback.")
        _redis_pool = None
        return None


async def close_redis() -> None:
    """Close Redis connection pool."""
    global _redis_pool
    if _redis_pool:
        await _redis_pool.aclose()
        _redis_pool = None
        logger.info("Redis connection closed")


def get_redis() -> Optional[redis.Redis]:
    """Get the Redis connection pool."""
    return _redis_pool


class LayoutStore:
    """
    Key-value persistence for chart layouts.

    Keys:
    - {layout_key} -> JSON {chartType, indicators, timeframe}
    """

    def __init__(
        self,
        redis_client: Optional[redis.Redis] = None,
        key: Optional[str] = None,
    ):
        self._redis = redis_client
        self._key = key or settings.layout_key
        # In-memory fallback when Redis is unavailable
        self._memory_cache: dict[str, str] = {}

    @property
    def redis(self) -> Optional[redis.Redis]:
        return self._redis or _redis_pool

    @property
    def key(self) -> str:
        return self._key

    async def save_raw(self, value: str) -> bool:
        """Store a serialized layout."""
        if self.redis:
            try:
                await self.redis.set(self._key, value)
                return True
            except Exception as e:
                logger.debug(f"Redis save_layout failed: {e}")

        # Fallback to memory
        self._memory_cache[self._key] = value
        return True

    async def load_raw(self) -> Optional[str]:
        """Fetch the serialized layout, or None if nothing is saved."""
        if self.redis:
            try:
                return await self.redis.get(self._key)
            except Exception as e:
                logger.debug(f"Redis load_layout failed: {e}")

        return self._memory_cache.get(self._key)

    async def save_layout(self, layout: ChartLayout) -> bool:
        """Persist a layout snapshot."""
        return await self.save_raw(layout.to_json())

    async def load_layout(self) -> Optional[ChartLayout]:
        """
        Load the saved layout.

        Returns None when nothing is saved or the stored JSON is unreadable.
        """
        raw = await self.load_raw()
        if not raw:
            return None
        try:
            return ChartLayout.from_json(raw)
        except ValueError as e:
            logger.warning(f"Ignoring unreadable saved layout: {e}")
            return None

    async def clear(self) -> None:
        """Remove the saved layout."""
        if self.redis:
            try:
                await self.redis.delete(self._key)
            except Exception as e:
                logger.debug(f"Redis clear_layout failed: {e}")
        self._memory_cache.pop(self._key, None)


# Singleton instance
_layout_store: Optional[LayoutStore] = None


def get_layout_store() -> LayoutStore:
    """Get the layout store singleton."""
    global _layout_store
    if _layout_store is None:
        _layout_store = LayoutStore()
    return _layout_store
