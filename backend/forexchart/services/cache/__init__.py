"""
Cache module for ForexChart.

Provides Redis persistence for chart layout snapshots.
"""

from forexchart.services.cache.layout_store import (
    LayoutStore,
    init_redis,
    close_redis,
    get_redis,
    get_layout_store,
)

__all__ = [
    "LayoutStore",
    "init_redis",
    "close_redis",
    "get_redis",
    "get_layout_store",
]
