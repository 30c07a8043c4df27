"""
Infrastructure adapter: process-local dict → IMetricsCache.

Entries are never evicted; a stale entry stays until the next put() for the
same symbol overwrites it. Nothing is shared across processes or survives a
restart.
"""

import time
from typing import Callable, Optional

from stockwise.domain.entities.stock_metrics import CacheEntry, StockMetrics
from stockwise.domain.ports.metrics_cache_port import IMetricsCache

METRICS_TTL_SECONDS = 5 * 60


class InMemoryMetricsCache(IMetricsCache):
    """Symbol-keyed metrics cache with a fixed freshness window."""

    def __init__(
        self,
        ttl_seconds: float = METRICS_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def get(self, symbol: str) -> Optional[StockMetrics]:
        entry = self._entries.get(symbol)
        if entry is None or self._clock() - entry.stored_at >= self._ttl:
            return None
        return entry.data

    def put(self, symbol: str, metrics: StockMetrics) -> None:
        self._entries[symbol] = CacheEntry(data=metrics, stored_at=self._clock())

    def peek(self, symbol: str) -> Optional[CacheEntry]:
        return self._entries.get(symbol)

    def __len__(self) -> int:
        return len(self._entries)
