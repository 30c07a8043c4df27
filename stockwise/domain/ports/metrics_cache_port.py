"""
Port (interface) for the stock metrics cache.
Infrastructure adapters (e.g. InMemoryMetricsCache) must implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Optional

from stockwise.domain.entities.stock_metrics import CacheEntry, StockMetrics


class IMetricsCache(ABC):
    @abstractmethod
    def get(self, symbol: str) -> Optional[StockMetrics]:
        """Return the cached record for *symbol* if it is still fresh, else None."""
        ...

    @abstractmethod
    def put(self, symbol: str, metrics: StockMetrics) -> None:
        """Store *metrics* for *symbol*, replacing any previous entry."""
        ...

    @abstractmethod
    def peek(self, symbol: str) -> Optional[CacheEntry]:
        """Return the raw entry for *symbol* regardless of its age."""
        ...
