"""
Domain entities for model-estimated stock metrics.
Zero external dependencies, pure Python dataclasses only.
"""

from dataclasses import dataclass, field

NUMERIC_FIELDS: tuple[str, ...] = (
    "current_price",
    "day_high",
    "day_low",
    "pe_ratio",
    "roe",
    "debt_to_equity",
    "profit_margins",
    "revenue_growth",
)

PRICE_FIELDS: frozenset[str] = frozenset({"current_price", "day_high", "day_low"})


@dataclass(frozen=True)
class StockMetrics:
    stock_name: str
    symbol: str
    current_price: float
    day_high: float
    day_low: float
    pe_ratio: float
    roe: float
    debt_to_equity: float
    profit_margins: float
    revenue_growth: float
    # Numeric fields whose value is a placeholder rather than a model figure.
    estimated_fields: frozenset[str] = field(default_factory=frozenset)

    def is_estimated(self, name: str) -> bool:
        return name in self.estimated_fields


@dataclass(frozen=True)
class CacheEntry:
    data: StockMetrics
    stored_at: float
