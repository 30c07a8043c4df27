"""
Domain entity for a BUY / SELL / HOLD recommendation.
Zero external dependencies, pure Python only.
"""

from dataclasses import dataclass
from enum import Enum


class RecommendationLabel(str, Enum):
    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"


@dataclass(frozen=True)
class Recommendation:
    symbol: str
    label: RecommendationLabel
    confidence: float
    raw_text: str
