"""
Application service: turns a free-text model reply into a StockMetrics record.

Business decisions owned here:
  - How a JSON object is located inside surrounding prose.
  - Which values count as observed figures. Zero is a valid ratio; prices
    must be strictly positive. Missing, null, non-numeric and non-finite
    values are not observed figures.
  - The placeholder policy: a uniform draw from a per-field range, recorded
    in StockMetrics.estimated_fields.

The random source is injected so placeholder draws are reproducible in tests.
"""

import json
import logging
import math
import random
from typing import Any, Optional

from stockwise.domain.entities.stock_metrics import NUMERIC_FIELDS, PRICE_FIELDS, StockMetrics
from stockwise.domain.errors import RetrievalError

logger = logging.getLogger(__name__)

# Keys the model is asked to use in its JSON reply.
WIRE_KEYS: dict[str, str] = {
    "current_price": "currentPrice",
    "day_high": "dayHigh",
    "day_low": "dayLow",
    "pe_ratio": "peRatio",
    "roe": "roe",
    "debt_to_equity": "debtToEquity",
    "profit_margins": "profitMargins",
    "revenue_growth": "revenueGrowth",
}

PLACEHOLDER_RANGES: dict[str, tuple[float, float]] = {
    "current_price": (50.0, 150.0),
    "day_high": (60.0, 160.0),
    "day_low": (40.0, 140.0),
    "pe_ratio": (10.0, 40.0),
    "roe": (0.1, 0.6),
    "debt_to_equity": (0.2, 1.2),
    "profit_margins": (0.1, 0.6),
    "revenue_growth": (0.05, 0.35),
}

_decoder = json.JSONDecoder()


def extract_json(text: str) -> Any:
    """Parse the JSON value embedded in *text*.

    Tries, in order: the first complete ``{...}`` object, the span from the
    first ``{`` to the last ``}``, and finally the whole text.

    Raises:
        ValueError:     if none of the candidates parses.
        RecursionError: if the reply nests deeper than the decoder can follow.
    """
    start = text.find("{")
    if start != -1:
        try:
            value, _ = _decoder.raw_decode(text, start)
            return value
        except json.JSONDecodeError:
            pass
        end = text.rfind("}")
        if end > start:
            try:
                return json.loads(text[start : end + 1])
            except json.JSONDecodeError:
                pass
    return json.loads(text.strip())


def coerce_number(value: Any, positive: bool = False) -> Optional[float]:
    """Return *value* as a finite float, or None if it is not an observed figure."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip().replace(",", "")
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number):
        return None
    if positive and number <= 0:
        return None
    return number


def _first_text(parsed: dict, *keys: str) -> Optional[str]:
    for key in keys:
        value = parsed.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


class MetricsNormalizer:
    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()

    def parse(self, symbol: str, text: str) -> StockMetrics:
        """Extract and normalize the metrics object from a raw model reply.

        Raises:
            RetrievalError: if no JSON can be parsed or the JSON is not an object.
        """
        try:
            parsed = extract_json(text)
        except (ValueError, RecursionError) as exc:
            logger.error("Failed to parse JSON for %s: %s", symbol, text[:300])
            raise RetrievalError(symbol, "invalid json") from exc
        if not isinstance(parsed, dict):
            raise RetrievalError(symbol, "response is not an object")
        return self.normalize(symbol, parsed)

    def normalize(self, symbol: str, parsed: dict) -> StockMetrics:
        values: dict[str, float] = {}
        estimated: set[str] = set()
        for name in NUMERIC_FIELDS:
            number = coerce_number(parsed.get(WIRE_KEYS[name]), positive=name in PRICE_FIELDS)
            if number is None:
                number = self.placeholder(name)
                estimated.add(name)
            values[name] = number

        if estimated:
            logger.info(
                "Using placeholder values for %s: %s", symbol, ", ".join(sorted(estimated))
            )

        return StockMetrics(
            stock_name=_first_text(parsed, "stockName", "name") or symbol,
            symbol=_first_text(parsed, "symbol") or symbol,
            estimated_fields=frozenset(estimated),
            **values,
        )

    def placeholder(self, name: str) -> float:
        low, high = PLACEHOLDER_RANGES[name]
        return self._rng.uniform(low, high)
