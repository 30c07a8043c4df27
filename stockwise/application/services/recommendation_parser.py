"""
Application service: strict parser for the two-line recommendation reply.

Line 1 must be one of BUY / SELL / HOLD (surrounding markdown emphasis and
punctuation are ignored). Line 2 must be a number in [0, 100], optionally
followed by '%'.
"""

import math

from stockwise.domain.entities.recommendation import Recommendation, RecommendationLabel
from stockwise.domain.errors import RecommendationError

_LABEL_DECORATION = " \t*_`'\".:-"
_NUMBER_DECORATION = " \t*_`'\""


def parse_recommendation(symbol: str, text: str) -> Recommendation:
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    if len(lines) < 2:
        raise RecommendationError(symbol, f"expected two lines, got {len(lines)}")

    label_text = lines[0].strip(_LABEL_DECORATION).upper()
    try:
        label = RecommendationLabel(label_text)
    except ValueError as exc:
        raise RecommendationError(symbol, f"unknown label {lines[0]!r}") from exc

    confidence_text = lines[1].strip(_NUMBER_DECORATION).rstrip(".").rstrip("%").strip()
    try:
        confidence = float(confidence_text)
    except ValueError as exc:
        raise RecommendationError(symbol, f"confidence is not a number: {lines[1]!r}") from exc
    if not math.isfinite(confidence) or not 0 <= confidence <= 100:
        raise RecommendationError(symbol, f"confidence out of range: {lines[1]!r}")

    return Recommendation(symbol=symbol, label=label, confidence=confidence, raw_text=text)
