"""
Use-case: retrieve model-estimated stock metrics for a symbol, through the cache.
Depends only on Domain ports and application services; no infrastructure imports.
"""

import logging
from typing import Optional

from stockwise.application.prompts import build_metrics_prompt
from stockwise.application.services.metrics_normalizer import MetricsNormalizer
from stockwise.application.services.model_calls import ModelCallFailed, ModelCallPolicy, call_model
from stockwise.application.services.single_flight import SingleFlight
from stockwise.domain.entities.stock_metrics import StockMetrics
from stockwise.domain.errors import RetrievalError
from stockwise.domain.ports.llm_port import ILanguageModel
from stockwise.domain.ports.metrics_cache_port import IMetricsCache

logger = logging.getLogger(__name__)


class GetStockMetricsUseCase:
    def __init__(
        self,
        llm: ILanguageModel,
        cache: IMetricsCache,
        normalizer: Optional[MetricsNormalizer] = None,
        policy: Optional[ModelCallPolicy] = None,
    ) -> None:
        """
        Args:
            llm:        ILanguageModel implementation (e.g. the Gemini adapter).
            cache:      IMetricsCache owned by this use-case; written on every successful retrieval.
            normalizer: Reply parser; pass one with a seeded random source for deterministic placeholders.
            policy:     Timeout and retry policy for the model call.
        """
        self._llm = llm
        self._cache = cache
        self._normalizer = normalizer or MetricsNormalizer()
        self._policy = policy or ModelCallPolicy()
        self._inflight: SingleFlight[StockMetrics] = SingleFlight()

    async def execute(self, symbol: str) -> StockMetrics:
        """Return metrics for *symbol* (uppercased), from cache when fresh.

        Raises:
            ValueError:     if *symbol* is blank.
            RetrievalError: if the model fails, times out, or replies with
                            nothing usable. The cache is not written.
        """
        if not symbol or not symbol.strip():
            raise ValueError("symbol must be a non-empty string")
        symbol = symbol.upper().strip()

        cached = self._cache.get(symbol)
        if cached is not None:
            logger.debug("Cache hit for %s", symbol)
            return cached

        logger.debug("Cache miss for %s", symbol)
        return await self._inflight.run(symbol, lambda: self._retrieve(symbol))

    async def _retrieve(self, symbol: str) -> StockMetrics:
        logger.debug("Fetching %s...", symbol)
        try:
            text = await call_model(
                self._llm, build_metrics_prompt(symbol), self._policy, run_name="stock-metrics"
            )
        except ModelCallFailed as exc:
            logger.error("Error fetching stock data for %s: %s", symbol, exc.reason)
            raise RetrievalError(symbol, exc.reason) from exc

        text = text or ""
        logger.debug("Response for %s: %s", symbol, text[:300])
        if not text.strip():
            raise RetrievalError(symbol, "empty response")

        metrics = self._normalizer.parse(symbol, text)
        logger.debug("Normalized data for %s: %s", symbol, metrics)
        self._cache.put(symbol, metrics)
        return metrics
