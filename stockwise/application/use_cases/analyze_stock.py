"""
Use-case: ask the language model for a BUY / SELL / HOLD call on a symbol.
Depends only on Domain ports and application services; no infrastructure imports.
"""

import logging
from typing import Optional

from stockwise.application.prompts import build_recommendation_prompt
from stockwise.application.services.model_calls import ModelCallFailed, ModelCallPolicy, call_model
from stockwise.application.services.recommendation_parser import parse_recommendation
from stockwise.application.use_cases.get_stock_metrics import GetStockMetricsUseCase
from stockwise.domain.entities.recommendation import Recommendation
from stockwise.domain.errors import RecommendationError
from stockwise.domain.ports.llm_port import ILanguageModel

logger = logging.getLogger(__name__)


class AnalyzeStockUseCase:
    def __init__(
        self,
        metrics: GetStockMetricsUseCase,
        llm: ILanguageModel,
        policy: Optional[ModelCallPolicy] = None,
    ) -> None:
        self._metrics = metrics
        self._llm = llm
        self._policy = policy or ModelCallPolicy()

    async def execute(self, symbol: str) -> Recommendation:
        """Fetch metrics for *symbol* (cached when fresh) and classify them.

        Raises:
            ValueError:          if *symbol* is blank.
            RetrievalError:      propagated from the metrics retrieval.
            RecommendationError: if the model call fails or its reply is not
                                 a valid label / confidence pair.
        """
        metrics = await self._metrics.execute(symbol)
        symbol = symbol.upper().strip()

        prompt = build_recommendation_prompt(symbol, metrics)
        try:
            text = await call_model(self._llm, prompt, self._policy, run_name="stock-analysis")
        except ModelCallFailed as exc:
            raise RecommendationError(symbol, exc.reason) from exc

        logger.debug("Recommendation reply for %s: %r", symbol, text)
        return parse_recommendation(symbol, text or "")
