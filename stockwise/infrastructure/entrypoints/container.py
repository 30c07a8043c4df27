"""
Composition Root: wires every infrastructure adapter into the application layer.

build_container() is called once at application startup. Tests build a
Container directly with fakes in place of the Gemini client and MongoDB.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from pymongo import MongoClient

from stockwise.application.services.model_calls import ModelCallPolicy
from stockwise.application.use_cases.analyze_stock import AnalyzeStockUseCase
from stockwise.application.use_cases.get_stock_metrics import GetStockMetricsUseCase
from stockwise.application.use_cases.log_in import LogInUseCase
from stockwise.application.use_cases.sign_up import SignUpUseCase
from stockwise.domain.ports.observability_port import IObservabilityHandler
from stockwise.domain.ports.token_validator_port import ITokenValidator
from stockwise.infrastructure.auth.bcrypt_hasher import BcryptPasswordHasher
from stockwise.infrastructure.auth.jwt_token_service import JWTTokenService
from stockwise.infrastructure.cache.in_memory_metrics_cache import InMemoryMetricsCache
from stockwise.infrastructure.config.settings import Settings
from stockwise.infrastructure.llm.gemini_adapter import GeminiChatAdapter
from stockwise.infrastructure.persistence.mongo_user_repository import MongoUserRepository

logger = logging.getLogger(__name__)


@dataclass
class Container:
    stock_metrics: GetStockMetricsUseCase
    analyze_stock: AnalyzeStockUseCase
    sign_up: SignUpUseCase
    log_in: LogInUseCase
    token_validator: ITokenValidator
    observability: Optional[IObservabilityHandler] = None
    _closers: list[Callable[[], Any]] = field(default_factory=list)

    def close(self) -> None:
        if self.observability is not None:
            self.observability.flush()
        for closer in self._closers:
            closer()


def build_container(settings: Settings) -> Container:
    observability: Optional[IObservabilityHandler] = None
    if settings.langfuse_enabled:
        from stockwise.infrastructure.observability.langfuse_adapter import (
            LangfuseObservabilityHandler,
        )
        observability = LangfuseObservabilityHandler()
        logger.info("Langfuse tracing enabled")

    llm = GeminiChatAdapter(
        api_key=settings.gemini_api_key,
        model=settings.gemini_model,
        observability=observability,
    )
    policy = ModelCallPolicy(
        timeout_seconds=settings.model_timeout_seconds,
        max_attempts=settings.model_max_attempts,
    )
    stock_metrics = GetStockMetricsUseCase(llm, InMemoryMetricsCache(), policy=policy)

    mongo = MongoClient(settings.mongodb_uri)
    users = MongoUserRepository.from_database(mongo.get_default_database(default="stockwiseDB"))
    users.ensure_indexes()
    logger.info("MongoDB connected successfully.")

    hasher = BcryptPasswordHasher()
    tokens = JWTTokenService(settings.jwt_secret, ttl_seconds=settings.jwt_ttl_seconds)

    return Container(
        stock_metrics=stock_metrics,
        analyze_stock=AnalyzeStockUseCase(stock_metrics, llm, policy=policy),
        sign_up=SignUpUseCase(users, hasher),
        log_in=LogInUseCase(users, hasher, tokens),
        token_validator=tokens,
        observability=observability,
        _closers=[mongo.close],
    )
