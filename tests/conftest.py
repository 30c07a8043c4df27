"""
Shared fixtures: a scripted language model, a manual clock, an in-memory user
repository, and a fully wired Container that never touches Gemini or MongoDB.
"""

import asyncio
import random
from typing import Optional

import pytest
from fastapi.testclient import TestClient

from stockwise.application.services.metrics_normalizer import MetricsNormalizer
from stockwise.application.services.model_calls import ModelCallPolicy
from stockwise.application.use_cases.analyze_stock import AnalyzeStockUseCase
from stockwise.application.use_cases.get_stock_metrics import GetStockMetricsUseCase
from stockwise.application.use_cases.log_in import LogInUseCase
from stockwise.application.use_cases.sign_up import SignUpUseCase
from stockwise.domain.entities.user import User
from stockwise.domain.errors import EmailAlreadyRegisteredError
from stockwise.domain.ports.llm_port import ILanguageModel
from stockwise.domain.ports.user_repository_port import IUserRepository
from stockwise.infrastructure.auth.bcrypt_hasher import BcryptPasswordHasher
from stockwise.infrastructure.auth.jwt_token_service import JWTTokenService
from stockwise.infrastructure.cache.in_memory_metrics_cache import InMemoryMetricsCache
from stockwise.infrastructure.entrypoints.container import Container
from stockwise.infrastructure.entrypoints.fastapi_app import create_app

FULL_REPLY = (
    '{"stockName": "Apple Inc.", "symbol": "AAPL", "currentPrice": 189.5, '
    '"dayHigh": 191.2, "dayLow": 187.9, "peRatio": 29.4, "roe": 1.47, '
    '"debtToEquity": 1.8, "profitMargins": 0.25, "revenueGrowth": 0.08}'
)


class FakeLanguageModel(ILanguageModel):
    """Returns scripted replies in order; an Exception in the script is raised instead."""

    def __init__(self, *replies, delay: float = 0.0) -> None:
        self.replies = list(replies)
        self.prompts: list[str] = []
        self.run_names: list[Optional[str]] = []
        self.delay = delay

    async def generate(self, prompt: str, run_name: Optional[str] = None) -> str:
        self.prompts.append(prompt)
        self.run_names.append(run_name)
        if self.delay:
            await asyncio.sleep(self.delay)
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, BaseException):
            raise reply
        return reply

    @property
    def calls(self) -> int:
        return len(self.prompts)


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class InMemoryUserRepository(IUserRepository):
    def __init__(self) -> None:
        self.users: dict[str, User] = {}

    def find_by_email(self, email: str) -> Optional[User]:
        return self.users.get(email)

    def add(self, user: User) -> User:
        if user.email in self.users:
            raise EmailAlreadyRegisteredError("Email already in use.")
        stored = User(id=f"user-{len(self.users) + 1}", email=user.email, password_hash=user.password_hash)
        self.users[user.email] = stored
        return stored


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return InMemoryMetricsCache(clock=clock)


@pytest.fixture
def normalizer():
    return MetricsNormalizer(rng=random.Random(1234))


@pytest.fixture
def policy():
    return ModelCallPolicy(timeout_seconds=1.0, max_attempts=1, backoff_seconds=0.0)


@pytest.fixture
def llm():
    return FakeLanguageModel(FULL_REPLY)


@pytest.fixture
def stock_metrics(llm, cache, normalizer, policy):
    return GetStockMetricsUseCase(llm, cache, normalizer=normalizer, policy=policy)


@pytest.fixture
def users():
    return InMemoryUserRepository()


@pytest.fixture
def hasher():
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
def tokens():
    return JWTTokenService("test-secret", ttl_seconds=3600)


@pytest.fixture
def container(llm, stock_metrics, users, hasher, tokens, policy):
    return Container(
        stock_metrics=stock_metrics,
        analyze_stock=AnalyzeStockUseCase(stock_metrics, llm, policy=policy),
        sign_up=SignUpUseCase(users, hasher),
        log_in=LogInUseCase(users, hasher, tokens),
        token_validator=tokens,
    )


@pytest.fixture
def client(container):
    with TestClient(create_app(container)) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(tokens):
    return {"Authorization": f"Bearer {tokens.issue(subject='user-1', email='ana@example.com')}"}
