"""
Tests for the Composition Root. MongoClient and ChatGoogleGenerativeAI are
patched so build_container() runs without a database or an API key.
"""

from unittest.mock import MagicMock, patch

import pytest

from stockwise.application.use_cases.analyze_stock import AnalyzeStockUseCase
from stockwise.application.use_cases.get_stock_metrics import GetStockMetricsUseCase
from stockwise.infrastructure.auth.jwt_token_service import JWTTokenService
from stockwise.infrastructure.config.settings import Settings
from stockwise.infrastructure.entrypoints.container import build_container


@pytest.fixture
def mongo_client():
    with patch("stockwise.infrastructure.entrypoints.container.MongoClient") as client_cls:
        yield client_cls


@pytest.fixture
def chat_model():
    with patch("stockwise.infrastructure.llm.gemini_adapter.ChatGoogleGenerativeAI") as chat_cls:
        yield chat_cls


def make_settings(**overrides):
    values = dict(
        gemini_api_key="gemini-key",
        jwt_secret="container-secret",
        mongodb_uri="mongodb://db.internal:27017/stockwiseDB",
        model_timeout_seconds=12.0,
        model_max_attempts=3,
    )
    values.update(overrides)
    return Settings(**values)


def test_wires_adapters_from_settings(mongo_client, chat_model):
    container = build_container(make_settings())

    mongo_client.assert_called_once_with("mongodb://db.internal:27017/stockwiseDB")
    database = mongo_client.return_value.get_default_database.return_value
    mongo_client.return_value.get_default_database.assert_called_once_with(default="stockwiseDB")
    database.__getitem__.assert_called_once_with("users")
    database.__getitem__.return_value.create_index.assert_called_once()
    assert chat_model.call_args.kwargs["google_api_key"] == "gemini-key"

    assert isinstance(container.stock_metrics, GetStockMetricsUseCase)
    assert isinstance(container.analyze_stock, AnalyzeStockUseCase)
    assert isinstance(container.token_validator, JWTTokenService)
    assert container.observability is None


def test_issued_tokens_use_configured_secret(mongo_client, chat_model):
    container = build_container(make_settings())

    token = JWTTokenService("container-secret").issue("user-1", "ana@example.com")

    assert container.token_validator.validate(token)["email"] == "ana@example.com"


def test_close_releases_mongo_client(mongo_client, chat_model):
    container = build_container(make_settings())
    mongo_client.return_value.close.assert_not_called()

    container.close()

    mongo_client.return_value.close.assert_called_once_with()


def test_close_flushes_tracing_when_enabled(mongo_client, chat_model):
    with patch(
        "stockwise.infrastructure.observability.langfuse_adapter.LangfuseObservabilityHandler"
    ) as handler_cls:
        container = build_container(make_settings(langfuse_enabled=True))

    assert container.observability is handler_cls.return_value
    container.close()
    handler_cls.return_value.flush.assert_called_once_with()
