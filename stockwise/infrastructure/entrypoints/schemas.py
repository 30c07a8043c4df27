"""
Pydantic request / response models for the HTTP API.
Field names are snake_case in Python and camelCase on the wire.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from stockwise.domain.entities.recommendation import Recommendation
from stockwise.domain.entities.stock_metrics import StockMetrics


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CredentialsRequest(BaseModel):
    # Optional so a missing field reaches the use-case and gets its 400 message.
    email: Optional[str] = None
    password: Optional[str] = None


class StockData(CamelModel):
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
    estimated_fields: list[str]

    @classmethod
    def from_entity(cls, metrics: StockMetrics) -> "StockData":
        return cls(
            stock_name=metrics.stock_name,
            symbol=metrics.symbol,
            current_price=metrics.current_price,
            day_high=metrics.day_high,
            day_low=metrics.day_low,
            pe_ratio=metrics.pe_ratio,
            roe=metrics.roe,
            debt_to_equity=metrics.debt_to_equity,
            profit_margins=metrics.profit_margins,
            revenue_growth=metrics.revenue_growth,
            estimated_fields=sorted(to_camel(name) for name in metrics.estimated_fields),
        )


class StockResponse(CamelModel):
    stock_data: StockData


class RecommendationData(BaseModel):
    label: str
    confidence: float


class AnalyzeResponse(CamelModel):
    gemini_response: str
    recommendation: RecommendationData

    @classmethod
    def from_entity(cls, recommendation: Recommendation) -> "AnalyzeResponse":
        return cls(
            gemini_response=recommendation.raw_text,
            recommendation=RecommendationData(
                label=recommendation.label.value,
                confidence=recommendation.confidence,
            ),
        )


class LoginResponse(CamelModel):
    message: str
    token: str
    user_email: str
