"""
Prompt templates sent to the language model.
Kept in the application layer, next to the parsing rules that depend on their wording.
"""

from stockwise.domain.entities.stock_metrics import StockMetrics

METRICS_PROMPT = """You are a stock data provider. Provide current real-time stock information for {symbol}.
Return ONLY a valid JSON object with these exact keys and numeric values:
{{"stockName": "...", "symbol": "{symbol}", "currentPrice": X, "dayHigh": X, "dayLow": X, "peRatio": X, "roe": X, "debtToEquity": X, "profitMargins": X, "revenueGrowth": X}}

Provide realistic data. If exact values aren't known, provide reasonable estimates. Use null for truly unknown values."""

RECOMMENDATION_PROMPT = """Analyze the stock {stock_name} ({symbol}) based on these metrics:
- Current Price: ${current_price}
- Day High: ${day_high}
- Day Low: ${day_low}
- P/E Ratio: {pe_ratio}
- ROE: {roe}
- Debt/Equity: {debt_to_equity}
- Profit Margin: {profit_margins}
- Revenue Growth: {revenue_growth}

Give your recommendation:
Line 1: ONE word recommendation (BUY, SELL, or HOLD)
Line 2: A confidence percentage (e.g., 85)
Do not include any explanation."""


def build_metrics_prompt(symbol: str) -> str:
    return METRICS_PROMPT.format(symbol=symbol)


def build_recommendation_prompt(symbol: str, metrics: StockMetrics) -> str:
    return RECOMMENDATION_PROMPT.format(
        stock_name=metrics.stock_name,
        symbol=symbol,
        current_price=metrics.current_price,
        day_high=metrics.day_high,
        day_low=metrics.day_low,
        pe_ratio=metrics.pe_ratio,
        roe=metrics.roe,
        debt_to_equity=metrics.debt_to_equity,
        profit_margins=metrics.profit_margins,
        revenue_growth=metrics.revenue_growth,
    )
