"""
Domain exceptions.

Use cases raise these; the HTTP entrypoint maps them to status codes.
"""


class StockwiseError(Exception):
    """Base class for every error raised by the application core."""


class RetrievalError(StockwiseError):
    """The model could not produce usable metrics for a symbol."""

    def __init__(self, symbol: str, reason: str) -> None:
        self.symbol = symbol
        self.reason = reason
        super().__init__(
            f"Failed to retrieve real-time data for {symbol} ({reason}). "
            "Please ensure the symbol is valid and try again."
        )


class RecommendationError(StockwiseError):
    """The recommendation call failed or its reply was not a valid label/confidence pair."""

    def __init__(self, symbol: str, reason: str) -> None:
        self.symbol = symbol
        self.reason = reason
        super().__init__(f"Could not produce a recommendation for {symbol}: {reason}")


class SignUpValidationError(StockwiseError, ValueError):
    pass


class EmailAlreadyRegisteredError(StockwiseError):
    pass


class InvalidCredentialsError(StockwiseError):
    pass
