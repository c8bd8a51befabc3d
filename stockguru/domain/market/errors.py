"""
Domain-specific errors for the market bounded context.

All errors raised from the domain layer must be defined here.
These are mapped to HTTP responses at the interface layer.
No framework imports allowed.
"""


class MarketDomainError(Exception):
    """Base error for all market domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class SymbolNotFoundError(MarketDomainError):
    """Raised when the market data provider has no data for a symbol."""

    def __init__(self, symbol: str) -> None:
        super().__init__(f"Stock data not found for {symbol}")
        self.symbol = symbol


class InsufficientDataError(MarketDomainError):
    """Raised when a price series is too short for technical analysis."""

    def __init__(self, required: int, available: int) -> None:
        super().__init__(
            "Insufficient data for technical analysis: "
            f"required {required} samples, got {available}"
        )
        self.required = required
        self.available = available


class InvalidPriceSeriesError(MarketDomainError):
    """Raised when a price series contains non-finite or negative values."""

    def __init__(self, index: int, value: float) -> None:
        super().__init__(f"Invalid price at position {index}: {value!r}")
        self.index = index
        self.value = value


class InvalidPeriodError(MarketDomainError):
    """Raised when a history period is not one the provider supports."""

    def __init__(self, period: str) -> None:
        super().__init__(f"Unsupported history period: {period}")
        self.period = period


class MarketDataUnavailableError(MarketDomainError):
    """Raised when an upstream market data or news provider fails."""

    def __init__(self, provider: str, reason: str) -> None:
        super().__init__(f"{provider} unavailable: {reason}")
        self.provider = provider
        self.reason = reason


class InsightDataUnavailableError(MarketDomainError):
    """Raised when a quote or indicator snapshot needed for an insight is missing."""

    def __init__(self, symbol: str) -> None:
        super().__init__(f"Insufficient data for analysis of {symbol}")
        self.symbol = symbol
