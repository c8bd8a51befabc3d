"""
Data Transfer Objects for the market application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class GetQuoteQuery:
    """Input DTO for retrieving a live quote.

    Attributes:
        symbol: NSE symbol or index alias (e.g. RELIANCE, NIFTY).
    """

    symbol: str


@dataclass(frozen=True)
class GetPriceHistoryQuery:
    """Input DTO for retrieving price history.

    Attributes:
        symbol: NSE symbol or index alias.
        period: Provider range such as 1mo, 3mo or 1y.
    """

    symbol: str
    period: str = "1mo"


@dataclass(frozen=True)
class GetTechnicalIndicatorsQuery:
    """Input DTO for computing the indicator snapshot of a symbol."""

    symbol: str


@dataclass(frozen=True)
class SearchStocksQuery:
    """Input DTO for a symbol search.

    Attributes:
        query: Free text matched against symbols and names.
        limit: Maximum number of results.
    """

    query: str
    limit: int = 10


@dataclass(frozen=True)
class GetMarketNewsQuery:
    """Input DTO for retrieving market news.

    Attributes:
        symbols: Restrict the search to these symbols; general market news if empty.
    """

    symbols: tuple[str, ...] = ()


@dataclass(frozen=True)
class GetStockNewsQuery:
    """Input DTO for retrieving news about one symbol."""

    symbol: str


@dataclass(frozen=True)
class GenerateInsightQuery:
    """Input DTO for generating an AI insight on a symbol."""

    symbol: str
