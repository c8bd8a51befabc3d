"""
Port interfaces (ABCs) for the market bounded context.

Ports define the contracts that the domain requires from the outside world.
Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from stockguru.domain.market.entities import (
    IndicatorSnapshot,
    MarketIndex,
    MarketNews,
    NewsArticle,
    PriceBar,
    SearchResult,
    SentimentAnalysis,
    StockInsight,
    StockQuote,
)


class MarketDataPort(ABC):
    """Port for live quotes, price history and symbol search."""

    @abstractmethod
    def get_quote(self, symbol: str) -> StockQuote:
        """Return the latest quote for a symbol.

        Raises:
            SymbolNotFoundError: If the provider has no data for the symbol.
            MarketDataUnavailableError: If the provider cannot be reached.
        """
        raise NotImplementedError

    @abstractmethod
    def get_history(self, symbol: str, period: str) -> list[PriceBar]:
        """Return price bars covering ``period``, oldest first."""
        raise NotImplementedError

    @abstractmethod
    def get_index(self, ticker: str, name: str) -> MarketIndex:
        """Return the current level of an index given its provider ticker."""
        raise NotImplementedError

    @abstractmethod
    def search(self, query: str, limit: int) -> list[SearchResult]:
        """Return NSE listings matching a free-text query."""
        raise NotImplementedError


class NewsSearchPort(ABC):
    """Port for searching financial news."""

    @abstractmethod
    def search(self, query: str, max_results: int) -> list[NewsArticle]:
        """Return raw articles (without sentiment) matching a query."""
        raise NotImplementedError


class NewsCachePort(ABC):
    """Port for caching assembled news batches by key."""

    @abstractmethod
    def get(self, key: str) -> Optional[tuple[datetime, MarketNews]]:
        """Return ``(stored_at, value)`` for a key, or None if absent."""
        raise NotImplementedError

    @abstractmethod
    def set(self, key: str, value: MarketNews) -> None:
        """Store a value under a key, stamped with the current time."""
        raise NotImplementedError


class MarketAnalystPort(ABC):
    """Port for AI judgements about market text and indicator data."""

    @abstractmethod
    def analyze_sentiment(self, text: str) -> SentimentAnalysis:
        """Classify the sentiment of a piece of financial text."""
        raise NotImplementedError

    @abstractmethod
    def generate_insight(
        self,
        symbol: str,
        indicators: IndicatorSnapshot,
        current_price: float,
        news: list[NewsArticle],
    ) -> StockInsight:
        """Return a directional outlook for a stock."""
        raise NotImplementedError
