"""
Test data builders and in-memory fakes of the domain ports.
"""

from datetime import date, datetime, timedelta
from typing import Optional

from stockguru.domain.market.entities import (
    NEUTRAL_SENTIMENT,
    BollingerBands,
    Direction,
    IndicatorSnapshot,
    InsightPrediction,
    MarketIndex,
    NewsArticle,
    PriceBar,
    RiskLevel,
    SearchResult,
    SentimentAnalysis,
    SentimentLabel,
    StockInsight,
    StockQuote,
)
from stockguru.domain.market.errors import (
    MarketDataUnavailableError,
    SymbolNotFoundError,
)
from stockguru.domain.market.ports import (
    MarketAnalystPort,
    MarketDataPort,
    NewsSearchPort,
)


def make_quote(symbol: str = "RELIANCE", price: float = 2500.0, change: float = 25.0) -> StockQuote:
    return StockQuote(
        symbol=symbol,
        company_name=f"{symbol} Ltd",
        price=price,
        change=change,
        change_percent=change / (price - change) * 100,
        volume=1_234_567,
        day_high=price + 10,
        day_low=price - 10,
        year_high=price + 500,
        year_low=price - 500,
        timestamp=datetime(2024, 3, 1, 15, 30),
    )


def make_bars(closes: list[float]) -> list[PriceBar]:
    start = date(2024, 1, 1)
    return [
        PriceBar(
            date=start + timedelta(days=i),
            open=close,
            high=close + 1,
            low=close - 1,
            close=close,
            volume=1000 + i,
        )
        for i, close in enumerate(closes)
    ]


def make_article(title: str = "RELIANCE hits record high", **overrides) -> NewsArticle:
    values = dict(
        title=title,
        summary="Shares of Reliance Industries rose on strong earnings...",
        source="Mint",
        published_at="2024-03-01T10:00:00",
        url="https://www.livemint.com/market/reliance",
        related_symbols=("RELIANCE",),
    )
    values.update(overrides)
    return NewsArticle(**values)


SNAPSHOT = IndicatorSnapshot(
    rsi=72.5,
    macd=4.2,
    signal=3.1,
    histogram=1.1,
    sma20=2450.0,
    ema50=2400.0,
    bollinger=BollingerBands(upper=2550.0, middle=2450.0, lower=2350.0),
)


class FakeMarketData(MarketDataPort):
    """Serves quotes and history from dicts; unknown symbols are not found."""

    def __init__(
        self,
        quotes: Optional[dict[str, StockQuote]] = None,
        history: Optional[dict[str, list[PriceBar]]] = None,
        search_results: Optional[list[SearchResult]] = None,
        failing_indices: tuple[str, ...] = (),
        search_fails: bool = False,
    ) -> None:
        self.quotes = quotes or {}
        self.history = history or {}
        self.search_results = search_results or []
        self.failing_indices = failing_indices
        self.search_fails = search_fails
        self.history_calls: list[tuple[str, str]] = []

    def get_quote(self, symbol: str) -> StockQuote:
        if symbol not in self.quotes:
            raise SymbolNotFoundError(symbol)
        return self.quotes[symbol]

    def get_history(self, symbol: str, period: str) -> list[PriceBar]:
        self.history_calls.append((symbol, period))
        if symbol not in self.history:
            raise SymbolNotFoundError(symbol)
        return self.history[symbol]

    def get_index(self, ticker: str, name: str) -> MarketIndex:
        if ticker in self.failing_indices:
            raise MarketDataUnavailableError("fake", f"{ticker} down")
        return MarketIndex(name=name, symbol=ticker, value=100.0, change=1.0, change_percent=1.0)

    def search(self, query: str, limit: int) -> list[SearchResult]:
        if self.search_fails:
            raise MarketDataUnavailableError("fake", "search down")
        return self.search_results[:limit]


class FakeNewsSearch(NewsSearchPort):
    def __init__(self, articles: Optional[list[NewsArticle]] = None, fails: bool = False) -> None:
        self.articles = articles or []
        self.fails = fails
        self.queries: list[str] = []

    def search(self, query: str, max_results: int) -> list[NewsArticle]:
        self.queries.append(query)
        if self.fails:
            raise MarketDataUnavailableError("fake", "news down")
        return self.articles[:max_results]


class FakeAnalyst(MarketAnalystPort):
    """Scores text containing 'record' or 'rose' as positive, 'fall' as negative."""

    def __init__(self) -> None:
        self.insight_calls: list[tuple] = []

    def analyze_sentiment(self, text: str) -> SentimentAnalysis:
        lower = text.lower()
        if "fall" in lower:
            return SentimentAnalysis(
                sentiment=SentimentLabel.NEGATIVE, score=20.0, confidence=0.9
            )
        if "record" in lower or "rose" in lower:
            return SentimentAnalysis(
                sentiment=SentimentLabel.POSITIVE, score=80.0, confidence=0.9
            )
        return NEUTRAL_SENTIMENT

    def generate_insight(self, symbol, indicators, current_price, news) -> StockInsight:
        self.insight_calls.append((symbol, indicators, current_price, tuple(news)))
        return StockInsight(
            symbol=symbol,
            prediction=InsightPrediction(
                direction=Direction.BULLISH, confidence=70.0, timeframe="1 month", target_price=2600.0
            ),
            reasoning="Momentum is strong.",
            risk_level=RiskLevel.MEDIUM,
            generated_at=datetime(2024, 3, 1, 16, 0),
        )


