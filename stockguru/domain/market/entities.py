"""
Domain entities for the market bounded context.

Entities represent market data as immutable value objects.
They contain no framework imports and no IO operations.
Prices are plain floats: every value comes from a JSON provider feed
and feeds 64-bit indicator math.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional


class SentimentLabel(Enum):
    """Sentiment classification for a news article."""

    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class Direction(Enum):
    """Predicted price direction of a stock insight."""

    BULLISH = "bullish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"


class RiskLevel(Enum):
    """Risk assessment attached to a stock insight."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class StockQuote:
    """Latest quote for an NSE-listed stock or index."""

    symbol: str
    company_name: str
    price: float
    change: float
    change_percent: float
    volume: int
    day_high: float
    day_low: float
    year_high: float
    year_low: float
    timestamp: datetime
    market_cap: Optional[float] = None
    pe: Optional[float] = None


@dataclass(frozen=True)
class PriceBar:
    """A single OHLCV bar of price history."""

    date: date
    open: float
    high: float
    low: float
    close: float
    volume: int


@dataclass(frozen=True)
class BollingerBands:
    """Upper, middle and lower Bollinger band values."""

    upper: float
    middle: float
    lower: float


@dataclass(frozen=True)
class MacdPoint:
    """MACD line, signal line and histogram at one point in time."""

    macd: float
    signal: float
    histogram: float


@dataclass(frozen=True)
class IndicatorSnapshot:
    """Latest technical indicator values computed from one price series."""

    rsi: float
    macd: float
    signal: float
    histogram: float
    sma20: float
    ema50: float
    bollinger: BollingerBands


@dataclass(frozen=True)
class MarketIndex:
    """Current level of a benchmark index."""

    name: str
    symbol: str
    value: float
    change: float
    change_percent: float


@dataclass(frozen=True)
class SearchResult:
    """A stock or index matching a search query."""

    symbol: str
    name: str


@dataclass(frozen=True)
class SentimentAnalysis:
    """Sentiment of a piece of financial text.

    Attributes:
        sentiment: Classification label.
        score: 0 (very negative) to 100 (very positive).
        confidence: 0 to 1.
    """

    sentiment: SentimentLabel
    score: float
    confidence: float


NEUTRAL_SENTIMENT = SentimentAnalysis(
    sentiment=SentimentLabel.NEUTRAL, score=50.0, confidence=0.5
)


@dataclass(frozen=True)
class NewsArticle:
    """A market news article with derived sentiment and related symbols."""

    title: str
    summary: str
    source: str
    published_at: str
    url: str
    related_symbols: tuple[str, ...] = ()
    sentiment: Optional[SentimentAnalysis] = None


@dataclass(frozen=True)
class MarketNews:
    """A batch of news articles and the time it was assembled."""

    articles: tuple[NewsArticle, ...]
    last_updated: datetime


@dataclass(frozen=True)
class MarketSentiment:
    """Aggregate sentiment over the general market news feed.

    All values are rounded integers: ``overall`` is the mean article
    score and the remaining fields are percentages of articles.
    """

    overall: int
    positive: int
    negative: int
    neutral: int


DEFAULT_MARKET_SENTIMENT = MarketSentiment(
    overall=50, positive=33, negative=33, neutral=34
)


@dataclass(frozen=True)
class InsightPrediction:
    """Directional call of a stock insight."""

    direction: Direction
    confidence: float
    timeframe: str
    target_price: Optional[float] = None


@dataclass(frozen=True)
class StockInsight:
    """AI-generated outlook for a stock."""

    symbol: str
    prediction: InsightPrediction
    reasoning: str
    risk_level: RiskLevel
    generated_at: datetime = field(default_factory=datetime.now)
