"""
Pydantic schemas for market API responses.

These schemas define the API contract for quotes, history, indicators,
news and insights. Field names follow the dashboard's camelCase JSON.
No business logic belongs here.
"""

import datetime as dt
from typing import Annotated, Optional

from fastapi import Path
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from stockguru.domain.market.entities import (
    IndicatorSnapshot,
    MarketIndex,
    MarketSentiment,
    NewsArticle,
    PriceBar,
    SearchResult,
    StockInsight,
    StockQuote,
)

SYMBOL_DESCRIPTION = "NSE stock symbol or index alias (e.g. RELIANCE, NIFTY)"
SYMBOL_PATTERN = r"^[A-Za-z0-9.^&-]{1,20}$"

SymbolPath = Annotated[
    str, Path(pattern=SYMBOL_PATTERN, description=SYMBOL_DESCRIPTION)
]


class ApiModel(BaseModel):
    """Base schema serializing snake_case fields as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    status: str
    version: str


class ErrorResponse(BaseModel):
    """Standard error response returned by all error handlers."""

    error: str
    detail: str | None = None


# ------------------------------------------------------------------
# Quotes, history, indicators
# ------------------------------------------------------------------


class StockQuoteResponse(ApiModel):
    """Latest quote of a stock or index."""

    symbol: str
    company_name: str
    price: float
    change: float
    change_percent: float
    volume: int
    market_cap: Optional[float] = None
    pe: Optional[float] = None
    day_high: float
    day_low: float
    year_high: float
    year_low: float
    timestamp: dt.datetime

    @classmethod
    def from_entity(cls, quote: StockQuote) -> "StockQuoteResponse":
        return cls(
            symbol=quote.symbol,
            company_name=quote.company_name,
            price=quote.price,
            change=quote.change,
            change_percent=quote.change_percent,
            volume=quote.volume,
            market_cap=quote.market_cap,
            pe=quote.pe,
            day_high=quote.day_high,
            day_low=quote.day_low,
            year_high=quote.year_high,
            year_low=quote.year_low,
            timestamp=quote.timestamp,
        )


class PriceBarItem(ApiModel):
    """A single OHLCV bar."""

    date: dt.date
    open: float
    high: float
    low: float
    close: float
    volume: int

    @classmethod
    def from_entity(cls, bar: PriceBar) -> "PriceBarItem":
        return cls(
            date=bar.date,
            open=bar.open,
            high=bar.high,
            low=bar.low,
            close=bar.close,
            volume=bar.volume,
        )


class BollingerBandsSchema(ApiModel):
    upper: float
    middle: float
    lower: float


class TechnicalIndicatorsResponse(ApiModel):
    """Latest indicator values of a symbol."""

    rsi: float
    macd: float
    signal: float
    histogram: float
    sma20: float
    ema50: float
    bollinger: BollingerBandsSchema

    @classmethod
    def from_entity(cls, snapshot: IndicatorSnapshot) -> "TechnicalIndicatorsResponse":
        return cls(
            rsi=snapshot.rsi,
            macd=snapshot.macd,
            signal=snapshot.signal,
            histogram=snapshot.histogram,
            sma20=snapshot.sma20,
            ema50=snapshot.ema50,
            bollinger=BollingerBandsSchema(
                upper=snapshot.bollinger.upper,
                middle=snapshot.bollinger.middle,
                lower=snapshot.bollinger.lower,
            ),
        )


class MarketIndexItem(ApiModel):
    name: str
    symbol: str
    value: float
    change: float
    change_percent: float

    @classmethod
    def from_entity(cls, index: MarketIndex) -> "MarketIndexItem":
        return cls(
            name=index.name,
            symbol=index.symbol,
            value=index.value,
            change=index.change,
            change_percent=index.change_percent,
        )


class SearchResultItem(ApiModel):
    symbol: str
    name: str

    @classmethod
    def from_entity(cls, result: SearchResult) -> "SearchResultItem":
        return cls(symbol=result.symbol, name=result.name)


# ------------------------------------------------------------------
# News and sentiment
# ------------------------------------------------------------------


class SentimentSchema(ApiModel):
    sentiment: str
    score: float = Field(..., ge=0, le=100)
    confidence: float = Field(..., ge=0, le=1)


class NewsArticleItem(ApiModel):
    title: str
    summary: str
    source: str
    published_at: str
    url: str
    related_symbols: list[str] = []
    sentiment: Optional[SentimentSchema] = None

    @classmethod
    def from_entity(cls, article: NewsArticle) -> "NewsArticleItem":
        sentiment = None
        if article.sentiment is not None:
            sentiment = SentimentSchema(
                sentiment=article.sentiment.sentiment.value,
                score=article.sentiment.score,
                confidence=article.sentiment.confidence,
            )
        return cls(
            title=article.title,
            summary=article.summary,
            source=article.source,
            published_at=article.published_at,
            url=article.url,
            related_symbols=list(article.related_symbols),
            sentiment=sentiment,
        )


class MarketNewsResponse(ApiModel):
    articles: list[NewsArticleItem]
    last_updated: dt.datetime


class MarketSentimentResponse(ApiModel):
    """Aggregate sentiment as a mean score and label percentages."""

    overall: int
    positive: int
    negative: int
    neutral: int

    @classmethod
    def from_entity(cls, sentiment: MarketSentiment) -> "MarketSentimentResponse":
        return cls(
            overall=sentiment.overall,
            positive=sentiment.positive,
            negative=sentiment.negative,
            neutral=sentiment.neutral,
        )


# ------------------------------------------------------------------
# Insights
# ------------------------------------------------------------------


class InsightPredictionSchema(ApiModel):
    direction: str
    confidence: float
    target_price: Optional[float] = None
    timeframe: str


class StockInsightResponse(ApiModel):
    """AI outlook for a stock."""

    symbol: str
    prediction: InsightPredictionSchema
    reasoning: str
    risk_level: str
    generated_at: dt.datetime

    @classmethod
    def from_entity(cls, insight: StockInsight) -> "StockInsightResponse":
        return cls(
            symbol=insight.symbol,
            prediction=InsightPredictionSchema(
                direction=insight.prediction.direction.value,
                confidence=insight.prediction.confidence,
                target_price=insight.prediction.target_price,
                timeframe=insight.prediction.timeframe,
            ),
            reasoning=insight.reasoning,
            risk_level=insight.risk_level.value,
            generated_at=insight.generated_at,
        )
