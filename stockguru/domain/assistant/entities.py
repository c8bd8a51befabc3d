"""
Domain entities for the assistant bounded context.

They contain no framework imports and no IO operations.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from stockguru.domain.market.entities import (
    IndicatorSnapshot,
    NewsArticle,
    StockQuote,
)


class QueryType(Enum):
    """What a chat query needs in order to be answered."""

    MARKET_DATA = "MARKET_DATA"
    GENERAL_EXPLANATION = "GENERAL_EXPLANATION"
    MIXED = "MIXED"


class ActionType(Enum):
    """Coarse intent of a chat message, used to pick suggestions."""

    STOCK_QUERY = "stock_query"
    TECHNICAL_ANALYSIS = "technical_analysis"
    MARKET_INSIGHT = "market_insight"
    GENERAL = "general"


@dataclass(frozen=True)
class QueryClassification:
    """Result of classifying a user query."""

    type: QueryType
    confidence: float
    stock_symbols: tuple[str, ...]
    needs_live_data: bool
    explanation: str


@dataclass(frozen=True)
class AssistantReply:
    """A single assistant answer with follow-up suggestions."""

    response: str
    suggestions: tuple[str, ...]
    action_type: ActionType


@dataclass(frozen=True)
class SymbolData:
    """Live data gathered for one symbol while answering a query.

    Either ``quote`` is set (and ``indicators`` when available) or
    ``error`` explains why the symbol could not be loaded.
    """

    symbol: str
    quote: Optional[StockQuote] = None
    indicators: Optional[IndicatorSnapshot] = None
    news: tuple[NewsArticle, ...] = ()
    error: Optional[str] = None


@dataclass(frozen=True)
class ChatOutcome:
    """Answer to a chat query plus the trace of how it was produced."""

    response: str
    classification: QueryClassification
    data_used: tuple[SymbolData, ...] = ()
    execution_steps: tuple[str, ...] = field(default_factory=tuple)
