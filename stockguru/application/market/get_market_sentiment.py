"""
Use case: Aggregate sentiment over the general market news feed.

Input: None
Output: MarketSentiment
Side effects: Same caching as GetMarketNewsUseCase.
Failure cases: None. No scored articles yields the neutral default.
"""

import logging
import math

from stockguru.application.market.dtos import GetMarketNewsQuery
from stockguru.application.market.get_market_news import GetMarketNewsUseCase
from stockguru.domain.market.entities import (
    DEFAULT_MARKET_SENTIMENT,
    MarketSentiment,
    SentimentLabel,
)

logger = logging.getLogger(__name__)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


class GetMarketSentimentUseCase:
    """Computes the mean sentiment score and label shares of market news."""

    def __init__(self, market_news: GetMarketNewsUseCase) -> None:
        self._market_news = market_news

    def execute(self) -> MarketSentiment:
        """Run the market sentiment use case."""
        news = self._market_news.execute(GetMarketNewsQuery())
        sentiments = [a.sentiment for a in news.articles if a.sentiment is not None]
        if not sentiments:
            logger.info("No scored articles; returning neutral market sentiment")
            return DEFAULT_MARKET_SENTIMENT

        total = len(sentiments)

        def share(label: SentimentLabel) -> int:
            count = sum(1 for s in sentiments if s.sentiment is label)
            return _round_half_up(count / total * 100)

        return MarketSentiment(
            overall=_round_half_up(math.fsum(s.score for s in sentiments) / total),
            positive=share(SentimentLabel.POSITIVE),
            negative=share(SentimentLabel.NEGATIVE),
            neutral=share(SentimentLabel.NEUTRAL),
        )
