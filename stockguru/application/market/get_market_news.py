"""
Use case: Retrieve market news with per-article sentiment.

Input: GetMarketNewsQuery (optional symbols)
Output: MarketNews
Side effects: Caches the assembled batch per symbol set.
Failure cases: None. A provider failure returns the last cached batch
    for the same symbols, or an empty batch.
"""

import logging
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from datetime import datetime, timedelta

from stockguru.application.market.dtos import GetMarketNewsQuery
from stockguru.domain.market.entities import MarketNews, NewsArticle
from stockguru.domain.market.errors import MarketDataUnavailableError
from stockguru.domain.market.ports import (
    MarketAnalystPort,
    NewsCachePort,
    NewsSearchPort,
)

logger = logging.getLogger(__name__)

GENERAL_NEWS_KEY = "general"
GENERAL_NEWS_QUERY = "Indian stock market BSE NSE NIFTY SENSEX latest news"
SENTIMENT_WORKERS = 4


class GetMarketNewsUseCase:
    """Searches news, scores each article's sentiment and caches the batch.

    Fresh cache entries short-circuit the provider entirely. Stale entries
    are only served when the provider fails.
    """

    def __init__(
        self,
        news_search: NewsSearchPort,
        analyst: MarketAnalystPort,
        cache: NewsCachePort,
        ttl_seconds: int = 900,
        max_results: int = 10,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._news_search = news_search
        self._analyst = analyst
        self._cache = cache
        self._ttl = timedelta(seconds=ttl_seconds)
        self._max_results = max_results
        self._clock = clock

    def execute(self, query: GetMarketNewsQuery) -> MarketNews:
        """Run the market news use case."""
        key = ",".join(query.symbols) if query.symbols else GENERAL_NEWS_KEY
        cached = self._cache.get(key)
        if cached is not None and self._clock() - cached[0] < self._ttl:
            logger.debug("News cache hit for key=%s", key)
            return cached[1]

        search_query = (
            f"{' '.join(query.symbols)} Indian stock market news"
            if query.symbols
            else GENERAL_NEWS_QUERY
        )
        try:
            raw_articles = self._news_search.search(search_query, self._max_results)
        except MarketDataUnavailableError as exc:
            logger.warning("News search failed for key=%s: %s", key, exc.reason)
            if cached is not None:
                return cached[1]
            return MarketNews(articles=(), last_updated=self._clock())

        articles = [a for a in raw_articles if a.title and a.summary]
        news = MarketNews(
            articles=tuple(self._with_sentiment(articles)),
            last_updated=self._clock(),
        )
        self._cache.set(key, news)
        logger.info("Fetched %d news articles for key=%s", len(news.articles), key)
        return news

    def _with_sentiment(self, articles: list[NewsArticle]) -> list[NewsArticle]:
        if not articles:
            return []
        with ThreadPoolExecutor(max_workers=SENTIMENT_WORKERS) as executor:
            sentiments = list(
                executor.map(
                    lambda a: self._analyst.analyze_sentiment(f"{a.title} {a.summary}"),
                    articles,
                )
            )
        return [
            replace(article, sentiment=sentiment)
            for article, sentiment in zip(articles, sentiments)
        ]
