"""
Use case: Retrieve news about a single symbol.

Input: GetStockNewsQuery (symbol)
Output: list[NewsArticle]
Side effects: Same caching as GetMarketNewsUseCase.
Failure cases: None.
"""

from stockguru.application.market.dtos import GetMarketNewsQuery, GetStockNewsQuery
from stockguru.application.market.get_market_news import GetMarketNewsUseCase
from stockguru.domain.market.entities import NewsArticle


class GetStockNewsUseCase:
    """Searches news for one symbol and keeps the articles that mention it."""

    def __init__(self, market_news: GetMarketNewsUseCase) -> None:
        self._market_news = market_news

    def execute(self, query: GetStockNewsQuery) -> list[NewsArticle]:
        """Run the stock news use case."""
        symbol = query.symbol.upper()
        news = self._market_news.execute(GetMarketNewsQuery(symbols=(symbol,)))
        needle = symbol.lower()
        return [
            article
            for article in news.articles
            if symbol in article.related_symbols
            or needle in article.title.lower()
            or needle in article.summary.lower()
        ]
