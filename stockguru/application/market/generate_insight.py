"""
Use case: Generate an AI outlook for a stock.

Input: GenerateInsightQuery (symbol)
Output: StockInsight
Side effects: Calls the market data, news and language model providers.
Failure cases: InsightDataUnavailableError if the quote or indicators
    cannot be obtained. News failures are tolerated.
"""

import logging
from concurrent.futures import ThreadPoolExecutor

from stockguru.application.market.dtos import (
    GenerateInsightQuery,
    GetQuoteQuery,
    GetStockNewsQuery,
    GetTechnicalIndicatorsQuery,
)
from stockguru.application.market.get_quote import GetQuoteUseCase
from stockguru.application.market.get_stock_news import GetStockNewsUseCase
from stockguru.application.market.get_technical_indicators import (
    GetTechnicalIndicatorsUseCase,
)
from stockguru.domain.market.entities import StockInsight
from stockguru.domain.market.errors import InsightDataUnavailableError, MarketDomainError
from stockguru.domain.market.ports import MarketAnalystPort

logger = logging.getLogger(__name__)


class GenerateInsightUseCase:
    """Gathers quote, indicators and news in parallel, then asks the analyst."""

    def __init__(
        self,
        get_quote: GetQuoteUseCase,
        get_indicators: GetTechnicalIndicatorsUseCase,
        get_news: GetStockNewsUseCase,
        analyst: MarketAnalystPort,
    ) -> None:
        self._get_quote = get_quote
        self._get_indicators = get_indicators
        self._get_news = get_news
        self._analyst = analyst

    def execute(self, query: GenerateInsightQuery) -> StockInsight:
        """Run the insight use case.

        Raises:
            InsightDataUnavailableError: If the quote or indicators are missing.
        """
        symbol = query.symbol.upper()
        with ThreadPoolExecutor(max_workers=3) as executor:
            quote_future = executor.submit(self._get_quote.execute, GetQuoteQuery(symbol))
            indicators_future = executor.submit(
                self._get_indicators.execute, GetTechnicalIndicatorsQuery(symbol)
            )
            news_future = executor.submit(self._get_news.execute, GetStockNewsQuery(symbol))

        try:
            quote = quote_future.result()
            indicators = indicators_future.result()
        except MarketDomainError as exc:
            logger.warning("Insight inputs unavailable for %s: %s", symbol, exc.message)
            raise InsightDataUnavailableError(symbol) from exc

        news = news_future.result()
        logger.info("Generating insight for %s with %d articles", symbol, len(news))
        return self._analyst.generate_insight(symbol, indicators, quote.price, news)
