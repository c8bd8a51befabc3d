"""
Use case: Retrieve a live quote for an NSE symbol or index.

Input: GetQuoteQuery (symbol)
Output: StockQuote
Side effects: None.
Failure cases: SymbolNotFoundError, MarketDataUnavailableError.
"""

import logging

from stockguru.application.market.dtos import GetQuoteQuery
from stockguru.domain.market.entities import StockQuote
from stockguru.domain.market.ports import MarketDataPort

logger = logging.getLogger(__name__)


class GetQuoteUseCase:
    """Delegates quote retrieval to the MarketDataPort."""

    def __init__(self, market_data: MarketDataPort) -> None:
        self._market_data = market_data

    def execute(self, query: GetQuoteQuery) -> StockQuote:
        """Return the latest quote for ``query.symbol``."""
        logger.info("Fetching quote for symbol=%s", query.symbol)
        return self._market_data.get_quote(query.symbol)
