"""
Use case: Retrieve OHLCV price history for a symbol.

Input: GetPriceHistoryQuery (symbol, period)
Output: list[PriceBar], oldest first
Side effects: None.
Failure cases: InvalidPeriodError, SymbolNotFoundError, MarketDataUnavailableError.
"""

import logging

from stockguru.application.market.dtos import GetPriceHistoryQuery
from stockguru.domain.market.entities import PriceBar
from stockguru.domain.market.history import validate_period
from stockguru.domain.market.ports import MarketDataPort

logger = logging.getLogger(__name__)


class GetPriceHistoryUseCase:
    """Validates the requested period and delegates to the MarketDataPort."""

    def __init__(self, market_data: MarketDataPort) -> None:
        self._market_data = market_data

    def execute(self, query: GetPriceHistoryQuery) -> list[PriceBar]:
        """Run the price history use case.

        Args:
            query: Symbol and provider range.

        Returns:
            Price bars with a positive close, oldest first.

        Raises:
            InvalidPeriodError: If the period is not a supported range.
        """
        period = validate_period(query.period)
        logger.info("Fetching history for symbol=%s, period=%s", query.symbol, period)
        return self._market_data.get_history(query.symbol, period)
