"""
Use case: Compute the technical indicator snapshot for a symbol.

Input: GetTechnicalIndicatorsQuery (symbol)
Output: IndicatorSnapshot
Side effects: None.
Failure cases: InsufficientDataError, SymbolNotFoundError, MarketDataUnavailableError.
"""

import logging

from stockguru.application.market.dtos import GetTechnicalIndicatorsQuery
from stockguru.domain.market.entities import IndicatorSnapshot
from stockguru.domain.market.history import closing_prices
from stockguru.domain.market.indicators import TechnicalIndicatorCalculator
from stockguru.domain.market.ports import MarketDataPort

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_PERIOD = "3mo"


class GetTechnicalIndicatorsUseCase:
    """Fetches daily history and runs the indicator calculator over the closes.

    The calculator itself is pure; all waiting happens in the history fetch.
    """

    def __init__(
        self,
        market_data: MarketDataPort,
        calculator: TechnicalIndicatorCalculator | None = None,
        history_period: str = DEFAULT_HISTORY_PERIOD,
    ) -> None:
        self._market_data = market_data
        self._calculator = calculator or TechnicalIndicatorCalculator()
        self._history_period = history_period

    def execute(self, query: GetTechnicalIndicatorsQuery) -> IndicatorSnapshot:
        """Run the technical indicator use case.

        Raises:
            InsufficientDataError: If the provider returned fewer bars than
                the calculator requires.
        """
        bars = self._market_data.get_history(query.symbol, self._history_period)
        logger.info(
            "Computing indicators for symbol=%s over %d bars",
            query.symbol,
            len(bars),
        )
        return self._calculator.compute(closing_prices(bars))
