"""
Use case: Retrieve the benchmark indices shown on the dashboard.

Input: None
Output: list[MarketIndex] in benchmark order
Side effects: None.
Failure cases: None. Indices that cannot be fetched are left out.
"""

import logging
from concurrent.futures import ThreadPoolExecutor

from stockguru.domain.market.entities import MarketIndex
from stockguru.domain.market.errors import MarketDomainError
from stockguru.domain.market.ports import MarketDataPort
from stockguru.domain.market.symbols import BENCHMARK_INDICES

logger = logging.getLogger(__name__)


class GetMarketIndicesUseCase:
    """Fetches every benchmark index concurrently and keeps the ones that succeed."""

    def __init__(
        self,
        market_data: MarketDataPort,
        indices: tuple[tuple[str, str], ...] = BENCHMARK_INDICES,
    ) -> None:
        self._market_data = market_data
        self._indices = indices

    def execute(self) -> list[MarketIndex]:
        """Run the market indices use case."""
        with ThreadPoolExecutor(max_workers=len(self._indices) or 1) as executor:
            futures = [
                (ticker, executor.submit(self._market_data.get_index, ticker, name))
                for ticker, name in self._indices
            ]

        results: list[MarketIndex] = []
        for ticker, future in futures:
            try:
                results.append(future.result())
            except MarketDomainError as exc:
                logger.warning("Skipping index %s: %s", ticker, exc.message)
        return results
