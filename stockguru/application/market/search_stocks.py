"""
Use case: Search NSE stocks and indices.

Input: SearchStocksQuery (query, limit)
Output: list[SearchResult], indices first
Side effects: None.
Failure cases: None. A provider failure degrades to index-only results.
"""

import logging

from stockguru.application.market.dtos import SearchStocksQuery
from stockguru.domain.market.entities import SearchResult
from stockguru.domain.market.errors import MarketDataUnavailableError
from stockguru.domain.market.ports import MarketDataPort
from stockguru.domain.market.symbols import search_index_catalog

logger = logging.getLogger(__name__)


class SearchStocksUseCase:
    """Combines the local index catalog with provider search results."""

    def __init__(self, market_data: MarketDataPort) -> None:
        self._market_data = market_data

    def execute(self, query: SearchStocksQuery) -> list[SearchResult]:
        """Run the search use case."""
        indices = search_index_catalog(query.query)
        try:
            stocks = self._market_data.search(query.query, query.limit)
        except MarketDataUnavailableError as exc:
            logger.warning("Stock search failed, returning indices only: %s", exc.reason)
            return indices[: query.limit]
        return (indices + stocks)[: query.limit]
