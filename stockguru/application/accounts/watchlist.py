"""
Use cases: Manage a user's watchlist.

The listing is enriched with live quotes fetched concurrently; a symbol
whose quote cannot be fetched is listed without one.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from stockguru.application.accounts.dtos import (
    AddWatchlistItemCommand,
    RemoveWatchlistItemCommand,
    WatchlistEntry,
)
from stockguru.application.market.dtos import GetQuoteQuery
from stockguru.application.market.get_quote import GetQuoteUseCase
from stockguru.domain.accounts.entities import WatchlistItem
from stockguru.domain.accounts.errors import WatchlistItemNotFoundError
from stockguru.domain.accounts.ports import WatchlistRepository
from stockguru.domain.market.entities import StockQuote
from stockguru.domain.market.errors import MarketDomainError

logger = logging.getLogger(__name__)

MAX_QUOTE_WORKERS = 8


class GetWatchlistUseCase:
    """Lists a user's watchlist with the latest quote of each symbol."""

    def __init__(self, watchlist: WatchlistRepository, get_quote: GetQuoteUseCase) -> None:
        self._watchlist = watchlist
        self._get_quote = get_quote

    def execute(self, user_id: str) -> list[WatchlistEntry]:
        items = self._watchlist.list_for_user(user_id)
        if not items:
            return []
        with ThreadPoolExecutor(max_workers=min(MAX_QUOTE_WORKERS, len(items))) as executor:
            quotes = list(executor.map(self._quote_or_none, items))
        return [WatchlistEntry(item=item, quote=quote) for item, quote in zip(items, quotes)]

    def _quote_or_none(self, item: WatchlistItem) -> Optional[StockQuote]:
        try:
            return self._get_quote.execute(GetQuoteQuery(item.symbol))
        except MarketDomainError as exc:
            logger.warning("No quote for watchlist symbol %s: %s", item.symbol, exc.message)
            return None


class AddWatchlistItemUseCase:
    """Adds a symbol to a user's watchlist.

    Raises:
        WatchlistItemExistsError: If the user already follows the symbol.
    """

    def __init__(self, watchlist: WatchlistRepository) -> None:
        self._watchlist = watchlist

    def execute(self, command: AddWatchlistItemCommand) -> WatchlistItem:
        item = self._watchlist.add(
            WatchlistItem(
                user_id=command.user_id,
                symbol=command.symbol.upper(),
                company_name=command.company_name,
            )
        )
        logger.info("User %s now follows %s", item.user_id, item.symbol)
        return item


class RemoveWatchlistItemUseCase:
    """Removes a symbol from a user's watchlist.

    Raises:
        WatchlistItemNotFoundError: If the symbol is not on the watchlist.
    """

    def __init__(self, watchlist: WatchlistRepository) -> None:
        self._watchlist = watchlist

    def execute(self, command: RemoveWatchlistItemCommand) -> None:
        symbol = command.symbol.upper()
        if not self._watchlist.remove(command.user_id, symbol):
            raise WatchlistItemNotFoundError(command.user_id, symbol)
        logger.info("User %s unfollowed %s", command.user_id, symbol)
