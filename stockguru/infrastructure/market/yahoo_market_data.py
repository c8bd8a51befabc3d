"""
Adapter: Yahoo Finance chart and search endpoints.

Implements MarketDataPort over the public v8 chart API (quotes, indices,
history) and the v1 search API. Symbols are translated to Yahoo tickers
with the NSE symbol rules.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

import httpx

from stockguru.domain.market.entities import (
    MarketIndex,
    PriceBar,
    SearchResult,
    StockQuote,
)
from stockguru.domain.market.errors import (
    MarketDataUnavailableError,
    SymbolNotFoundError,
)
from stockguru.domain.market.history import bar_interval
from stockguru.domain.market.ports import MarketDataPort
from stockguru.domain.market.symbols import (
    NSE_SUFFIX,
    from_provider_symbol,
    to_provider_symbol,
)

logger = logging.getLogger(__name__)

PROVIDER = "yahoo"
NSE_EXCHANGE = "NSI"
DEFAULT_HEADERS = {"User-Agent": "Mozilla/5.0 (compatible; StockGuru/0.1)"}


def _first_number(*values: Any) -> Optional[float]:
    """Return the first truthy value as a float, mirroring ``a or b`` chains."""
    for value in values:
        if value:
            return float(value)
    return None


class YahooMarketDataAdapter(MarketDataPort):
    """Concrete adapter for Yahoo Finance.

    Args:
        chart_url: Base URL of the chart endpoint.
        search_url: URL of the search endpoint.
        timeout: Request timeout in seconds.
        client: Pre-built httpx client; one is created if omitted.
    """

    def __init__(
        self,
        chart_url: str,
        search_url: str,
        timeout: float = 30.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._chart_url = chart_url.rstrip("/")
        self._search_url = search_url
        self._client = client or httpx.Client(timeout=timeout, headers=DEFAULT_HEADERS)

    def close(self) -> None:
        self._client.close()

    # ------------------------------------------------------------------
    # MarketDataPort
    # ------------------------------------------------------------------

    def get_quote(self, symbol: str) -> StockQuote:
        result = self._chart(symbol, to_provider_symbol(symbol))
        meta = result.get("meta") or {}
        price, change, change_percent = self._price_change(symbol, meta)
        return StockQuote(
            symbol=symbol.upper(),
            company_name=meta.get("shortName") or meta.get("longName") or symbol,
            price=price,
            change=change,
            change_percent=change_percent,
            volume=int(meta.get("regularMarketVolume") or 0),
            day_high=_first_number(meta.get("regularMarketDayHigh"), price),
            day_low=_first_number(meta.get("regularMarketDayLow"), price),
            year_high=_first_number(meta.get("fiftyTwoWeekHigh"), price),
            year_low=_first_number(meta.get("fiftyTwoWeekLow"), price),
            timestamp=datetime.now(),
            market_cap=_first_number(meta.get("marketCap")),
            pe=_first_number(meta.get("trailingPE")),
        )

    def get_history(self, symbol: str, period: str) -> list[PriceBar]:
        result = self._chart(
            symbol,
            to_provider_symbol(symbol),
            params={"range": period, "interval": bar_interval(period)},
        )
        timestamps = result.get("timestamp") or []
        quotes = (result.get("indicators") or {}).get("quote") or []
        if not timestamps or not quotes:
            return []

        quote = quotes[0]

        def column(name: str) -> list:
            return quote.get(name) or [None] * len(timestamps)

        opens, highs, lows = column("open"), column("high"), column("low")
        closes, volumes = column("close"), column("volume")

        bars = []
        for i, ts in enumerate(timestamps):
            close = closes[i] or 0.0
            # Yahoo pads missing sessions with nulls
            if close <= 0:
                continue
            bars.append(
                PriceBar(
                    date=datetime.fromtimestamp(ts, tz=timezone.utc).date(),
                    open=float(opens[i] or 0.0),
                    high=float(highs[i] or 0.0),
                    low=float(lows[i] or 0.0),
                    close=float(close),
                    volume=int(volumes[i] or 0),
                )
            )
        logger.debug("Fetched %d bars for %s (%s)", len(bars), symbol, period)
        return bars

    def get_index(self, ticker: str, name: str) -> MarketIndex:
        result = self._chart(ticker, ticker)
        value, change, change_percent = self._price_change(ticker, result.get("meta") or {})
        return MarketIndex(
            name=name,
            symbol=ticker,
            value=value,
            change=change,
            change_percent=change_percent,
        )

    def search(self, query: str, limit: int) -> list[SearchResult]:
        params = {
            "q": query,
            "quotesCount": limit,
            "newsCount": 0,
            "enableFuzzyQuery": False,
            "quotesQueryId": "tss_match_phrase_query",
        }
        try:
            response = self._client.get(self._search_url, params=params)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Yahoo search failed for query=%r: %s", query, exc)
            raise MarketDataUnavailableError(PROVIDER, str(exc)) from exc

        results = []
        for quote in payload.get("quotes") or []:
            ticker = quote.get("symbol") or ""
            if quote.get("exchange") != NSE_EXCHANGE and not ticker.endswith(NSE_SUFFIX):
                continue
            results.append(
                SearchResult(
                    symbol=from_provider_symbol(ticker),
                    name=quote.get("shortname") or quote.get("longname") or ticker,
                )
            )
        return results

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _chart(
        self,
        symbol: str,
        ticker: str,
        params: Optional[dict[str, str]] = None,
    ) -> dict[str, Any]:
        """Return ``chart.result[0]`` for a ticker."""
        try:
            response = self._client.get(f"{self._chart_url}/{ticker}", params=params)
        except httpx.HTTPError as exc:
            logger.error("Yahoo chart request failed for %s: %s", ticker, exc)
            raise MarketDataUnavailableError(PROVIDER, str(exc)) from exc

        if response.status_code == 404:
            raise SymbolNotFoundError(symbol)
        try:
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Yahoo chart response invalid for %s: %s", ticker, exc)
            raise MarketDataUnavailableError(PROVIDER, str(exc)) from exc

        results = (payload.get("chart") or {}).get("result") or []
        if not results:
            raise SymbolNotFoundError(symbol)
        return results[0]

    @staticmethod
    def _price_change(symbol: str, meta: dict[str, Any]) -> tuple[float, float, float]:
        """Return ``(price, change, change_percent)`` from chart metadata."""
        previous_close = meta.get("previousClose") or meta.get("chartPreviousClose")
        price = _first_number(meta.get("regularMarketPrice"), previous_close)
        if price is None:
            raise SymbolNotFoundError(symbol)
        if not previous_close:
            return price, 0.0, 0.0
        change = price - float(previous_close)
        return price, change, change / float(previous_close) * 100
