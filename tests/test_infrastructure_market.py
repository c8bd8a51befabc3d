"""
Tests for the market infrastructure adapters.

HTTP calls are served by httpx.MockTransport; no network access.
"""

import json
from datetime import date, datetime, timedelta, timezone

import httpx
import pytest

from stockguru.domain.market.entities import MarketNews
from stockguru.domain.market.errors import (
    MarketDataUnavailableError,
    SymbolNotFoundError,
)
from stockguru.infrastructure.market.news_cache import InMemoryNewsCache
from stockguru.infrastructure.market.tavily_news import (
    NEWS_DOMAINS,
    TavilyNewsAdapter,
)
from stockguru.infrastructure.market.yahoo_market_data import YahooMarketDataAdapter

CHART_URL = "https://query1.finance.yahoo.com/v8/finance/chart"
SEARCH_URL = "https://query1.finance.yahoo.com/v1/finance/search"

RELIANCE_META = {
    "symbol": "RELIANCE.NS",
    "shortName": "Reliance Industries",
    "regularMarketPrice": 2525.0,
    "previousClose": 2500.0,
    "regularMarketVolume": 4_200_000,
    "regularMarketDayHigh": 2540.0,
    "regularMarketDayLow": 2490.0,
    "fiftyTwoWeekHigh": 3000.0,
    "fiftyTwoWeekLow": 2200.0,
}


def _ts(day: int) -> int:
    return int(datetime(2024, 1, day, 9, 15, tzinfo=timezone.utc).timestamp())


def _chart(meta: dict, **extra) -> dict:
    return {"chart": {"result": [{"meta": meta, **extra}], "error": None}}


def _yahoo(handler) -> YahooMarketDataAdapter:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return YahooMarketDataAdapter(CHART_URL, SEARCH_URL, client=client)


class TestYahooQuotes:
    """Tests for quotes and indices."""

    def test_quote_parsing(self) -> None:
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json=_chart(RELIANCE_META))

        quote = _yahoo(handler).get_quote("reliance")

        assert requests[0].url.path.endswith("/RELIANCE.NS")
        assert quote.symbol == "RELIANCE"
        assert quote.company_name == "Reliance Industries"
        assert quote.price == 2525.0
        assert quote.change == 25.0
        assert quote.change_percent == pytest.approx(1.0)
        assert quote.volume == 4_200_000
        assert quote.year_high == 3000.0
        assert quote.market_cap is None

    def test_missing_fields_fall_back_to_price(self) -> None:
        meta = {"regularMarketPrice": 100.0, "chartPreviousClose": 80.0}
        quote = _yahoo(lambda r: httpx.Response(200, json=_chart(meta))).get_quote("ABC")
        assert quote.company_name == "ABC"
        assert quote.day_high == 100.0
        assert quote.change == 20.0
        assert quote.change_percent == pytest.approx(25.0)

    def test_no_previous_close_means_no_change(self) -> None:
        meta = {"regularMarketPrice": 100.0}
        quote = _yahoo(lambda r: httpx.Response(200, json=_chart(meta))).get_quote("ABC")
        assert quote.change == 0.0
        assert quote.change_percent == 0.0

    def test_index_alias_uses_caret_ticker(self) -> None:
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json=_chart({"regularMarketPrice": 22000.0}))

        _yahoo(handler).get_quote("NIFTY")
        assert requests[0].url.path.endswith("/%5ENSEI") or requests[0].url.path.endswith("/^NSEI")

    def test_404_is_symbol_not_found(self) -> None:
        adapter = _yahoo(lambda r: httpx.Response(404, json={}))
        with pytest.raises(SymbolNotFoundError):
            adapter.get_quote("NOPE")

    def test_empty_result_is_symbol_not_found(self) -> None:
        adapter = _yahoo(lambda r: httpx.Response(200, json={"chart": {"result": None}}))
        with pytest.raises(SymbolNotFoundError):
            adapter.get_quote("NOPE")

    def test_server_error_is_unavailable(self) -> None:
        adapter = _yahoo(lambda r: httpx.Response(500, text="boom"))
        with pytest.raises(MarketDataUnavailableError) as exc_info:
            adapter.get_quote("RELIANCE")
        assert exc_info.value.provider == "yahoo"

    def test_transport_error_is_unavailable(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(MarketDataUnavailableError):
            _yahoo(handler).get_quote("RELIANCE")

    def test_index(self) -> None:
        meta = {"regularMarketPrice": 22100.0, "previousClose": 22000.0}
        index = _yahoo(lambda r: httpx.Response(200, json=_chart(meta))).get_index(
            "^NSEI", "NIFTY 50"
        )
        assert index.name == "NIFTY 50"
        assert index.symbol == "^NSEI"
        assert index.change == 100.0


class TestYahooHistory:
    """Tests for price history."""

    def test_bars_skip_missing_sessions(self) -> None:
        params = {}

        def handler(request: httpx.Request) -> httpx.Response:
            params.update(request.url.params)
            return httpx.Response(
                200,
                json=_chart(
                    {},
                    timestamp=[_ts(1), _ts(2), _ts(3)],
                    indicators={
                        "quote": [
                            {
                                "open": [10.0, None, 12.0],
                                "high": [11.0, None, 13.0],
                                "low": [9.0, None, 11.0],
                                "close": [10.5, None, 12.5],
                                "volume": [100, None, 300],
                            }
                        ]
                    },
                ),
            )

        bars = _yahoo(handler).get_history("TCS", "1mo")

        assert params == {"range": "1mo", "interval": "1d"}
        assert [b.date for b in bars] == [date(2024, 1, 1), date(2024, 1, 3)]
        assert [b.close for b in bars] == [10.5, 12.5]
        assert bars[1].volume == 300

    def test_short_range_uses_hourly_bars(self) -> None:
        params = {}

        def handler(request: httpx.Request) -> httpx.Response:
            params.update(request.url.params)
            return httpx.Response(200, json=_chart({}))

        assert _yahoo(handler).get_history("TCS", "5d") == []
        assert params["interval"] == "1h"


class TestYahooSearch:
    """Tests for symbol search."""

    def test_keeps_nse_listings(self) -> None:
        payload = {
            "quotes": [
                {"symbol": "TCS.NS", "shortname": "Tata Consultancy", "exchange": "NSI"},
                {"symbol": "TCS.BO", "shortname": "Tata Consultancy", "exchange": "BSE"},
                {"symbol": "TCEHY", "shortname": "Tencent", "exchange": "PNK"},
                {"symbol": "INFY.NS", "longname": "Infosys Limited"},
            ]
        }
        results = _yahoo(lambda r: httpx.Response(200, json=payload)).search("tata", 10)
        assert [(r.symbol, r.name) for r in results] == [
            ("TCS", "Tata Consultancy"),
            ("INFY", "Infosys Limited"),
        ]

    def test_search_failure(self) -> None:
        adapter = _yahoo(lambda r: httpx.Response(503))
        with pytest.raises(MarketDataUnavailableError):
            adapter.search("tata", 10)


class TestTavilyNews:
    """Tests for the Tavily news adapter."""

    def test_missing_key(self) -> None:
        adapter = TavilyNewsAdapter(api_key="", client=httpx.Client())
        with pytest.raises(MarketDataUnavailableError) as exc_info:
            adapter.search("news", 5)
        assert exc_info.value.provider == "tavily"

    def test_results_are_mapped(self) -> None:
        bodies = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(json.loads(request.content))
            return httpx.Response(
                200,
                json={
                    "results": [
                        {
                            "title": "RIL shares climb",
                            "content": "x" * 400,
                            "url": "https://www.livemint.com/markets/ril",
                            "published_date": "2024-03-01",
                        },
                        {"title": "Quiet day", "content": "", "url": "https://example.com/a"},
                    ]
                },
            )

        adapter = TavilyNewsAdapter(
            api_key="key", client=httpx.Client(transport=httpx.MockTransport(handler))
        )
        articles = adapter.search("RELIANCE news", 5)

        assert bodies[0]["query"] == "RELIANCE news"
        assert bodies[0]["max_results"] == 5
        assert bodies[0]["include_domains"] == list(NEWS_DOMAINS)
        first, second = articles
        assert first.source == "Mint"
        assert first.summary == "x" * 300 + "..."
        assert first.related_symbols == ("RELIANCE",)
        assert first.published_at == "2024-03-01"
        assert first.sentiment is None
        assert second.summary == "Quiet day"
        assert second.source == "https://example.com/a"

    def test_http_error(self) -> None:
        adapter = TavilyNewsAdapter(
            api_key="key",
            client=httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(401))),
        )
        with pytest.raises(MarketDataUnavailableError):
            adapter.search("news", 5)


class TestNewsCache:
    """Tests for the in-memory news cache."""

    def test_stamps_entries_with_clock(self) -> None:
        stamp = datetime(2024, 3, 1, 9, 0)
        cache = InMemoryNewsCache(clock=lambda: stamp)
        news = MarketNews(articles=(), last_updated=stamp)
        assert cache.get("general") is None
        cache.set("general", news)
        assert cache.get("general") == (stamp, news)
        cache.clear()
        assert cache.get("general") is None

    def test_size_is_bounded(self) -> None:
        stamp = datetime(2024, 3, 1, 9, 0)
        cache = InMemoryNewsCache(max_entries=50, clock=lambda: stamp)
        news = MarketNews(articles=(), last_updated=stamp)
        for i in range(5000):
            cache.set(f"SYM{i}", news)
        assert len(cache) == 50
        assert cache.get("SYM0") is None
        assert cache.get("SYM4999") == (stamp, news)

    def test_evicts_least_recently_used(self) -> None:
        stamp = datetime(2024, 3, 1, 9, 0)
        cache = InMemoryNewsCache(max_entries=2, clock=lambda: stamp)
        news = MarketNews(articles=(), last_updated=stamp)
        cache.set("general", news)
        cache.set("TCS", news)
        cache.get("general")
        cache.set("INFY", news)
        assert cache.get("TCS") is None
        assert cache.get("general") is not None
        assert cache.get("INFY") is not None

    def test_purges_entries_past_retention(self) -> None:
        now = [datetime(2024, 3, 1, 9, 0)]
        cache = InMemoryNewsCache(retention=timedelta(hours=1), clock=lambda: now[0])
        news = MarketNews(articles=(), last_updated=now[0])
        cache.set("old", news)
        now[0] += timedelta(minutes=30)
        cache.set("recent", news)
        now[0] += timedelta(minutes=45)
        cache.set("general", news)
        assert cache.get("old") is None
        assert cache.get("recent") is not None
        assert len(cache) == 2

    def test_rejects_non_positive_capacity(self) -> None:
        with pytest.raises(ValueError):
            InMemoryNewsCache(max_entries=0)
