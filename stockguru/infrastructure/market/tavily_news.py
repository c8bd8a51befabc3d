"""
Adapter: Tavily web search for Indian financial news.

Implements NewsSearchPort. Searches are restricted to a fixed set of
Indian business news domains. Articles are returned without sentiment.
"""

import logging
from datetime import datetime
from typing import Any, Optional

import httpx

from stockguru.domain.market.entities import NewsArticle
from stockguru.domain.market.errors import MarketDataUnavailableError
from stockguru.domain.market.ports import NewsSearchPort
from stockguru.domain.market.symbols import extract_symbols, source_name

logger = logging.getLogger(__name__)

PROVIDER = "tavily"
SUMMARY_LENGTH = 300

NEWS_DOMAINS = (
    "economictimes.indiatimes.com",
    "business-standard.com",
    "livemint.com",
    "moneycontrol.com",
    "zeebiz.com",
    "thehindubusinessline.com",
    "financialexpress.com",
)


class TavilyNewsAdapter(NewsSearchPort):
    """Concrete adapter for the Tavily search REST API.

    Args:
        api_key: Tavily API key. An empty key makes every search fail
            with MarketDataUnavailableError.
        api_url: Search endpoint URL.
        timeout: Request timeout in seconds.
        client: Pre-built httpx client; one is created if omitted.
    """

    def __init__(
        self,
        api_key: str,
        api_url: str = "https://api.tavily.com/search",
        timeout: float = 30.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._api_key = api_key
        self._api_url = api_url
        self._client = client or httpx.Client(timeout=timeout)

    def search(self, query: str, max_results: int) -> list[NewsArticle]:
        if not self._api_key:
            raise MarketDataUnavailableError(PROVIDER, "TAVILY_API_KEY is not configured")

        body = {
            "api_key": self._api_key,
            "query": query,
            "search_depth": "basic",
            "include_answer": False,
            "include_images": False,
            "include_raw_content": False,
            "max_results": max_results,
            "include_domains": list(NEWS_DOMAINS),
        }
        try:
            response = self._client.post(self._api_url, json=body)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Tavily search failed for query=%r: %s", query, exc)
            raise MarketDataUnavailableError(PROVIDER, str(exc)) from exc

        results = payload.get("results") or []
        logger.info("Tavily returned %d results for query=%r", len(results), query)
        return [self._to_article(result) for result in results]

    @staticmethod
    def _to_article(result: dict[str, Any]) -> NewsArticle:
        title = result.get("title") or ""
        content = result.get("content") or ""
        url = result.get("url") or ""
        summary = f"{content[:SUMMARY_LENGTH]}..." if content else title
        return NewsArticle(
            title=title,
            summary=summary,
            source=source_name(url),
            published_at=result.get("published_date") or datetime.now().isoformat(),
            url=url,
            related_symbols=tuple(extract_symbols(f"{title} {content}")),
        )

    def close(self) -> None:
        self._client.close()
