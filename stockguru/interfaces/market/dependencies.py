"""
Dependency injection for the market bounded context.

Provides FastAPI dependency functions that wire infrastructure
adapters into use cases via constructor injection.
Adapters holding connections or state are built once per process.
These are the composition root for the market context.
"""

from datetime import timedelta
from functools import lru_cache

from stockguru.application.market.generate_insight import GenerateInsightUseCase
from stockguru.application.market.get_market_indices import GetMarketIndicesUseCase
from stockguru.application.market.get_market_news import GetMarketNewsUseCase
from stockguru.application.market.get_market_sentiment import GetMarketSentimentUseCase
from stockguru.application.market.get_price_history import GetPriceHistoryUseCase
from stockguru.application.market.get_quote import GetQuoteUseCase
from stockguru.application.market.get_stock_news import GetStockNewsUseCase
from stockguru.application.market.get_technical_indicators import (
    GetTechnicalIndicatorsUseCase,
)
from stockguru.application.market.search_stocks import SearchStocksUseCase
from stockguru.core.config import settings
from stockguru.domain.assistant.ports import LanguageModelPort
from stockguru.infrastructure.assistant.llm_gateway import build_language_model
from stockguru.infrastructure.assistant.market_analyst import LlmMarketAnalyst
from stockguru.infrastructure.assistant.prompt_loader import get_prompt_loader
from stockguru.infrastructure.market.news_cache import InMemoryNewsCache
from stockguru.infrastructure.market.tavily_news import TavilyNewsAdapter
from stockguru.infrastructure.market.yahoo_market_data import YahooMarketDataAdapter


@lru_cache
def get_market_data_adapter() -> YahooMarketDataAdapter:
    """Build the shared Yahoo Finance adapter."""
    return YahooMarketDataAdapter(
        chart_url=settings.yahoo_chart_url,
        search_url=settings.yahoo_search_url,
        timeout=settings.http_timeout_seconds,
    )


@lru_cache
def get_news_search_adapter() -> TavilyNewsAdapter:
    """Build the shared Tavily adapter."""
    return TavilyNewsAdapter(
        api_key=settings.tavily_api_key,
        api_url=settings.tavily_api_url,
        timeout=settings.http_timeout_seconds,
    )


@lru_cache
def get_news_cache() -> InMemoryNewsCache:
    """Build the process-wide news cache."""
    return InMemoryNewsCache(
        max_entries=settings.news_cache_max_entries,
        retention=timedelta(seconds=settings.news_cache_retention_seconds),
    )


@lru_cache
def get_language_model() -> LanguageModelPort:
    """Build the shared Groq/OpenAI gateway."""
    return build_language_model(settings)


def get_market_analyst() -> LlmMarketAnalyst:
    return LlmMarketAnalyst(llm=get_language_model(), prompts=get_prompt_loader())


def get_quote_use_case() -> GetQuoteUseCase:
    """Build GetQuoteUseCase with its infrastructure dependencies."""
    return GetQuoteUseCase(market_data=get_market_data_adapter())


def get_price_history_use_case() -> GetPriceHistoryUseCase:
    """Build GetPriceHistoryUseCase with its infrastructure dependencies."""
    return GetPriceHistoryUseCase(market_data=get_market_data_adapter())


def get_technical_indicators_use_case() -> GetTechnicalIndicatorsUseCase:
    """Build GetTechnicalIndicatorsUseCase with its infrastructure dependencies."""
    return GetTechnicalIndicatorsUseCase(
        market_data=get_market_data_adapter(),
        history_period=settings.indicator_history_period,
    )


def get_market_indices_use_case() -> GetMarketIndicesUseCase:
    """Build GetMarketIndicesUseCase with its infrastructure dependencies."""
    return GetMarketIndicesUseCase(market_data=get_market_data_adapter())


def get_search_stocks_use_case() -> SearchStocksUseCase:
    """Build SearchStocksUseCase with its infrastructure dependencies."""
    return SearchStocksUseCase(market_data=get_market_data_adapter())


def get_market_news_use_case() -> GetMarketNewsUseCase:
    """Build GetMarketNewsUseCase with its infrastructure dependencies."""
    return GetMarketNewsUseCase(
        news_search=get_news_search_adapter(),
        analyst=get_market_analyst(),
        cache=get_news_cache(),
        ttl_seconds=settings.news_cache_ttl_seconds,
        max_results=settings.news_max_results,
    )


def get_stock_news_use_case() -> GetStockNewsUseCase:
    """Build GetStockNewsUseCase with its infrastructure dependencies."""
    return GetStockNewsUseCase(market_news=get_market_news_use_case())


def get_market_sentiment_use_case() -> GetMarketSentimentUseCase:
    """Build GetMarketSentimentUseCase with its infrastructure dependencies."""
    return GetMarketSentimentUseCase(market_news=get_market_news_use_case())


def get_generate_insight_use_case() -> GenerateInsightUseCase:
    """Build GenerateInsightUseCase with its infrastructure dependencies."""
    return GenerateInsightUseCase(
        get_quote=get_quote_use_case(),
        get_indicators=get_technical_indicators_use_case(),
        get_news=get_stock_news_use_case(),
        analyst=get_market_analyst(),
    )
