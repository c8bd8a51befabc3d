"""
FastAPI router for the market bounded context.

All routes delegate to use cases. No business logic here.
Path symbols are validated by pattern and upper-cased.
Error mapping is handled by centralized error handlers.
"""

from fastapi import APIRouter, Depends, Path, Query, Request

from stockguru.application.market.dtos import (
    GenerateInsightQuery,
    GetMarketNewsQuery,
    GetPriceHistoryQuery,
    GetQuoteQuery,
    GetStockNewsQuery,
    GetTechnicalIndicatorsQuery,
    SearchStocksQuery,
)
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
from stockguru.interfaces.market.dependencies import (
    get_generate_insight_use_case,
    get_market_indices_use_case,
    get_market_news_use_case,
    get_market_sentiment_use_case,
    get_price_history_use_case,
    get_quote_use_case,
    get_search_stocks_use_case,
    get_stock_news_use_case,
    get_technical_indicators_use_case,
)
from stockguru.interfaces.market.schemas import (
    ErrorResponse,
    MarketIndexItem,
    MarketNewsResponse,
    MarketSentimentResponse,
    NewsArticleItem,
    PriceBarItem,
    SearchResultItem,
    StockInsightResponse,
    StockQuoteResponse,
    SymbolPath,
    TechnicalIndicatorsResponse,
)
from stockguru.shared.security.rate_limiting import HEAVY_RATE_LIMIT, limiter

router = APIRouter(tags=["market"])

SEARCH_LIMIT = 10


@router.get(
    "/stocks/search/{query}",
    response_model=list[SearchResultItem],
    summary="Search stocks",
    description="Search NSE stocks and indices by symbol or name. Indices come first.",
)
def search_stocks(
    query: str = Path(..., min_length=1, max_length=50),
    use_case: SearchStocksUseCase = Depends(get_search_stocks_use_case),
) -> list[SearchResultItem]:
    """Search the index catalog and the provider."""
    results = use_case.execute(SearchStocksQuery(query=query, limit=SEARCH_LIMIT))
    return [SearchResultItem.from_entity(r) for r in results]


@router.get(
    "/stocks/{symbol}",
    response_model=StockQuoteResponse,
    responses={404: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
    summary="Get live quote",
    description="Latest price, change and day/year ranges for a stock or index.",
)
def get_quote(
    symbol: SymbolPath,
    use_case: GetQuoteUseCase = Depends(get_quote_use_case),
) -> StockQuoteResponse:
    """Return the live quote of a symbol."""
    quote = use_case.execute(GetQuoteQuery(symbol=symbol.upper()))
    return StockQuoteResponse.from_entity(quote)


@router.get(
    "/stocks/{symbol}/historical",
    response_model=list[PriceBarItem],
    responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
    summary="Get price history",
    description="OHLCV bars for a range such as 1mo, 3mo or 1y. Hourly bars for multi-day ranges.",
)
def get_price_history(
    symbol: SymbolPath,
    period: str = Query(default="1mo", max_length=5),
    use_case: GetPriceHistoryUseCase = Depends(get_price_history_use_case),
) -> list[PriceBarItem]:
    """Return the price history of a symbol."""
    bars = use_case.execute(GetPriceHistoryQuery(symbol=symbol.upper(), period=period))
    return [PriceBarItem.from_entity(b) for b in bars]


@router.get(
    "/stocks/{symbol}/technical",
    response_model=TechnicalIndicatorsResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Get technical indicators",
    description="RSI(14), MACD(12,26,9), SMA(20), EMA(50) and Bollinger(20,2) over 3 months of daily closes.",
)
def get_technical_indicators(
    symbol: SymbolPath,
    use_case: GetTechnicalIndicatorsUseCase = Depends(get_technical_indicators_use_case),
) -> TechnicalIndicatorsResponse:
    """Return the latest indicator snapshot of a symbol."""
    snapshot = use_case.execute(GetTechnicalIndicatorsQuery(symbol=symbol.upper()))
    return TechnicalIndicatorsResponse.from_entity(snapshot)


@router.get(
    "/market/indices",
    response_model=list[MarketIndexItem],
    summary="Get benchmark indices",
    description="NIFTY 50, SENSEX, BANK NIFTY and NIFTY IT. Indices that fail to load are omitted.",
)
def get_market_indices(
    use_case: GetMarketIndicesUseCase = Depends(get_market_indices_use_case),
) -> list[MarketIndexItem]:
    """Return the dashboard's benchmark indices."""
    return [MarketIndexItem.from_entity(i) for i in use_case.execute()]


@router.get(
    "/market/sentiment",
    response_model=MarketSentimentResponse,
    summary="Get market sentiment",
    description="Mean sentiment score and label percentages over general market news.",
)
def get_market_sentiment(
    use_case: GetMarketSentimentUseCase = Depends(get_market_sentiment_use_case),
) -> MarketSentimentResponse:
    """Return the aggregate market sentiment."""
    return MarketSentimentResponse.from_entity(use_case.execute())


@router.get(
    "/news",
    response_model=MarketNewsResponse,
    summary="Get market news",
    description="Latest Indian market news with per-article sentiment. Comma-separated symbols narrow the search.",
)
def get_market_news(
    symbols: str | None = Query(default=None, max_length=200),
    use_case: GetMarketNewsUseCase = Depends(get_market_news_use_case),
) -> MarketNewsResponse:
    """Return market news, optionally about specific symbols."""
    requested = tuple(s.strip().upper() for s in (symbols or "").split(",") if s.strip())
    news = use_case.execute(GetMarketNewsQuery(symbols=requested))
    return MarketNewsResponse(
        articles=[NewsArticleItem.from_entity(a) for a in news.articles],
        last_updated=news.last_updated,
    )


@router.get(
    "/news/{symbol}",
    response_model=list[NewsArticleItem],
    summary="Get stock news",
    description="News articles that mention a symbol.",
)
def get_stock_news(
    symbol: SymbolPath,
    use_case: GetStockNewsUseCase = Depends(get_stock_news_use_case),
) -> list[NewsArticleItem]:
    """Return news about one symbol."""
    articles = use_case.execute(GetStockNewsQuery(symbol=symbol.upper()))
    return [NewsArticleItem.from_entity(a) for a in articles]


@router.get(
    "/insights/{symbol}",
    response_model=StockInsightResponse,
    responses={400: {"model": ErrorResponse}, 429: {"model": ErrorResponse}},
    summary="Get AI insight",
    description="Directional outlook from live quote, indicators and news.",
)
@limiter.limit(HEAVY_RATE_LIMIT)
def get_insight(
    request: Request,
    symbol: SymbolPath,
    use_case: GenerateInsightUseCase = Depends(get_generate_insight_use_case),
) -> StockInsightResponse:
    """Return an AI-generated insight for a symbol."""
    insight = use_case.execute(GenerateInsightQuery(symbol=symbol.upper()))
    return StockInsightResponse.from_entity(insight)
