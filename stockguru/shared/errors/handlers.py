"""
Centralized error handlers for FastAPI.

Maps domain-specific errors to HTTP responses.
No stack traces or internal details are exposed to clients.
All error responses use the ErrorResponse schema.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from stockguru.domain.accounts.errors import (
    AccountsDomainError,
    AlertNotFoundError,
    UsernameTakenError,
    UserNotFoundError,
    WatchlistItemExistsError,
    WatchlistItemNotFoundError,
)
from stockguru.domain.assistant.errors import (
    AssistantDomainError,
    LanguageModelUnavailableError,
)
from stockguru.domain.market.errors import (
    InsightDataUnavailableError,
    InsufficientDataError,
    InvalidPeriodError,
    InvalidPriceSeriesError,
    MarketDataUnavailableError,
    MarketDomainError,
    SymbolNotFoundError,
)

logger = logging.getLogger(__name__)

HTTP_400 = 400
HTTP_404 = 404
HTTP_409 = 409
HTTP_422 = 422
HTTP_500 = 500
HTTP_502 = 502
HTTP_503 = 503


def _error_response(status_code: int, error: str, detail: str | None = None) -> JSONResponse:
    """Build a consistent JSON error response."""
    body: dict[str, str | None] = {"error": error}
    if detail:
        body["detail"] = detail
    return JSONResponse(status_code=status_code, content=body)


def register_error_handlers(app: FastAPI) -> None:
    """Register all domain error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """

    # --- market ---

    @app.exception_handler(SymbolNotFoundError)
    async def handle_symbol_not_found(
        _request: Request, exc: SymbolNotFoundError
    ) -> JSONResponse:
        """Handle missing stock symbol errors."""
        logger.warning("Symbol not found: %s", exc.symbol)
        return _error_response(HTTP_404, "Symbol not found", exc.message)

    @app.exception_handler(InsufficientDataError)
    async def handle_insufficient_data(
        _request: Request, exc: InsufficientDataError
    ) -> JSONResponse:
        """Handle price series too short for technical analysis."""
        logger.warning("Insufficient data: required=%d available=%d", exc.required, exc.available)
        return _error_response(HTTP_400, "Insufficient data", exc.message)

    @app.exception_handler(InsightDataUnavailableError)
    async def handle_insight_data_unavailable(
        _request: Request, exc: InsightDataUnavailableError
    ) -> JSONResponse:
        """Handle insights requested for symbols without quote or indicators."""
        logger.warning("Insight data unavailable: %s", exc.symbol)
        return _error_response(HTTP_400, "Insufficient data for analysis", exc.message)

    @app.exception_handler(InvalidPeriodError)
    async def handle_invalid_period(
        _request: Request, exc: InvalidPeriodError
    ) -> JSONResponse:
        """Handle unsupported history periods."""
        logger.warning("Invalid period: %s", exc.period)
        return _error_response(HTTP_422, "Invalid history period", exc.message)

    @app.exception_handler(InvalidPriceSeriesError)
    async def handle_invalid_price_series(
        _request: Request, exc: InvalidPriceSeriesError
    ) -> JSONResponse:
        """Handle provider price series with non-finite or negative values."""
        logger.error("Invalid price series from provider: index=%d", exc.index)
        return _error_response(HTTP_502, "Invalid market data")

    @app.exception_handler(MarketDataUnavailableError)
    async def handle_market_data_unavailable(
        _request: Request, exc: MarketDataUnavailableError
    ) -> JSONResponse:
        """Handle upstream market data or news provider failures."""
        logger.error("Provider unavailable: %s", exc.provider)
        return _error_response(HTTP_502, "Market data provider unavailable")

    @app.exception_handler(MarketDomainError)
    async def handle_market_domain(
        _request: Request, exc: MarketDomainError
    ) -> JSONResponse:
        """Catch-all for unhandled market domain errors."""
        logger.error("Unhandled market domain error: %s", exc.message)
        return _error_response(HTTP_500, "Internal server error")

    # --- assistant ---

    @app.exception_handler(LanguageModelUnavailableError)
    async def handle_language_model_unavailable(
        _request: Request, exc: LanguageModelUnavailableError
    ) -> JSONResponse:
        """Handle failures of every configured language model provider."""
        logger.error("Language model unavailable")
        return _error_response(HTTP_503, "AI assistant unavailable")

    @app.exception_handler(AssistantDomainError)
    async def handle_assistant_domain(
        _request: Request, exc: AssistantDomainError
    ) -> JSONResponse:
        """Catch-all for unhandled assistant domain errors."""
        logger.error("Unhandled assistant domain error: %s", exc.message)
        return _error_response(HTTP_500, "Internal server error")

    # --- accounts ---

    @app.exception_handler(UserNotFoundError)
    async def handle_user_not_found(
        _request: Request, exc: UserNotFoundError
    ) -> JSONResponse:
        """Handle missing user errors."""
        logger.warning("User not found: %s", exc.user_id)
        return _error_response(HTTP_404, "User not found")

    @app.exception_handler(WatchlistItemNotFoundError)
    async def handle_watchlist_item_not_found(
        _request: Request, exc: WatchlistItemNotFoundError
    ) -> JSONResponse:
        """Handle removal of symbols missing from a watchlist."""
        logger.warning("Watchlist item not found: %s", exc.symbol)
        return _error_response(HTTP_404, "Item not found in watchlist", exc.message)

    @app.exception_handler(AlertNotFoundError)
    async def handle_alert_not_found(
        _request: Request, exc: AlertNotFoundError
    ) -> JSONResponse:
        """Handle missing alert errors."""
        logger.warning("Alert not found: %s", exc.alert_id)
        return _error_response(HTTP_404, "Alert not found")

    @app.exception_handler(UsernameTakenError)
    async def handle_username_taken(
        _request: Request, exc: UsernameTakenError
    ) -> JSONResponse:
        """Handle duplicate usernames."""
        logger.warning("Username already taken")
        return _error_response(HTTP_409, "Username already taken")

    @app.exception_handler(WatchlistItemExistsError)
    async def handle_watchlist_item_exists(
        _request: Request, exc: WatchlistItemExistsError
    ) -> JSONResponse:
        """Handle symbols already on a watchlist."""
        logger.warning("Watchlist item exists: %s", exc.symbol)
        return _error_response(HTTP_409, "Symbol already on watchlist", exc.message)

    @app.exception_handler(AccountsDomainError)
    async def handle_accounts_domain(
        _request: Request, exc: AccountsDomainError
    ) -> JSONResponse:
        """Catch-all for unhandled accounts domain errors."""
        logger.error("Unhandled accounts domain error: %s", exc.message)
        return _error_response(HTTP_500, "Internal server error")

    @app.exception_handler(Exception)
    async def handle_unexpected(
        _request: Request, exc: Exception
    ) -> JSONResponse:
        """Catch-all for unexpected errors. Never exposes internals."""
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return _error_response(HTTP_500, "Internal server error")
