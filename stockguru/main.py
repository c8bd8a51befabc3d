"""
Application entry point.

Creates the FastAPI application and wires together:
- Routers (one per bounded context)
- Error handlers (centralized domain-to-HTTP mapping)
- Security middleware (headers, CORS, rate limiting)
- Logging configuration

No business logic belongs here.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from stockguru.core.config import settings
from stockguru.interfaces.accounts.router import router as accounts_router
from stockguru.interfaces.assistant.router import router as assistant_router
from stockguru.interfaces.health import router as health_router
from stockguru.interfaces.market.dependencies import (
    get_language_model,
    get_market_data_adapter,
    get_news_search_adapter,
)
from stockguru.interfaces.market.router import router as market_router
from stockguru.shared.errors.handlers import register_error_handlers
from stockguru.shared.logging import configure_logging
from stockguru.shared.security.headers import SecurityHeadersMiddleware
from stockguru.shared.security.rate_limiting import (
    limiter,
    rate_limit_exceeded_handler,
)

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: report providers on startup, close HTTP clients on shutdown."""
    providers = get_language_model().provider_names
    logger.info(
        "%s %s starting; LLM providers: %s",
        settings.project_name,
        settings.version,
        ", ".join(providers) or "none",
    )

    yield

    # Only close clients that were actually built
    if get_market_data_adapter.cache_info().currsize:
        get_market_data_adapter().close()
    if get_news_search_adapter.cache_info().currsize:
        get_news_search_adapter().close()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Registers routers, error handlers, and security middleware.
    This is the composition root of the application.

    Returns:
        A fully configured FastAPI application instance.
    """
    configure_logging(level=settings.log_level)

    app = FastAPI(
        title=settings.project_name,
        version=settings.version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    # --- Rate Limiting ---
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # --- Security Middleware ---
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["Content-Type"],
    )

    # --- Error Handlers ---
    register_error_handlers(app)

    # --- Routers ---
    app.include_router(health_router, prefix=API_PREFIX)
    app.include_router(market_router, prefix=API_PREFIX)
    app.include_router(assistant_router, prefix=API_PREFIX)
    app.include_router(accounts_router, prefix=API_PREFIX)

    return app


app = create_app()
