"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        debug: Enable debug mode. Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        rate_limit_default: Default rate limit for all endpoints.
        rate_limit_heavy: Rate limit for LLM-backed endpoints.
        cors_origins: Origins allowed to call the API from a browser.

    Provider keys default to empty strings; a missing key disables the
    corresponding provider instead of failing at startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    project_name: str = "StockGuru"
    version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    rate_limit_default: str = "60/minute"
    rate_limit_heavy: str = "10/minute"
    cors_origins: list[str] = ["http://localhost:5000"]

    # --- Market data (Yahoo Finance) ---
    yahoo_chart_url: str = "https://query1.finance.yahoo.com/v8/finance/chart"
    yahoo_search_url: str = "https://query2.finance.yahoo.com/v1/finance/search"
    indicator_history_period: str = "3mo"
    http_timeout_seconds: float = 30.0

    # --- News (Tavily) ---
    tavily_api_key: str = ""
    tavily_api_url: str = "https://api.tavily.com/search"
    news_max_results: int = 10
    news_cache_ttl_seconds: int = 900
    news_cache_max_entries: int = 256
    news_cache_retention_seconds: int = 86400

    # --- LLM providers ---
    groq_api_key: str = ""
    groq_model: str = "llama-3.3-70b-versatile"
    openai_api_key: str = ""
    openai_model: str = "gpt-4o"
    llm_temperature: float = 0.7
    llm_max_tokens: int = 1000


settings = Settings()
