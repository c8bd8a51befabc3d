"""
Domain rules for price history requests.
"""

from stockguru.domain.market.entities import PriceBar
from stockguru.domain.market.errors import InvalidPeriodError

HISTORY_PERIODS = frozenset(
    {"1d", "5d", "1mo", "3mo", "6mo", "1y", "2y", "5y", "10y", "ytd", "max"}
)


def validate_period(period: str) -> str:
    """Return the normalized period or raise InvalidPeriodError."""
    normalized = period.strip().lower()
    if normalized not in HISTORY_PERIODS:
        raise InvalidPeriodError(period)
    return normalized


def bar_interval(period: str) -> str:
    """Return the bar interval for a period: hourly for multi-day ranges, else daily."""
    if period.endswith("d") and period[:-1].isdigit() and period != "1d":
        return "1h"
    return "1d"


def closing_prices(bars: list[PriceBar]) -> list[float]:
    """Return the closes of a bar series, oldest first."""
    return [bar.close for bar in bars]
