"""
Data Transfer Objects for the accounts application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional
from uuid import UUID

from stockguru.domain.accounts.entities import AlertType, WatchlistItem
from stockguru.domain.market.entities import StockQuote


@dataclass(frozen=True)
class RegisterUserCommand:
    """Input DTO for registering a user."""

    username: str
    password: str


@dataclass(frozen=True)
class AddWatchlistItemCommand:
    """Input DTO for following a symbol.

    Attributes:
        user_id: Owner of the watchlist.
        symbol: NSE symbol, stored upper-case.
        company_name: Display name shown on the dashboard.
    """

    user_id: str
    symbol: str
    company_name: str


@dataclass(frozen=True)
class RemoveWatchlistItemCommand:
    """Input DTO for unfollowing a symbol."""

    user_id: str
    symbol: str


@dataclass(frozen=True)
class WatchlistEntry:
    """Output DTO: a watchlist item with its live quote, if available."""

    item: WatchlistItem
    quote: Optional[StockQuote] = None


@dataclass(frozen=True)
class CreateAlertCommand:
    """Input DTO for creating an alert.

    Attributes:
        target_value: Price for price alerts, RSI threshold for RSI alerts.
    """

    user_id: str
    symbol: str
    alert_type: AlertType
    target_value: Decimal


@dataclass(frozen=True)
class UpdateAlertCommand:
    """Input DTO for changing an alert. None fields are left unchanged."""

    alert_id: UUID
    target_value: Optional[Decimal] = None
    is_active: Optional[bool] = None


@dataclass(frozen=True)
class GetChatHistoryQuery:
    """Input DTO for listing a user's recent chat exchanges."""

    user_id: str
    limit: int = 50
