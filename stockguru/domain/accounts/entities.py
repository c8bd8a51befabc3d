"""
Domain entities for the accounts bounded context.

Entities represent core business objects with identity and lifecycle.
They contain no framework imports and no IO operations.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4


class AlertType(Enum):
    """Condition an alert watches for."""

    PRICE_ABOVE = "price_above"
    PRICE_BELOW = "price_below"
    RSI_OVERBOUGHT = "rsi_overbought"
    RSI_OVERSOLD = "rsi_oversold"

    @property
    def needs_indicators(self) -> bool:
        """Whether evaluating this alert requires an RSI value."""
        return self in (AlertType.RSI_OVERBOUGHT, AlertType.RSI_OVERSOLD)


@dataclass(frozen=True)
class User:
    """A registered dashboard user. ``password_hash`` is never exposed."""

    username: str
    password_hash: str
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class WatchlistItem:
    """A symbol a user follows on the dashboard."""

    user_id: str
    symbol: str
    company_name: str
    id: UUID = field(default_factory=uuid4)
    added_at: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class StockAlert:
    """A user-defined alert on price or RSI.

    ``target_value`` is a price for price alerts and an RSI threshold
    for RSI alerts.
    """

    user_id: str
    symbol: str
    alert_type: AlertType
    target_value: Decimal
    is_active: bool = True
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class ChatMessage:
    """One persisted exchange between a user and the assistant."""

    message: str
    response: str
    user_id: Optional[str] = None
    id: UUID = field(default_factory=uuid4)
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class AlertEvaluation:
    """Outcome of checking one alert against live data."""

    alert: StockAlert
    triggered: bool
    observed_value: Optional[float]
    reason: str
