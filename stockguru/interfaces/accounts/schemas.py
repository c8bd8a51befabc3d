"""
Pydantic schemas for accounts API request/response validation.

These schemas enforce input validation and define the API contract
for users, watchlists, alerts and chat history.
No business logic belongs here.
"""

import datetime as dt
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import Field

from stockguru.application.accounts.dtos import WatchlistEntry
from stockguru.domain.accounts.entities import (
    AlertEvaluation,
    AlertType,
    StockAlert,
    User,
)
from stockguru.interfaces.market.schemas import (
    SYMBOL_DESCRIPTION,
    SYMBOL_PATTERN,
    ApiModel,
    StockQuoteResponse,
)

USER_ID_MAX_LEN = 64
USERNAME_PATTERN = r"^[A-Za-z0-9_.-]+$"


class MessageResponse(ApiModel):
    """Plain confirmation message."""

    message: str


# ------------------------------------------------------------------
# Users
# ------------------------------------------------------------------


class RegisterUserRequest(ApiModel):
    """Request schema for registering a user.

    Attributes:
        username: 3-50 characters of letters, digits, '_', '.', '-'.
        password: 8-128 characters. Only a salted hash is stored.
    """

    username: str = Field(..., min_length=3, max_length=50, pattern=USERNAME_PATTERN)
    password: str = Field(..., min_length=8, max_length=128)


class UserResponse(ApiModel):
    """A registered user. The password hash is never returned."""

    id: UUID
    username: str
    created_at: dt.datetime

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(id=user.id, username=user.username, created_at=user.created_at)


# ------------------------------------------------------------------
# Watchlist
# ------------------------------------------------------------------


class AddWatchlistItemRequest(ApiModel):
    user_id: str = Field(..., min_length=1, max_length=USER_ID_MAX_LEN)
    symbol: str = Field(..., pattern=SYMBOL_PATTERN, description=SYMBOL_DESCRIPTION)
    company_name: str = Field(..., min_length=1, max_length=200)


class WatchlistItemResponse(ApiModel):
    """A watchlist item, with its live quote when listing."""

    id: UUID
    user_id: str
    symbol: str
    company_name: str
    added_at: dt.datetime
    quote: Optional[StockQuoteResponse] = None

    @classmethod
    def from_entry(cls, entry: WatchlistEntry) -> "WatchlistItemResponse":
        item = entry.item
        return cls(
            id=item.id,
            user_id=item.user_id,
            symbol=item.symbol,
            company_name=item.company_name,
            added_at=item.added_at,
            quote=StockQuoteResponse.from_entity(entry.quote) if entry.quote else None,
        )


# ------------------------------------------------------------------
# Alerts
# ------------------------------------------------------------------


class CreateAlertRequest(ApiModel):
    """Request schema for creating an alert.

    Attributes:
        target_value: Price for price alerts, RSI (0-100) for RSI alerts.
    """

    user_id: str = Field(..., min_length=1, max_length=USER_ID_MAX_LEN)
    symbol: str = Field(..., pattern=SYMBOL_PATTERN, description=SYMBOL_DESCRIPTION)
    alert_type: AlertType
    target_value: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)


class UpdateAlertRequest(ApiModel):
    target_value: Optional[Decimal] = Field(
        default=None, gt=0, max_digits=12, decimal_places=2
    )
    is_active: Optional[bool] = None


class AlertResponse(ApiModel):
    id: UUID
    user_id: str
    symbol: str
    alert_type: AlertType
    target_value: Decimal
    is_active: bool
    created_at: dt.datetime

    @classmethod
    def from_entity(cls, alert: StockAlert) -> "AlertResponse":
        return cls(
            id=alert.id,
            user_id=alert.user_id,
            symbol=alert.symbol,
            alert_type=alert.alert_type,
            target_value=alert.target_value,
            is_active=alert.is_active,
            created_at=alert.created_at,
        )


class AlertEvaluationResponse(ApiModel):
    """Whether an alert's condition currently holds."""

    alert: AlertResponse
    triggered: bool
    observed_value: Optional[float] = None
    reason: str

    @classmethod
    def from_entity(cls, evaluation: AlertEvaluation) -> "AlertEvaluationResponse":
        return cls(
            alert=AlertResponse.from_entity(evaluation.alert),
            triggered=evaluation.triggered,
            observed_value=evaluation.observed_value,
            reason=evaluation.reason,
        )


# ------------------------------------------------------------------
# Chat history
# ------------------------------------------------------------------


class ClearChatHistoryResponse(MessageResponse):
    removed: int
