"""
Port interfaces (ABCs) for the accounts bounded context.

Repositories hold users, watchlists, alerts and chat history.
The domain layer never depends on concrete implementations.
"""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from stockguru.domain.accounts.entities import (
    ChatMessage,
    StockAlert,
    User,
    WatchlistItem,
)


class UserRepository(ABC):
    """Port for persisting and retrieving users."""

    @abstractmethod
    def get(self, user_id: UUID) -> Optional[User]:
        """Return a user by ID, or None if not found."""
        raise NotImplementedError

    @abstractmethod
    def get_by_username(self, username: str) -> Optional[User]:
        """Return a user by username, or None if not found."""
        raise NotImplementedError

    @abstractmethod
    def add(self, user: User) -> User:
        """Persist a new user.

        Raises:
            UsernameTakenError: If the username is already registered.
        """
        raise NotImplementedError


class WatchlistRepository(ABC):
    """Port for persisting watchlist items."""

    @abstractmethod
    def list_for_user(self, user_id: str) -> list[WatchlistItem]:
        """Return a user's watchlist ordered by insertion."""
        raise NotImplementedError

    @abstractmethod
    def add(self, item: WatchlistItem) -> WatchlistItem:
        """Persist a watchlist item.

        Raises:
            WatchlistItemExistsError: If the user already follows the symbol.
        """
        raise NotImplementedError

    @abstractmethod
    def remove(self, user_id: str, symbol: str) -> bool:
        """Remove a symbol from a user's watchlist. Returns False if absent."""
        raise NotImplementedError


class AlertRepository(ABC):
    """Port for persisting alerts."""

    @abstractmethod
    def get(self, alert_id: UUID) -> Optional[StockAlert]:
        """Return an alert by ID, or None if not found."""
        raise NotImplementedError

    @abstractmethod
    def list_active(self, user_id: str) -> list[StockAlert]:
        """Return a user's active alerts."""
        raise NotImplementedError

    @abstractmethod
    def save(self, alert: StockAlert) -> StockAlert:
        """Insert or replace an alert by ID."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, alert_id: UUID) -> bool:
        """Delete an alert. Returns False if absent."""
        raise NotImplementedError


class ChatHistoryRepository(ABC):
    """Port for persisting assistant conversations."""

    @abstractmethod
    def save(self, message: ChatMessage) -> ChatMessage:
        """Persist one exchange."""
        raise NotImplementedError

    @abstractmethod
    def recent(self, user_id: str, limit: int) -> list[ChatMessage]:
        """Return the latest ``limit`` exchanges of a user, oldest first."""
        raise NotImplementedError

    @abstractmethod
    def clear(self, user_id: str) -> int:
        """Delete a user's history. Returns the number of messages removed."""
        raise NotImplementedError
