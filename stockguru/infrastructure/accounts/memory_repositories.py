"""
Adapters: In-memory repositories for the accounts bounded context.

Each repository guards its map with a lock so use cases can be called
from FastAPI's worker threads. Data lives for the lifetime of the process.
"""

import logging
import threading
from typing import Optional
from uuid import UUID

from stockguru.domain.accounts.entities import (
    ChatMessage,
    StockAlert,
    User,
    WatchlistItem,
)
from stockguru.domain.accounts.errors import (
    UsernameTakenError,
    WatchlistItemExistsError,
)
from stockguru.domain.accounts.ports import (
    AlertRepository,
    ChatHistoryRepository,
    UserRepository,
    WatchlistRepository,
)

logger = logging.getLogger(__name__)


class InMemoryUserRepository(UserRepository):
    """Users keyed by ID, with unique usernames."""

    def __init__(self) -> None:
        self._users: dict[UUID, User] = {}
        self._lock = threading.Lock()

    def get(self, user_id: UUID) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        with self._lock:
            return next(
                (u for u in self._users.values() if u.username == username), None
            )

    def add(self, user: User) -> User:
        with self._lock:
            if any(u.username == user.username for u in self._users.values()):
                raise UsernameTakenError(user.username)
            self._users[user.id] = user
        return user


class InMemoryWatchlistRepository(WatchlistRepository):
    """Watchlist items in insertion order, unique per (user, symbol)."""

    def __init__(self) -> None:
        self._items: dict[tuple[str, str], WatchlistItem] = {}
        self._lock = threading.Lock()

    def list_for_user(self, user_id: str) -> list[WatchlistItem]:
        with self._lock:
            return [i for i in self._items.values() if i.user_id == user_id]

    def add(self, item: WatchlistItem) -> WatchlistItem:
        key = (item.user_id, item.symbol)
        with self._lock:
            if key in self._items:
                raise WatchlistItemExistsError(item.user_id, item.symbol)
            self._items[key] = item
        return item

    def remove(self, user_id: str, symbol: str) -> bool:
        with self._lock:
            return self._items.pop((user_id, symbol), None) is not None


class InMemoryAlertRepository(AlertRepository):
    """Alerts keyed by ID."""

    def __init__(self) -> None:
        self._alerts: dict[UUID, StockAlert] = {}
        self._lock = threading.Lock()

    def get(self, alert_id: UUID) -> Optional[StockAlert]:
        with self._lock:
            return self._alerts.get(alert_id)

    def list_active(self, user_id: str) -> list[StockAlert]:
        with self._lock:
            return [
                a for a in self._alerts.values() if a.user_id == user_id and a.is_active
            ]

    def save(self, alert: StockAlert) -> StockAlert:
        with self._lock:
            self._alerts[alert.id] = alert
        return alert

    def delete(self, alert_id: UUID) -> bool:
        with self._lock:
            return self._alerts.pop(alert_id, None) is not None


class InMemoryChatHistoryRepository(ChatHistoryRepository):
    """Chat exchanges in arrival order."""

    def __init__(self) -> None:
        self._messages: list[ChatMessage] = []
        self._lock = threading.Lock()

    def save(self, message: ChatMessage) -> ChatMessage:
        with self._lock:
            self._messages.append(message)
        return message

    def recent(self, user_id: str, limit: int) -> list[ChatMessage]:
        if limit <= 0:
            return []
        with self._lock:
            mine = [m for m in self._messages if m.user_id == user_id]
        return mine[-limit:]

    def clear(self, user_id: str) -> int:
        with self._lock:
            kept = [m for m in self._messages if m.user_id != user_id]
            removed = len(self._messages) - len(kept)
            self._messages = kept
        return removed
