"""
Dependency injection for the accounts bounded context.

Repositories are in-memory and process-wide, so each is built once.
"""

from functools import lru_cache

from stockguru.application.accounts.alerts import (
    CreateAlertUseCase,
    DeleteAlertUseCase,
    EvaluateAlertsUseCase,
    ListAlertsUseCase,
    UpdateAlertUseCase,
)
from stockguru.application.accounts.chat_history import (
    ClearChatHistoryUseCase,
    GetChatHistoryUseCase,
)
from stockguru.application.accounts.users import GetUserUseCase, RegisterUserUseCase
from stockguru.application.accounts.watchlist import (
    AddWatchlistItemUseCase,
    GetWatchlistUseCase,
    RemoveWatchlistItemUseCase,
)
from stockguru.infrastructure.accounts.memory_repositories import (
    InMemoryAlertRepository,
    InMemoryChatHistoryRepository,
    InMemoryUserRepository,
    InMemoryWatchlistRepository,
)
from stockguru.interfaces.market.dependencies import (
    get_quote_use_case,
    get_technical_indicators_use_case,
)
from stockguru.shared.security.passwords import hash_password


@lru_cache
def get_user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@lru_cache
def get_watchlist_repository() -> InMemoryWatchlistRepository:
    return InMemoryWatchlistRepository()


@lru_cache
def get_alert_repository() -> InMemoryAlertRepository:
    return InMemoryAlertRepository()


@lru_cache
def get_chat_history_repository() -> InMemoryChatHistoryRepository:
    return InMemoryChatHistoryRepository()


def get_register_user_use_case() -> RegisterUserUseCase:
    """Build RegisterUserUseCase with its infrastructure dependencies."""
    return RegisterUserUseCase(users=get_user_repository(), hash_password=hash_password)


def get_user_use_case() -> GetUserUseCase:
    return GetUserUseCase(users=get_user_repository())


def get_watchlist_use_case() -> GetWatchlistUseCase:
    """Build GetWatchlistUseCase with its infrastructure dependencies."""
    return GetWatchlistUseCase(
        watchlist=get_watchlist_repository(),
        get_quote=get_quote_use_case(),
    )


def get_add_watchlist_item_use_case() -> AddWatchlistItemUseCase:
    return AddWatchlistItemUseCase(watchlist=get_watchlist_repository())


def get_remove_watchlist_item_use_case() -> RemoveWatchlistItemUseCase:
    return RemoveWatchlistItemUseCase(watchlist=get_watchlist_repository())


def get_create_alert_use_case() -> CreateAlertUseCase:
    return CreateAlertUseCase(alerts=get_alert_repository())


def get_list_alerts_use_case() -> ListAlertsUseCase:
    return ListAlertsUseCase(alerts=get_alert_repository())


def get_update_alert_use_case() -> UpdateAlertUseCase:
    return UpdateAlertUseCase(alerts=get_alert_repository())


def get_delete_alert_use_case() -> DeleteAlertUseCase:
    return DeleteAlertUseCase(alerts=get_alert_repository())


def get_evaluate_alerts_use_case() -> EvaluateAlertsUseCase:
    """Build EvaluateAlertsUseCase with its infrastructure dependencies."""
    return EvaluateAlertsUseCase(
        alerts=get_alert_repository(),
        get_quote=get_quote_use_case(),
        get_indicators=get_technical_indicators_use_case(),
    )


def get_chat_history_use_case() -> GetChatHistoryUseCase:
    return GetChatHistoryUseCase(history=get_chat_history_repository())


def get_clear_chat_history_use_case() -> ClearChatHistoryUseCase:
    return ClearChatHistoryUseCase(history=get_chat_history_repository())
