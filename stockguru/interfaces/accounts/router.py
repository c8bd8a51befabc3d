"""
FastAPI router for the accounts bounded context.

Users, watchlists, alerts and chat history.
All routes delegate to use cases. No business logic here.
Error mapping is handled by centralized error handlers.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, status

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
from stockguru.application.accounts.dtos import (
    AddWatchlistItemCommand,
    CreateAlertCommand,
    GetChatHistoryQuery,
    RegisterUserCommand,
    RemoveWatchlistItemCommand,
    UpdateAlertCommand,
    WatchlistEntry,
)
from stockguru.application.accounts.users import GetUserUseCase, RegisterUserUseCase
from stockguru.application.accounts.watchlist import (
    AddWatchlistItemUseCase,
    GetWatchlistUseCase,
    RemoveWatchlistItemUseCase,
)
from stockguru.interfaces.accounts.dependencies import (
    get_add_watchlist_item_use_case,
    get_chat_history_use_case,
    get_clear_chat_history_use_case,
    get_create_alert_use_case,
    get_delete_alert_use_case,
    get_evaluate_alerts_use_case,
    get_list_alerts_use_case,
    get_register_user_use_case,
    get_remove_watchlist_item_use_case,
    get_update_alert_use_case,
    get_user_use_case,
    get_watchlist_use_case,
)
from stockguru.interfaces.accounts.schemas import (
    USER_ID_MAX_LEN,
    AddWatchlistItemRequest,
    AlertEvaluationResponse,
    AlertResponse,
    ClearChatHistoryResponse,
    CreateAlertRequest,
    MessageResponse,
    RegisterUserRequest,
    UpdateAlertRequest,
    UserResponse,
    WatchlistItemResponse,
)
from stockguru.interfaces.assistant.schemas import ChatMessageItem
from stockguru.interfaces.market.schemas import ErrorResponse, SymbolPath

router = APIRouter(tags=["accounts"])

UserIdPath = Annotated[str, Path(min_length=1, max_length=USER_ID_MAX_LEN)]

DEFAULT_HISTORY_LIMIT = 50
MAX_HISTORY_LIMIT = 500


# ------------------------------------------------------------------
# Users
# ------------------------------------------------------------------


@router.post(
    "/users",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
    summary="Register user",
)
def register_user(
    request: RegisterUserRequest,
    use_case: RegisterUserUseCase = Depends(get_register_user_use_case),
) -> UserResponse:
    """Register a user with a unique username."""
    user = use_case.execute(
        RegisterUserCommand(username=request.username, password=request.password)
    )
    return UserResponse.from_entity(user)


@router.get(
    "/users/{user_id}",
    response_model=UserResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get user",
)
def get_user(
    user_id: UUID,
    use_case: GetUserUseCase = Depends(get_user_use_case),
) -> UserResponse:
    """Return a registered user."""
    return UserResponse.from_entity(use_case.execute(user_id))


# ------------------------------------------------------------------
# Watchlist
# ------------------------------------------------------------------


@router.get(
    "/watchlist/{user_id}",
    response_model=list[WatchlistItemResponse],
    summary="Get watchlist",
    description="A user's watchlist with live quotes. Symbols whose quote fails are listed without one.",
)
def get_watchlist(
    user_id: UserIdPath,
    use_case: GetWatchlistUseCase = Depends(get_watchlist_use_case),
) -> list[WatchlistItemResponse]:
    """Return a user's watchlist."""
    return [WatchlistItemResponse.from_entry(e) for e in use_case.execute(user_id)]


@router.post(
    "/watchlist",
    response_model=WatchlistItemResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
    summary="Add to watchlist",
)
def add_watchlist_item(
    request: AddWatchlistItemRequest,
    use_case: AddWatchlistItemUseCase = Depends(get_add_watchlist_item_use_case),
) -> WatchlistItemResponse:
    """Follow a symbol."""
    item = use_case.execute(
        AddWatchlistItemCommand(
            user_id=request.user_id,
            symbol=request.symbol,
            company_name=request.company_name,
        )
    )
    return WatchlistItemResponse.from_entry(WatchlistEntry(item=item))


@router.delete(
    "/watchlist/{user_id}/{symbol}",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Remove from watchlist",
)
def remove_watchlist_item(
    user_id: UserIdPath,
    symbol: SymbolPath,
    use_case: RemoveWatchlistItemUseCase = Depends(get_remove_watchlist_item_use_case),
) -> MessageResponse:
    """Unfollow a symbol."""
    use_case.execute(RemoveWatchlistItemCommand(user_id=user_id, symbol=symbol.upper()))
    return MessageResponse(message="Item removed from watchlist")


# ------------------------------------------------------------------
# Alerts
# ------------------------------------------------------------------


@router.get(
    "/alerts/{user_id}",
    response_model=list[AlertResponse],
    summary="List active alerts",
)
def list_alerts(
    user_id: UserIdPath,
    use_case: ListAlertsUseCase = Depends(get_list_alerts_use_case),
) -> list[AlertResponse]:
    """Return a user's active alerts."""
    return [AlertResponse.from_entity(a) for a in use_case.execute(user_id)]


@router.post(
    "/alerts",
    response_model=AlertResponse,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": ErrorResponse}},
    summary="Create alert",
)
def create_alert(
    request: CreateAlertRequest,
    use_case: CreateAlertUseCase = Depends(get_create_alert_use_case),
) -> AlertResponse:
    """Create a price or RSI alert."""
    alert = use_case.execute(
        CreateAlertCommand(
            user_id=request.user_id,
            symbol=request.symbol,
            alert_type=request.alert_type,
            target_value=request.target_value,
        )
    )
    return AlertResponse.from_entity(alert)


@router.patch(
    "/alerts/{alert_id}",
    response_model=AlertResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Update alert",
)
def update_alert(
    alert_id: UUID,
    request: UpdateAlertRequest,
    use_case: UpdateAlertUseCase = Depends(get_update_alert_use_case),
) -> AlertResponse:
    """Change an alert's target value or active flag."""
    alert = use_case.execute(
        UpdateAlertCommand(
            alert_id=alert_id,
            target_value=request.target_value,
            is_active=request.is_active,
        )
    )
    return AlertResponse.from_entity(alert)


@router.delete(
    "/alerts/{alert_id}",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Delete alert",
)
def delete_alert(
    alert_id: UUID,
    use_case: DeleteAlertUseCase = Depends(get_delete_alert_use_case),
) -> MessageResponse:
    """Delete an alert."""
    use_case.execute(alert_id)
    return MessageResponse(message="Alert deleted")


@router.get(
    "/alerts/{user_id}/triggered",
    response_model=list[AlertEvaluationResponse],
    summary="Evaluate alerts",
    description="Checks each active alert of a user against the live price and RSI.",
)
def evaluate_alerts(
    user_id: UserIdPath,
    use_case: EvaluateAlertsUseCase = Depends(get_evaluate_alerts_use_case),
) -> list[AlertEvaluationResponse]:
    """Return one evaluation per active alert."""
    return [AlertEvaluationResponse.from_entity(e) for e in use_case.execute(user_id)]


# ------------------------------------------------------------------
# Chat history
# ------------------------------------------------------------------


@router.get(
    "/chat/history/{user_id}",
    response_model=list[ChatMessageItem],
    summary="Get chat history",
    description="The latest exchanges of a user, oldest first.",
)
def get_chat_history(
    user_id: UserIdPath,
    limit: int = Query(default=DEFAULT_HISTORY_LIMIT, ge=1, le=MAX_HISTORY_LIMIT),
    use_case: GetChatHistoryUseCase = Depends(get_chat_history_use_case),
) -> list[ChatMessageItem]:
    """Return a user's recent chat history."""
    messages = use_case.execute(GetChatHistoryQuery(user_id=user_id, limit=limit))
    return [ChatMessageItem.from_entity(m) for m in messages]


@router.delete(
    "/chat/history/{user_id}",
    response_model=ClearChatHistoryResponse,
    summary="Clear chat history",
)
def clear_chat_history(
    user_id: UserIdPath,
    use_case: ClearChatHistoryUseCase = Depends(get_clear_chat_history_use_case),
) -> ClearChatHistoryResponse:
    """Delete a user's chat history."""
    removed = use_case.execute(user_id)
    return ClearChatHistoryResponse(message="Chat history cleared", removed=removed)
