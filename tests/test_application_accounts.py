"""
Tests for the accounts application layer (use cases) and the
in-memory repositories backing them.
"""

from decimal import Decimal
from uuid import uuid4

import pytest

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
)
from stockguru.application.accounts.users import GetUserUseCase, RegisterUserUseCase
from stockguru.application.accounts.watchlist import (
    AddWatchlistItemUseCase,
    GetWatchlistUseCase,
    RemoveWatchlistItemUseCase,
)
from stockguru.application.market.get_quote import GetQuoteUseCase
from stockguru.application.market.get_technical_indicators import (
    GetTechnicalIndicatorsUseCase,
)
from stockguru.domain.accounts.entities import AlertType, ChatMessage
from stockguru.domain.accounts.errors import (
    AlertNotFoundError,
    UsernameTakenError,
    UserNotFoundError,
    WatchlistItemExistsError,
    WatchlistItemNotFoundError,
)
from stockguru.infrastructure.accounts.memory_repositories import (
    InMemoryAlertRepository,
    InMemoryChatHistoryRepository,
    InMemoryUserRepository,
    InMemoryWatchlistRepository,
)
from fakes import FakeMarketData, make_bars, make_quote


def _fake_hash(password: str) -> str:
    return f"hashed:{password}"


class TestUsers:
    """Tests for user registration and lookup."""

    def test_register_stores_hash_only(self) -> None:
        users = InMemoryUserRepository()
        user = RegisterUserUseCase(users, _fake_hash).execute(
            RegisterUserCommand(username="asha", password="pw")
        )
        assert user.password_hash == "hashed:pw"
        assert users.get(user.id) == user

    def test_duplicate_username_rejected(self) -> None:
        users = InMemoryUserRepository()
        use_case = RegisterUserUseCase(users, _fake_hash)
        use_case.execute(RegisterUserCommand(username="asha", password="pw"))
        with pytest.raises(UsernameTakenError):
            use_case.execute(RegisterUserCommand(username="asha", password="other"))

    def test_get_user(self) -> None:
        users = InMemoryUserRepository()
        user = RegisterUserUseCase(users, _fake_hash).execute(
            RegisterUserCommand(username="asha", password="pw")
        )
        assert GetUserUseCase(users).execute(user.id) == user

    def test_get_unknown_user(self) -> None:
        with pytest.raises(UserNotFoundError):
            GetUserUseCase(InMemoryUserRepository()).execute(uuid4())


class TestWatchlist:
    """Tests for watchlist use cases."""

    def test_add_upper_cases_symbol(self) -> None:
        watchlist = InMemoryWatchlistRepository()
        item = AddWatchlistItemUseCase(watchlist).execute(
            AddWatchlistItemCommand(user_id="u1", symbol="tcs", company_name="TCS Ltd")
        )
        assert item.symbol == "TCS"

    def test_duplicate_rejected(self) -> None:
        use_case = AddWatchlistItemUseCase(InMemoryWatchlistRepository())
        use_case.execute(AddWatchlistItemCommand("u1", "TCS", "TCS Ltd"))
        with pytest.raises(WatchlistItemExistsError):
            use_case.execute(AddWatchlistItemCommand("u1", "tcs", "TCS Ltd"))

    def test_same_symbol_for_other_user(self) -> None:
        watchlist = InMemoryWatchlistRepository()
        use_case = AddWatchlistItemUseCase(watchlist)
        use_case.execute(AddWatchlistItemCommand("u1", "TCS", "TCS Ltd"))
        use_case.execute(AddWatchlistItemCommand("u2", "TCS", "TCS Ltd"))
        assert len(watchlist.list_for_user("u2")) == 1

    def test_listing_is_enriched_with_quotes(self) -> None:
        watchlist = InMemoryWatchlistRepository()
        add = AddWatchlistItemUseCase(watchlist)
        add.execute(AddWatchlistItemCommand("u1", "RELIANCE", "Reliance Industries"))
        add.execute(AddWatchlistItemCommand("u1", "DELISTED", "Gone Ltd"))
        get_quote = GetQuoteUseCase(FakeMarketData(quotes={"RELIANCE": make_quote()}))

        entries = GetWatchlistUseCase(watchlist, get_quote).execute("u1")

        assert [e.item.symbol for e in entries] == ["RELIANCE", "DELISTED"]
        assert entries[0].quote.price == 2500.0
        assert entries[1].quote is None

    def test_empty_listing(self) -> None:
        get_quote = GetQuoteUseCase(FakeMarketData())
        assert GetWatchlistUseCase(InMemoryWatchlistRepository(), get_quote).execute("u1") == []

    def test_remove(self) -> None:
        watchlist = InMemoryWatchlistRepository()
        AddWatchlistItemUseCase(watchlist).execute(AddWatchlistItemCommand("u1", "TCS", "TCS Ltd"))
        RemoveWatchlistItemUseCase(watchlist).execute(RemoveWatchlistItemCommand("u1", "tcs"))
        assert watchlist.list_for_user("u1") == []

    def test_remove_missing(self) -> None:
        with pytest.raises(WatchlistItemNotFoundError):
            RemoveWatchlistItemUseCase(InMemoryWatchlistRepository()).execute(
                RemoveWatchlistItemCommand("u1", "TCS")
            )


class TestAlerts:
    """Tests for alert management and evaluation."""

    def _create(self, alerts, alert_type: AlertType, target: str, symbol: str = "RELIANCE"):
        return CreateAlertUseCase(alerts).execute(
            CreateAlertCommand(
                user_id="u1",
                symbol=symbol,
                alert_type=alert_type,
                target_value=Decimal(target),
            )
        )

    def test_create_and_list(self) -> None:
        alerts = InMemoryAlertRepository()
        alert = self._create(alerts, AlertType.PRICE_ABOVE, "2600", symbol="reliance")
        assert alert.symbol == "RELIANCE"
        assert alert.is_active is True
        assert ListAlertsUseCase(alerts).execute("u1") == [alert]

    def test_update_changes_only_given_fields(self) -> None:
        alerts = InMemoryAlertRepository()
        alert = self._create(alerts, AlertType.PRICE_ABOVE, "2600")
        updated = UpdateAlertUseCase(alerts).execute(
            UpdateAlertCommand(alert_id=alert.id, is_active=False)
        )
        assert updated.target_value == Decimal("2600")
        assert updated.is_active is False
        assert ListAlertsUseCase(alerts).execute("u1") == []

    def test_update_missing(self) -> None:
        with pytest.raises(AlertNotFoundError):
            UpdateAlertUseCase(InMemoryAlertRepository()).execute(
                UpdateAlertCommand(alert_id=uuid4(), target_value=Decimal("1"))
            )

    def test_delete(self) -> None:
        alerts = InMemoryAlertRepository()
        alert = self._create(alerts, AlertType.PRICE_BELOW, "2000")
        DeleteAlertUseCase(alerts).execute(alert.id)
        assert alerts.get(alert.id) is None
        with pytest.raises(AlertNotFoundError):
            DeleteAlertUseCase(alerts).execute(alert.id)

    def test_evaluate(self) -> None:
        alerts = InMemoryAlertRepository()
        self._create(alerts, AlertType.PRICE_ABOVE, "2400")
        self._create(alerts, AlertType.PRICE_BELOW, "2400")
        self._create(alerts, AlertType.RSI_OVERBOUGHT, "70")
        self._create(alerts, AlertType.PRICE_ABOVE, "10", symbol="GONE")
        market_data = FakeMarketData(
            quotes={"RELIANCE": make_quote()},
            history={"RELIANCE": make_bars([100.0 + i for i in range(60)])},
        )
        use_case = EvaluateAlertsUseCase(
            alerts,
            GetQuoteUseCase(market_data),
            GetTechnicalIndicatorsUseCase(market_data),
        )

        evaluations = use_case.execute("u1")

        assert [e.triggered for e in evaluations] == [True, False, True, False]
        assert evaluations[2].observed_value == 100.0
        assert evaluations[3].observed_value is None
        assert market_data.history_calls == [("RELIANCE", "3mo")]


class TestChatHistory:
    """Tests for chat history use cases."""

    def _history_with(self, count: int) -> InMemoryChatHistoryRepository:
        history = InMemoryChatHistoryRepository()
        for i in range(count):
            history.save(ChatMessage(message=f"q{i}", response=f"a{i}", user_id="u1"))
        history.save(ChatMessage(message="other", response="x", user_id="u2"))
        return history

    def test_latest_messages_oldest_first(self) -> None:
        history = self._history_with(5)
        messages = GetChatHistoryUseCase(history).execute(GetChatHistoryQuery("u1", limit=2))
        assert [m.message for m in messages] == ["q3", "q4"]

    def test_non_positive_limit(self) -> None:
        history = self._history_with(3)
        assert GetChatHistoryUseCase(history).execute(GetChatHistoryQuery("u1", limit=0)) == []

    def test_clear_only_touches_one_user(self) -> None:
        history = self._history_with(3)
        assert ClearChatHistoryUseCase(history).execute("u1") == 3
        assert history.recent("u1", 10) == []
        assert len(history.recent("u2", 10)) == 1
