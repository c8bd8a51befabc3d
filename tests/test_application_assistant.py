"""
Tests for the assistant application layer (use cases).

The chat assistant port is replaced by a scripted fake; market data
comes from the shared in-memory fakes. No network calls.
"""

from datetime import datetime

from stockguru.application.assistant.answer_message import AnswerMessageUseCase
from stockguru.application.assistant.dtos import ChatCommand
from stockguru.application.assistant.process_chat import ProcessChatUseCase
from stockguru.application.market.get_market_news import GetMarketNewsUseCase
from stockguru.application.market.get_quote import GetQuoteUseCase
from stockguru.application.market.get_stock_news import GetStockNewsUseCase
from stockguru.application.market.get_technical_indicators import (
    GetTechnicalIndicatorsUseCase,
)
from stockguru.domain.assistant.entities import ActionType, AssistantReply, QueryType
from stockguru.domain.assistant.errors import LanguageModelUnavailableError
from stockguru.domain.assistant.fallback_replies import BUSY_REPLY
from stockguru.domain.assistant.ports import ChatAssistantPort
from stockguru.domain.assistant.query_rules import classify_query
from stockguru.infrastructure.accounts.memory_repositories import (
    InMemoryChatHistoryRepository,
)
from stockguru.infrastructure.market.news_cache import InMemoryNewsCache
from fakes import (
    FakeAnalyst,
    FakeMarketData,
    FakeNewsSearch,
    make_article,
    make_bars,
    make_quote,
)

AS_OF = datetime(2024, 3, 1, 15, 30)


class ScriptedAssistant(ChatAssistantPort):
    """Classifies with keyword rules and answers with a fixed text or fails."""

    def __init__(self, reply: str = "LLM answer", available: bool = True) -> None:
        self.reply = reply
        self.available = available
        self.contexts: list[tuple] = []

    def answer(self, message: str) -> AssistantReply:
        return AssistantReply(
            response=f"quick: {message}",
            suggestions=("one", "two", "three"),
            action_type=ActionType.GENERAL,
        )

    def classify(self, query: str):
        return classify_query(query)

    def answer_with_context(self, query, classification, data) -> str:
        self.contexts.append((query, classification, list(data)))
        if not self.available:
            raise LanguageModelUnavailableError("all providers failed")
        return self.reply


def _use_case(assistant, market_data, history=None) -> ProcessChatUseCase:
    news = GetMarketNewsUseCase(
        news_search=FakeNewsSearch(
            [make_article(title=f"NIFTY update {i}", related_symbols=("NIFTY",)) for i in range(5)]
        ),
        analyst=FakeAnalyst(),
        cache=InMemoryNewsCache(),
    )
    return ProcessChatUseCase(
        assistant=assistant,
        get_quote=GetQuoteUseCase(market_data),
        get_indicators=GetTechnicalIndicatorsUseCase(market_data),
        get_news=GetStockNewsUseCase(news),
        history=history or InMemoryChatHistoryRepository(),
        clock=lambda: AS_OF,
    )


def _market_data() -> FakeMarketData:
    return FakeMarketData(
        quotes={"RELIANCE": make_quote(), "NIFTY": make_quote("NIFTY", price=22000.0, change=110.0)},
        history={"RELIANCE": make_bars([100.0 + i for i in range(60)])},
    )


class TestProcessChat:
    """Tests for ProcessChatUseCase."""

    def test_market_data_query_gathers_and_answers(self) -> None:
        assistant = ScriptedAssistant()
        outcome = _use_case(assistant, _market_data()).process("RELIANCE price today")

        assert outcome.response == "LLM answer"
        assert outcome.classification.type is QueryType.MARKET_DATA
        assert [d.symbol for d in outcome.data_used] == ["RELIANCE"]
        reliance = outcome.data_used[0]
        assert reliance.quote.price == 2500.0
        assert reliance.indicators.rsi == 100.0
        assert reliance.news == ()
        assert outcome.execution_steps == (
            "Query classified as MARKET_DATA (confidence 90%)",
            "Fetching live data for RELIANCE",
            "Loaded data for 1/1 symbols",
            "Generated answer with language model",
        )

    def test_general_query_fetches_nothing(self) -> None:
        assistant = ScriptedAssistant()
        outcome = _use_case(assistant, _market_data()).process("Explain compound interest")
        assert outcome.data_used == ()
        assert len(outcome.execution_steps) == 2
        assert assistant.contexts[0][2] == []

    def test_index_gets_top_news(self) -> None:
        outcome = _use_case(ScriptedAssistant(), _market_data()).process("NIFTY today")
        nifty = outcome.data_used[0]
        assert nifty.indicators is None
        assert len(nifty.news) == 3

    def test_unknown_symbol_is_recorded_as_error(self) -> None:
        outcome = _use_case(ScriptedAssistant(), _market_data()).process("ZZZZ and RELIANCE price")
        errors = {d.symbol: d.error for d in outcome.data_used}
        assert errors["RELIANCE"] is None
        assert "ZZZZ" in errors["ZZZZ"]
        assert "Loaded data for 1/2 symbols" in outcome.execution_steps

    def test_unavailable_model_answers_from_data(self) -> None:
        assistant = ScriptedAssistant(available=False)
        outcome = _use_case(assistant, _market_data()).process("RELIANCE price today")
        assert outcome.response.startswith("Here's the current data for RELIANCE:")
        assert "Data as of: 2024-03-01 15:30:00" in outcome.response
        assert outcome.execution_steps[-1] == "Language model unavailable; answered from live data"

    def test_unavailable_model_without_data_is_busy(self) -> None:
        assistant = ScriptedAssistant(available=False)
        outcome = _use_case(assistant, _market_data()).process("Explain compound interest")
        assert outcome.response == BUSY_REPLY

    def test_execute_persists_exchange(self) -> None:
        history = InMemoryChatHistoryRepository()
        use_case = _use_case(ScriptedAssistant(), _market_data(), history=history)
        exchange = use_case.execute(ChatCommand(message="RELIANCE price", user_id="u1"))

        assert exchange.message.response == "LLM answer"
        assert exchange.outcome.response == "LLM answer"
        stored = history.recent("u1", 10)
        assert [m.message for m in stored] == ["RELIANCE price"]


class TestAnswerMessage:
    """Tests for AnswerMessageUseCase."""

    def test_delegates_to_assistant(self) -> None:
        reply = AnswerMessageUseCase(ScriptedAssistant()).execute(ChatCommand(message="hi"))
        assert reply.response == "quick: hi"
        assert reply.action_type is ActionType.GENERAL
