"""
Use case: Answer a chat query using live market data.

Input: ChatCommand (message, user_id)
Output: ChatExchange (persisted message + outcome)
Side effects: Calls market, news and language model providers;
    stores the exchange in the chat history.
Failure cases: None. Provider failures are recorded per symbol, and a
    language model failure falls back to a data summary.

Workflow:
    1. Classify the query
    2. Fetch quote, indicators and (for indices) news per symbol
    3. Ask the assistant with the gathered data
    4. Fall back to a data summary if the assistant is unavailable
    5. Persist the exchange
"""

import logging
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime

from stockguru.application.assistant.dtos import ChatCommand, ChatExchange
from stockguru.application.market.dtos import (
    GetQuoteQuery,
    GetStockNewsQuery,
    GetTechnicalIndicatorsQuery,
)
from stockguru.application.market.get_quote import GetQuoteUseCase
from stockguru.application.market.get_stock_news import GetStockNewsUseCase
from stockguru.application.market.get_technical_indicators import (
    GetTechnicalIndicatorsUseCase,
)
from stockguru.domain.accounts.entities import ChatMessage
from stockguru.domain.accounts.ports import ChatHistoryRepository
from stockguru.domain.assistant.entities import (
    ChatOutcome,
    QueryType,
    SymbolData,
)
from stockguru.domain.assistant.errors import LanguageModelUnavailableError
from stockguru.domain.assistant.fallback_replies import BUSY_REPLY, data_reply
from stockguru.domain.assistant.ports import ChatAssistantPort
from stockguru.domain.market.errors import MarketDomainError
from stockguru.domain.market.symbols import NEWS_INDICES

logger = logging.getLogger(__name__)

NEWS_PER_INDEX = 3
MAX_FETCH_WORKERS = 4


class ProcessChatUseCase:
    """Orchestrates classification, data gathering and the assistant answer."""

    def __init__(
        self,
        assistant: ChatAssistantPort,
        get_quote: GetQuoteUseCase,
        get_indicators: GetTechnicalIndicatorsUseCase,
        get_news: GetStockNewsUseCase,
        history: ChatHistoryRepository,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._assistant = assistant
        self._get_quote = get_quote
        self._get_indicators = get_indicators
        self._get_news = get_news
        self._history = history
        self._clock = clock

    def execute(self, command: ChatCommand) -> ChatExchange:
        """Run the chat use case."""
        outcome = self.process(command.message)
        message = self._history.save(
            ChatMessage(
                message=command.message,
                response=outcome.response,
                user_id=command.user_id,
            )
        )
        logger.info(
            "Chat answered: type=%s symbols=%s steps=%d",
            outcome.classification.type.value,
            [d.symbol for d in outcome.data_used],
            len(outcome.execution_steps),
        )
        return ChatExchange(message=message, outcome=outcome)

    def process(self, query: str) -> ChatOutcome:
        """Answer a query without persisting it."""
        steps: list[str] = []

        classification = self._assistant.classify(query)
        steps.append(
            f"Query classified as {classification.type.value} "
            f"(confidence {classification.confidence:.0%})"
        )

        data: list[SymbolData] = []
        wants_data = classification.type in (QueryType.MARKET_DATA, QueryType.MIXED)
        if wants_data and classification.stock_symbols:
            steps.append(
                "Fetching live data for " + ", ".join(classification.stock_symbols)
            )
            data = self._gather(classification.stock_symbols)
            loaded = sum(1 for d in data if d.error is None)
            steps.append(f"Loaded data for {loaded}/{len(data)} symbols")

        try:
            response = self._assistant.answer_with_context(query, classification, data)
            steps.append("Generated answer with language model")
        except LanguageModelUnavailableError as exc:
            logger.warning("Language model unavailable, using data fallback: %s", exc.reason)
            response = self._fallback(data)
            steps.append("Language model unavailable; answered from live data")

        return ChatOutcome(
            response=response,
            classification=classification,
            data_used=tuple(data),
            execution_steps=tuple(steps),
        )

    def _gather(self, symbols: tuple[str, ...]) -> list[SymbolData]:
        workers = min(MAX_FETCH_WORKERS, len(symbols))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(self._fetch_symbol, symbols))

    def _fetch_symbol(self, symbol: str) -> SymbolData:
        try:
            quote = self._get_quote.execute(GetQuoteQuery(symbol))
        except MarketDomainError as exc:
            logger.warning("Chat data fetch failed for %s: %s", symbol, exc.message)
            return SymbolData(symbol=symbol, error=exc.message)

        try:
            indicators = self._get_indicators.execute(GetTechnicalIndicatorsQuery(symbol))
        except MarketDomainError as exc:
            logger.info("No indicators for %s: %s", symbol, exc.message)
            indicators = None

        news = ()
        if symbol in NEWS_INDICES:
            news = tuple(
                self._get_news.execute(GetStockNewsQuery(symbol))[:NEWS_PER_INDEX]
            )

        return SymbolData(symbol=symbol, quote=quote, indicators=indicators, news=news)

    def _fallback(self, data: list[SymbolData]) -> str:
        for item in data:
            if item.quote is not None:
                return data_reply(item, self._clock())
        return BUSY_REPLY
