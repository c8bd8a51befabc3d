"""
Adapter: LLM-backed chat assistant.

Implements ChatAssistantPort:
    - answer: JSON reply with suggestions, canned reply on failure
    - classify: LLM classification, keyword rules on failure
    - answer_with_context: free-text answer grounded on live data
"""

import json
import logging
import re
from datetime import datetime
from typing import Any

from stockguru.domain.assistant.entities import (
    AssistantReply,
    QueryClassification,
    QueryType,
    SymbolData,
)
from stockguru.domain.assistant.errors import LanguageModelUnavailableError
from stockguru.domain.assistant.fallback_replies import (
    DEFAULT_SUGGESTIONS,
    fallback_reply,
)
from stockguru.domain.assistant.ports import ChatAssistantPort, LanguageModelPort
from stockguru.domain.assistant.query_rules import (
    classify_query,
    determine_action_type,
)
from stockguru.infrastructure.assistant.prompt_loader import PromptLoader

logger = logging.getLogger(__name__)

DEFAULT_RESPONSE = "I'm here to help you with Indian stock market queries."
_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


def market_context(data: list[SymbolData], as_of: datetime) -> str:
    """Format gathered symbol data as a prompt block. Failed symbols are skipped."""
    lines = ["", "Current Market Data:"]
    for item in data:
        quote = item.quote
        if quote is None:
            continue
        sign = "+" if quote.change >= 0 else ""
        lines += [
            "",
            f"{item.symbol}:",
            f"- Price: ₹{quote.price:.2f}",
            f"- Change: {sign}{quote.change:.2f} ({quote.change_percent:.2f}%)",
        ]
        if item.indicators is not None:
            lines += [
                f"- RSI: {item.indicators.rsi:.1f}",
                f"- MACD: {item.indicators.macd:.2f}",
            ]
        if item.news:
            lines.append(f"- Latest News: {item.news[0].title}")
    lines += ["", f"Data as of: {as_of:%Y-%m-%d %H:%M:%S}", ""]
    return "\n".join(lines)


class LlmChatAssistant(ChatAssistantPort):
    """Conversational assistant on top of a LanguageModelPort."""

    def __init__(self, llm: LanguageModelPort, prompts: PromptLoader) -> None:
        self._llm = llm
        self._prompts = prompts

    def answer(self, message: str) -> AssistantReply:
        try:
            content = self._llm.complete(
                self._prompts.system_prompt("chat"), message, json_mode=True
            )
        except LanguageModelUnavailableError as exc:
            logger.warning("Chat reply unavailable, using fallback: %s", exc.reason)
            return fallback_reply(message)

        try:
            data = json.loads(content)
        except ValueError:
            data = None
        if not isinstance(data, dict):
            data = {"response": content}

        suggestions = data.get("suggestions")
        if not isinstance(suggestions, list) or not suggestions:
            suggestions = DEFAULT_SUGGESTIONS
        return AssistantReply(
            response=str(data.get("response") or DEFAULT_RESPONSE),
            suggestions=tuple(str(s) for s in suggestions),
            action_type=determine_action_type(message),
        )

    def classify(self, query: str) -> QueryClassification:
        try:
            content = self._llm.complete(
                self._prompts.system_prompt("classifier"),
                self._prompts.render("classifier", query=query),
                json_mode=True,
            )
            match = _JSON_OBJECT.search(content)
            if match is None:
                raise ValueError("no JSON object in classifier reply")
            return self._parse_classification(json.loads(match.group(0)))
        except (LanguageModelUnavailableError, ValueError, TypeError, AttributeError) as exc:
            logger.info("LLM classification failed, using rules: %s", exc)
            return classify_query(query)

    def answer_with_context(
        self,
        query: str,
        classification: QueryClassification,
        data: list[SymbolData],
    ) -> str:
        context = ""
        if classification.needs_live_data and data:
            context = market_context(data, datetime.now())
        return self._llm.complete(
            self._prompts.role_prompt("contextual", classification.type.value),
            self._prompts.render("contextual", query=query, context=context),
        )

    @staticmethod
    def _parse_classification(result: dict[str, Any]) -> QueryClassification:
        try:
            query_type = QueryType(result.get("type"))
        except ValueError:
            query_type = QueryType.GENERAL_EXPLANATION
        symbols = result.get("stockSymbols") or []
        return QueryClassification(
            type=query_type,
            confidence=float(result.get("confidence") or 0.7),
            stock_symbols=tuple(dict.fromkeys(str(s).upper() for s in symbols)),
            needs_live_data=bool(result.get("needsLiveData")),
            explanation=str(result.get("explanation") or "Query classified using AI"),
        )
