"""
Tests for the assistant infrastructure adapters.

Provider SDK clients are replaced by MagicMock; adapters on top of the
gateway use a scripted LanguageModelPort. No network calls.
"""

import json
from datetime import datetime
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock

import groq
import openai
import pytest

from stockguru.domain.assistant.entities import (
    ActionType,
    QueryClassification,
    QueryType,
    SymbolData,
)
from stockguru.domain.assistant.errors import LanguageModelUnavailableError
from stockguru.domain.assistant.fallback_replies import DEFAULT_SUGGESTIONS
from stockguru.domain.assistant.ports import LanguageModelPort
from stockguru.domain.market.entities import (
    NEUTRAL_SENTIMENT,
    Direction,
    RiskLevel,
    SentimentLabel,
)
from stockguru.infrastructure.assistant.chat_assistant import (
    LlmChatAssistant,
    market_context,
)
from stockguru.infrastructure.assistant.llm_gateway import (
    ChatProvider,
    FallbackLanguageModel,
)
from stockguru.infrastructure.assistant.market_analyst import (
    UNAVAILABLE_REASONING,
    LlmMarketAnalyst,
)
from stockguru.infrastructure.assistant.prompt_loader import (
    DEFAULT_SYSTEM_PROMPT,
    PromptLoader,
)
from fakes import SNAPSHOT, make_article, make_quote


def _completion(content: str) -> SimpleNamespace:
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def _client(content: str = "", error: Exception = None) -> MagicMock:
    client = MagicMock()
    if error is not None:
        client.chat.completions.create.side_effect = error
    else:
        client.chat.completions.create.return_value = _completion(content)
    return client


class ScriptedModel(LanguageModelPort):
    """Returns queued replies; raises LanguageModelUnavailableError when empty."""

    def __init__(self, *replies: str) -> None:
        self.replies = list(replies)
        self.calls: list[dict] = []

    def complete(self, system_prompt, user_prompt, json_mode=False, temperature=None, max_tokens=None):
        self.calls.append(
            {"system": system_prompt, "user": user_prompt, "json_mode": json_mode}
        )
        if not self.replies:
            raise LanguageModelUnavailableError("scripted model exhausted")
        return self.replies.pop(0)


@pytest.fixture
def prompts() -> PromptLoader:
    return PromptLoader()


class TestFallbackLanguageModel:
    """Tests for the Groq/OpenAI gateway."""

    def test_first_provider_answers(self) -> None:
        groq_client = _client("  hello  ")
        openai_client = _client("unused")
        llm = FallbackLanguageModel(
            [ChatProvider("groq", groq_client, "llama"), ChatProvider("openai", openai_client, "gpt")],
            temperature=0.2,
            max_tokens=50,
        )

        assert llm.complete("sys", "user") == "hello"
        kwargs = groq_client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "llama"
        assert kwargs["temperature"] == 0.2
        assert kwargs["max_tokens"] == 50
        assert kwargs["messages"][0] == {"role": "system", "content": "sys"}
        assert "response_format" not in kwargs
        openai_client.chat.completions.create.assert_not_called()

    def test_falls_back_on_provider_error(self) -> None:
        llm = FallbackLanguageModel(
            [
                ChatProvider("groq", _client(error=groq.GroqError("rate limited")), "llama"),
                ChatProvider("openai", _client("from openai"), "gpt"),
            ]
        )
        assert llm.complete("sys", "user") == "from openai"

    def test_all_providers_fail(self) -> None:
        llm = FallbackLanguageModel(
            [
                ChatProvider("groq", _client(error=groq.GroqError("rate limited")), "llama"),
                ChatProvider("openai", _client(error=openai.OpenAIError("no quota")), "gpt"),
            ]
        )
        with pytest.raises(LanguageModelUnavailableError) as exc_info:
            llm.complete("sys", "user")
        assert "groq: rate limited" in exc_info.value.reason
        assert "openai: no quota" in exc_info.value.reason

    def test_no_providers(self) -> None:
        with pytest.raises(LanguageModelUnavailableError):
            FallbackLanguageModel([]).complete("sys", "user")

    def test_json_mode_and_overrides(self) -> None:
        client = _client("{}")
        llm = FallbackLanguageModel([ChatProvider("groq", client, "llama")])
        llm.complete("sys", "user", json_mode=True, temperature=0.0, max_tokens=10)
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["response_format"] == {"type": "json_object"}
        assert kwargs["temperature"] == 0.0
        assert kwargs["max_tokens"] == 10

    def test_provider_names(self) -> None:
        llm = FallbackLanguageModel([ChatProvider("groq", _client(), "llama")])
        assert llm.provider_names == ["groq"]


class TestMarketAnalyst:
    """Tests for LlmMarketAnalyst."""

    def test_sentiment_parsing_and_clamping(self, prompts) -> None:
        llm = ScriptedModel(json.dumps({"sentiment": "Positive", "score": 140, "confidence": 0.8}))
        result = LlmMarketAnalyst(llm, prompts).analyze_sentiment("Shares surge")
        assert result.sentiment is SentimentLabel.POSITIVE
        assert result.score == 100.0
        assert result.confidence == 0.8
        assert llm.calls[0]["json_mode"] is True
        assert llm.calls[0]["user"] == "Shares surge"

    def test_sentiment_unknown_label(self, prompts) -> None:
        llm = ScriptedModel(json.dumps({"sentiment": "mixed", "score": 40, "confidence": 2}))
        result = LlmMarketAnalyst(llm, prompts).analyze_sentiment("text")
        assert result.sentiment is SentimentLabel.NEUTRAL
        assert result.confidence == 1.0

    @pytest.mark.parametrize("reply", ["not json", "[1, 2]"])
    def test_sentiment_bad_reply_is_neutral(self, prompts, reply: str) -> None:
        assert LlmMarketAnalyst(ScriptedModel(reply), prompts).analyze_sentiment("t") == NEUTRAL_SENTIMENT

    def test_sentiment_unavailable_is_neutral(self, prompts) -> None:
        assert LlmMarketAnalyst(ScriptedModel(), prompts).analyze_sentiment("t") == NEUTRAL_SENTIMENT

    def test_insight(self, prompts) -> None:
        reply = {
            "prediction": {
                "direction": "BULLISH",
                "confidence": 120,
                "targetPrice": 2650,
                "timeframe": "1 week",
            },
            "reasoning": "Strong momentum.",
            "riskLevel": "low",
        }
        llm = ScriptedModel(json.dumps(reply))
        insight = LlmMarketAnalyst(llm, prompts).generate_insight(
            "reliance", SNAPSHOT, 2500.0, [make_article()]
        )

        assert insight.symbol == "RELIANCE"
        assert insight.prediction.direction is Direction.BULLISH
        assert insight.prediction.confidence == 100.0
        assert insight.prediction.target_price == 2650.0
        assert insight.prediction.timeframe == "1 week"
        assert insight.risk_level is RiskLevel.LOW
        prompt = llm.calls[0]["user"]
        assert "Analyze the stock RELIANCE" in prompt
        assert "RSI: 72.50" in prompt
        assert "Recent News Sentiment: 1 articles analyzed" in prompt

    def test_insight_defaults(self, prompts) -> None:
        insight = LlmMarketAnalyst(ScriptedModel("{}"), prompts).generate_insight(
            "TCS", SNAPSHOT, 3500.0, []
        )
        assert insight.prediction.direction is Direction.NEUTRAL
        assert insight.prediction.confidence == 50.0
        assert insight.prediction.target_price is None
        assert insight.risk_level is RiskLevel.MEDIUM

    def test_insight_unavailable(self, prompts) -> None:
        insight = LlmMarketAnalyst(ScriptedModel(), prompts).generate_insight(
            "TCS", SNAPSHOT, 3500.0, []
        )
        assert insight.reasoning == UNAVAILABLE_REASONING
        assert insight.prediction.direction is Direction.NEUTRAL


class TestChatAssistant:
    """Tests for LlmChatAssistant."""

    def test_answer_json(self, prompts) -> None:
        llm = ScriptedModel(json.dumps({"response": "NIFTY is up.", "suggestions": ["a", "b"]}))
        reply = LlmChatAssistant(llm, prompts).answer("How is NIFTY?")
        assert reply.response == "NIFTY is up."
        assert reply.suggestions == ("a", "b")
        assert reply.action_type is ActionType.STOCK_QUERY

    def test_answer_plain_text(self, prompts) -> None:
        reply = LlmChatAssistant(ScriptedModel("Just text"), prompts).answer("hello there")
        assert reply.response == "Just text"
        assert reply.suggestions == DEFAULT_SUGGESTIONS
        assert reply.action_type is ActionType.GENERAL

    def test_answer_unavailable_uses_fallback(self, prompts) -> None:
        reply = LlmChatAssistant(ScriptedModel(), prompts).answer("Tell me about TCS")
        assert "TCS analysis" in reply.response

    def test_classify_extracts_embedded_json(self, prompts) -> None:
        content = (
            'Sure! {"type": "MIXED", "confidence": 0.85, "stockSymbols": ["sbin", "SBIN", "nifty"],'
            ' "needsLiveData": true, "explanation": "both"} Hope that helps.'
        )
        llm = ScriptedModel(content)
        result = LlmChatAssistant(llm, prompts).classify("What is RSI for SBIN?")
        assert result.type is QueryType.MIXED
        assert result.confidence == 0.85
        assert result.stock_symbols == ("SBIN", "NIFTY")
        assert result.needs_live_data is True
        assert 'User Query: "What is RSI for SBIN?"' in llm.calls[0]["user"]

    def test_classify_unknown_type(self, prompts) -> None:
        result = LlmChatAssistant(ScriptedModel('{"type": "OTHER"}'), prompts).classify("x")
        assert result.type is QueryType.GENERAL_EXPLANATION
        assert result.confidence == 0.7

    @pytest.mark.parametrize("replies", [(), ("no json here",), ("{broken",)])
    def test_classify_falls_back_to_rules(self, prompts, replies) -> None:
        result = LlmChatAssistant(ScriptedModel(*replies), prompts).classify("TCS price today")
        assert result.type is QueryType.MARKET_DATA
        assert result.confidence == 0.9

    def test_answer_with_context_includes_data(self, prompts) -> None:
        llm = ScriptedModel("Answer")
        classification = QueryClassification(
            type=QueryType.MARKET_DATA,
            confidence=0.9,
            stock_symbols=("RELIANCE",),
            needs_live_data=True,
            explanation="",
        )
        data = [SymbolData(symbol="RELIANCE", quote=make_quote(), indicators=SNAPSHOT)]

        assert LlmChatAssistant(llm, prompts).answer_with_context("price?", classification, data) == "Answer"
        call = llm.calls[0]
        assert call["system"] == prompts.role_prompt("contextual", "MARKET_DATA")
        assert "RELIANCE:" in call["user"]
        assert "- Price: ₹2500.00" in call["user"]

    def test_answer_with_context_propagates_unavailable(self, prompts) -> None:
        classification = QueryClassification(
            type=QueryType.GENERAL_EXPLANATION,
            confidence=0.7,
            stock_symbols=(),
            needs_live_data=False,
            explanation="",
        )
        with pytest.raises(LanguageModelUnavailableError):
            LlmChatAssistant(ScriptedModel(), prompts).answer_with_context("q", classification, [])

    def test_market_context_skips_failed_symbols(self) -> None:
        data = [
            SymbolData(symbol="ZZZZ", error="not found"),
            SymbolData(
                symbol="NIFTY",
                quote=make_quote("NIFTY", price=22000.0, change=-110.0),
                news=(make_article(title="Markets slip"),),
            ),
        ]
        text = market_context(data, datetime(2024, 3, 1, 15, 30))
        assert "ZZZZ" not in text
        assert "- Change: -110.00" in text
        assert "- Latest News: Markets slip" in text
        assert "RSI" not in text
        assert "Data as of: 2024-03-01 15:30:00" in text


class TestPromptLoader:
    """Tests for PromptLoader."""

    def test_shipped_prompts_load(self, prompts) -> None:
        assert "StockGuru" in prompts.system_prompt("chat")
        assert prompts.role_prompt("contextual", "MIXED") != DEFAULT_SYSTEM_PROMPT

    def test_missing_file_uses_defaults(self, tmp_path: Path) -> None:
        loader = PromptLoader(tmp_path / "missing.yaml")
        assert loader.system_prompt("chat") == DEFAULT_SYSTEM_PROMPT
        assert loader.render("insight", symbol="TCS", rsi=50) == "symbol: TCS\nrsi: 50"

    def test_custom_file(self, tmp_path: Path) -> None:
        path = tmp_path / "prompts.yaml"
        path.write_text("greet:\n  system: Hi\n  user_template: 'Hello {name}'\n", encoding="utf-8")
        loader = PromptLoader(path)
        assert loader.system_prompt("greet") == "Hi"
        assert loader.render("greet", name="Asha") == "Hello Asha"
        assert loader.role_prompt("greet", "ANY") == DEFAULT_SYSTEM_PROMPT
