"""
Adapter: LLM-backed market analyst.

Implements MarketAnalystPort. Model output is parsed as JSON and
normalized into domain entities; scores are clamped to their ranges and
unknown labels fall back to neutral values. Any failure yields a neutral
result instead of an error.
"""

import json
import logging
from typing import Any

from stockguru.domain.assistant.errors import LanguageModelUnavailableError
from stockguru.domain.assistant.ports import LanguageModelPort
from stockguru.domain.market.entities import (
    NEUTRAL_SENTIMENT,
    Direction,
    IndicatorSnapshot,
    InsightPrediction,
    NewsArticle,
    RiskLevel,
    SentimentAnalysis,
    SentimentLabel,
    StockInsight,
)
from stockguru.domain.market.ports import MarketAnalystPort
from stockguru.infrastructure.assistant.prompt_loader import PromptLoader

logger = logging.getLogger(__name__)

DEFAULT_TIMEFRAME = "1 month"
DEFAULT_REASONING = "Analysis based on current technical indicators."
UNAVAILABLE_REASONING = "Unable to generate insight at this time."


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _enum_or(enum_cls, value: Any, default):
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        return default


def _json_object(content: str) -> dict[str, Any]:
    data = json.loads(content)
    if not isinstance(data, dict):
        raise ValueError("expected a JSON object")
    return data


class LlmMarketAnalyst(MarketAnalystPort):
    """Sentiment scoring and stock insights from a language model."""

    def __init__(self, llm: LanguageModelPort, prompts: PromptLoader) -> None:
        self._llm = llm
        self._prompts = prompts

    def analyze_sentiment(self, text: str) -> SentimentAnalysis:
        try:
            result = _json_object(
                self._llm.complete(
                    self._prompts.system_prompt("sentiment"), text, json_mode=True
                )
            )
            return SentimentAnalysis(
                sentiment=_enum_or(
                    SentimentLabel, result.get("sentiment"), SentimentLabel.NEUTRAL
                ),
                score=_clamp(float(result.get("score") or 50), 0.0, 100.0),
                confidence=_clamp(float(result.get("confidence") or 0.5), 0.0, 1.0),
            )
        except (LanguageModelUnavailableError, ValueError, TypeError) as exc:
            logger.warning("Sentiment analysis failed, using neutral: %s", exc)
            return NEUTRAL_SENTIMENT

    def generate_insight(
        self,
        symbol: str,
        indicators: IndicatorSnapshot,
        current_price: float,
        news: list[NewsArticle],
    ) -> StockInsight:
        symbol = symbol.upper()
        prompt = self._prompts.render(
            "insight",
            symbol=symbol,
            rsi=indicators.rsi,
            macd=indicators.macd,
            sma20=indicators.sma20,
            current_price=current_price,
            news_line=(
                f"Recent News Sentiment: {len(news)} articles analyzed" if news else ""
            ),
        )
        try:
            result = _json_object(
                self._llm.complete(self._prompts.system_prompt("insight"), prompt, json_mode=True)
            )
            prediction = result.get("prediction") or {}
            target = prediction.get("targetPrice")
            return StockInsight(
                symbol=symbol,
                prediction=InsightPrediction(
                    direction=_enum_or(Direction, prediction.get("direction"), Direction.NEUTRAL),
                    confidence=_clamp(float(prediction.get("confidence") or 50), 0.0, 100.0),
                    timeframe=prediction.get("timeframe") or DEFAULT_TIMEFRAME,
                    target_price=float(target) if target is not None else None,
                ),
                reasoning=result.get("reasoning") or DEFAULT_REASONING,
                risk_level=_enum_or(RiskLevel, result.get("riskLevel"), RiskLevel.MEDIUM),
            )
        except (LanguageModelUnavailableError, ValueError, TypeError, AttributeError) as exc:
            logger.warning("Insight generation failed for %s: %s", symbol, exc)
            return StockInsight(
                symbol=symbol,
                prediction=InsightPrediction(
                    direction=Direction.NEUTRAL,
                    confidence=50.0,
                    timeframe=DEFAULT_TIMEFRAME,
                ),
                reasoning=UNAVAILABLE_REASONING,
                risk_level=RiskLevel.MEDIUM,
            )
