"""
Domain service: Canned assistant replies.

Used when the language model cannot answer. Replies point the user to
the live dashboard data and offer follow-up suggestions that match
the intent of the message.
"""

from datetime import datetime

from stockguru.domain.assistant.entities import (
    ActionType,
    AssistantReply,
    SymbolData,
)
from stockguru.domain.assistant.query_rules import (
    determine_action_type,
    primary_symbol,
)

RSI_OVERBOUGHT = 70.0
RSI_OVERSOLD = 30.0

DEFAULT_SUGGESTIONS = (
    "Check NIFTY trends",
    "Analyze TCS fundamentals",
    "Show technical indicators for RELIANCE",
)

BUSY_REPLY = (
    "I'm currently experiencing high API demand. Please check the live stock "
    "data displayed above in the dashboard - it includes current prices, "
    "technical indicators, and news updates that refresh automatically."
)

_PRICE_WORDS = ("price", "current", "quote")


def _asks_for_price(lower: str) -> bool:
    return any(word in lower for word in _PRICE_WORDS)


def fallback_reply(message: str) -> AssistantReply:
    """Return a canned reply for a message the language model could not answer."""
    lower = message.lower()
    action_type = determine_action_type(message)
    symbol = primary_symbol(message)

    if action_type is ActionType.STOCK_QUERY and symbol:
        if _asks_for_price(lower):
            return AssistantReply(
                response=(
                    f"I can see you're asking about {symbol}'s current price. "
                    "The live data is displayed in the stock information section "
                    "above. While I'm experiencing high API demand, you can view "
                    "the real-time price, change percentage, and other key metrics "
                    "in the main dashboard."
                ),
                suggestions=(
                    f"View {symbol} detailed analysis",
                    f"Check {symbol} technical indicators",
                    f"Get {symbol} market news",
                ),
                action_type=ActionType.STOCK_QUERY,
            )
        return AssistantReply(
            response=(
                f"I'm here to help with {symbol} analysis! While experiencing high "
                "API demand, you can find comprehensive live data above including "
                "current price, technical indicators (RSI, MACD, SMA), and recent news."
            ),
            suggestions=(
                f"View {symbol} price trends",
                f"Analyze {symbol} technical signals",
                f"Check latest {symbol} news",
            ),
            action_type=ActionType.STOCK_QUERY,
        )

    if action_type is ActionType.TECHNICAL_ANALYSIS:
        return AssistantReply(
            response=(
                "I can help explain technical indicators! Check the technical "
                "analysis section above for RSI, MACD, and moving averages. These "
                "indicators help identify trends, momentum, and potential "
                "entry/exit points."
            ),
            suggestions=(
                "Explain RSI indicator meaning",
                "How to read MACD signals",
                "Moving averages strategy",
            ),
            action_type=ActionType.TECHNICAL_ANALYSIS,
        )

    if action_type is ActionType.MARKET_INSIGHT:
        return AssistantReply(
            response=(
                "For current market trends and insights, I recommend checking the "
                "latest news and technical analysis sections. The Indian markets "
                "are influenced by global cues, sectoral performance, and economic "
                "indicators."
            ),
            suggestions=(
                "Check NIFTY 50 performance",
                "Analyze sector rotation trends",
                "Review market sentiment indicators",
            ),
            action_type=ActionType.MARKET_INSIGHT,
        )

    if _asks_for_price(lower):
        return AssistantReply(
            response=(
                "I'm currently experiencing high API demand. To check current "
                "prices, please use the search box above to select a specific "
                "stock or index."
            ),
            suggestions=(
                "Search for a specific stock (e.g., RELIANCE, TCS)",
                "Check NIFTY index performance",
                "View technical analysis section",
            ),
            action_type=ActionType.GENERAL,
        )

    return AssistantReply(
        response=(
            "I'm your StockGuru AI assistant! I can help with Indian stock "
            "analysis, technical indicators, market trends, and investment "
            "insights. While experiencing high API demand, you can explore "
            "real-time data using the search and dashboard above."
        ),
        suggestions=(
            "Search for a specific stock to analyze",
            "View technical indicators in the dashboard",
            "Check market news and trends",
        ),
        action_type=ActionType.GENERAL,
    )


def rsi_label(rsi: float) -> str:
    """Return the conventional reading of an RSI value."""
    if rsi > RSI_OVERBOUGHT:
        return "Overbought"
    if rsi < RSI_OVERSOLD:
        return "Oversold"
    return "Neutral"


def data_reply(data: SymbolData, as_of: datetime) -> str:
    """Summarize live data for one symbol as a plain-text answer.

    Args:
        data: Data gathered for the symbol; ``data.quote`` must be set.
        as_of: Time the data was gathered.
    """
    quote = data.quote
    if quote is None:
        raise ValueError(f"No quote available for {data.symbol}")

    sign = "+" if quote.change >= 0 else ""
    lines = [
        f"Here's the current data for {data.symbol}:",
        "",
        f"Current Price: ₹{quote.price:.2f}",
        f"Change: {sign}{quote.change:.2f} ({quote.change_percent:.2f}%)",
        f"Volume: {quote.volume:,}",
    ]

    indicators = data.indicators
    if indicators is not None:
        macd_label = "Bullish" if indicators.macd > 0 else "Bearish"
        lines += [
            "",
            "Technical Analysis:",
            f"• RSI: {indicators.rsi:.1f} ({rsi_label(indicators.rsi)})",
            f"• MACD: {indicators.macd:.2f} ({macd_label})",
            f"• SMA(20): ₹{indicators.sma20:.2f}",
        ]

    lines += [
        "",
        f"Data as of: {as_of:%Y-%m-%d %H:%M:%S}",
        "",
        "Note: AI analysis temporarily unavailable due to high demand, "
        "but live data is current.",
    ]
    return "\n".join(lines)
