"""
Domain service: Rule-based chat query analysis.

Keyword and pattern rules used when no language model is available:
    - Symbol detection (tickers, index names, common company names)
    - Query classification (live data vs. explanation vs. both)
    - Action type detection for suggestion selection

Pure functions over the query text.
"""

import re

from stockguru.domain.assistant.entities import (
    ActionType,
    QueryClassification,
    QueryType,
)

_TICKER_PATTERN = re.compile(r"\b[A-Z]{2,6}\b")
_ACTION_TICKER_PATTERN = re.compile(r"\b[A-Z]{2,10}\b")

# Upper-case tokens that look like tickers but name indicators or venues
NON_SYMBOL_TOKENS = frozenset(
    {"RSI", "MACD", "SMA", "EMA", "BOLLINGER", "STOCHASTIC", "NSE", "BSE"}
)

KNOWN_INDICES: dict[str, str] = {
    "banknifty": "NIFTYBANK",
    "niftybank": "NIFTYBANK",
    "nifty": "NIFTY",
    "sensex": "SENSEX",
}

# Company names as typed in chat -> NSE symbol
COMPANY_NAMES: dict[str, str] = {
    "reliance": "RELIANCE",
    "tcs": "TCS",
    "infosys": "INFY",
    "infy": "INFY",
    "hdfc": "HDFCBANK",
    "icici": "ICICIBANK",
    "state bank": "SBIN",
    "sbi": "SBIN",
    "wipro": "WIPRO",
    "bharti": "BHARTIARTL",
    "itc": "ITC",
    "hindunilvr": "HINDUNILVR",
    "adani": "ADANIPORTS",
    "bajaj": "BAJFINANCE",
}

MARKET_DATA_KEYWORDS = (
    "price", "current", "today", "latest", "now", "recent", "live",
    "performance", "chart", "graph", "technical", "rsi", "macd",
    "news", "analysis", "trend", "movement", "volume",
)

EDUCATION_KEYWORDS = (
    "what is", "how to", "explain", "definition", "meaning", "concept",
    "calculate", "formula", "example", "difference between", "types of",
)

TECHNICAL_TERMS = (
    "rsi", "macd", "sma", "ema", "bollinger", "technical", "chart", "indicator",
)
MARKET_TERMS = (
    "nifty", "sensex", "market", "trend", "prediction", "economy", "sector",
)
STOCK_TERMS = (
    "price", "stock", "share", "company", "reliance", "tcs", "infosys",
    "hdfc", "icici", "sbi", "adani",
)


def _contains_any(text: str, terms: tuple[str, ...]) -> bool:
    return any(term in text for term in terms)


def detect_symbols(query: str) -> list[str]:
    """Return the stock and index symbols a query refers to.

    Order: explicit upper-case tickers, then index names, then company
    names. Each symbol appears once.
    """
    lower = query.lower()
    candidates = [
        token
        for token in _TICKER_PATTERN.findall(query)
        if token not in NON_SYMBOL_TOKENS
    ]
    candidates += [
        symbol for name, symbol in KNOWN_INDICES.items() if name in lower
    ]
    candidates += [
        symbol for name, symbol in COMPANY_NAMES.items() if name in lower
    ]

    symbols: list[str] = []
    for symbol in candidates:
        if symbol and symbol not in symbols:
            symbols.append(symbol)
    return symbols


def classify_query(query: str) -> QueryClassification:
    """Classify a query with keyword rules.

    Education wording combined with market wording or symbols means the
    user wants a concept explained on live data (MIXED). Market wording
    or symbols alone means MARKET_DATA. Anything else is educational.
    """
    lower = query.lower()
    symbols = tuple(detect_symbols(query))
    has_market_data = _contains_any(lower, MARKET_DATA_KEYWORDS)
    has_education = _contains_any(lower, EDUCATION_KEYWORDS)

    if has_education and (has_market_data or symbols):
        return QueryClassification(
            type=QueryType.MIXED,
            confidence=0.8,
            stock_symbols=symbols,
            needs_live_data=True,
            explanation="Query requires both explanation and live data",
        )

    if has_market_data or symbols:
        return QueryClassification(
            type=QueryType.MARKET_DATA,
            confidence=0.9,
            stock_symbols=symbols,
            needs_live_data=True,
            explanation="Query requires live market data",
        )

    return QueryClassification(
        type=QueryType.GENERAL_EXPLANATION,
        confidence=0.7,
        stock_symbols=(),
        needs_live_data=False,
        explanation="Query is educational/explanatory",
    )


def determine_action_type(message: str) -> ActionType:
    """Return the coarse intent of a chat message.

    Stock mentions win over technical terms, which win over market terms.
    """
    lower = message.lower()
    if _ACTION_TICKER_PATTERN.search(message) or _contains_any(lower, STOCK_TERMS):
        return ActionType.STOCK_QUERY
    if _contains_any(lower, TECHNICAL_TERMS):
        return ActionType.TECHNICAL_ANALYSIS
    if _contains_any(lower, MARKET_TERMS):
        return ActionType.MARKET_INSIGHT
    return ActionType.GENERAL


def primary_symbol(message: str) -> str | None:
    """Return the single symbol a message is most likely about.

    Priority: explicit upper-case ticker, then company name, then index name.
    """
    tickers = _ACTION_TICKER_PATTERN.findall(message)
    if tickers:
        return tickers[0]
    lower = message.lower()
    for name, symbol in COMPANY_NAMES.items():
        if name in lower:
            return symbol
    for name, symbol in KNOWN_INDICES.items():
        if name in lower:
            return symbol
    return None
