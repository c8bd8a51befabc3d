"""
Domain service: NSE symbol rules.

Maps user-facing symbols and index aliases to provider tickers,
extracts stock symbols mentioned in free text, and resolves news
source display names. Pure functions over strings.
"""

import re

from stockguru.domain.market.entities import SearchResult

NSE_SUFFIX = ".NS"

# User-facing index aliases -> Yahoo Finance tickers
INDEX_TICKERS: dict[str, str] = {
    "NIFTY": "^NSEI",
    "NIFTY50": "^NSEI",
    "SENSEX": "^BSESN",
    "NIFTYBANK": "^NSEBANK",
    "NIFTYIT": "^CNXIT",
    "NIFTYPHARMA": "^CNXPHARMA",
    "NIFTYFMCG": "^CNXFMCG",
    "NIFTYAUTO": "^CNXAUTO",
}

# Benchmarks shown on the dashboard header: (ticker, display name)
BENCHMARK_INDICES: tuple[tuple[str, str], ...] = (
    ("^NSEI", "NIFTY 50"),
    ("^BSESN", "SENSEX"),
    ("^NSEBANK", "BANK NIFTY"),
    ("^CNXIT", "NIFTY IT"),
)

SEARCHABLE_INDICES: tuple[SearchResult, ...] = (
    SearchResult(symbol="NIFTY", name="NIFTY 50 Index"),
    SearchResult(symbol="NIFTY50", name="NIFTY 50 Index"),
    SearchResult(symbol="NIFTYBANK", name="NIFTY Bank Index"),
    SearchResult(symbol="NIFTYIT", name="NIFTY IT Index"),
    SearchResult(symbol="NIFTYPHARMA", name="NIFTY Pharma Index"),
    SearchResult(symbol="NIFTYFMCG", name="NIFTY FMCG Index"),
    SearchResult(symbol="NIFTYAUTO", name="NIFTY Auto Index"),
    SearchResult(symbol="SENSEX", name="BSE SENSEX Index"),
)

# Indices that get headline news attached in chat answers
NEWS_INDICES = frozenset({"NIFTY", "NIFTY50", "SENSEX"})

# Name or alias as written in news -> canonical NSE symbol
_NEWS_ALIASES: tuple[tuple[str, str], ...] = (
    ("RELIANCE", "RELIANCE"),
    ("RIL", "RELIANCE"),
    ("TCS", "TCS"),
    ("TATA CONSULTANCY", "TCS"),
    ("INFY", "INFY"),
    ("INFOSYS", "INFY"),
    ("HDFCBANK", "HDFCBANK"),
    ("HDFC BANK", "HDFCBANK"),
    ("ICICIBANK", "ICICIBANK"),
    ("ICICI BANK", "ICICIBANK"),
    ("BHARTIARTL", "BHARTIARTL"),
    ("BHARTI AIRTEL", "BHARTIARTL"),
    ("SBIN", "SBIN"),
    ("SBI", "SBIN"),
    ("LT", "LT"),
    ("LARSEN", "LT"),
    ("ASIANPAINT", "ASIANPAINT"),
    ("ASIAN PAINTS", "ASIANPAINT"),
    ("MARUTI", "MARUTI"),
    ("MARUTI SUZUKI", "MARUTI"),
)

_NEWS_ALIAS_PATTERN = re.compile(
    r"\b("
    + "|".join(
        re.escape(alias)
        for alias, _ in sorted(_NEWS_ALIASES, key=lambda a: -len(a[0]))
    )
    + r")\b",
    re.IGNORECASE,
)
_CANONICAL_BY_ALIAS = dict(_NEWS_ALIASES)

NEWS_SOURCE_NAMES: dict[str, str] = {
    "economictimes.indiatimes.com": "Economic Times",
    "business-standard.com": "Business Standard",
    "livemint.com": "Mint",
    "moneycontrol.com": "MoneyControl",
    "zeebiz.com": "Zee Business",
}


def to_provider_symbol(symbol: str) -> str:
    """Return the Yahoo Finance ticker for a user-facing symbol.

    Index aliases map to their caret tickers. A bare symbol is treated as
    an NSE listing and gets the ``.NS`` suffix. Symbols that already carry
    an exchange suffix or a caret are passed through unchanged.
    """
    upper = symbol.strip().upper()
    if upper in INDEX_TICKERS:
        return INDEX_TICKERS[upper]
    if "." in upper or upper.startswith("^"):
        return upper
    return f"{upper}{NSE_SUFFIX}"


def from_provider_symbol(ticker: str) -> str:
    """Strip the NSE suffix from a provider ticker."""
    if ticker.upper().endswith(NSE_SUFFIX):
        return ticker[: -len(NSE_SUFFIX)]
    return ticker


def search_index_catalog(query: str) -> list[SearchResult]:
    """Return indices whose symbol or name contains the query (case-insensitive)."""
    needle = query.strip().lower()
    return [
        index
        for index in SEARCHABLE_INDICES
        if needle in index.symbol.lower() or needle in index.name.lower()
    ]


def extract_symbols(text: str) -> list[str]:
    """Return canonical symbols of the large caps mentioned in a text.

    Symbols are returned once each, in order of first mention.
    """
    found: list[str] = []
    for match in _NEWS_ALIAS_PATTERN.finditer(text):
        symbol = _CANONICAL_BY_ALIAS[match.group(1).upper()]
        if symbol not in found:
            found.append(symbol)
    return found


def source_name(url: str) -> str:
    """Return a display name for a news URL, or the URL itself."""
    for domain, name in NEWS_SOURCE_NAMES.items():
        if domain in url:
            return name
    return url
