"""Supported symbols and candle intervals."""

import re

from app.errors import UnsupportedSymbolError

# Normalized symbol -> Binance spot pair
SYMBOL_MAPPING: dict[str, str] = {
    "BTC": "BTCUSDT",
    "ETH": "ETHUSDT",
    "BNB": "BNBUSDT",
    "SOL": "SOLUSDT",
    "ADA": "ADAUSDT",
    "XRP": "XRPUSDT",
    "DOT": "DOTUSDT",
    "DOGE": "DOGEUSDT",
    "AVAX": "AVAXUSDT",
    "LINK": "LINKUSDT",
}

SYMBOL_NAMES: dict[str, str] = {
    "BTC": "Bitcoin",
    "ETH": "Ethereum",
    "BNB": "BNB",
    "SOL": "Solana",
    "ADA": "Cardano",
    "XRP": "Ripple",
    "DOT": "Polkadot",
    "DOGE": "Dogecoin",
    "AVAX": "Avalanche",
    "LINK": "Chainlink",
}

INTERVAL_LABELS: dict[str, str] = {
    "1m": "1 minute",
    "3m": "3 minutes",
    "5m": "5 minutes",
    "15m": "15 minutes",
    "30m": "30 minutes",
    "1h": "1 hour",
    "2h": "2 hours",
    "4h": "4 hours",
    "6h": "6 hours",
    "8h": "8 hours",
    "12h": "12 hours",
    "1d": "1 day",
    "3d": "3 days",
    "1w": "1 week",
    "1M": "1 month",
}

_SUFFIX = re.compile(r"(USDT|USD)$")


def normalize_symbol(symbol: str) -> str:
    """'btcusdt' -> 'BTC'."""
    return _SUFFIX.sub("", symbol.strip().upper())


def resolve_pair(symbol: str) -> str:
    """Map a user-supplied symbol to its Binance pair.

    Raises:
        UnsupportedSymbolError: If the symbol is not supported
    """
    pair = SYMBOL_MAPPING.get(normalize_symbol(symbol))
    if pair is None:
        raise UnsupportedSymbolError(symbol)
    return pair


def interval_label(interval: str) -> str:
    """Human-readable interval name (unknown intervals pass through)."""
    return INTERVAL_LABELS.get(interval, interval)


def extract_symbol(text: str, default: str = "BTC") -> str:
    """Return the first supported symbol mentioned in a chat message."""
    for word in text.split():
        candidate = word.strip().upper()
        if candidate in SYMBOL_MAPPING:
            return candidate
    return default
