"""Exceptions raised by the service layer."""


class VegasError(Exception):
    """Base class for service errors."""


class UnsupportedSymbolError(VegasError, ValueError):
    """Symbol is not in the supported catalogue."""

    def __init__(self, symbol: str):
        super().__init__(f"Unsupported symbol: {symbol}")
        self.symbol = symbol


class MarketDataError(VegasError):
    """Candle data could not be fetched."""


class LineApiError(VegasError):
    """LINE Messaging API returned a non-success status."""

    def __init__(self, status_code: int, detail: str = ""):
        message = f"LINE API error: {status_code}"
        if detail:
            message = f"{message} {detail}"
        super().__init__(message)
        self.status_code = status_code
