"""External service clients."""

from app.clients.binance_rest import BinanceRestClient, RateLimiter
from app.clients.line_messaging import LineMessagingClient, text_message

__all__ = [
    "BinanceRestClient",
    "RateLimiter",
    "LineMessagingClient",
    "text_message",
]
