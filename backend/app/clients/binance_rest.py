"""Binance REST API client for fetching candle data."""

import asyncio
import logging
from typing import Any

import httpx

from app.errors import MarketDataError
from core.models import Candle

logger = logging.getLogger(__name__)


class RateLimiter:
    """Simple rate limiter for API calls."""

    def __init__(self, calls_per_minute: int = 1200):
        self.calls_per_minute = calls_per_minute
        self.interval = 60.0 / calls_per_minute
        self.last_call = 0.0
        self._lock = asyncio.Lock()

    async def acquire(self) -> None:
        """Wait if necessary to respect rate limit."""
        async with self._lock:
            loop = asyncio.get_running_loop()
            wait_time = self.last_call + self.interval - loop.time()
            if wait_time > 0:
                await asyncio.sleep(wait_time)
            self.last_call = loop.time()


class BinanceRestClient:
    """Binance spot REST API client (public market data only)."""

    BASE_URL = "https://api.binance.com"
    MAX_LIMIT = 1000

    def __init__(
        self,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or self.BASE_URL
        self.rate_limiter = RateLimiter()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={"Accept": "application/json"},
                timeout=30.0,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _request(
        self, method: str, endpoint: str, params: dict[str, Any] | None = None
    ) -> Any:
        """Make an API request with rate limiting."""
        await self.rate_limiter.acquire()
        client = await self._get_client()
        try:
            response = await client.request(method, endpoint, params=params)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as e:
            raise MarketDataError(f"Binance request {endpoint} failed: {e}") from e
        except ValueError as e:
            raise MarketDataError(f"Binance returned invalid JSON for {endpoint}: {e}") from e

    async def get_candles(
        self,
        pair: str,
        interval: str = "1h",
        limit: int = 1000,
    ) -> list[Candle]:
        """
        Fetch the most recent candles for a pair.

        Args:
            pair: Trading pair (e.g., "BTCUSDT")
            interval: Candle interval (e.g., "1h")
            limit: Number of candles (max 1000)

        Returns:
            List of Candle objects, oldest first

        Raises:
            MarketDataError: If the request fails or returns no data
        """
        params = {
            "symbol": pair,
            "interval": interval,
            "limit": min(limit, self.MAX_LIMIT),
        }
        data = await self._request("GET", "/api/v3/klines", params)

        if not data:
            raise MarketDataError(f"No candle data returned for {pair} {interval}")

        candles = [
            Candle(
                timestamp=int(item[0]),
                open=float(item[1]),
                high=float(item[2]),
                low=float(item[3]),
                close=float(item[4]),
                volume=float(item[5]),
            )
            for item in data
        ]
        logger.debug(f"Fetched {len(candles)} {interval} candles for {pair}")
        return candles
