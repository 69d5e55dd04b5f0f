"""Vegas Tunnel strategy: one detector per symbol/timeframe pair.

Detector state is not atomic across read-classify-mutate, so evaluations
for the same pair are serialized with a per-pair asyncio.Lock. Different
pairs never share state and may be processed concurrently.
"""

import asyncio
import logging
from typing import Sequence

from core.models import Candle, Signal, VegasTunnelConfig
from core.strategy.vegas_tunnel.detector import VegasTunnelDetector
from core.strategy.vegas_tunnel.models import VEGAS_TUNNEL_STRATEGY_NAME

logger = logging.getLogger(__name__)


class VegasTunnelStrategy:
    """Keyed collection of Vegas Tunnel detectors."""

    def __init__(self, config: VegasTunnelConfig | None = None):
        self.config = config or VegasTunnelConfig()

        self._detectors: dict[str, VegasTunnelDetector] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    @property
    def name(self) -> str:
        return VEGAS_TUNNEL_STRATEGY_NAME

    @property
    def version(self) -> str:
        return "1.0.0"

    @property
    def tracked_pairs(self) -> list[str]:
        """Keys ('SYMBOL_TIMEFRAME') of pairs evaluated so far."""
        return sorted(self._detectors)

    def get_detector(self, symbol: str, timeframe: str) -> VegasTunnelDetector:
        """Get or create the detector for a symbol/timeframe pair."""
        key = f"{symbol}_{timeframe}"
        if key not in self._detectors:
            self._detectors[key] = VegasTunnelDetector(symbol, timeframe, self.config)
            self._locks[key] = asyncio.Lock()
        return self._detectors[key]

    def evaluate(
        self,
        symbol: str,
        timeframe: str,
        candles: Sequence[Candle],
    ) -> Signal | None:
        """Evaluate a series without locking (single-task callers only)."""
        return self.get_detector(symbol, timeframe).evaluate(candles)

    async def process(
        self,
        symbol: str,
        timeframe: str,
        candles: Sequence[Candle],
    ) -> Signal | None:
        """Evaluate a series, serialized with other calls for the same pair.

        Args:
            symbol: Normalized symbol (e.g. "BTC")
            timeframe: Candle interval (e.g. "1h")
            candles: Candle series, oldest first

        Returns:
            Signal for the newest candle, or None if the series is too short
        """
        detector = self.get_detector(symbol, timeframe)
        async with self._locks[f"{symbol}_{timeframe}"]:
            return detector.evaluate(candles)

    def reset(self, symbol: str, timeframe: str) -> None:
        """Reset the detector for a pair, if it exists."""
        key = f"{symbol}_{timeframe}"
        detector = self._detectors.get(key)
        if detector is not None:
            detector.reset()
            logger.debug(f"Reset Vegas Tunnel state for {key}")
