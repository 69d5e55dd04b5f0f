"""Strategy configuration models."""

from __future__ import annotations

from pydantic import BaseModel


class VegasTunnelConfig(BaseModel):
    """Vegas Tunnel parameters.

    The EMA periods and minimum history are fixed by the method itself;
    they live here so every component reads them from one place.
    """

    # Fastest to slowest: filter line, inner tunnel, outer tunnel
    ema_periods: tuple[int, int, int, int, int] = (12, 144, 169, 576, 676)

    # Longest EMA needs this many closes before the SMA seed washes out
    min_candles: int = 676

    # Fibonacci extension multipliers for target1..target3
    fib_multipliers: tuple[float, float, float] = (1.0, 1.618, 2.0)

    # Fallback target range when no swing range is available (5% of entry)
    default_range_pct: float = 0.05

    # Trailing candles scanned for swing high/low
    swing_window: int = 50


DEFAULT_CONFIG = VegasTunnelConfig()
