"""Technical indicators for Vegas Tunnel signal generation.

All functions are pure NumPy/Python math over closed series (oldest first).
Prices are handled as float64, matching the double precision the live
signal feed was tuned against.
"""

from typing import Sequence

import numpy as np

from core.models.candle import Candle


def ema(values: Sequence[float], period: int) -> list[float]:
    """
    Calculate Exponential Moving Average.

    The series is seeded at index 0 with the simple mean of the first
    ``min(period, len(values))`` prices, then every later value follows
    ``ema[i] = price[i] * k + ema[i - 1] * (1 - k)`` with ``k = 2 / (period + 1)``.
    Unlike the textbook EMA there are no leading NaN values.

    Args:
        values: Sequence of price values
        period: EMA period

    Returns:
        List of EMA values (same length as input), or an empty list when
        the input is empty or the period is not positive
    """
    if len(values) == 0 or period <= 0:
        return []

    arr = np.asarray(values, dtype=np.float64)
    multiplier = 2.0 / (period + 1)

    result = np.empty_like(arr)
    result[0] = np.mean(arr[:min(period, len(arr))])

    for i in range(1, len(arr)):
        result[i] = arr[i] * multiplier + result[i - 1] * (1 - multiplier)

    return result.tolist()


def highest(values: Sequence[float], period: int) -> float | None:
    """Highest value over the trailing ``period`` entries (None if empty)."""
    if len(values) == 0 or period <= 0:
        return None
    return float(np.max(np.asarray(values[-period:], dtype=np.float64)))


def lowest(values: Sequence[float], period: int) -> float | None:
    """Lowest value over the trailing ``period`` entries (None if empty)."""
    if len(values) == 0 or period <= 0:
        return None
    return float(np.min(np.asarray(values[-period:], dtype=np.float64)))


def swing_bounds(
    candles: Sequence[Candle],
    window: int = 50,
) -> tuple[float, float] | None:
    """
    Find the swing high/low of the most recent candles.

    Args:
        candles: Candle series, oldest first
        window: Number of trailing candles to scan

    Returns:
        Tuple of (swing_high, swing_low), or None if there is nothing to scan
    """
    recent = candles[-window:] if window > 0 else []
    if not recent:
        return None

    swing_high = highest([c.high for c in recent], len(recent))
    swing_low = lowest([c.low for c in recent], len(recent))
    return swing_high, swing_low
