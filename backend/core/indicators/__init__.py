"""Technical indicators (pure math, no I/O)."""

from core.indicators.indicators import (
    ema,
    highest,
    lowest,
    swing_bounds,
)

__all__ = [
    "ema",
    "highest",
    "lowest",
    "swing_bounds",
]
