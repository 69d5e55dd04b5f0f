"""Indicator snapshot for the newest candle of a series."""

from typing import Sequence

from core.indicators import ema
from core.models import DEFAULT_CONFIG, Candle, IndicatorSnapshot, VegasTunnelConfig


def build_snapshot(
    candles: Sequence[Candle],
    config: VegasTunnelConfig = DEFAULT_CONFIG,
) -> IndicatorSnapshot | None:
    """Compute the five tunnel EMAs at the newest candle.

    Returns None when the series is shorter than ``config.min_candles``;
    that is the normal "not computable yet" outcome, not an error.
    """
    if len(candles) < config.min_candles:
        return None

    closes = [c.close for c in candles]
    latest = [ema(closes, period)[-1] for period in config.ema_periods]

    return IndicatorSnapshot(
        ema12=latest[0],
        ema144=latest[1],
        ema169=latest[2],
        ema576=latest[3],
        ema676=latest[4],
    )
