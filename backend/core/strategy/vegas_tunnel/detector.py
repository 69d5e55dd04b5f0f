"""Vegas Tunnel retest detector.

Signal Logic (bullish alignment, bearish mirrors it):
- Not armed: low touches EMA144 and close holds EMA12 -> LONG at once
- Not armed: low touches EMA144 only -> arm, wait for confirmation
- Armed: close back at/above EMA12 -> LONG, disarm
- Armed: EMA12 falls to/below EMA144 -> setup invalidated, disarm

Any candle where the five EMAs are not strictly ordered resets the state.

This module is pure business logic with no I/O dependencies.
"""

import logging
from typing import Sequence

from core.models import (
    DEFAULT_CONFIG,
    Alignment,
    Candle,
    IndicatorSnapshot,
    Signal,
    SignalType,
    VegasTunnelConfig,
)
from core.strategy.vegas_tunnel.models import INITIAL_STATE, TunnelState
from core.strategy.vegas_tunnel.snapshot import build_snapshot

logger = logging.getLogger(__name__)


def classify_alignment(snapshot: IndicatorSnapshot) -> Alignment:
    """Classify the strict ordering of the five EMAs."""
    values = snapshot.as_tuple()
    pairs = list(zip(values, values[1:]))

    if all(fast > slow for fast, slow in pairs):
        return Alignment.BULLISH
    if all(fast < slow for fast, slow in pairs):
        return Alignment.BEARISH
    return Alignment.NONE


def transition(
    state: TunnelState,
    candle: Candle,
    snapshot: IndicatorSnapshot,
) -> tuple[TunnelState, SignalType]:
    """Apply one candle to the detector state.

    Args:
        state: State before this candle
        candle: Newest closed candle
        snapshot: EMA values at this candle

    Returns:
        Tuple of (next state, emitted signal type)
    """
    alignment = classify_alignment(snapshot)
    ema12 = snapshot.ema12
    ema144 = snapshot.ema144

    if alignment == Alignment.NONE:
        return TunnelState(Alignment.NONE, False), SignalType.NONE

    if alignment == Alignment.BULLISH:
        touched = candle.low <= ema144
        confirmed = candle.close >= ema12
        invalidated = ema12 <= ema144
        trigger = SignalType.LONG
    else:
        touched = candle.high >= ema144
        confirmed = candle.close <= ema12
        invalidated = ema12 >= ema144
        trigger = SignalType.SHORT

    if not state.armed:
        # Touch and confirmation may land on the same candle
        if touched and confirmed:
            return TunnelState(alignment, False), trigger
        if touched:
            return TunnelState(alignment, True), SignalType.NONE
        return TunnelState(alignment, False), SignalType.NONE

    if confirmed:
        return TunnelState(alignment, False), trigger
    if invalidated:
        return TunnelState(alignment, False), SignalType.NONE
    return TunnelState(alignment, True), SignalType.NONE


class VegasTunnelDetector:
    """Stateful detector for a single symbol/timeframe pair.

    Not safe for concurrent use: callers evaluating the same pair from
    several tasks must serialize access (see VegasTunnelStrategy).
    """

    def __init__(
        self,
        symbol: str = "",
        timeframe: str = "",
        config: VegasTunnelConfig | None = None,
    ):
        self.symbol = symbol
        self.timeframe = timeframe
        self.config = config or DEFAULT_CONFIG
        self._state = INITIAL_STATE

    @property
    def state(self) -> TunnelState:
        return self._state

    def reset(self) -> None:
        """Forget alignment and any pending retest."""
        self._state = INITIAL_STATE

    def evaluate(self, candles: Sequence[Candle]) -> Signal | None:
        """Evaluate the newest candle of a series.

        Args:
            candles: Candle series, oldest first

        Returns:
            Signal for the newest candle (type may be NONE), or None if the
            series is too short to compute the tunnel
        """
        snapshot = build_snapshot(candles, self.config)
        if snapshot is None:
            return None

        candle = candles[-1]
        previous = self._state
        self._state, signal_type = transition(previous, candle, snapshot)

        if self._state != previous:
            logger.debug(
                f"Tunnel {self.symbol} {self.timeframe}: "
                f"{previous.alignment.value}/armed={previous.armed} -> "
                f"{self._state.alignment.value}/armed={self._state.armed}"
            )

        if signal_type != SignalType.NONE:
            logger.info(
                f"VEGAS {signal_type.value.upper()}: {self.symbol} {self.timeframe} "
                f"@ {candle.close} ema12={snapshot.ema12:.4f} ema144={snapshot.ema144:.4f}"
            )

        return Signal(
            type=signal_type,
            price=candle.close,
            timestamp=candle.timestamp,
            indicators=snapshot,
        )
