"""Signal service: fetch candles, run the tunnel, project targets."""

import logging

from pydantic import BaseModel

from app.clients.binance_rest import BinanceRestClient
from app.symbols import normalize_symbol, resolve_pair
from core.indicators import swing_bounds
from core.models import (
    IndicatorSnapshot,
    TradingSignal,
    TriggerConditions,
)
from core.strategy.vegas_tunnel import (
    VegasTunnelStrategy,
    build_snapshot,
    describe_trigger,
    project_targets,
)

logger = logging.getLogger(__name__)


class TriggerReport(BaseModel):
    """Current price, EMA snapshot and trigger conditions for a symbol."""

    symbol: str
    timeframe: str
    current_price: float
    indicators: IndicatorSnapshot | None = None
    conditions: TriggerConditions | None = None
    explanation: str = ""


class SignalService:
    """Runs the Vegas Tunnel for one symbol/timeframe per call.

    Detector state persists per pair across calls, so a retest armed on
    one cycle can be confirmed on the next.
    """

    def __init__(
        self,
        client: BinanceRestClient,
        strategy: VegasTunnelStrategy | None = None,
        candle_limit: int = 1000,
        swing_window: int = 50,
        default_timeframe: str = "1h",
        default_leverage: int = 10,
    ):
        self.client = client
        self.strategy = strategy or VegasTunnelStrategy()
        self.candle_limit = candle_limit
        self.swing_window = swing_window
        self.default_timeframe = default_timeframe
        self.default_leverage = default_leverage

    async def analyze_symbol(
        self,
        symbol: str,
        timeframe: str | None = None,
        leverage: int | None = None,
    ) -> TradingSignal | None:
        """
        Evaluate the newest candle of a symbol.

        Args:
            symbol: Symbol in any common form ("btc", "BTCUSDT")
            timeframe: Candle interval (defaults to the service timeframe)
            leverage: Leverage to quote (defaults to the service leverage)

        Returns:
            TradingSignal if the newest candle triggers, otherwise None

        Raises:
            UnsupportedSymbolError: If the symbol is not supported
            MarketDataError: If candles cannot be fetched
        """
        timeframe = timeframe or self.default_timeframe
        leverage = leverage or self.default_leverage
        normalized = normalize_symbol(symbol)
        pair = resolve_pair(normalized)

        candles = await self.client.get_candles(pair, timeframe, self.candle_limit)
        signal = await self.strategy.process(normalized, timeframe, candles)

        if signal is None:
            logger.info(
                f"{normalized} {timeframe}: insufficient data "
                f"({len(candles)} candles, need {self.strategy.config.min_candles})"
            )
            return None
        if not signal.is_actionable:
            return None

        bounds = swing_bounds(candles, self.swing_window)
        swing_high, swing_low = bounds if bounds else (None, None)
        targets = project_targets(
            signal.price,
            signal.type,
            swing_high,
            swing_low,
            self.strategy.config,
        )

        return TradingSignal(
            symbol=normalized,
            direction=signal.type,
            timeframe=timeframe,
            leverage=leverage,
            entry_price=signal.price,
            targets=targets,
            timestamp=signal.timestamp,
        )

    async def trigger_price(
        self,
        symbol: str,
        timeframe: str | None = None,
    ) -> TriggerReport:
        """Describe the price levels that would trigger the next signal.

        Reads the current snapshot only; detector state is left untouched.

        Raises:
            UnsupportedSymbolError: If the symbol is not supported
            MarketDataError: If candles cannot be fetched
        """
        timeframe = timeframe or self.default_timeframe
        normalized = normalize_symbol(symbol)
        pair = resolve_pair(normalized)

        candles = await self.client.get_candles(pair, timeframe, self.candle_limit)
        current_price = candles[-1].close
        snapshot = build_snapshot(candles, self.strategy.config)

        if snapshot is None:
            return TriggerReport(
                symbol=normalized,
                timeframe=timeframe,
                current_price=current_price,
                explanation="Not enough data to compute trigger conditions",
            )

        conditions = describe_trigger(snapshot)
        return TriggerReport(
            symbol=normalized,
            timeframe=timeframe,
            current_price=current_price,
            indicators=snapshot,
            conditions=conditions,
            explanation=conditions.explanation,
        )

    async def scan(
        self,
        symbols: list[str],
        timeframe: str | None = None,
    ) -> list[TradingSignal]:
        """Analyze several symbols; a failing symbol is logged and skipped."""
        signals = []
        for symbol in symbols:
            try:
                signal = await self.analyze_symbol(symbol, timeframe)
            except Exception as e:
                logger.error(f"Analysis failed for {symbol}: {e}")
                continue
            if signal is not None:
                logger.info(f"{signal.symbol} {signal.timeframe}: {signal.direction.value} signal")
                signals.append(signal)
        return signals
