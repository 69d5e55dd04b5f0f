"""Tests for the signal service."""

from unittest.mock import AsyncMock, patch

import pytest

from app.errors import MarketDataError, UnsupportedSymbolError
from app.services import SignalService
from core.models import (
    Candle,
    IndicatorSnapshot,
    Signal,
    SignalType,
    TargetLevels,
    TradingSignal,
)


SNAPSHOT = IndicatorSnapshot(ema12=110, ema144=105, ema169=104, ema576=100, ema676=99)


def _candles(n: int, low: float = 95.0, high: float = 115.0) -> list[Candle]:
    return [
        Candle(timestamp=i * 3_600_000, open=100.0, high=high, low=low, close=100.0)
        for i in range(n)
    ]


def _signal(signal_type: SignalType, price: float = 100.0) -> Signal:
    return Signal(type=signal_type, price=price, timestamp=42, indicators=SNAPSHOT)


class TestAnalyzeSymbol:
    """Tests for SignalService.analyze_symbol."""

    @pytest.fixture
    def client(self):
        client = AsyncMock()
        client.get_candles.return_value = _candles(700)
        return client

    @pytest.mark.asyncio
    async def test_long_signal_with_swing_targets(self, client):
        """A LONG detection becomes a TradingSignal with swing-range targets."""
        service = SignalService(client, candle_limit=800, default_leverage=20)

        with patch.object(
            service.strategy, "process", new_callable=AsyncMock,
            return_value=_signal(SignalType.LONG),
        ) as mock_process:
            signal = await service.analyze_symbol("btcusdt")

        client.get_candles.assert_awaited_once_with("BTCUSDT", "1h", 800)
        mock_process.assert_awaited_once()
        assert mock_process.call_args[0][:2] == ("BTC", "1h")

        assert signal.symbol == "BTC"
        assert signal.direction == SignalType.LONG
        assert signal.leverage == 20
        assert signal.entry_price == 100.0
        assert signal.timestamp == 42
        # swing range = 115 - 95 = 20
        assert signal.targets.target1 == pytest.approx(120.0)
        assert signal.targets.target2 == pytest.approx(132.36)
        assert signal.targets.target3 == pytest.approx(140.0)

    @pytest.mark.asyncio
    async def test_short_signal_overrides(self, client):
        service = SignalService(client)

        with patch.object(
            service.strategy, "process", new_callable=AsyncMock,
            return_value=_signal(SignalType.SHORT),
        ):
            signal = await service.analyze_symbol("ETH", "4h", leverage=5)

        client.get_candles.assert_awaited_once_with("ETHUSDT", "4h", 1000)
        assert signal.direction == SignalType.SHORT
        assert signal.timeframe == "4h"
        assert signal.leverage == 5
        assert signal.targets.target1 == pytest.approx(80.0)

    @pytest.mark.asyncio
    async def test_no_signal(self, client):
        service = SignalService(client)

        with patch.object(
            service.strategy, "process", new_callable=AsyncMock,
            return_value=_signal(SignalType.NONE),
        ):
            assert await service.analyze_symbol("BTC") is None

    @pytest.mark.asyncio
    async def test_insufficient_data(self):
        """Fewer candles than the slowest EMA gives no signal."""
        client = AsyncMock()
        client.get_candles.return_value = _candles(100)
        service = SignalService(client)

        assert await service.analyze_symbol("BTC") is None
        assert service.strategy.tracked_pairs == ["BTC_1h"]

    @pytest.mark.asyncio
    async def test_unsupported_symbol(self, client):
        service = SignalService(client)

        with pytest.raises(UnsupportedSymbolError):
            await service.analyze_symbol("SHIB")
        client.get_candles.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_market_data_error_propagates(self):
        client = AsyncMock()
        client.get_candles.side_effect = MarketDataError("down")
        service = SignalService(client)

        with pytest.raises(MarketDataError):
            await service.analyze_symbol("BTC")


class TestTriggerPrice:
    """Tests for SignalService.trigger_price."""

    @pytest.mark.asyncio
    async def test_reports_current_levels(self):
        client = AsyncMock()
        client.get_candles.return_value = _candles(700)
        service = SignalService(client)

        report = await service.trigger_price("SOL")

        assert report.symbol == "SOL"
        assert report.timeframe == "1h"
        assert report.current_price == 100.0
        assert report.indicators is not None
        assert report.indicators.ema676 == pytest.approx(100.0)
        assert report.explanation == report.conditions.explanation
        # read-only: no detector is created
        assert service.strategy.tracked_pairs == []

    @pytest.mark.asyncio
    async def test_not_enough_data(self):
        client = AsyncMock()
        client.get_candles.return_value = _candles(10)
        service = SignalService(client)

        report = await service.trigger_price("BTC", "15m")

        assert report.timeframe == "15m"
        assert report.indicators is None
        assert report.conditions is None
        assert report.explanation == "Not enough data to compute trigger conditions"


class TestScan:
    """Tests for SignalService.scan."""

    @pytest.mark.asyncio
    async def test_failures_are_skipped(self):
        """One failing symbol does not stop the others."""
        service = SignalService(AsyncMock())
        sol_signal = TradingSignal(
            symbol="SOL",
            direction=SignalType.LONG,
            timeframe="1h",
            entry_price=100.0,
            targets=TargetLevels(target1=120.0, target2=132.36, target3=140.0),
            timestamp=42,
        )
        results = {
            "BTC": MarketDataError("timeout"),
            "ETH": None,
            "SOL": sol_signal,
        }

        async def fake_analyze(symbol, timeframe=None):
            result = results[symbol]
            if isinstance(result, Exception):
                raise result
            return result

        with patch.object(service, "analyze_symbol", side_effect=fake_analyze) as mock_analyze:
            signals = await service.scan(["BTC", "ETH", "SOL"], "1h")

        assert signals == [sol_signal]
        assert mock_analyze.call_count == 3
