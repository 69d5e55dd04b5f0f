"""Tests for target projection and trigger descriptions."""

import pytest

from core.models import Alignment, IndicatorSnapshot, SignalType, VegasTunnelConfig
from core.strategy.vegas_tunnel import describe_trigger, project_targets


class TestProjectTargets:
    def test_long_with_swing_range(self):
        targets = project_targets(100.0, SignalType.LONG, swing_high=110.0, swing_low=90.0)

        assert targets.target1 == pytest.approx(120.0)
        assert targets.target2 == pytest.approx(132.36)
        assert targets.target3 == pytest.approx(140.0)

    def test_short_with_swing_range(self):
        targets = project_targets(100.0, SignalType.SHORT, swing_high=110.0, swing_low=90.0)

        assert targets.target1 == pytest.approx(80.0)
        assert targets.target2 == pytest.approx(67.64)
        assert targets.target3 == pytest.approx(60.0)

    def test_swapped_bounds_use_absolute_range(self):
        targets = project_targets(100.0, "long", swing_high=90.0, swing_low=110.0)
        assert targets.target1 == pytest.approx(120.0)

    def test_default_range_is_five_percent(self):
        targets = project_targets(200.0, SignalType.LONG)

        assert targets.target1 == pytest.approx(210.0)
        assert targets.target2 == pytest.approx(216.18)
        assert targets.target3 == pytest.approx(220.0)

    def test_single_bound_falls_back_to_default(self):
        targets = project_targets(200.0, SignalType.SHORT, swing_high=250.0)

        assert targets.target1 == pytest.approx(190.0)
        assert targets.target3 == pytest.approx(180.0)

    def test_custom_config(self):
        config = VegasTunnelConfig(default_range_pct=0.1)
        targets = project_targets(100.0, SignalType.LONG, config=config)
        assert targets.target1 == pytest.approx(110.0)

    def test_none_direction_rejected(self):
        with pytest.raises(ValueError):
            project_targets(100.0, SignalType.NONE)


class TestDescribeTrigger:
    def test_bullish(self):
        snapshot = IndicatorSnapshot(ema12=110, ema144=105, ema169=104, ema576=100, ema676=99)
        conditions = describe_trigger(snapshot)

        assert conditions.alignment == Alignment.BULLISH
        assert conditions.long_signal_price == 105
        assert conditions.short_signal_price is None
        assert "105.0000" in conditions.explanation

    def test_bearish(self):
        snapshot = IndicatorSnapshot(ema12=90, ema144=95, ema169=96, ema576=100, ema676=101)
        conditions = describe_trigger(snapshot)

        assert conditions.alignment == Alignment.BEARISH
        assert conditions.short_signal_price == 95
        assert conditions.long_signal_price is None

    def test_no_alignment_lists_values(self):
        snapshot = IndicatorSnapshot(ema12=1, ema144=2, ema169=1.5, ema576=3, ema676=4)
        conditions = describe_trigger(snapshot)

        assert conditions.alignment == Alignment.NONE
        assert conditions.long_signal_price is None
        assert conditions.short_signal_price is None
        assert "EMA169: 1.5000" in conditions.explanation
