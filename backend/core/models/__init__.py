"""Data models."""

from core.models.candle import Candle
from core.models.config import DEFAULT_CONFIG, VegasTunnelConfig
from core.models.signal import (
    Alignment,
    IndicatorSnapshot,
    Signal,
    SignalType,
    TargetLevels,
    TradingSignal,
    TriggerConditions,
)

__all__ = [
    "Candle",
    "DEFAULT_CONFIG",
    "VegasTunnelConfig",
    "Alignment",
    "IndicatorSnapshot",
    "Signal",
    "SignalType",
    "TargetLevels",
    "TradingSignal",
    "TriggerConditions",
]
