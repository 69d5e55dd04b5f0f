"""Signal and indicator data models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator


class SignalType(str, Enum):
    """Direction emitted by the detector for one candle."""

    LONG = "long"
    SHORT = "short"
    NONE = "none"


class Alignment(str, Enum):
    """Ordering of the five tunnel EMAs."""

    NONE = "none"
    BULLISH = "bullish"  # ema12 > ema144 > ema169 > ema576 > ema676
    BEARISH = "bearish"  # ema12 < ema144 < ema169 < ema576 < ema676


class IndicatorSnapshot(BaseModel):
    """Latest value of each tunnel EMA."""

    model_config = ConfigDict(frozen=True)

    ema12: float
    ema144: float
    ema169: float
    ema576: float
    ema676: float

    def as_tuple(self) -> tuple[float, float, float, float, float]:
        """EMA values ordered fastest to slowest."""
        return (self.ema12, self.ema144, self.ema169, self.ema576, self.ema676)


class Signal(BaseModel):
    """Result of evaluating the newest candle of a series."""

    model_config = ConfigDict(frozen=True)

    type: SignalType
    price: float
    timestamp: int
    indicators: IndicatorSnapshot

    @property
    def is_actionable(self) -> bool:
        return self.type != SignalType.NONE


class TargetLevels(BaseModel):
    """Take-profit levels at Fibonacci extensions 1.0 / 1.618 / 2.0."""

    model_config = ConfigDict(frozen=True)

    target1: float
    target2: float
    target3: float


class TradingSignal(BaseModel):
    """Actionable signal with projected targets, ready for delivery."""

    model_config = ConfigDict(frozen=True)

    symbol: str
    direction: SignalType
    timeframe: str
    leverage: int = 10
    entry_price: float
    targets: TargetLevels
    timestamp: int

    @field_validator("direction")
    @classmethod
    def _actionable_only(cls, value: SignalType) -> SignalType:
        if value == SignalType.NONE:
            raise ValueError("TradingSignal direction must be long or short")
        return value


class TriggerConditions(BaseModel):
    """Price levels that would arm the next retest for the current alignment."""

    alignment: Alignment
    long_signal_price: float | None = None
    short_signal_price: float | None = None
    explanation: str
