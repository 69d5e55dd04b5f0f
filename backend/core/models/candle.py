"""Candle (OHLCV) data models."""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Candle(BaseModel):
    """One closed OHLCV candle.

    Timestamps are Unix epoch milliseconds. A series of candles is ordered
    oldest first and is never mutated by the signal engine.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: int
    open: float = Field(ge=0)
    high: float = Field(ge=0)
    low: float = Field(ge=0)
    close: float = Field(ge=0)
    volume: float = Field(default=0.0, ge=0)

    @model_validator(mode="after")
    def _check_range(self) -> "Candle":
        if self.low > min(self.open, self.close):
            raise ValueError(
                f"low {self.low} is above open/close ({self.open}, {self.close})"
            )
        if self.high < max(self.open, self.close):
            raise ValueError(
                f"high {self.high} is below open/close ({self.open}, {self.close})"
            )
        return self
