"""Application configuration."""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # LINE Messaging API
    line_channel_access_token: str = ""
    line_channel_secret: str = ""
    skip_signature_verification: bool = False  # development only

    # Redis (recipient store; falls back to memory when unreachable)
    redis_url: str = "redis://localhost:6379/0"

    # Binance spot market data
    binance_base_url: str = "https://api.binance.com"

    # Signal scan
    symbols: list[str] = ["BTC", "ETH", "BNB", "SOL"]
    timeframe: str = "1h"
    candle_limit: int = 1000
    leverage: int = 10
    swing_window: int = 50
    scan_interval_seconds: int = 3600  # 0 disables the periodic scan

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
