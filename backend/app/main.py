"""Main application entry point."""

import asyncio
import logging
import time
from contextlib import asynccontextmanager

# Configure logging FIRST, before any other imports
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
)

# Reduce noise from third-party libraries (must be set before importing them)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("asyncio").setLevel(logging.WARNING)

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import router
from app.clients import BinanceRestClient, LineMessagingClient
from app.config import Settings, get_settings
from app.services import LineBot, SignalService
from app.storage import RecipientStore
from core.models import VegasTunnelConfig
from core.strategy import VegasTunnelStrategy

logger = logging.getLogger(__name__)


async def run_scan_cycle(service: SignalService, bot: LineBot, settings: Settings) -> int:
    """Scan configured symbols once and broadcast every signal found.

    Returns:
        Number of signals broadcast
    """
    signals = await service.scan(settings.symbols, settings.timeframe)
    sent = 0
    for signal in signals:
        try:
            delivered = await bot.send_trading_signal(signal)
            logger.info(
                f"Broadcast {signal.symbol} {signal.direction.value} to {delivered} chats"
            )
            sent += 1
        except Exception as e:
            logger.error(f"Broadcast of {signal.symbol} signal failed: {e}")
    return sent


async def _periodic_scan(service: SignalService, bot: LineBot, settings: Settings):
    """Background task: scan symbols every ``scan_interval_seconds``."""
    while True:
        try:
            await asyncio.sleep(settings.scan_interval_seconds)
            await run_scan_cycle(service, bot, settings)
        except asyncio.CancelledError:
            break
        except Exception as e:
            logger.warning(f"Scan cycle error: {e}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings = get_settings()
    logger.info("Starting Vegas Tunnel signal bot...")

    binance = BinanceRestClient(base_url=settings.binance_base_url)
    line = LineMessagingClient(
        settings.line_channel_access_token,
        settings.line_channel_secret,
    )
    store = await RecipientStore.connect(settings.redis_url)

    strategy = VegasTunnelStrategy(VegasTunnelConfig(swing_window=settings.swing_window))
    service = SignalService(
        binance,
        strategy,
        candle_limit=settings.candle_limit,
        swing_window=settings.swing_window,
        default_timeframe=settings.timeframe,
        default_leverage=settings.leverage,
    )
    bot = LineBot(line, store, service)

    app.state.signal_service = service
    app.state.line_bot = bot
    app.state.started_at = time.monotonic()

    scan_task: asyncio.Task | None = None
    if settings.scan_interval_seconds > 0:
        scan_task = asyncio.create_task(_periodic_scan(service, bot, settings))
        logger.info(
            f"Scanning {', '.join(settings.symbols)} every "
            f"{settings.scan_interval_seconds}s on {settings.timeframe}"
        )

    try:
        yield
    finally:
        logger.info("Shutting down...")
        if scan_task is not None:
            scan_task.cancel()
            try:
                await scan_task
            except asyncio.CancelledError:
                pass
        await binance.close()
        await line.close()
        await store.close()
        logger.info("Shutdown complete")


app = FastAPI(
    title="Vegas Tunnel Signal Bot",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Line-Signature"],
)

app.include_router(router)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


def main() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
