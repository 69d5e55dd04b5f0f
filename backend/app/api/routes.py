"""REST API routes."""

import logging
import time
from datetime import datetime, timezone
from typing import Optional

import orjson
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from app.config import Settings, get_settings
from app.errors import UnsupportedSymbolError, VegasError
from app.services import LineBot, SignalService
from app.services.formatter import format_system_status, format_trading_signal
from core.models import IndicatorSnapshot, TradingSignal, TriggerConditions

logger = logging.getLogger(__name__)

router = APIRouter()

VERSION = "1.0.0"


# Request/response models
class AnalyzeRequest(BaseModel):
    """Manual analysis request."""

    model_config = ConfigDict(populate_by_name=True)

    symbol: str = "BTC"
    timeframe: Optional[str] = None
    user_id: Optional[str] = Field(default=None, alias="userId")


class AnalyzeResponse(BaseModel):
    """Manual analysis result."""

    success: bool
    signal: Optional[TradingSignal] = None
    formatted_message: Optional[str] = None
    message: Optional[str] = None


class TriggerPriceRequest(BaseModel):
    """Trigger-price request."""

    symbol: str = "BTC"
    timeframe: Optional[str] = None


class TriggerPriceResponse(BaseModel):
    """Trigger-price result."""

    success: bool
    symbol: str
    timeframe: str
    current_price: float
    indicators: Optional[IndicatorSnapshot] = None
    trigger_conditions: Optional[TriggerConditions] = None
    explanation: str


class SystemStatus(BaseModel):
    """System status response."""

    healthy: bool
    message: str
    version: str
    symbols: list[str]
    timeframe: str
    tracked_pairs: int
    timestamp: datetime


# Dependencies: services are built in the app lifespan
def get_signal_service(request: Request) -> SignalService:
    return request.app.state.signal_service


def get_line_bot(request: Request) -> LineBot:
    return request.app.state.line_bot


def _error_response(error: VegasError) -> JSONResponse:
    status_code = 400 if isinstance(error, UnsupportedSymbolError) else 500
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": str(error)},
    )


@router.get("/")
async def index():
    """Service description and endpoints."""
    return {
        "message": "Vegas Tunnel signal bot",
        "version": VERSION,
        "endpoints": {
            "webhook": "/webhook (POST)",
            "analyze": "/analyze (POST)",
            "status": "/status (GET)",
            "trigger-price": "/trigger-price (POST)",
            "test": "/test (GET)",
        },
    }


@router.get("/test")
async def test():
    """Liveness check."""
    return {
        "message": "Signal bot is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "features": [
            "Vegas Tunnel analysis",
            "LINE bot integration",
            "Multiple symbols",
            "Fibonacci take-profit targets",
        ],
    }


@router.get("/status", response_model=SystemStatus)
async def get_status(
    request: Request,
    service: SignalService = Depends(get_signal_service),
    settings: Settings = Depends(get_settings),
):
    """Get system status."""
    started_at = getattr(request.app.state, "started_at", None)
    uptime = time.monotonic() - started_at if started_at is not None else None
    tracked = len(service.strategy.tracked_pairs)

    return SystemStatus(
        healthy=True,
        message=format_system_status(True, uptime, tracked),
        version=VERSION,
        symbols=settings.symbols,
        timeframe=settings.timeframe,
        tracked_pairs=tracked,
        timestamp=datetime.now(timezone.utc),
    )


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze(
    body: AnalyzeRequest,
    service: SignalService = Depends(get_signal_service),
    bot: LineBot = Depends(get_line_bot),
):
    """Run the tunnel for one symbol and optionally push the signal to a user."""
    try:
        signal = await service.analyze_symbol(body.symbol, body.timeframe)
        if signal is None:
            return AnalyzeResponse(
                success=False,
                message=f"No trading signal for {body.symbol.upper()} right now",
            )
        if body.user_id:
            await bot.send_trading_signal(signal, body.user_id)
    except VegasError as e:
        logger.error(f"Analyze request failed: {e}")
        return _error_response(e)

    return AnalyzeResponse(
        success=True,
        signal=signal,
        formatted_message=format_trading_signal(signal),
    )


@router.post("/trigger-price", response_model=TriggerPriceResponse)
async def trigger_price(
    body: TriggerPriceRequest,
    service: SignalService = Depends(get_signal_service),
):
    """Current EMAs and the price that would trigger the next signal."""
    try:
        report = await service.trigger_price(body.symbol, body.timeframe)
    except VegasError as e:
        logger.error(f"Trigger-price request failed: {e}")
        return _error_response(e)

    return TriggerPriceResponse(
        success=True,
        symbol=report.symbol,
        timeframe=report.timeframe,
        current_price=report.current_price,
        indicators=report.indicators,
        trigger_conditions=report.conditions,
        explanation=report.explanation,
    )


@router.post("/webhook")
async def webhook(
    request: Request,
    bot: LineBot = Depends(get_line_bot),
    settings: Settings = Depends(get_settings),
):
    """LINE webhook endpoint."""
    body = await request.body()

    if settings.skip_signature_verification:
        logger.debug("Signature verification skipped (development mode)")
    else:
        signature = request.headers.get("x-line-signature")
        if not signature:
            raise HTTPException(status_code=400, detail="Missing signature")
        if not bot.client.verify_signature(body, signature):
            logger.error("Webhook signature verification failed")
            raise HTTPException(status_code=403, detail="Invalid signature")

    try:
        payload = orjson.loads(body)
    except orjson.JSONDecodeError:
        raise HTTPException(status_code=400, detail="Invalid JSON body")
    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail="Webhook body must be an object")

    for event in payload.get("events", []):
        try:
            await bot.process_event(event)
        except VegasError as e:
            logger.error(f"Webhook event failed: {e}")

    return {"status": "ok"}
