"""LINE bot: webhook commands and signal delivery."""

import asyncio
import logging
from typing import Any

from app.clients.line_messaging import LineMessagingClient, text_message
from app.errors import VegasError
from app.services.formatter import (
    HELP_TEXT,
    SYMBOLS_TEXT,
    format_error_message,
    format_system_status,
    format_trading_signal,
    format_trigger_message,
)
from app.services.signal_service import SignalService
from app.storage.recipients import RecipientStore, chat_id_for
from app.symbols import extract_symbol
from core.models import TradingSignal

logger = logging.getLogger(__name__)


def _message_text(event: dict[str, Any]) -> str | None:
    message = event.get("message") or {}
    if event.get("type") != "message" or message.get("type") != "text":
        return None
    return (message.get("text") or "").lower()


def is_price_query(text: str | None) -> bool:
    return bool(text) and "price" in text


class LineBot:
    """Answers chat commands and fans signals out to registered chats."""

    def __init__(
        self,
        client: LineMessagingClient,
        store: RecipientStore,
        service: SignalService,
    ):
        self.client = client
        self.store = store
        self.service = service

    async def handle_event(self, event: dict[str, Any]) -> list[dict] | None:
        """Register the chat and build the immediate reply, if any."""
        chat_id = chat_id_for(event.get("source") or {})
        if chat_id:
            await self.store.add(chat_id)

        text = _message_text(event)
        if text is None:
            return None

        if "help" in text:
            return [text_message(HELP_TEXT)]
        if "status" in text:
            return [text_message(format_system_status(
                True,
                tracked_pairs=len(self.service.strategy.tracked_pairs),
                recipients=self.store.count(),
            ))]
        if "symbols" in text:
            return [text_message(SYMBOLS_TEXT)]
        if is_price_query(text):
            symbol = extract_symbol(text)
            return [text_message(f"🔍 Looking up {symbol} trigger conditions...")]
        return None

    async def process_event(self, event: dict[str, Any]) -> None:
        """Handle one webhook event end to end.

        Price queries get an immediate acknowledgement, then the report is
        pushed to the originating chat once the candles are analyzed.
        """
        replies = await self.handle_event(event)
        reply_token = event.get("replyToken")
        if not replies or not reply_token:
            return

        await self.client.reply(reply_token, replies)

        text = _message_text(event)
        if not is_price_query(text):
            return

        chat_id = chat_id_for(event.get("source") or {})
        if not chat_id:
            return

        symbol = extract_symbol(text)
        try:
            report = await self.service.trigger_price(symbol)
        except VegasError as e:
            logger.warning(f"Price query for {symbol} failed: {e}")
            message = format_error_message(f"{symbol} lookup failed", str(e))
        else:
            if report.conditions is None:
                message = format_error_message(
                    report.explanation, f"{symbol} {report.timeframe}"
                )
            else:
                message = format_trigger_message(
                    symbol,
                    report.current_price,
                    report.indicators,
                    report.conditions,
                )

        await self.client.push(chat_id, [text_message(message)])

    async def send_trading_signal(
        self,
        signal: TradingSignal,
        chat_id: str | None = None,
    ) -> int:
        """
        Deliver a signal to one chat, or to every registered chat.

        Recipients whose push fails are dropped from the store.

        Returns:
            Number of chats the signal was delivered to

        Raises:
            LineApiError: If delivery to an explicit chat_id fails
        """
        messages = [text_message(format_trading_signal(signal))]

        if chat_id:
            await self.client.push(chat_id, messages)
            return 1

        await self.store.load()
        recipients = self.store.all()
        logger.info(f"Sending {signal.symbol} signal to {len(recipients)} chats")

        results = await asyncio.gather(
            *(self.client.push(recipient, messages) for recipient in recipients),
            return_exceptions=True,
        )

        failed = []
        for recipient, result in zip(recipients, results):
            if isinstance(result, Exception):
                logger.warning(f"Delivery to {recipient} failed: {result}")
                failed.append(recipient)

        if failed:
            await self.store.remove_many(failed)

        return len(recipients) - len(failed)
