"""LINE Messaging API client."""

import base64
import hashlib
import hmac
import logging
from typing import Any

import httpx

from app.errors import LineApiError

logger = logging.getLogger(__name__)


def text_message(text: str) -> dict[str, str]:
    """Build a LINE text message object."""
    return {"type": "text", "text": text}


class LineMessagingClient:
    """Minimal LINE bot client: reply, push, broadcast, webhook signatures."""

    BASE_URL = "https://api.line.me"

    def __init__(
        self,
        channel_access_token: str,
        channel_secret: str,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.channel_access_token = channel_access_token
        self.channel_secret = channel_secret
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.BASE_URL,
                headers={"Authorization": f"Bearer {self.channel_access_token}"},
                timeout=10.0,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _post(self, endpoint: str, payload: dict[str, Any]) -> None:
        client = await self._get_client()
        response = await client.post(endpoint, json=payload)
        if response.is_error:
            raise LineApiError(response.status_code, response.text)

    def verify_signature(self, body: bytes | str, signature: str) -> bool:
        """Check the X-Line-Signature header against the raw request body.

        The signature is base64(HMAC-SHA256(channel_secret, body)).
        """
        if isinstance(body, str):
            body = body.encode("utf-8")
        digest = hmac.new(
            self.channel_secret.encode("utf-8"), body, hashlib.sha256
        ).digest()
        expected = base64.b64encode(digest).decode("ascii")
        return hmac.compare_digest(expected, signature)

    async def reply(self, reply_token: str, messages: list[dict]) -> None:
        """Reply to a webhook event."""
        await self._post(
            "/v2/bot/message/reply",
            {"replyToken": reply_token, "messages": messages},
        )

    async def push(self, to: str, messages: list[dict]) -> None:
        """Push messages to a user, group or room."""
        await self._post("/v2/bot/message/push", {"to": to, "messages": messages})

    async def broadcast(self, messages: list[dict]) -> None:
        """Send messages to every friend of the bot."""
        await self._post("/v2/bot/message/broadcast", {"messages": messages})
