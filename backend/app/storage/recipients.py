"""Chat recipients for signal broadcasts.

Chat ids are kept in memory and mirrored to Redis as one orjson-encoded
list, so they survive restarts. When Redis is unreachable the store keeps
working from memory only.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

import orjson
import redis.asyncio as redis

logger = logging.getLogger(__name__)

KEY_RECIPIENTS = "line:recipients"


def chat_id_for(source: dict[str, Any]) -> str | None:
    """Pick the chat to answer for a webhook event source.

    Groups and rooms take precedence over the individual user.
    """
    source_type = source.get("type")
    if source_type == "group" and source.get("groupId"):
        return source["groupId"]
    if source_type == "room" and source.get("roomId"):
        return source["roomId"]
    return source.get("userId")


class RecipientStore:
    """Set of chat ids that receive broadcast signals."""

    def __init__(self, client: redis.Redis | None = None):
        self._client = client
        self._chat_ids: set[str] = set()
        self._loaded = False

    @classmethod
    async def connect(cls, redis_url: str) -> "RecipientStore":
        """Create a store backed by Redis, or memory-only if Redis is down."""
        client = redis.Redis.from_url(redis_url, decode_responses=False)
        try:
            await client.ping()
            logger.info(f"Recipient store using Redis: {redis_url}")
        except redis.RedisError as e:
            logger.warning(f"Redis connection failed: {e}. Recipients kept in memory only.")
            await client.aclose()
            client = None
        store = cls(client)
        await store.load()
        return store

    @property
    def is_persistent(self) -> bool:
        return self._client is not None

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def load(self) -> None:
        """Load stored chat ids, retrying on later calls until a read succeeds."""
        if self._loaded:
            return

        if self._client is None:
            self._loaded = True
            return

        try:
            raw = await self._client.get(KEY_RECIPIENTS)
        except redis.RedisError as e:
            logger.warning(f"Redis GET error: {e}")
            return

        self._loaded = True
        if raw:
            self._chat_ids.update(orjson.loads(raw))
            logger.info(f"Loaded {len(self._chat_ids)} recipients")

    async def _save(self) -> None:
        # Never overwrite a stored list that could not be read
        if self._client is None or not self._loaded:
            return
        try:
            await self._client.set(KEY_RECIPIENTS, orjson.dumps(sorted(self._chat_ids)))
        except redis.RedisError as e:
            logger.warning(f"Redis SET error: {e}")

    async def add(self, chat_id: str) -> bool:
        """Register a chat. Returns True if it was new."""
        await self.load()
        if chat_id in self._chat_ids:
            return False
        self._chat_ids.add(chat_id)
        await self._save()
        logger.info(f"New recipient: {chat_id}")
        return True

    async def remove_many(self, chat_ids: Iterable[str]) -> int:
        """Drop chats (e.g. ones that failed delivery). Returns count removed."""
        await self.load()
        removed = self._chat_ids.intersection(chat_ids)
        if removed:
            self._chat_ids.difference_update(removed)
            await self._save()
            logger.info(f"Removed {len(removed)} recipients")
        return len(removed)

    def all(self) -> list[str]:
        return sorted(self._chat_ids)

    def count(self) -> int:
        return len(self._chat_ids)
