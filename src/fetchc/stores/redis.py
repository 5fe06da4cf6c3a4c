"""Redis raw byte store."""

from __future__ import annotations

from typing import Any

from loguru import logger

from fetchc.action import Action
from fetchc.types import NOTHING, Maybe, Some


class AsyncRedisStore:
    """Raw byte store over an async Redis client.

    Keys are namespaced as ``<prefix>:<key>``. A missing key is absence.
    """

    def __init__(
        self,
        client: Any,  # redis.asyncio.Redis
        *,
        prefix: str = "fetchc",
    ) -> None:
        self._client = client
        self._prefix = prefix.encode("utf-8")

    def _key(self, key: bytes) -> bytes:
        """Generate the full Redis key."""
        return self._prefix + b":" + key

    def __call__(self, key: bytes) -> Action[Maybe[bytes]]:
        return Action(lambda: self.get(key))

    async def get(self, key: bytes) -> Maybe[bytes]:
        data = await self._client.get(self._key(key))
        if data is None:
            logger.debug("redis miss for {!r}", key)
            return NOTHING
        if isinstance(data, str):
            data = data.encode("utf-8")
        return Some(data)

    async def set(self, key: bytes, value: bytes, *, px: int | None = None) -> None:
        """Store raw bytes, optionally expiring after ``px`` milliseconds."""
        await self._client.set(self._key(key), value, px=px)

    async def delete(self, key: bytes) -> None:
        await self._client.delete(self._key(key))

    async def disconnect(self) -> None:
        """Close the Redis connection."""
        await self._client.aclose()
