"""In-memory key/value store."""

from __future__ import annotations

import asyncio
import re
from collections.abc import Hashable, Mapping
from typing import Generic, TypeVar

from loguru import logger

from fetchc.action import Action
from fetchc.types import NOTHING, Maybe, Some

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

Delay = str | int  # "50ms", "2s" or milliseconds

_DELAY_PATTERN = re.compile(r"^(\d+)(ms|s)$")


def delay_seconds(delay: Delay) -> float:
    """Seconds to sleep before each lookup, for ``asyncio.sleep``."""
    if isinstance(delay, int):
        if delay < 0:
            raise ValueError(f"Invalid delay: {delay!r}")
        return delay / 1000
    match = _DELAY_PATTERN.match(delay)
    if not match:
        raise ValueError(f"Invalid delay: {delay!r}")
    amount, unit = match.groups()
    return int(amount) if unit == "s" else int(amount) / 1000


class AsyncMemoryStore(Generic[K, V]):
    """Dict-backed store with optional simulated latency.

    The instance itself is a key/value store: ``store(key)`` builds an
    Action of ``Maybe[V]``. With bytes keys and values it also serves as a
    raw store for ``create_key_val_store``.
    """

    def __init__(
        self,
        data: Mapping[K, V] | None = None,
        *,
        delay: Delay = 0,
    ) -> None:
        self._data: dict[K, V] = dict(data or {})
        self._delay = delay_seconds(delay)
        self._lock = asyncio.Lock()
        self.calls = 0

    def __call__(self, key: K) -> Action[Maybe[V]]:
        return Action(lambda: self.get(key))

    async def get(self, key: K) -> Maybe[V]:
        """Look up a key, waiting out the configured delay first."""
        self.calls += 1
        if self._delay:
            await asyncio.sleep(self._delay)
        async with self._lock:
            if key not in self._data:
                logger.debug("memory store miss for {!r}", key)
                return NOTHING
            return Some(self._data[key])

    async def set(self, key: K, value: V) -> None:
        async with self._lock:
            self._data[key] = value

    async def delete(self, key: K) -> None:
        async with self._lock:
            self._data.pop(key, None)

    async def clear(self) -> None:
        async with self._lock:
            self._data.clear()

    def __len__(self) -> int:
        return len(self._data)
