"""Stores implementing the key/value shapes fetchc consumes."""

from contextlib import suppress

from fetchc.stores.memory import AsyncMemoryStore

# Optional stores - only available when dependencies are installed
with suppress(ImportError):
    from fetchc.stores.redis import AsyncRedisStore

with suppress(ImportError):
    from fetchc.stores.http import AsyncHttpStore

__all__ = [
    "AsyncHttpStore",
    "AsyncMemoryStore",
    "AsyncRedisStore",
]
