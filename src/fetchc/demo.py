"""Ship container bucket lookup: a fast cache in front of a slow store.

Run with ``python -m fetchc.demo [ship_id] [container_id]``.
"""

from __future__ import annotations

import asyncio
import sys
from collections.abc import Callable, Mapping
from dataclasses import dataclass

from loguru import logger

from fetchc.action import Action, bind, pure
from fetchc.codecs import identity, join_fields
from fetchc.getters import (
    create_getter_with_cache,
    getter2non_null_or_reject,
    kvstore2getter,
)
from fetchc.stores.memory import AsyncMemoryStore, Delay

BucketIdList = list[int]


@dataclass(frozen=True, slots=True)
class ShipQuery:
    """Which container on which ship to list buckets for."""

    ship_id: str
    container_id: str


CACHED: dict[str, BucketIdList] = {
    "cafef00d-2025-05-01": [333, 634],
    "cafef00d-2025-05-02": [599, 3776],
    "cafef00d-2025-05-03": [42, 42195],
    "dafef00d-2025-05-01": [330, 630],
    "dafef00d-2025-05-02": [590, 3770],
    "dafef00d-2025-05-03": [40, 42190],
}

STORED: dict[str, BucketIdList] = {
    **CACHED,
    "cafef00d-2025-05-04": [41, 42194],
    "dafef00d-2025-05-04": [39, 42189],
}


def build_db(
    cache_data: Mapping[str, BucketIdList] = CACHED,
    store_data: Mapping[str, BucketIdList] = STORED,
    *,
    delay: Delay = "1s",
) -> Callable[[ShipQuery], Action[BucketIdList]]:
    """Assemble the cached, absence-intolerant bucket getter."""
    query2key = join_fields("ship_id", "container_id")
    cache = kvstore2getter(AsyncMemoryStore(cache_data), query2key, identity)
    slow_db = kvstore2getter(
        AsyncMemoryStore(store_data, delay=delay), query2key, identity
    )
    return create_getter_with_cache(cache, getter2non_null_or_reject(slow_db))


def fetch_buckets(
    db: Callable[[ShipQuery], Action[BucketIdList]],
    query: ShipQuery,
) -> Action[BucketIdList]:
    return bind(pure(query), db)


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    ship_id = args[0] if args else "cafef00d"
    container_id = args[1] if len(args) > 1 else "2025-05-03"

    query = ShipQuery(ship_id=ship_id, container_id=container_id)
    try:
        buckets = asyncio.run(fetch_buckets(build_db(), query)())
    except Exception:
        logger.exception("lookup failed for {!r}", query)
        return 1
    logger.info("buckets for {!r}: {}", query, buckets)
    return 0


if __name__ == "__main__":
    sys.exit(main())
