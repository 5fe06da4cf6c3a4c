"""Getter and key/value store combinators.

A getter maps a query to an Action; a key/value store maps a key to an
Action of a Maybe. The combinators here nest into lookup pipelines:

    db = create_getter_with_cache(
        cache_getter,
        getter2non_null_or_reject(slow_getter),
    )
    buckets = await bind(pure(query), db)()

None of them catch errors. Whatever a store, codec or id mapping raises
surfaces unchanged from the outermost action. A store or getter that
yields something other than ``Some`` or ``NOTHING`` fails with TypeError.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from loguru import logger

from fetchc.action import Action, all_, bind, fmap, pure
from fetchc.errors import NotFoundError
from fetchc.types import NOTHING, KeyValStore, Maybe, RawKeyValStore, Some

Q = TypeVar("Q")
R = TypeVar("R")
K = TypeVar("K")
V = TypeVar("V")
I = TypeVar("I")  # noqa: E741

logger = logger.bind(component="fetchc.getters")


def _is_present(maybe: Any) -> bool:
    """Tell Some from NOTHING; anything else is a broken collaborator."""
    if isinstance(maybe, Some):
        return True
    if maybe is NOTHING:
        return False
    raise TypeError(f"expected Some or NOTHING, got {maybe!r}")


def kvstore2getter(
    kvstore: KeyValStore[K, V],
    query2key: Callable[[Q], Action[K]],
    value2result: Callable[[V], Action[R]],
) -> Callable[[Q], Action[Maybe[R]]]:
    """Create a getter backed by a key/value store.

    The query is mapped to a key, the key is looked up, and a found value
    is mapped to the result. An absent value skips ``value2result``.
    """

    def getter(query: Q) -> Action[Maybe[R]]:
        found = bind(query2key(query), kvstore)

        def to_result(maybe_value: Maybe[V]) -> Action[Maybe[R]]:
            if not _is_present(maybe_value):
                return pure(NOTHING)
            return fmap(value2result(maybe_value.value), Some)

        return bind(found, to_result)

    return getter


def create_key_val_store(
    raw: RawKeyValStore,
    key2bytes: Callable[[K], Action[bytes]],
    bytes2val: Callable[[bytes], Action[V]],
) -> KeyValStore[K, V]:
    """Create a typed key/value store from a raw byte store and its codecs.

    Absent bytes are never decoded.
    """

    def kvstore(key: K) -> Action[Maybe[V]]:
        found = bind(key2bytes(key), raw)

        def decode(maybe_raw: Maybe[bytes]) -> Action[Maybe[V]]:
            if not _is_present(maybe_raw):
                return pure(NOTHING)
            return fmap(bytes2val(maybe_raw.value), Some)

        return bind(found, decode)

    return kvstore


def create_getter_with_cache(
    cache: Callable[[Q], Action[Maybe[R]]],
    source: Callable[[Q], Action[Any]],
    *,
    source_yields_maybe: bool = False,
) -> Callable[[Q], Action[Any]]:
    """Decorate a source getter with a read-through cache getter.

    A cache hit is returned without consulting ``source``. A miss returns
    whatever ``source`` produces, failure included. The cache is never
    written to; populating it is left to whoever owns it.

    By default ``source`` is absence intolerant and hits are unwrapped to
    plain results. Pass ``source_yields_maybe=True`` when ``source``
    returns a Maybe, so hits keep their ``Some``.
    """

    def getter(query: Q) -> Action[Any]:
        def hit_or_source(cached: Maybe[R]) -> Action[Any]:
            if _is_present(cached):
                logger.debug("cache hit for {!r}", query)
                return pure(cached if source_yields_maybe else cached.value)
            logger.debug("cache miss for {!r}", query)
            return source(query)

        return bind(cache(query), hit_or_source)

    return getter


def create_getter_using_unique_id(
    getter: Callable[[Q], Action[Maybe[R]]],
    query2id: Callable[[Q], Action[I]],
    result2id: Callable[[R], Action[I]],
) -> Callable[[Q], Action[Maybe[R]]]:
    """Decorate a getter so results whose id differs from the query's are dropped.

    Both ids are computed concurrently once the result is known and
    compared with ``==``. A mismatch yields ``NOTHING``, not an error.
    """

    def checked(query: Q) -> Action[Maybe[R]]:
        def verify(found: Maybe[R]) -> Action[Maybe[R]]:
            if not _is_present(found):
                return pure(NOTHING)

            def compare(ids: list[Any]) -> Maybe[R]:
                query_id, result_id = ids
                if query_id == result_id:
                    return found
                logger.debug(
                    "id mismatch for {!r}: expected {!r}, got {!r}",
                    query,
                    query_id,
                    result_id,
                )
                return NOTHING

            return fmap(all_([query2id(query), result2id(found.value)]), compare)

        return bind(getter(query), verify)

    return checked


def getter2non_null_or_reject(
    getter: Callable[[Q], Action[Maybe[R]]],
) -> Callable[[Q], Action[R]]:
    """Turn absence from ``getter`` into a :class:`NotFoundError`."""

    def strict(query: Q) -> Action[R]:
        def unwrap(found: Maybe[R]) -> Action[R]:
            if _is_present(found):
                return pure(found.value)

            async def reject() -> R:
                logger.debug("nothing found for {!r}", query)
                raise NotFoundError(query)

            return Action(reject)

        return bind(getter(query), unwrap)

    return strict


__all__ = [
    "create_getter_using_unique_id",
    "create_getter_with_cache",
    "create_key_val_store",
    "getter2non_null_or_reject",
    "kvstore2getter",
]
