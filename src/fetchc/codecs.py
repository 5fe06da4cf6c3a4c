"""Key and value mappings shaped for the getter combinators.

Every function here takes a plain value and returns an Action, so it can
be passed straight to ``kvstore2getter`` or ``create_key_val_store``.
Decoding errors are raised when the action runs, not when it is built.
"""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from fetchc.action import Action, fmap, pure

T = TypeVar("T")


def _json_default(obj: Any) -> Any:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    return str(obj)


def _dumps(obj: Any) -> str:
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), default=_json_default)


def identity(value: T) -> Action[T]:
    """Pass the value through unchanged."""
    return pure(value)


def query2json_key(query: Any) -> Action[str]:
    """Serialize a query to a canonical JSON string key."""
    return fmap(pure(query), _dumps)


def json_value2result(value: str | bytes) -> Action[Any]:
    return fmap(pure(value), json.loads)


def str2bytes(value: str) -> Action[bytes]:
    return fmap(pure(value), lambda s: s.encode("utf-8"))


def bytes2str(value: bytes) -> Action[str]:
    return fmap(pure(value), lambda b: b.decode("utf-8"))


def json2bytes(value: Any) -> Action[bytes]:
    """Encode any JSON-serializable value as UTF-8 JSON bytes."""
    return fmap(pure(value), lambda v: _dumps(v).encode("utf-8"))


def bytes2json(value: bytes) -> Action[Any]:
    return fmap(pure(value), lambda b: json.loads(b.decode("utf-8")))


def _field(query: Any, name: str) -> Any:
    if isinstance(query, Mapping):
        return query[name]
    return getattr(query, name)


def join_fields(*names: str, sep: str = "-") -> Callable[[Any], Action[str]]:
    """Build a query-to-key mapping that joins the named fields.

    Usage:
        query2key = join_fields("ship_id", "container_id")
        await query2key(ShipQuery("ship1", "containerA"))()  # "ship1-containerA"

    Fields are read as attributes, or as items when the query is a mapping.
    """
    if not names:
        raise ValueError("join_fields needs at least one field name")

    def query2key(query: Any) -> Action[str]:
        return fmap(pure(query), lambda q: sep.join(str(_field(q, n)) for n in names))

    return query2key


__all__ = [
    "bytes2json",
    "bytes2str",
    "identity",
    "join_fields",
    "json2bytes",
    "json_value2result",
    "query2json_key",
    "str2bytes",
]
