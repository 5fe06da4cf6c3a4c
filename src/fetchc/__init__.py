"""fetchc - composable lazy actions for cached key/value lookups."""

from contextlib import suppress

# Action core
from fetchc.action import Action, all_, bind, fmap, lift, pure, run
from fetchc.errors import FetchcError, NotFoundError, StoreError

# Combinators
from fetchc.getters import (
    create_getter_using_unique_id,
    create_getter_with_cache,
    create_key_val_store,
    getter2non_null_or_reject,
    kvstore2getter,
)

# Stores
from fetchc.stores import AsyncMemoryStore

# Core types
from fetchc.types import (
    NOTHING,
    Getter,
    KeyValStore,
    Maybe,
    RawKeyValStore,
    Some,
    from_optional,
    to_optional,
)

# Optional store imports - only available when dependencies are installed
with suppress(ImportError):
    from fetchc.stores import AsyncRedisStore

with suppress(ImportError):
    from fetchc.stores import AsyncHttpStore

__version__ = "0.1.0"

__all__ = [
    "NOTHING",
    "Action",
    "AsyncHttpStore",
    "AsyncMemoryStore",
    "AsyncRedisStore",
    "FetchcError",
    "Getter",
    "KeyValStore",
    "Maybe",
    "NotFoundError",
    "RawKeyValStore",
    "Some",
    "StoreError",
    "all_",
    "bind",
    "create_getter_using_unique_id",
    "create_getter_with_cache",
    "create_key_val_store",
    "fmap",
    "from_optional",
    "getter2non_null_or_reject",
    "kvstore2getter",
    "lift",
    "pure",
    "run",
    "to_optional",
]
