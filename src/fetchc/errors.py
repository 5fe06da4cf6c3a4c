"""Exceptions raised by fetchc."""

from typing import Any


class FetchcError(Exception):
    """Base class for errors raised by fetchc itself."""


class NotFoundError(FetchcError, LookupError):
    """No value could be resolved for a query through the getter chain."""

    def __init__(self, query: Any) -> None:
        super().__init__(f"not found: {query!r}")
        self.query = query


class StoreError(FetchcError):
    """A shipped store got an unexpected response from its backend."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
