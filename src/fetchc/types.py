"""Core types for fetchc."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Final, Generic, TypeVar, Union

from fetchc.action import Action

T = TypeVar("T")
Q = TypeVar("Q")
R = TypeVar("R")
K = TypeVar("K")
V = TypeVar("V")


@dataclass(frozen=True, slots=True)
class Some(Generic[T]):
    """A present value. ``Some(None)`` and ``Some([])`` are still present."""

    value: T

    def is_some(self) -> bool:
        return True

    def is_nothing(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value


class _Nothing:
    """The absent outcome of a lookup. Use the ``NOTHING`` singleton."""

    __slots__ = ()
    _instance: _Nothing | None = None

    def __new__(cls) -> _Nothing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def is_some(self) -> bool:
        return False

    def is_nothing(self) -> bool:
        return True

    def unwrap(self) -> Any:
        raise ValueError("called unwrap() on NOTHING")

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOTHING"


NOTHING: Final = _Nothing()

Maybe = Union[Some[T], _Nothing]


def from_optional(value: T | None) -> Maybe[T]:
    """Treat ``None`` as absence, anything else as present."""
    if value is None:
        return NOTHING
    return Some(value)


def to_optional(maybe: Maybe[T]) -> T | None:
    """Collapse a Maybe back to ``T | None``."""
    if isinstance(maybe, Some):
        return maybe.value
    return None


# Function shapes collaborators implement
Getter = Callable[[Q], Action[R]]
KeyValStore = Callable[[K], Action[Maybe[V]]]
RawKeyValStore = Callable[[bytes], Action[Maybe[bytes]]]
