"""Action - a lazy, repeatable asynchronous computation.

Provides:
- Action[T]: zero-argument callable returning a fresh awaitable on each call
- pure(): lift a plain value
- bind(): sequence an action into an action-producing function
- lift(): turn a coroutine function into an action-producing function
- all_(): run many actions concurrently, results in input order

Building an action never runs anything. Calling it starts the work;
calling it again starts the work again.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Coroutine, Iterable
from typing import Any, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")


class Action(Generic[T]):
    """A deferred asynchronous computation producing T.

    Usage:
        action = pure(42)
        value = await action()   # 42
        value = await action()   # runs again, 42
    """

    __slots__ = ("_run",)

    def __init__(self, run: Callable[[], Awaitable[T]]) -> None:
        self._run = run

    def __call__(self) -> Coroutine[Any, Any, T]:
        return self._invoke()

    async def _invoke(self) -> T:
        return await self._run()

    def bind(self, mapper: Callable[[T], Action[U]]) -> Action[U]:
        """Method form of :func:`bind`."""
        return bind(self, mapper)

    def map(self, fn: Callable[[T], U]) -> Action[U]:
        """Method form of :func:`fmap`."""
        return fmap(self, fn)


def pure(value: T) -> Action[T]:
    """An action that resolves with ``value`` and never fails."""

    async def go() -> T:
        return value

    return Action(go)


def bind(action: Action[T], mapper: Callable[[T], Action[U]]) -> Action[U]:
    """Run ``action``, feed its result to ``mapper``, run the action it returns.

    Failures from either stage propagate unchanged.
    """

    async def go() -> U:
        value = await action()
        return await mapper(value)()

    return Action(go)


def fmap(action: Action[T], fn: Callable[[T], U]) -> Action[U]:
    """Apply a plain function to the result of ``action``."""

    async def go() -> U:
        return fn(await action())

    return Action(go)


def lift(fn: Callable[[T], Awaitable[U]]) -> Callable[[T], Action[U]]:
    """Wrap a coroutine function so calling it builds an action instead."""

    def lifted(arg: T) -> Action[U]:
        return Action(lambda: fn(arg))

    return lifted


def all_(actions: Iterable[Action[T]]) -> Action[list[T]]:
    """Run all actions concurrently; results keep the input order.

    The first failure fails the whole action.
    """
    pending = list(actions)

    async def go() -> list[T]:
        return list(await asyncio.gather(*(action() for action in pending)))

    return Action(go)


async def run(action: Action[T]) -> T:
    """Invoke ``action`` once and wait for it to settle."""
    return await action()


__all__ = ["Action", "all_", "bind", "fmap", "lift", "pure", "run"]
