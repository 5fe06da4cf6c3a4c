"""Tests for the Action core."""

import asyncio

import pytest

from fetchc import Action, all_, bind, fmap, lift, pure, run


def counting(value: int) -> tuple[Action[int], list[int]]:
    """An action returning ``value`` that records each invocation."""
    calls: list[int] = []

    async def go() -> int:
        calls.append(value)
        return value

    return Action(go), calls


def failing(exc: Exception) -> Action[int]:
    async def go() -> int:
        raise exc

    return Action(go)


class TestPure:
    """Tests for pure()."""

    async def test_resolves_with_value(self) -> None:
        assert await pure(42)() == 42

    async def test_none_is_a_value(self) -> None:
        assert await pure(None)() is None

    async def test_run_helper(self) -> None:
        assert await run(pure("x")) == "x"


class TestBind:
    """Tests for bind() sequencing."""

    async def test_left_identity(self) -> None:
        """bind(pure(x), f) settles like f(x)."""

        def f(x: int) -> Action[int]:
            return pure(x * 2)

        assert await bind(pure(21), f)() == await f(21)()

    async def test_left_identity_failure(self) -> None:
        def f(x: int) -> Action[int]:
            return failing(ValueError(f"bad {x}"))

        with pytest.raises(ValueError, match="bad 3"):
            await f(3)()
        with pytest.raises(ValueError, match="bad 3"):
            await bind(pure(3), f)()

    async def test_right_identity(self) -> None:
        assert await bind(pure(7), pure)() == 7

    async def test_associativity(self) -> None:
        def f(x: int) -> Action[int]:
            return pure(x + 1)

        def g(x: int) -> Action[str]:
            return pure(f"<{x}>")

        a = pure(1)
        left = bind(bind(a, f), g)
        right = bind(a, lambda t: bind(f(t), g))
        assert await left() == await right() == "<2>"

    async def test_construction_is_lazy(self) -> None:
        """Building a composition runs nothing."""
        action, calls = counting(1)
        mapped: list[int] = []

        def mapper(x: int) -> Action[int]:
            mapped.append(x)
            return pure(x)

        composed = bind(action, mapper)
        assert calls == []
        assert mapped == []

        assert await composed() == 1
        assert calls == [1]
        assert mapped == [1]

    async def test_reinvocation_reruns(self) -> None:
        action, calls = counting(5)
        composed = bind(action, lambda x: pure(x + 1))

        assert await composed() == 6
        assert await composed() == 6
        assert calls == [5, 5]

    async def test_steps_run_in_order(self) -> None:
        order: list[str] = []

        async def first() -> int:
            await asyncio.sleep(0.01)
            order.append("first")
            return 1

        def second(x: int) -> Action[int]:
            order.append("mapper")

            async def go() -> int:
                order.append("second")
                return x + 1

            return Action(go)

        assert await bind(Action(first), second)() == 2
        assert order == ["first", "mapper", "second"]

    async def test_failure_in_first_stage_skips_mapper(self) -> None:
        mapped: list[int] = []

        def mapper(x: int) -> Action[int]:
            mapped.append(x)
            return pure(x)

        with pytest.raises(KeyError, match="boom"):
            await bind(failing(KeyError("boom")), mapper)()
        assert mapped == []

    async def test_failure_in_second_stage_propagates(self) -> None:
        with pytest.raises(RuntimeError, match="late"):
            await bind(pure(1), lambda _: failing(RuntimeError("late")))()

    async def test_method_form(self) -> None:
        assert await pure(2).bind(lambda x: pure(x * 10))() == 20


class TestFmap:
    """Tests for fmap()."""

    async def test_applies_function(self) -> None:
        assert await fmap(pure(3), str)() == "3"

    async def test_method_form(self) -> None:
        assert await pure([1, 2]).map(len)() == 2


class TestLift:
    """Tests for lift()."""

    async def test_defers_call(self) -> None:
        calls: list[int] = []

        async def double(x: int) -> int:
            calls.append(x)
            return x * 2

        action = lift(double)(4)
        assert calls == []
        assert await action() == 8
        assert await action() == 8
        assert calls == [4, 4]

    async def test_composes_with_bind(self) -> None:
        async def shout(s: str) -> str:
            return s.upper()

        assert await bind(pure("hi"), lift(shout))() == "HI"


class TestAll:
    """Tests for all_()."""

    async def test_preserves_input_order(self) -> None:
        assert await all_([pure(1), pure(2), pure(3)])() == [1, 2, 3]

    async def test_order_independent_of_completion(self) -> None:
        async def delayed(pair: tuple[int, float]) -> int:
            value, seconds = pair
            await asyncio.sleep(seconds)
            return value

        slow = lift(delayed)
        actions = [slow((1, 0.03)), slow((2, 0.01)), slow((3, 0.0))]
        assert await all_(actions)() == [1, 2, 3]

    async def test_runs_concurrently(self) -> None:
        started: list[int] = []
        gate = asyncio.Event()

        async def wait_for_gate(value: int) -> int:
            started.append(value)
            if len(started) == 2:
                gate.set()
            await gate.wait()
            return value

        gated = lift(wait_for_gate)
        result = await asyncio.wait_for(all_([gated(1), gated(2)])(), timeout=1)
        assert result == [1, 2]

    async def test_one_failure_fails_all(self) -> None:
        with pytest.raises(ValueError, match="bad"):
            await all_([pure(1), failing(ValueError("bad")), pure(3)])()

    async def test_empty(self) -> None:
        assert await all_([])() == []

    async def test_accepts_generator_and_reruns(self) -> None:
        action, calls = counting(9)
        combined = all_(action for _ in range(2))
        assert await combined() == [9, 9]
        assert await combined() == [9, 9]
        assert calls == [9, 9, 9, 9]
