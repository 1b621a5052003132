"""Tests for the check driver."""

from __future__ import annotations

import random

import pytest

from statewalk import (
    CheckResult,
    IntermediateState,
    Machine,
    NoStartStateError,
    StartState,
    StartTransition,
    StatewalkSettings,
    TerminateState,
    Transition,
    ValidationFailure,
    Walk,
    WalkFailure,
    check,
)

MINIMAL_FAILING_WALK = Walk("step0", ("init", "foo", "back", "foo", "back"))


class TestCheck:
    @pytest.mark.asyncio
    async def test_passing_machine(self, loop_machine, rng, settings):
        result = await check(loop_machine, rng=rng, settings=settings)
        assert result.success
        assert result.failure is None
        assert result.walks_explored == 200
        assert result.finished_at is not None
        result.raise_for_failure()

    @pytest.mark.asyncio
    async def test_exploration_limit(self, loop_machine, rng, settings):
        result = await check(loop_machine, 17, rng=rng, settings=settings)
        assert result.walks_explored == 17
        assert result.exploration_limit == 17

    @pytest.mark.asyncio
    async def test_limit_from_settings(self, loop_machine, rng):
        settings = StatewalkSettings(_env_file=None, exploration_limit=9)
        result = await check(loop_machine, rng=rng, settings=settings)
        assert result.walks_explored == 9

    @pytest.mark.asyncio
    async def test_invalid_limit(self, loop_machine, settings):
        with pytest.raises(ValueError):
            await check(loop_machine, 0, settings=settings)

    @pytest.mark.asyncio
    async def test_finds_and_minimizes_failure(self, failing_machine, rng, settings):
        result = await check(failing_machine, rng=rng, settings=settings)
        assert not result.success
        assert result.failure is not None
        assert result.failure.walk == MINIMAL_FAILING_WALK
        assert isinstance(result.failure.cause, ValidationFailure)
        assert result.original_failure is not None
        assert result.walks_explored < 200

    @pytest.mark.asyncio
    async def test_raise_for_failure(self, failing_machine, rng, settings):
        result = await check(failing_machine, rng=rng, settings=settings)
        with pytest.raises(WalkFailure) as exc_info:
            result.raise_for_failure()
        assert exc_info.value.walk == MINIMAL_FAILING_WALK

    @pytest.mark.asyncio
    async def test_async_machine(self, async_failing_machine, rng, settings):
        result = await check(async_failing_machine, rng=rng, settings=settings)
        assert result.failure is not None
        assert result.failure.walk == MINIMAL_FAILING_WALK

    @pytest.mark.asyncio
    async def test_stops_at_first_failure(self, rng, settings):
        executed: list[int] = []

        def always_fail(value: int) -> None:
            executed.append(value)
            raise AssertionError("broken on arrival")

        machine = Machine({
            "s": StartState(edges={"go": StartTransition("t", lambda: 0)}),
            "t": IntermediateState(edges={"stay": Transition("t", lambda v: v)}, validate=always_fail),
        })
        result = await check(machine, rng=rng, settings=settings)
        assert result.walks_explored == 1
        assert result.failure is not None
        assert result.failure.walk == Walk("s", ("go",))
        # One run for the walk itself plus none for shrinking a one-step walk
        assert executed == [0]

    @pytest.mark.asyncio
    async def test_shrinking_can_be_disabled(self, rng):
        machine = Machine({
            "s": StartState(edges={"go": StartTransition("a", lambda: 0)}),
            "a": IntermediateState(
                edges={"spin": Transition("a", lambda v: v), "boom": Transition("end", lambda v: v)},
            ),
            "end": TerminateState(validate=lambda v: False),
        })
        settings = StatewalkSettings(_env_file=None, shrink=False, walk_length_mean=30, walk_length_spread=0)
        result = await check(machine, rng=random.Random(3), settings=settings)
        assert result.failure is result.original_failure
        assert result.shrink_ratio == 1.0

    @pytest.mark.asyncio
    async def test_shrink_ratio(self, rng):
        machine = Machine({
            "s": StartState(edges={"go": StartTransition("a", lambda: 0)}),
            "a": IntermediateState(
                edges={"spin": Transition("a", lambda v: v), "boom": Transition("end", lambda v: v)},
            ),
            "end": TerminateState(validate=lambda v: False),
        })
        settings = StatewalkSettings(_env_file=None, walk_length_mean=30, walk_length_spread=0)
        result = await check(machine, rng=rng, settings=settings)
        assert result.failure is not None
        assert result.failure.walk.edges[-1] == "boom"
        assert len(result.failure.walk) <= 2
        assert result.shrink_ratio <= 1.0

    @pytest.mark.asyncio
    async def test_no_start_state_is_fatal(self, settings):
        machine = Machine({"a": IntermediateState(), "b": TerminateState()})
        with pytest.raises(NoStartStateError):
            await check(machine, settings=settings)


class TestCheckResult:
    def test_success_summary(self):
        result = CheckResult(exploration_limit=10, walks_explored=10, steps_taken=42)
        result.finish()
        summary = result.summary()
        assert summary["success"] is True
        assert summary["walks_explored"] == 10
        assert summary["failing_walk_length"] is None
        assert summary["error"] is None
        assert result.duration_ms >= 0

    def test_shrink_ratio_without_failure(self):
        assert CheckResult(exploration_limit=1).shrink_ratio == 1.0
