"""Tests for the timing engine.

Most tests drive the engine with the FakeClock fixture: the measured
"algorithm" advances the clock by a known cost, which makes iteration counts
and returned durations exact.
"""

from __future__ import annotations

import math

import pytest

from chrono_probe.clock import resolution, tick
from chrono_probe.errors import InvalidArgument, MeasurementTimeout
from chrono_probe.input import Input, InputBuilder, InputSet
from chrono_probe.inputs import VectorInput
from chrono_probe.distribution import Uniform
from chrono_probe.timing import (
    Algorithm,
    TimingLimits,
    as_algorithm,
    measure,
    measure_group,
    measure_mut,
    measure_one,
    measure_one_mut,
    min_measurable_time,
)


class ClockedInput(Input):
    """Input whose clone costs ``clone_cost`` on the fake clock."""

    def __init__(self, length: int, clock, clone_cost: float = 0.0) -> None:
        self.length = length
        self.clock = clock
        self.clone_cost = clone_cost
        self.consumed = False

    def size(self) -> int:
        return self.length

    @classmethod
    def generate(cls, size: int, config) -> "ClockedInput":
        return cls(size, config)

    def clone(self) -> "ClockedInput":
        self.clock.advance(self.clone_cost)
        return ClockedInput(self.length, self.clock, self.clone_cost)


def costly(clock, cost: float):
    calls = []

    def algorithm(value) -> None:
        calls.append(value)
        clock.advance(cost)

    return algorithm, calls


def test_min_measurable_time() -> None:
    assert min_measurable_time(1.0, 0.25) == 5.0


def test_measure_one_returns_mean_call_time(fake_clock) -> None:
    algorithm, calls = costly(fake_clock, 2.0)
    mean = measure_one(algorithm, object(), 0.25, 1.0, clock=fake_clock)
    # loop stops at the first elapsed > 5: 3 calls, 6 units
    assert len(calls) == 3
    assert mean == 2.0
    assert mean * len(calls) > min_measurable_time(1.0, 0.25)


def test_measure_one_smaller_error_means_more_calls(fake_clock) -> None:
    algorithm, calls = costly(fake_clock, 1.0)
    measure_one(algorithm, object(), 0.01, 1.0, clock=fake_clock)
    assert len(calls) == 102


def test_measure_one_mut_excludes_clone_time(fake_clock) -> None:
    value = ClockedInput(10, fake_clock, clone_cost=5.0)
    algorithm, calls = costly(fake_clock, 2.0)
    mean = measure_one_mut(algorithm, value, 0.25, 1.0, clock=fake_clock)
    assert mean == 2.0
    assert len(calls) == 3
    # every call got its own fresh clone, never the shared input
    assert all(c is not value for c in calls)
    assert len({id(c) for c in calls}) == 3


def test_measure_one_mut_leaves_input_untouched() -> None:
    value = VectorInput([5, 4, 3, 2, 1])

    def sort_in_place(v: VectorInput) -> None:
        v.values.sort()

    measure_one_mut(sort_in_place, value, 0.5, 1e-7)
    assert value.values == [5, 4, 3, 2, 1]


def test_measure_group_sums_repetitions(fake_clock) -> None:
    group = [ClockedInput(7, fake_clock) for _ in range(3)]
    algorithm, _ = costly(fake_clock, 2.0)
    point = measure_group(Algorithm("a", algorithm), group, 0.25, 1.0, clock=fake_clock)
    assert point.size == 7
    assert point.time == 6.0


def test_measure_group_mutating_uses_clones(fake_clock) -> None:
    group = [ClockedInput(4, fake_clock, clone_cost=10.0)]
    algorithm, calls = costly(fake_clock, 2.0)
    point = measure_group(
        Algorithm("m", algorithm, mutating=True), group, 0.25, 1.0, clock=fake_clock
    )
    assert point.time == 2.0
    assert all(c is not group[0] for c in calls)


def test_measure_builds_one_series_per_algorithm(fake_clock) -> None:
    inputs = InputSet([[ClockedInput(s, fake_clock)] for s in (30, 10, 20)])
    cheap, _ = costly(fake_clock, 1.0)
    slow, _ = costly(fake_clock, 3.0)
    result = measure(
        inputs,
        [Algorithm("cheap", cheap), slow],
        0.25,
        resolution=1.0,
        clock=fake_clock,
    )
    assert [m.algorithm_name for m in result.series] == ["cheap", "algorithm"]
    assert result.relative_error == 0.25
    assert result.resolution == 1.0
    cheap_series = result.get("cheap")
    assert [p.size for p in cheap_series.points] == [30, 10, 20]
    assert [p.time for p in cheap_series.points] == [1.0, 1.0, 1.0]
    assert [p.time for p in result.get("algorithm").points] == [3.0, 3.0, 3.0]


def test_measure_mut_marks_bare_callables_mutating(fake_clock) -> None:
    inputs = InputSet([[ClockedInput(5, fake_clock, clone_cost=100.0)]])
    algorithm, calls = costly(fake_clock, 2.0)
    result = measure_mut(inputs, [algorithm], 0.25, resolution=1.0, clock=fake_clock)
    assert result.series[0].points[0].time == 2.0
    assert all(c is not inputs.groups[0][0] for c in calls)


def test_measure_calibrates_resolution_when_not_given() -> None:
    calls = []

    class TickingClock:
        def __init__(self) -> None:
            self.t = 0.0

        def __call__(self) -> float:
            self.t += 0.5
            return self.t

    clock = TickingClock()
    inputs = InputSet([[VectorInput([1])]])
    result = measure(inputs, [calls.append], 0.5, clock=clock)
    assert result.resolution == 0.5
    assert calls


def test_measure_reports_progress(fake_clock) -> None:
    inputs = InputSet([[ClockedInput(s, fake_clock)] for s in range(1, 21)])
    algorithm, _ = costly(fake_clock, 1.0)
    events = []
    measure(inputs, [algorithm], 0.5, progress=events.append, resolution=1.0, clock=fake_clock)
    assert {e.stage for e in events} == {"measure"}
    assert events[-1].done == 20 and events[-1].total == 20


@pytest.mark.parametrize("relative_error", [0.0, -0.1])
def test_measure_rejects_non_positive_relative_error(relative_error: float) -> None:
    calls = []
    inputs = InputSet([[VectorInput([1, 2])]])
    with pytest.raises(InvalidArgument):
        measure(inputs, [calls.append], relative_error)
    assert calls == []


def test_measure_rejects_empty_algorithms_and_inputs() -> None:
    with pytest.raises(InvalidArgument):
        measure(InputSet([[VectorInput([1])]]), [], 0.1)
    with pytest.raises(InvalidArgument):
        measure(InputSet([]), [len], 0.1)


def test_iteration_cap_raises_timeout(fake_clock) -> None:
    algorithm, calls = costly(fake_clock, 1.0)
    with pytest.raises(MeasurementTimeout) as info:
        measure_one(
            algorithm,
            object(),
            0.001,
            1.0,
            limits=TimingLimits(max_iterations=3),
            clock=fake_clock,
        )
    assert len(calls) == 3
    assert info.value.iterations == 3
    assert info.value.elapsed == 3.0


def test_wall_clock_cap_counts_clone_time(fake_clock) -> None:
    value = ClockedInput(1, fake_clock, clone_cost=4.0)
    algorithm, calls = costly(fake_clock, 1.0)
    with pytest.raises(MeasurementTimeout):
        measure_one_mut(
            algorithm,
            value,
            0.001,
            1.0,
            limits=TimingLimits(max_seconds=12.0),
            clock=fake_clock,
        )
    # 5 units per iteration, cap reached after the third
    assert len(calls) == 3


def test_limits_not_hit_keep_precision(fake_clock) -> None:
    algorithm, _ = costly(fake_clock, 2.0)
    mean = measure_one(
        algorithm,
        object(),
        0.25,
        1.0,
        limits=TimingLimits(max_iterations=100, max_seconds=100.0),
        clock=fake_clock,
    )
    assert mean == 2.0


def test_as_algorithm_names_bare_callables() -> None:
    def my_algo(x):
        return x

    wrapped = as_algorithm(my_algo, mutating=True)
    assert wrapped.name == "my_algo"
    assert wrapped.mutating is True
    named = Algorithm("given", my_algo)
    assert as_algorithm(named, mutating=True) is named


# --- real clock smoke tests ---


def test_clock_resolution_positive() -> None:
    assert tick() > 0
    assert resolution() > 0


def test_resolution_is_mean_of_ticks() -> None:
    class StepClock:
        def __init__(self) -> None:
            self.t = 0.0

        def __call__(self) -> float:
            self.t += 0.25
            return self.t

    assert resolution(samples=100, clock=StepClock()) == 0.25


def test_measure_real_clock_smoke() -> None:
    inputs = InputBuilder(Uniform(10, 200), VectorInput).build(4, repetitions=2)
    result = measure(inputs, [Algorithm("sum", lambda v: sum(v.values))], 0.5)
    series = result.series[0]
    assert len(series) == 4
    assert [p.size for p in series.points] == inputs.sizes()
    assert all(p.time > 0 for p in series.points)
    assert result.resolution > 0


@pytest.mark.parametrize("relative_error", [math.nan, math.inf])
def test_measure_rejects_non_finite_relative_error(relative_error: float) -> None:
    calls = []
    inputs = InputSet([[VectorInput([1, 2])]])
    with pytest.raises(InvalidArgument):
        measure(
            inputs,
            [calls.append],
            relative_error,
            limits=TimingLimits(max_iterations=10_000),
            resolution=1e-7,
        )
    assert calls == []


def test_measure_rejects_empty_group() -> None:
    calls = []
    with pytest.raises(InvalidArgument):
        measure(InputSet([[VectorInput([1])], []]), [calls.append], 0.1, resolution=1e-7)
    assert calls == []


@pytest.mark.parametrize(
    "kwargs",
    [
        {"max_iterations": 0},
        {"max_iterations": -5},
        {"max_seconds": 0.0},
        {"max_seconds": -1.0},
        {"max_seconds": math.nan},
    ],
)
def test_timing_limits_reject_non_positive_caps(kwargs) -> None:
    with pytest.raises(InvalidArgument):
        TimingLimits(**kwargs)
