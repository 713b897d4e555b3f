"""Adaptive precision timing of algorithms.

A single call of a fast algorithm is far below the resolution of the clock,
so each input is timed by calling the algorithm in a loop until the total
elapsed time is long enough for the clock resolution to be a negligible
fraction of it::

    min_measurable = resolution * (1 / relative_error + 1)

The mean time per call is then ``elapsed / calls``.

Algorithms that modify their input (sorting in place, ...) are timed in the
mutating mode: every call gets a fresh clone of the input and the time spent
cloning is removed from the measurement.

The loops spin on the clock and never sleep. Without :class:`TimingLimits`
they are unbounded: a very cheap algorithm combined with a tiny relative
error can run for a long time.
"""

from __future__ import annotations

import math
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Sequence, Union

from chrono_probe.clock import resolution as clock_resolution
from chrono_probe.errors import InvalidArgument, MeasurementTimeout
from chrono_probe.input import Input, InputSet
from chrono_probe.measurements import Measurement, Measurements, Point
from chrono_probe.progress import (
    ProgressEvent,
    ProgressObserver,
    is_checkpoint,
    log_progress,
    no_progress,
)

logger = logging.getLogger("chrono_probe.timing")

Clock = Callable[[], float]


@dataclass(frozen=True, slots=True)
class Algorithm:
    """A named callable under measurement.

    Fields:
        name: Label used for the resulting series.
        function: Called with one input; its return value is discarded.
        mutating: True if ``function`` modifies its argument, which switches
            the engine to clone-per-call timing.
    """

    name: str
    function: Callable[[Any], Any]
    mutating: bool = False

    def __call__(self, value: Any) -> Any:
        return self.function(value)


AlgorithmLike = Union[Algorithm, Callable[[Any], Any]]


@dataclass(frozen=True, slots=True)
class TimingLimits:
    """Optional caps applied to every single timing loop.

    ``max_iterations`` bounds the number of calls, ``max_seconds`` the real
    time spent in the loop (cloning included). ``None`` disables a cap.
    """

    max_iterations: int | None = None
    max_seconds: float | None = None

    def __post_init__(self) -> None:
        if self.max_iterations is not None and self.max_iterations <= 0:
            raise InvalidArgument(
                f"max_iterations must be greater than 0, got {self.max_iterations}"
            )
        if self.max_seconds is not None and not (self.max_seconds > 0):
            raise InvalidArgument(f"max_seconds must be greater than 0, got {self.max_seconds}")

    def check(self, iterations: int, started: float, now: float, elapsed: float) -> None:
        if self.max_iterations is not None and iterations >= self.max_iterations:
            raise MeasurementTimeout(
                f"timing loop reached {iterations} iterations without reaching the "
                "requested precision",
                iterations,
                elapsed,
            )
        if self.max_seconds is not None and now - started >= self.max_seconds:
            raise MeasurementTimeout(
                f"timing loop exceeded {self.max_seconds}s without reaching the "
                "requested precision",
                iterations,
                elapsed,
            )


NO_LIMITS = TimingLimits()


def as_algorithm(algorithm: AlgorithmLike, mutating: bool = False) -> Algorithm:
    """Wrap a bare callable into an :class:`Algorithm` named after it."""
    if isinstance(algorithm, Algorithm):
        return algorithm
    name = getattr(algorithm, "__name__", None) or repr(algorithm)
    return Algorithm(name=name, function=algorithm, mutating=mutating)


def min_measurable_time(resolution: float, relative_error: float) -> float:
    return resolution * (1.0 / relative_error + 1.0)


def measure_one(
    algorithm: Callable[[Any], Any],
    value: Any,
    relative_error: float,
    resolution: float,
    limits: TimingLimits = NO_LIMITS,
    clock: Clock = time.perf_counter,
) -> float:
    """Mean duration (s) of ``algorithm(value)`` to the requested precision."""
    min_measurable = min_measurable_time(resolution, relative_error)
    n = 0
    start = clock()
    while True:
        algorithm(value)
        n += 1
        now = clock()
        elapsed = now - start
        if elapsed > min_measurable:
            return elapsed / n
        limits.check(n, start, now, elapsed)


def measure_one_mut(
    algorithm: Callable[[Any], Any],
    value: Input,
    relative_error: float,
    resolution: float,
    limits: TimingLimits = NO_LIMITS,
    clock: Clock = time.perf_counter,
) -> float:
    """Like :func:`measure_one` for algorithms that consume their input.

    Each call runs on ``value.clone()``. The clone is timed on its own and
    the start timestamp is moved forward by that amount, so the final
    ``elapsed`` only accounts for the algorithm calls (plus the negligible
    loop bookkeeping).
    """
    min_measurable = min_measurable_time(resolution, relative_error)
    n = 0
    started = start = clock()
    while True:
        clone_start = clock()
        trial = value.clone()
        clone_duration = clock() - clone_start
        algorithm(trial)
        n += 1
        start += clone_duration
        now = clock()
        elapsed = now - start
        if elapsed > min_measurable:
            return elapsed / n
        limits.check(n, started, now, elapsed)


def measure_group(
    algorithm: AlgorithmLike,
    group: Sequence[Input],
    relative_error: float,
    resolution: float,
    limits: TimingLimits = NO_LIMITS,
    clock: Clock = time.perf_counter,
) -> Point:
    """Time every repetition of one size and sum the per-call means.

    The sum grows with the number of repetitions; only series built with
    the same repetition count are comparable.
    """
    algorithm = as_algorithm(algorithm)
    timer = measure_one_mut if algorithm.mutating else measure_one
    total = 0.0
    for value in group:
        total += timer(algorithm.function, value, relative_error, resolution, limits, clock)
    return Point(size=group[0].size(), time=total)


def measure_series(
    algorithm: Algorithm,
    inputs: InputSet,
    relative_error: float,
    resolution: float,
    limits: TimingLimits = NO_LIMITS,
    progress: ProgressObserver = no_progress,
    clock: Clock = time.perf_counter,
) -> Measurement:
    """One :class:`Measurement` for ``algorithm`` over every group of ``inputs``."""
    total = len(inputs)
    points: list[Point] = []
    for done, group in enumerate(inputs, start=1):
        points.append(measure_group(algorithm, group, relative_error, resolution, limits, clock))
        if is_checkpoint(done, total):
            event = ProgressEvent("measure", algorithm.name, done, total)
            log_progress(logger, event)
            progress(event)
    return Measurement(algorithm.name, points)


def measure(
    inputs: InputSet,
    algorithms: Iterable[AlgorithmLike],
    relative_error: float,
    limits: TimingLimits = NO_LIMITS,
    progress: ProgressObserver | None = None,
    resolution: float | None = None,
    clock: Clock = time.perf_counter,
) -> Measurements:
    """Time every algorithm on every input group.

    Args:
        inputs: Grouped inputs from :class:`~chrono_probe.input.InputBuilder`.
        algorithms: :class:`Algorithm` objects or bare callables (taken as
            non-mutating).
        relative_error: Target precision of each timing, e.g. ``0.001``.
        limits: Optional caps on each timing loop.
        progress: Optional observer for per-algorithm progress.
        resolution: Clock resolution in seconds; calibrated when ``None``.
        clock: Monotonic clock returning seconds.

    Returns:
        Measurements with one series per algorithm, in the given order.

    Raises:
        InvalidArgument: If ``relative_error`` is not positive, no algorithm
            is given or ``inputs`` is empty.
        MeasurementTimeout: If a limit in ``limits`` is exceeded.
    """
    return _measure_all(
        inputs,
        [as_algorithm(a) for a in algorithms],
        relative_error,
        limits,
        progress,
        resolution,
        clock,
    )


def measure_mut(
    inputs: InputSet,
    algorithms: Iterable[AlgorithmLike],
    relative_error: float,
    limits: TimingLimits = NO_LIMITS,
    progress: ProgressObserver | None = None,
    resolution: float | None = None,
    clock: Clock = time.perf_counter,
) -> Measurements:
    """:func:`measure` for algorithms modifying their input.

    Bare callables are wrapped as mutating; :class:`Algorithm` objects keep
    their own ``mutating`` flag. The shared input set is never modified.
    """
    return _measure_all(
        inputs,
        [as_algorithm(a, mutating=True) for a in algorithms],
        relative_error,
        limits,
        progress,
        resolution,
        clock,
    )


def _measure_all(
    inputs: InputSet,
    algorithms: list[Algorithm],
    relative_error: float,
    limits: TimingLimits,
    progress: ProgressObserver | None,
    resolution: float | None,
    clock: Clock,
) -> Measurements:
    # NaN compares false both ways and would never end the timing loop
    if not (relative_error > 0) or not math.isfinite(relative_error):
        raise InvalidArgument(
            f"relative error must be a finite positive number, got {relative_error}"
        )
    if not algorithms:
        raise InvalidArgument("at least one algorithm must be given")
    if len(inputs) == 0:
        raise InvalidArgument("the input set must not be empty")
    if any(len(group) == 0 for group in inputs):
        raise InvalidArgument("every input group must hold at least one input")
    observer = progress or no_progress
    if resolution is None:
        resolution = clock_resolution(clock=clock)
    logger.info(
        "Clock resolution %.3e s, minimum measurable time %.3e s",
        resolution,
        min_measurable_time(resolution, relative_error),
    )
    series: list[Measurement] = []
    for i, algorithm in enumerate(algorithms, start=1):
        logger.info(
            "Processing %s (%d/%d)%s",
            algorithm.name,
            i,
            len(algorithms),
            " [mutating]" if algorithm.mutating else "",
        )
        series.append(
            measure_series(
                algorithm, inputs, relative_error, resolution, limits, observer, clock
            )
        )
    return Measurements(series=series, relative_error=relative_error, resolution=resolution)
