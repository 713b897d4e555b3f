"""Clock calibration.

The timing engine needs to know the smallest time difference the host clock
can report so it can decide how long a loop must run before the measured
total is precise enough.
"""

from __future__ import annotations

import time
from typing import Callable

from chrono_probe.errors import InvalidArgument

DEFAULT_SAMPLES = 100


def tick(clock: Callable[[], float] = time.perf_counter) -> float:
    """Spin until the clock changes and return the observed step (seconds)."""
    start = clock()
    while True:
        now = clock()
        if now != start:
            return now - start


def resolution(
    samples: int = DEFAULT_SAMPLES,
    clock: Callable[[], float] = time.perf_counter,
) -> float:
    """Average of ``samples`` clock ticks, in seconds.

    A single tick is noisy (the OS may preempt us between two readings), the
    mean over 100 ticks is stable enough to size the timing loops.
    """
    if samples <= 0:
        raise InvalidArgument("samples must be greater than 0")
    total = 0.0
    for _ in range(samples):
        total += tick(clock)
    return total / samples
