"""Result containers produced by the timing engine.

This module defines:
    Point        -- one (size, time) observation for a group of inputs.
    Measurement  -- the size/time series of one algorithm.
    Measurements -- all series of one run plus the shared run metadata.

Times are stored in seconds (floats, as returned by ``time.perf_counter``);
regression and log scaling work on microseconds.
"""

from __future__ import annotations

import json
import math
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

MICROS_PER_SECOND = 1_000_000.0


@dataclass(frozen=True)
class Point:
    """Aggregated measurement for one nominal input size.

    Fields:
        size: Nominal size of the input group.
        time: Sum over the group's repetitions of the mean call time (s).
    """

    size: int
    time: float

    @property
    def time_us(self) -> float:
        return self.time * MICROS_PER_SECOND


@dataclass
class Measurement:
    """Series of points for one algorithm (not sorted unless requested)."""

    algorithm_name: str
    points: list[Point] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.points)

    def max_time(self) -> float:
        return max(p.time for p in self.points)

    def min_time(self) -> float:
        return min(p.time for p in self.points)

    def max_size(self) -> int:
        return max(p.size for p in self.points)

    def min_size(self) -> int:
        return min(p.size for p in self.points)

    def sort(self) -> None:
        self.points.sort(key=lambda p: p.size)

    def sorted_by_size(self) -> "Measurement":
        return Measurement(self.algorithm_name, sorted(self.points, key=lambda p: p.size))

    def linear_regression(self) -> tuple[float, float]:
        """Least squares fit ``time_us = slope * size + intercept``.

        Returns:
            ``(slope, intercept)``.

        Raises:
            ZeroDivisionError: When all sizes are equal (or there are no
                points): the fit is undefined.
        """
        n = 0.0
        sum_x = sum_y = sum_xy = sum_xx = 0.0
        for point in self.points:
            x = float(point.size)
            y = point.time_us
            sum_x += x
            sum_y += y
            sum_xy += x * y
            sum_xx += x * x
            n += 1.0
        slope = (n * sum_xy - sum_x * sum_y) / (n * sum_xx - sum_x * sum_x)
        intercept = (sum_y - slope * sum_x) / n
        return slope, intercept

    def log_log_scale(self) -> "Measurement":
        """Map every point to ``(int(log2(size)), log2(time_us))``.

        On the resulting series the regression slope estimates the exponent
        of a power law ``time ~ size^k``. Sizes or times of zero raise the
        ``math`` domain error.
        """
        scaled = [
            Point(
                size=int(math.log2(p.size)),
                time=math.log2(p.time_us) / MICROS_PER_SECOND,
            )
            for p in self.points
        ]
        return Measurement(self.algorithm_name, scaled)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Measurement":
        return cls(
            algorithm_name=data["algorithm_name"],
            points=[Point(size=int(p["size"]), time=float(p["time"])) for p in data["points"]],
        )


@dataclass
class Measurements:
    """Complete result of one run.

    Fields:
        series: One Measurement per algorithm, in the order they were given.
        relative_error: Precision requested for every timing.
        resolution: Calibrated clock resolution in seconds.
    """

    series: list[Measurement]
    relative_error: float
    resolution: float

    def __iter__(self):
        return iter(self.series)

    def __len__(self) -> int:
        return len(self.series)

    def get(self, algorithm_name: str) -> Measurement:
        for measurement in self.series:
            if measurement.algorithm_name == algorithm_name:
                return measurement
        raise KeyError(algorithm_name)

    def max_time(self) -> float:
        return max(m.max_time() for m in self.series)

    def min_time(self) -> float:
        return min(m.min_time() for m in self.series)

    def max_size(self) -> int:
        return max(m.max_size() for m in self.series)

    def min_size(self) -> int:
        return min(m.min_size() for m in self.series)

    def log_log_scale(self) -> "Measurements":
        return Measurements(
            series=[m.log_log_scale() for m in self.series],
            relative_error=self.relative_error,
            resolution=self.resolution,
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Measurements":
        return cls(
            series=[Measurement.from_dict(m) for m in data["series"]],
            relative_error=float(data["relative_error"]),
            resolution=float(data["resolution"]),
        )

    def serialize_json(self, path: str | Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)
        return path
