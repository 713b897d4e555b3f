"""Core package for empirical time complexity measurements.

Exports the size distributions, the input builder, the timing engine and
the result containers.
"""

from chrono_probe.clock import resolution  # noqa: F401
from chrono_probe.distribution import (  # noqa: F401
    Exponential,
    GenerationType,
    Reciprocal,
    Uniform,
)
from chrono_probe.errors import (  # noqa: F401
    ChronoProbeError,
    InvalidArgument,
    MeasurementTimeout,
)
from chrono_probe.input import Input, InputBuilder, InputSet  # noqa: F401
from chrono_probe.measurements import Measurement, Measurements, Point  # noqa: F401
from chrono_probe.timing import (  # noqa: F401
    Algorithm,
    TimingLimits,
    measure,
    measure_group,
    measure_mut,
    measure_one,
    measure_one_mut,
)

__all__ = [
    "Algorithm",
    "ChronoProbeError",
    "Exponential",
    "GenerationType",
    "Input",
    "InputBuilder",
    "InputSet",
    "InvalidArgument",
    "Measurement",
    "MeasurementTimeout",
    "Measurements",
    "Point",
    "Reciprocal",
    "TimingLimits",
    "Uniform",
    "measure",
    "measure_group",
    "measure_mut",
    "measure_one",
    "measure_one_mut",
    "resolution",
]
