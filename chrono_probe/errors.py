"""Exception hierarchy shared by the measurement engine."""


class ChronoProbeError(Exception):
    """Base class for all errors raised by chrono_probe."""


class InvalidArgument(ChronoProbeError, ValueError):
    """Invalid configuration detected before any input is built or timed.

    Covers non-positive counts (``n``, ``repetitions``), non-positive
    ``relative_error`` or ``lambda``, empty / inverted size ranges and invalid
    example input configurations (empty character sets etc.).
    """


class MeasurementTimeout(ChronoProbeError, RuntimeError):
    """A timing loop exceeded its iteration or wall-clock cap.

    Attributes:
        iterations: Number of completed algorithm calls when the cap was hit.
        elapsed: Accumulated measured time in seconds at that moment.
    """

    def __init__(self, message: str, iterations: int, elapsed: float) -> None:
        super().__init__(message)
        self.iterations = iterations
        self.elapsed = elapsed
