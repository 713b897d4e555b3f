"""Input size distributions.

Sizes are produced by inverse transform sampling: a fraction ``u`` in
``[0, 1]`` is mapped through the inverse cumulative distribution function of
the configured law. ``u`` is either taken at evenly spaced quantiles
(``GenerationType.FIXED_INTERVALS``, deterministic and always hitting both
ends of the range) or drawn at random (``GenerationType.RANDOM``).

Contains:
- Uniform      -- sizes spread linearly over the range.
- Exponential  -- denser towards the small end, mean-matched to the range.
- Reciprocal   -- log-uniform, the same number of sizes per decade.
"""

from __future__ import annotations

import math
import random
import sys
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterator, Protocol

from chrono_probe.errors import InvalidArgument

# Largest exponent for which exp() is still representable as a float.
_MAX_EXP_ARGUMENT = sys.float_info.max_exp * math.log(2.0)


class GenerationType(Enum):
    FIXED_INTERVALS = "fixed"
    RANDOM = "random"


class Distribution(Protocol):
    """Anything able to produce ``n`` input sizes."""

    def generate(self, n: int) -> list[int]: ...


@dataclass(frozen=True)
class ProbabilityDistribution:
    """Common sampling logic over the closed range ``[min_size, max_size]``.

    Subclasses only provide :meth:`inverse_cdf`.

    Attributes:
        min_size: Smallest size that can be produced.
        max_size: Largest size that can be produced.
        gen_type: How the quantiles are chosen.
        rng: Random source for ``GenerationType.RANDOM``; the module level
            generator of :mod:`random` when ``None``.
    """

    min_size: int
    max_size: int
    gen_type: GenerationType = GenerationType.FIXED_INTERVALS
    rng: random.Random | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.min_size < 0:
            raise InvalidArgument(f"size range must be non-negative, got min={self.min_size}")
        if self.min_size > self.max_size:
            raise InvalidArgument(
                f"size range must not be empty, got [{self.min_size}, {self.max_size}]"
            )

    def inverse_cdf(self, u: float) -> float:
        raise NotImplementedError

    def with_gen_type(self, gen_type: GenerationType) -> "ProbabilityDistribution":
        return replace(self, gen_type=gen_type)

    def fractions(self, n: int) -> Iterator[float]:
        """Yield the ``n`` quantiles fed into :meth:`inverse_cdf`."""
        if self.gen_type is GenerationType.FIXED_INTERVALS:
            for i in range(n):
                yield i / (n - 1) if n != 1 else 0.0
        else:
            source = self.rng if self.rng is not None else random
            for _ in range(n):
                yield source.random()

    def generate(self, n: int) -> list[int]:
        """Return ``n`` sizes, each within ``[min_size, max_size]``.

        Raises:
            InvalidArgument: If ``n`` is not positive.
        """
        if n <= 0:
            raise InvalidArgument("the number of input sizes must be greater than 0")
        sizes: list[int] = []
        for u in self.fractions(n):
            size = int(self.inverse_cdf(u))
            # rounding in the closed forms may step just outside the range
            sizes.append(min(max(size, self.min_size), self.max_size))
        return sizes


@dataclass(frozen=True)
class Uniform(ProbabilityDistribution):
    def inverse_cdf(self, u: float) -> float:
        return self.min_size + (self.max_size - self.min_size) * u


@dataclass(frozen=True)
class Exponential(ProbabilityDistribution):
    """Exponential law truncated to ``[min_size, max_size]``.

    Unless given explicitly, ``lambda_`` is chosen as
    ``ln(max/min) / (max - min)`` so the distribution is spread over the whole
    range. For a degenerate range (``min == max``) the limit ``1 / min`` is
    used.
    """

    lambda_: float | None = None

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.min_size <= 0:
            raise InvalidArgument("exponential distribution requires min_size > 0")
        if self.lambda_ is None:
            if self.max_size > self.min_size:
                lambda_ = math.log(self.max_size / self.min_size) / (
                    self.max_size - self.min_size
                )
            else:
                lambda_ = 1.0 / self.min_size
            object.__setattr__(self, "lambda_", lambda_)
        elif not (self.lambda_ > 0) or not math.isfinite(self.lambda_):
            raise InvalidArgument(f"lambda must be a finite number greater than 0, got {self.lambda_}")

    def with_lambda(self, lambda_: float) -> "Exponential":
        return replace(self, lambda_=lambda_)

    def inverse_cdf(self, u: float) -> float:
        """Map ``u`` to ``F^-1(F(min) + u * (F(max) - F(min)))``.

        With ``x = lambda*min`` and ``y = lambda*max`` this simplifies to
        ``(y - ln((1-u) e^(y-x) + u)) / lambda``. When ``e^(y-x)`` would
        overflow, the dominant term of the logarithm is used instead.
        """
        lam = self.lambda_
        lo = float(self.min_size)
        hi = float(self.max_size)
        if u == 0.0 or lo == hi:
            return lo
        if u == 1.0:
            return hi
        x = lam * lo
        y = lam * hi
        if y - x < _MAX_EXP_ARGUMENT:
            return (y - math.log((1.0 - u) * math.exp(y - x) + u)) / lam
        if y - x > -math.log(1.0 - u):
            return (x - math.log(1.0 - u)) / lam
        return (y - math.log(u)) / lam


@dataclass(frozen=True)
class Reciprocal(ProbabilityDistribution):
    def __post_init__(self) -> None:
        super().__post_init__()
        if self.min_size <= 0:
            raise InvalidArgument("reciprocal distribution requires min_size > 0")

    def inverse_cdf(self, u: float) -> float:
        return self.min_size * (self.max_size / self.min_size) ** u
