"""Integer vectors: unsorted ones for sorting, sorted ones for searching."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum

from chrono_probe.input import Input

U32_MAX = 2**32 - 1


@dataclass
class VectorInput(Input):
    """Unsorted vector of random 32-bit integers; takes no configuration."""

    values: list[int] = field(default_factory=list)

    def size(self) -> int:
        return len(self.values)

    @classmethod
    def generate(cls, size: int, config: None = None) -> "VectorInput":
        return cls([random.getrandbits(32) for _ in range(size)])

    def clone(self) -> "VectorInput":
        return VectorInput(self.values.copy())


class SearchGenerator(Enum):
    FAST = "fast"  # one value per equal-width bucket, sorted by construction
    UNIFORM = "uniform"  # independent uniform values, sorted afterwards


@dataclass
class SearchInput(Input):
    """Sorted vector plus the value to look for."""

    vector: list[int]
    target: int

    def size(self) -> int:
        return len(self.vector)

    @classmethod
    def generate(
        cls, size: int, config: SearchGenerator | None = None
    ) -> "SearchInput":
        generator = config or SearchGenerator.FAST
        if generator is SearchGenerator.FAST:
            vector = _bucketed_vector(size, 0, U32_MAX)
        else:
            vector = sorted(random.randint(0, U32_MAX) for _ in range(size))
        return cls(vector, random.randint(0, U32_MAX))


def _bucketed_vector(n: int, lo: int, hi: int) -> list[int]:
    if n == 0:
        return []
    bucket = (hi - lo) // n
    vector = []
    for i in range(n):
        bucket_lo = lo + i * bucket
        bucket_hi = hi if i == n - 1 else bucket_lo + max(bucket - 1, 0)
        vector.append(random.randint(bucket_lo, bucket_hi))
    return vector
