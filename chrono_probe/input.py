"""Input capability and the builder producing grouped input sets.

An input type tells the engine two things: how big an instance is
(:meth:`Input.size`) and how to make a fresh instance of a given size
(:meth:`Input.generate`). The :class:`InputBuilder` combines such a type with
a size distribution::

    builder = InputBuilder(Uniform(10, 100_000), SearchInput, SearchGenerator.FAST)
    inputs = builder.build(200, repetitions=5)
"""

from __future__ import annotations

import copy
import dataclasses
import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Generic, Iterator, TypeVar

from chrono_probe.distribution import Distribution
from chrono_probe.errors import InvalidArgument
from chrono_probe.progress import (
    ProgressEvent,
    ProgressObserver,
    is_checkpoint,
    log_progress,
    no_progress,
)

logger = logging.getLogger("chrono_probe.input")


class Input(ABC):
    """Base class for every measurable input type."""

    @abstractmethod
    def size(self) -> int:
        """Size of this instance as seen on the x axis of the results."""

    @classmethod
    @abstractmethod
    def generate(cls, size: int, config: Any) -> "Input":
        """Create a new (usually random) instance of the requested size.

        Args:
            size: Nominal size produced by the distribution.
            config: Generation strategy; each call receives its own copy.
        """

    def clone(self) -> "Input":
        """Independent copy used by the mutating timing mode."""
        return copy.deepcopy(self)

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready fields of this instance (dataclass inputs by default)."""
        if dataclasses.is_dataclass(self):
            return dataclasses.asdict(self)
        return dict(vars(self))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Input":
        return cls(**data)


I = TypeVar("I", bound=Input)


@dataclass
class InputSet(Generic[I]):
    """Inputs grouped by nominal size, in generation order.

    Invariant: every group is non-empty and all groups hold the same number
    of repetitions.
    """

    groups: list[list[I]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.groups)

    def __iter__(self) -> Iterator[list[I]]:
        return iter(self.groups)

    @property
    def repetitions(self) -> int:
        return len(self.groups[0]) if self.groups else 0

    def sizes(self) -> list[int]:
        return [group[0].size() for group in self.groups]

    def to_dict(self) -> dict[str, Any]:
        return {"groups": [[value.to_dict() for value in group] for group in self.groups]}

    def serialize_json(self, path: str | Path) -> Path:
        """Write the inputs to ``path`` (overwritten if it exists)."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)
        return path

    @classmethod
    def from_dict(cls, data: dict[str, Any], input_type: type[I]) -> "InputSet[I]":
        return cls([[input_type.from_dict(v) for v in group] for group in data["groups"]])

    @classmethod
    def load_json(cls, path: str | Path, input_type: type[I]) -> "InputSet[I]":
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_dict(json.load(f), input_type)


class InputBuilder(Generic[I]):
    """Materialise an :class:`InputSet` from a distribution and an input type.

    Args:
        distribution: Source of input sizes.
        input_type: :class:`Input` subclass whose ``generate`` is called.
        config: Generation strategy forwarded (as a deep copy) to every call.
        progress: Optional observer notified as groups are built.
    """

    def __init__(
        self,
        distribution: Distribution,
        input_type: type[I],
        config: Any = None,
        progress: ProgressObserver | None = None,
    ) -> None:
        self.distribution = distribution
        self.input_type = input_type
        self.config = config
        self.progress = progress or no_progress

    def build(self, n: int, repetitions: int = 1) -> InputSet[I]:
        """Generate ``n`` groups of ``repetitions`` inputs each.

        Raises:
            InvalidArgument: If ``n`` or ``repetitions`` is not positive.
        """
        if n <= 0:
            raise InvalidArgument("the number of inputs to be generated must be greater than 0")
        if repetitions <= 0:
            raise InvalidArgument("the number of repetitions must be greater than 0")
        sizes = self.distribution.generate(n)
        label = self.input_type.__name__
        logger.debug("Generating %d x %d %s inputs", n, repetitions, label)
        groups: list[list[I]] = []
        for done, size in enumerate(sizes, start=1):
            group = [
                self.input_type.generate(size, copy.deepcopy(self.config))
                for _ in range(repetitions)
            ]
            groups.append(group)
            if is_checkpoint(done, n):
                event = ProgressEvent("build", label, done, n)
                log_progress(logger, event)
                self.progress(event)
        return InputSet(groups)
