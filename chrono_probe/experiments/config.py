"""YAML experiment configuration.

Turns the plain mapping loaded from ``config.yaml`` into a validated
:class:`ExperimentConfig`. Every problem is reported as
:class:`~chrono_probe.errors.InvalidArgument` before anything is generated or
timed.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from chrono_probe.algorithms import REGISTRY
from chrono_probe.distribution import (
    Exponential,
    GenerationType,
    ProbabilityDistribution,
    Reciprocal,
    Uniform,
)
from chrono_probe.errors import InvalidArgument
from chrono_probe.inputs import INPUT_TYPES, SearchGenerator, StringConfig, StringGen
from chrono_probe.timing import Algorithm, TimingLimits
from chrono_probe.visualization import PlotConfig, Scale

DISTRIBUTIONS: dict[str, type[ProbabilityDistribution]] = {
    "uniform": Uniform,
    "exponential": Exponential,
    "reciprocal": Reciprocal,
}


def load_config(config_file: str | Path = "config.yaml") -> dict:
    """Load configuration from YAML file."""
    with open(config_file, "r", encoding="utf-8") as file:
        config = yaml.safe_load(file)
    return config or {}


def _enum(enum_type, value: Any, what: str):
    try:
        return enum_type(value)
    except ValueError:
        allowed = ", ".join(e.value for e in enum_type)
        raise InvalidArgument(f"unknown {what} {value!r}, expected one of: {allowed}") from None


def _number(convert, value: Any, what: str):
    try:
        return convert(value)
    except (TypeError, ValueError, OverflowError):
        raise InvalidArgument(f"{what} must be a number, got {value!r}") from None


@dataclass(frozen=True)
class DistributionSettings:
    kind: str = "uniform"
    min_size: int = 10
    max_size: int = 1000
    generation: GenerationType = GenerationType.FIXED_INTERVALS
    lambda_: float | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DistributionSettings":
        kind = str(data.get("kind", "uniform")).lower()
        if kind not in DISTRIBUTIONS:
            raise InvalidArgument(
                f"unknown distribution {kind!r}, expected one of: {', '.join(DISTRIBUTIONS)}"
            )
        if "min" not in data or "max" not in data:
            raise InvalidArgument("distribution.min and distribution.max must be set")
        lambda_ = data.get("lambda")
        if lambda_ is not None and kind != "exponential":
            raise InvalidArgument("distribution.lambda only applies to the exponential distribution")
        settings = cls(
            kind=kind,
            min_size=_number(int, data["min"], "distribution.min"),
            max_size=_number(int, data["max"], "distribution.max"),
            generation=_enum(GenerationType, data.get("generation", "fixed"), "generation"),
            lambda_=None if lambda_ is None else _number(float, lambda_, "distribution.lambda"),
        )
        # constructing once validates the range
        settings.build()
        return settings

    def build(self, rng: random.Random | None = None) -> ProbabilityDistribution:
        kwargs: dict[str, Any] = {"gen_type": self.generation, "rng": rng}
        if self.lambda_ is not None:
            kwargs["lambda_"] = self.lambda_
        return DISTRIBUTIONS[self.kind](self.min_size, self.max_size, **kwargs)


@dataclass(frozen=True)
class InputSettings:
    kind: str = "vector"
    config: Any = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "InputSettings":
        kind = str(data.get("kind", "vector")).lower()
        if kind not in INPUT_TYPES:
            raise InvalidArgument(
                f"unknown input kind {kind!r}, expected one of: {', '.join(INPUT_TYPES)}"
            )
        if kind == "string":
            config: Any = StringConfig(
                method=_enum(StringGen, data.get("method", "random"), "string method"),
                char_set=tuple(data.get("char_set", "ab")),
            )
        elif kind == "search":
            config = _enum(SearchGenerator, data.get("generator", "fast"), "search generator")
        else:
            config = None
        return cls(kind=kind, config=config)

    @property
    def input_type(self):
        return INPUT_TYPES[self.kind]


@dataclass(frozen=True)
class PlotSettings:
    enabled: bool = True
    config: PlotConfig = field(default_factory=PlotConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PlotSettings":
        defaults = PlotConfig()
        return cls(
            enabled=bool(data.get("enabled", True)),
            config=PlotConfig(
                title=data.get("title", defaults.title),
                caption=data.get("caption", defaults.caption),
                x_label=data.get("x_label", defaults.x_label),
                y_label=data.get("y_label", defaults.y_label),
                scale=_enum(Scale, data.get("scale", defaults.scale.value), "plot scale"),
            ),
        )


@dataclass(frozen=True)
class ExperimentConfig:
    """Everything needed for one measurement run.

    Attributes:
        name: Used for the output directory.
        n: Number of input sizes.
        repetitions: Inputs generated per size.
        relative_error: Precision of every timing.
        algorithms: Registry names, all expecting ``input.kind``.
        seed: Optional seed making the generated inputs reproducible.
        save_inputs: Also write the generated inputs to ``inputs.json``.
    """

    name: str
    n: int
    repetitions: int
    relative_error: float
    distribution: DistributionSettings
    input: InputSettings
    algorithms: tuple[str, ...]
    results_folder: str = "results"
    seed: int | None = None
    save_inputs: bool = False
    limits: TimingLimits = TimingLimits()
    plot: PlotSettings = field(default_factory=PlotSettings)

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> "ExperimentConfig":
        exp = config.get("experiment") or {}
        n = _number(int, exp.get("n", 0), "experiment.n")
        repetitions = _number(int, exp.get("repetitions", 1), "experiment.repetitions")
        relative_error = _number(
            float, exp.get("relative_error", 0.001), "experiment.relative_error"
        )
        if n <= 0:
            raise InvalidArgument("experiment.n must be greater than 0")
        if repetitions <= 0:
            raise InvalidArgument("experiment.repetitions must be greater than 0")
        if not (relative_error > 0) or not math.isfinite(relative_error):
            raise InvalidArgument("experiment.relative_error must be a finite positive number")

        input_settings = InputSettings.from_dict(config.get("input") or {})
        names = tuple(config.get("algorithms") or ())
        if not names:
            raise InvalidArgument("algorithms list must be set and non-empty")
        for name in names:
            if name not in REGISTRY:
                raise InvalidArgument(
                    f"unknown algorithm {name!r}, expected one of: {', '.join(REGISTRY)}"
                )
            expected_kind = REGISTRY[name][1]
            if expected_kind != input_settings.kind:
                raise InvalidArgument(
                    f"algorithm {name!r} needs {expected_kind!r} inputs, "
                    f"configured input kind is {input_settings.kind!r}"
                )

        limits_cfg = exp.get("limits") or {}
        max_iterations = limits_cfg.get("max_iterations")
        max_seconds = limits_cfg.get("max_seconds")
        seed = exp.get("seed")
        return cls(
            name=str(exp.get("name", "experiment")),
            n=n,
            repetitions=repetitions,
            relative_error=relative_error,
            distribution=DistributionSettings.from_dict(config.get("distribution") or {}),
            input=input_settings,
            algorithms=names,
            results_folder=str(exp.get("results_folder", "results")),
            seed=None if seed is None else _number(int, seed, "experiment.seed"),
            save_inputs=bool(exp.get("save_inputs", False)),
            limits=TimingLimits(
                max_iterations=(
                    None
                    if max_iterations is None
                    else _number(int, max_iterations, "experiment.limits.max_iterations")
                ),
                max_seconds=(
                    None
                    if max_seconds is None
                    else _number(float, max_seconds, "experiment.limits.max_seconds")
                ),
            ),
            plot=PlotSettings.from_dict(config.get("plot") or {}),
        )

    @classmethod
    def from_file(cls, config_file: str | Path) -> "ExperimentConfig":
        return cls.from_dict(load_config(config_file))

    def build_algorithms(self) -> list[Algorithm]:
        return [REGISTRY[name][0] for name in self.algorithms]
