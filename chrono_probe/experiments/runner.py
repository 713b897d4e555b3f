"""Experiment runner: configuration in, result files out.

Each runner instance owns one timestamped directory under the results
folder; every experiment run through it gets its own sub-directory with
``measurements.json``, ``summary.csv`` and (optionally) ``time_plot.png``
and ``inputs.json``.
Older result directories are never removed.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from chrono_probe.experiments.aggregate import write_summary_csv
from chrono_probe.experiments.config import ExperimentConfig
from chrono_probe.input import InputBuilder, InputSet
from chrono_probe.measurements import Measurements
from chrono_probe.progress import ProgressObserver
from chrono_probe.timing import measure
from chrono_probe.visualization import time_plot

logger = logging.getLogger("chrono_probe.experiments")


@dataclass
class RunResult:
    config: ExperimentConfig
    measurements: Measurements
    output_dir: Path
    measurements_path: Path
    summary_path: Path
    plot_path: Optional[Path] = None
    inputs_path: Optional[Path] = None


class ExperimentRunner:
    def __init__(self, base_results_dir: str | Path = "results") -> None:
        self.base_dir = Path(base_results_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)
        self.timestamp_dir = self.base_dir / datetime.now().strftime("%Y%m%d_%H%M%S")
        self.timestamp_dir.mkdir(parents=True, exist_ok=True)

    def run(
        self,
        cfg: ExperimentConfig,
        progress: ProgressObserver | None = None,
        resolution: float | None = None,
    ) -> RunResult:
        """Build the inputs, time every algorithm and persist the results.

        Args:
            cfg: Validated experiment configuration.
            progress: Optional observer for build and measure progress.
            resolution: Clock resolution override; calibrated when None.
        """
        if cfg.seed is not None:
            random.seed(cfg.seed)
        rng = random.Random(cfg.seed) if cfg.seed is not None else None
        distribution = cfg.distribution.build(rng=rng)
        builder = InputBuilder(
            distribution, cfg.input.input_type, cfg.input.config, progress=progress
        )
        logger.info(
            "Experiment %s: %d sizes x %d repetitions of %s inputs",
            cfg.name,
            cfg.n,
            cfg.repetitions,
            cfg.input.kind,
        )
        inputs = builder.build(cfg.n, cfg.repetitions)
        measurements = measure(
            inputs,
            cfg.build_algorithms(),
            cfg.relative_error,
            limits=cfg.limits,
            progress=progress,
            resolution=resolution,
        )
        return self._persist(cfg, inputs, measurements)

    def _persist(
        self, cfg: ExperimentConfig, inputs: InputSet, measurements: Measurements
    ) -> RunResult:
        out_dir = self.timestamp_dir / cfg.name
        out_dir.mkdir(parents=True, exist_ok=True)
        inputs_path = None
        if cfg.save_inputs:
            inputs_path = inputs.serialize_json(out_dir / "inputs.json")
            logger.info("Saved %s", inputs_path)
        measurements_path = measurements.serialize_json(out_dir / "measurements.json")
        logger.info("Saved %s", measurements_path)
        summary_path = write_summary_csv(measurements, out_dir / "summary.csv")
        plot_path = None
        if cfg.plot.enabled:
            plot_path = Path(time_plot(out_dir / "time_plot.png", measurements, cfg.plot.config))
        return RunResult(
            config=cfg,
            measurements=measurements,
            output_dir=out_dir,
            measurements_path=measurements_path,
            summary_path=summary_path,
            plot_path=plot_path,
            inputs_path=inputs_path,
        )
