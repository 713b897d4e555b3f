import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

import matplotlib

matplotlib.use("Agg")  # Must be set before importing pyplot
import matplotlib.pyplot as plt  # noqa: E402

from chrono_probe.measurements import Measurements  # noqa: E402

logger = logging.getLogger("chrono_probe.visualization")


class Scale(Enum):
    LINEAR = "linear"
    LOG_LOG = "loglog"


@dataclass(frozen=True)
class PlotConfig:
    """Labels and axis scale of a time plot."""

    title: str = "Measurements plot"
    caption: str = ""
    x_label: str = "Size"
    y_label: str = "Time [us]"
    scale: Scale = Scale.LINEAR


def time_plot(
    file_name: str | Path,
    measurements: Measurements,
    config: Optional[PlotConfig] = None,
) -> str:
    """Plot one line per algorithm (time in microseconds against size).

    Points are drawn sorted by size; the input Measurements is left
    untouched. With ``Scale.LOG_LOG`` non-positive points are skipped since
    they cannot be shown on a logarithmic axis.

    Returns:
        Path of the saved image.
    """
    if config is None:
        config = PlotConfig()
    fig, ax = plt.subplots(figsize=(10.24, 7.68), constrained_layout=True)
    cmap = plt.get_cmap("tab10")
    for i, measurement in enumerate(measurements.series):
        points = measurement.sorted_by_size().points
        if config.scale is Scale.LOG_LOG:
            points = [p for p in points if p.size > 0 and p.time > 0]
        ax.plot(
            [p.size for p in points],
            [p.time_us for p in points],
            "-",
            color=cmap(i % 10),
            linewidth=2,
            alpha=0.9,
            label=measurement.algorithm_name,
        )
    if config.scale is Scale.LOG_LOG:
        ax.set_xscale("log")
        ax.set_yscale("log")
    ax.set_xlabel(config.x_label, fontsize=12)
    ax.set_ylabel(config.y_label, fontsize=12)
    ax.set_title(config.title, fontsize=14, fontweight="bold")
    if config.caption:
        fig.text(0.5, 0.005, config.caption, ha="center", fontsize=9, alpha=0.6)
    ax.grid(True, alpha=0.3, linestyle="--", linewidth=0.7)
    ax.legend(loc="upper left", frameon=True, edgecolor="black", fontsize=9)
    filepath = str(file_name)
    _ensure_dir(os.path.dirname(filepath))
    fig.savefig(filepath, dpi=180)
    plt.close(fig)
    logger.info("Time plot saved as: %s", filepath)
    return filepath


def _ensure_dir(path: str):
    if path:
        os.makedirs(path, exist_ok=True)
