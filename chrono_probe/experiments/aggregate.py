from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from chrono_probe.measurements import Measurement, Measurements

logger = logging.getLogger("chrono_probe.aggregate")

SUMMARY_COLUMNS = [
    "algorithm",
    "points",
    "min_size",
    "max_size",
    "min_time_us",
    "max_time_us",
    "slope_us",
    "intercept_us",
    "loglog_slope",
    "loglog_intercept",
]


def load_measurements(path: str | Path) -> Measurements:
    """Read back a ``measurements.json`` written by the runner."""
    with open(path, "r", encoding="utf-8") as f:
        return Measurements.from_dict(json.load(f))


def _fit(measurement: Measurement) -> tuple[float | None, float | None]:
    try:
        return measurement.linear_regression()
    except ZeroDivisionError:
        return None, None


def _fit_log_log(measurement: Measurement) -> tuple[float | None, float | None]:
    # log2 of a zero size or time is undefined
    try:
        return measurement.log_log_scale().linear_regression()
    except (ValueError, ZeroDivisionError):
        return None, None


def summarize(measurements: Measurements) -> List[Dict[str, Any]]:
    """One row per algorithm: extremes plus linear and log-log fits.

    The log-log slope estimates the exponent ``k`` in ``time ~ size^k``.
    Fits that are undefined for the data (single size, zero times) are left
    as None.
    """
    rows: List[Dict[str, Any]] = []
    for m in measurements.series:
        if not m.points:
            rows.append({"algorithm": m.algorithm_name, "points": 0})
            continue
        slope, intercept = _fit(m)
        log_slope, log_intercept = _fit_log_log(m)
        rows.append(
            {
                "algorithm": m.algorithm_name,
                "points": len(m.points),
                "min_size": m.min_size(),
                "max_size": m.max_size(),
                "min_time_us": m.min_time() * 1e6,
                "max_time_us": m.max_time() * 1e6,
                "slope_us": slope,
                "intercept_us": intercept,
                "loglog_slope": log_slope,
                "loglog_intercept": log_intercept,
            }
        )
    return rows


def write_summary_csv(measurements: Measurements, out_path: str | Path) -> Path:
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    rows = summarize(measurements)
    with open(out_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=SUMMARY_COLUMNS)
        writer.writeheader()
        for row in rows:
            writer.writerow({k: ("" if row.get(k) is None else row.get(k)) for k in SUMMARY_COLUMNS})
    logger.info("Summary written: %s", out_path)
    return out_path
