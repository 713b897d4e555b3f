from __future__ import annotations

import json
import math

import pytest

from chrono_probe.experiments.aggregate import load_measurements
from chrono_probe.measurements import Measurement, Measurements, Point


def _series(name: str, pairs: list[tuple[int, float]]) -> Measurement:
    """Build a series from (size, time in microseconds) pairs."""
    return Measurement(name, [Point(size, us / 1e6) for size, us in pairs])


def test_point_time_us() -> None:
    assert Point(10, 0.0025).time_us == pytest.approx(2500.0)


@pytest.mark.parametrize("a, b", [(3.0, 7.0), (0.5, 120.0), (12.25, 0.0)])
def test_linear_regression_recovers_exact_line(a: float, b: float) -> None:
    m = _series("lin", [(s, a * s + b) for s in (10, 40, 25, 100, 70)])
    slope, intercept = m.linear_regression()
    assert slope == pytest.approx(a, rel=1e-3)
    assert intercept == pytest.approx(b, rel=1e-3, abs=1e-6)


def test_linear_regression_equal_sizes_undefined() -> None:
    m = _series("flat", [(5, 1.0), (5, 2.0), (5, 3.0)])
    with pytest.raises(ZeroDivisionError):
        m.linear_regression()


def test_log_log_scale_maps_size_and_time() -> None:
    m = _series("p", [(256, 1024.0), (1000, 3.0)])
    scaled = m.log_log_scale()
    assert scaled.algorithm_name == "p"
    assert scaled.points[0].size == 8
    assert scaled.points[0].time_us == pytest.approx(10.0)
    assert scaled.points[1].size == int(math.log2(1000))
    assert scaled.points[1].time_us == pytest.approx(math.log2(3.0))
    # original untouched
    assert m.points[0].size == 256


def test_log_log_scale_is_not_idempotent() -> None:
    m = _series("p", [(256, 1024.0)])
    twice = m.log_log_scale().log_log_scale()
    assert twice.points[0].size == 3
    assert twice.points[0].time_us != pytest.approx(10.0)


def test_log_log_regression_recovers_power_law_exponent() -> None:
    m = _series("quad", [(2**k, float(4**k)) for k in range(2, 10)])
    slope, intercept = m.log_log_scale().linear_regression()
    assert slope == pytest.approx(2.0, rel=1e-3)
    assert intercept == pytest.approx(0.0, abs=1e-6)


def test_log_log_scale_of_zero_size_is_not_guarded() -> None:
    with pytest.raises(ValueError):
        _series("z", [(0, 5.0)]).log_log_scale()


def test_accessors() -> None:
    a = _series("a", [(10, 5.0), (30, 1.0), (20, 9.0)])
    b = _series("b", [(5, 2.0), (50, 0.5)])
    ms = Measurements([a, b], relative_error=0.01, resolution=1e-7)
    assert a.max_time() == pytest.approx(9e-6)
    assert a.min_time() == pytest.approx(1e-6)
    assert a.max_size() == 30 and a.min_size() == 10
    assert ms.max_time() == pytest.approx(9e-6)
    assert ms.min_time() == pytest.approx(0.5e-6)
    assert ms.max_size() == 50
    assert ms.min_size() == 5
    assert ms.get("b") is b
    with pytest.raises(KeyError):
        ms.get("c")


def test_sorting() -> None:
    a = _series("a", [(30, 1.0), (10, 2.0), (20, 3.0)])
    s = a.sorted_by_size()
    assert [p.size for p in s.points] == [10, 20, 30]
    assert [p.size for p in a.points] == [30, 10, 20]
    a.sort()
    assert [p.size for p in a.points] == [10, 20, 30]


def test_measurements_log_log_scale_keeps_metadata() -> None:
    ms = Measurements([_series("a", [(4, 8.0)])], relative_error=0.05, resolution=2e-8)
    scaled = ms.log_log_scale()
    assert scaled.relative_error == 0.05
    assert scaled.resolution == 2e-8
    assert scaled.series[0].points[0].size == 2


def test_serialize_json_round_trip(tmp_path) -> None:
    ms = Measurements(
        [_series("a", [(10, 5.0), (20, 7.5)]), _series("b", [(10, 1.0)])],
        relative_error=0.001,
        resolution=4.2e-8,
    )
    path = ms.serialize_json(tmp_path / "out" / "measurements.json")
    data = json.loads(path.read_text())
    assert set(data) == {"series", "relative_error", "resolution"}
    assert data["series"][0]["algorithm_name"] == "a"
    assert set(data["series"][0]["points"][0]) == {"size", "time"}
    assert load_measurements(path) == ms
