from datetime import date

import pytest

from studio_resources.forecasting.peaks import compute_peaks, top_departments_by_peak
from studio_resources.forecasting.resource_models import (
    DEPARTMENTS,
    Department,
    DepartmentValues,
    MonthlyDataPoint,
    Peaks,
)

POINTS = [
    MonthlyDataPoint(
        date(2024, 1, 1),
        DepartmentValues(animation=3.0, cg=1.0, compositing=0.5, fx=0.0),
        DepartmentValues(animation=1.0, cg=2.0, compositing=0.0, fx=1.0),
    ),
    MonthlyDataPoint(
        date(2024, 2, 1),
        DepartmentValues(animation=2.5, cg=4.0, compositing=0.25, fx=0.0),
        DepartmentValues(animation=2.5, cg=1.0, compositing=0.0, fx=0.0),
    ),
]


def test_empty_series_gives_zero_peaks():
    assert compute_peaks([], show_remaining=False) == Peaks()
    assert compute_peaks([], show_remaining=True) == Peaks()


def test_gross_need_peaks():
    peaks = compute_peaks(POINTS, show_remaining=False)
    assert peaks == Peaks(animation=3.0, cg=4.0, compositing=0.5, fx=0.0)


def test_remaining_need_peaks():
    peaks = compute_peaks(POINTS, show_remaining=True)
    assert peaks.animation == pytest.approx(2.0)
    assert peaks.cg == pytest.approx(3.0)
    assert peaks.fx == 0.0


def test_remaining_peaks_bound_every_point():
    peaks = compute_peaks(POINTS, show_remaining=True)
    for d in DEPARTMENTS:
        assert peaks.get(d) >= 0
        assert all(peaks.get(d) >= p.remaining(d) for p in POINTS)


def test_fully_booked_series_has_zero_remaining_peak():
    points = [MonthlyDataPoint(date(2024, 1, 1), DepartmentValues(fx=1.0), DepartmentValues(fx=5.0))]
    assert compute_peaks(points, show_remaining=True).fx == 0.0


def test_top_departments_by_peak():
    peaks = Peaks(animation=1.0, cg=4.0, compositing=2.0, fx=0.5)
    assert top_departments_by_peak(peaks, limit=2) == [Department.CG, Department.COMPOSITING]
