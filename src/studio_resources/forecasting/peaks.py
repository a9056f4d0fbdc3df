"""
Peak Analysis

Rules:
- Pure reduction over a produced monthly series
- Peaks are never negative; an empty series gives all zeros
"""

from __future__ import annotations

from typing import Sequence

from studio_resources.forecasting.monthly import series_values
from studio_resources.forecasting.resource_models import (
    DEPARTMENTS,
    Department,
    MonthlyDataPoint,
    Peaks,
)


def peak_value(points: Sequence[MonthlyDataPoint], department: Department, show_remaining: bool) -> float:
    return max([0.0, *series_values(list(points), department, show_remaining)])


def compute_peaks(points: Sequence[MonthlyDataPoint], show_remaining: bool) -> Peaks:
    values = {d: peak_value(points, d, show_remaining) for d in DEPARTMENTS}
    return Peaks(
        animation=values[Department.ANIMATION],
        cg=values[Department.CG],
        compositing=values[Department.COMPOSITING],
        fx=values[Department.FX],
    )


def top_departments_by_peak(peaks: Peaks, limit: int = 4):
    return sorted(DEPARTMENTS, key=lambda d: peaks.get(d), reverse=True)[:limit]
