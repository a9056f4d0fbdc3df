"""
Monthly Aggregation

Folds daily need/booked series into one point per calendar month: the average
FTE per working day that actually carries data in that month.
"""

from __future__ import annotations

from datetime import date
from typing import List

from studio_resources.forecasting.resource_models import (
    DailyMetrics,
    Department,
    DepartmentValues,
    MonthlyDataPoint,
)
from studio_resources.utils.businessdays import get_business_dates, get_month_starts, month_end


def _average(total: DepartmentValues, count: int) -> DepartmentValues:
    if count == 0:
        return DepartmentValues()
    return DepartmentValues(
        animation=total.animation / count,
        cg=total.cg / count,
        compositing=total.compositing / count,
        fx=total.fx / count,
    )


def fold_monthly(
    daily_need: DailyMetrics,
    daily_booked: DailyMetrics,
    start: date,
    end: date,
) -> List[MonthlyDataPoint]:
    """
    One MonthlyDataPoint per calendar month intersecting [start, end], in order.

    Sums cover the month's working days. Need and booked are each divided by
    the number of those days present in their own lookup, so bookings never
    move the gross need. A month with working days but no data
    yields an all-zero point.
    """
    points: List[MonthlyDataPoint] = []

    for first in get_month_starts(start, end):
        working_days = get_business_dates(first, month_end(first))
        if not working_days:
            continue

        need_total = DepartmentValues()
        booked_total = DepartmentValues()
        need_days = 0
        booked_days = 0

        for day in working_days:
            need = daily_need.get(day)
            if need is not None:
                need_total = need_total + need
                need_days += 1
            booked = daily_booked.get(day)
            if booked is not None:
                booked_total = booked_total + booked
                booked_days += 1

        points.append(
            MonthlyDataPoint(
                month=first,
                needed=_average(need_total, need_days),
                booked=_average(booked_total, booked_days),
            )
        )

    return points


def series_values(points: List[MonthlyDataPoint], department: Department, show_remaining: bool) -> List[float]:
    """
    The plotted value per point: gross need, or need minus booked floored at zero.
    """
    if show_remaining:
        return [p.remaining(department) for p in points]
    return [p.needed.get(department) for p in points]
