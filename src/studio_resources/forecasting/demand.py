"""
Demand Projection

Spreads one production unit's per-department person-day budget over its
working days, shaped by the department's distribution curve.

Rules:
- Pure functions only
- A unit that cannot be projected contributes nothing; it is never an error
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import List, Mapping, Optional

from studio_resources.forecasting.curves import CURVE_SEGMENTS, interpolate
from studio_resources.forecasting.resource_models import (
    DEPARTMENTS,
    DailyMetrics,
    Department,
    DepartmentValues,
    DistributionCurve,
    ProductionUnit,
)
from studio_resources.utils.businessdays import get_business_dates
from studio_resources.utils.logger import get_logger

logger = get_logger(__name__)


class SkipReason(Enum):
    MISSING_DATES = "missing_dates"
    MALFORMED_DATES = "malformed_dates"
    INVERTED_RANGE = "inverted_range"
    NO_WORKING_DAYS = "no_working_days"


@dataclass(frozen=True)
class DateRange:
    """Outcome of resolving a record's start/end strings."""

    start: Optional[date] = None
    end: Optional[date] = None
    working_days: tuple = ()
    skip_reason: Optional[SkipReason] = None

    @property
    def ok(self) -> bool:
        return self.skip_reason is None


def parse_iso_date(value) -> date:
    """
    Parse an ISO date ("2024-03-01" or a full timestamp). Raises ValueError.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Not a date string: {value!r}")
    text = value.strip()
    if len(text) > 10 and text[10] in "T ":
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    return datetime.strptime(text, "%Y-%m-%d").date()


def resolve_date_range(start_value, end_value) -> DateRange:
    """
    Turn raw start/end values into a working-day range, or a reason to skip.
    """
    if not start_value or not end_value:
        return DateRange(skip_reason=SkipReason.MISSING_DATES)

    try:
        start = parse_iso_date(start_value)
        end = parse_iso_date(end_value)
    except ValueError:
        return DateRange(skip_reason=SkipReason.MALFORMED_DATES)

    if end < start:
        return DateRange(start=start, end=end, skip_reason=SkipReason.INVERTED_RANGE)

    days = get_business_dates(start, end)
    if not days:
        return DateRange(start=start, end=end, skip_reason=SkipReason.NO_WORKING_DAYS)

    return DateRange(start=start, end=end, working_days=tuple(days))


def curve_positions(n_days: int) -> List[float]:
    """
    Normalized position of each working day: i / (n - 1), or 0 for a single day.
    """
    if n_days <= 0:
        return []
    if n_days == 1:
        return [0.0]
    return [i / (n_days - 1) for i in range(n_days)]


def project_daily_need(
    unit: ProductionUnit,
    curve_settings: Mapping[Department, DistributionCurve],
) -> DailyMetrics:
    """
    Per-working-day FTE need for one unit.

    Each day gets avg_daily * curve(position) * CURVE_SEGMENTS per department,
    so a flat curve reproduces exactly effort / working_days every day.
    """
    date_range = resolve_date_range(unit.start_date, unit.end_date)

    if not date_range.ok:
        if date_range.skip_reason is SkipReason.MALFORMED_DATES:
            logger.warning(
                "Unit %s has malformed dates (start=%r, end=%r); skipped",
                unit.id,
                unit.start_date,
                unit.end_date,
            )
        else:
            logger.debug("Unit %s not projectable: %s", unit.id, date_range.skip_reason.value)
        return {}

    days = date_range.working_days
    n_days = len(days)
    avg_daily = {d: unit.effort_for(d) / n_days for d in DEPARTMENTS}

    daily: DailyMetrics = {}
    for day, position in zip(days, curve_positions(n_days)):
        values = {
            d: avg_daily[d] * interpolate(curve_settings[d], position) * CURVE_SEGMENTS
            for d in DEPARTMENTS
        }
        daily[day] = DepartmentValues(
            animation=values[Department.ANIMATION],
            cg=values[Department.CG],
            compositing=values[Department.COMPOSITING],
            fx=values[Department.FX],
        )

    return daily


def merge_daily(target: DailyMetrics, source: DailyMetrics) -> DailyMetrics:
    """
    Add source into target in place (day-wise, department-wise). Returns target.
    """
    for day, values in source.items():
        existing = target.get(day)
        target[day] = values if existing is None else existing + values
    return target
