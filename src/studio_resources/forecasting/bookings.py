"""
Booking Aggregation

Rules:
- Pure functions only
- Overlapping commitments simply add up (overbooking is meaningful downstream)
- A commitment with bad dates is skipped; the batch continues
"""

from __future__ import annotations

from typing import Iterable, List

from studio_resources.forecasting.demand import SkipReason, resolve_date_range
from studio_resources.forecasting.resource_models import (
    Commitment,
    DailyMetrics,
    DepartmentValues,
    ResourceFilters,
)
from studio_resources.utils.logger import get_logger

logger = get_logger(__name__)


def filter_commitments(
    commitments: Iterable[Commitment],
    filters: ResourceFilters,
) -> List[Commitment]:
    """
    Keep commitments in an accepted region (empty set = all) and the selected project.
    """
    kept = []
    for c in commitments:
        if filters.regions and c.region not in filters.regions:
            continue
        if filters.project_id and c.project_id != filters.project_id:
            continue
        kept.append(c)
    return kept


def aggregate_daily_booked(
    commitments: Iterable[Commitment],
    filters: ResourceFilters,
) -> DailyMetrics:
    """
    Per-working-day booked FTE, summed per department.
    """
    daily: DailyMetrics = {}
    skipped = 0

    for c in filter_commitments(commitments, filters):
        date_range = resolve_date_range(c.start_date, c.end_date)
        if not date_range.ok:
            if date_range.skip_reason is SkipReason.MALFORMED_DATES:
                logger.warning(
                    "Commitment %s has malformed dates (start=%r, end=%r); skipped",
                    c.id,
                    c.start_date,
                    c.end_date,
                )
            skipped += 1
            continue

        allocation = c.allocation or 1.0
        for day in date_range.working_days:
            daily[day] = daily.get(day, DepartmentValues()).add(c.department, allocation)

    if skipped:
        logger.info("Skipped %s commitment(s) without a usable date range", skipped)

    return daily
