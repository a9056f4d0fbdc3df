"""
Timeline Window

Default window starts one month back and runs forward by zoom level. When the
units on screen are all finished, the window is moved to bracket them instead.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from studio_resources.forecasting.demand import parse_iso_date
from studio_resources.forecasting.resource_models import (
    ProductionUnit,
    TimelineBounds,
    TimelineZoom,
)
from studio_resources.utils.businessdays import add_months, month_end, month_start
from studio_resources.utils.logger import get_logger

logger = get_logger(__name__)


def default_bounds(zoom: TimelineZoom, today: date) -> TimelineBounds:
    start = month_start(add_months(today, -1))

    if zoom is TimelineZoom.THREE_MONTHS:
        end = month_end(add_months(today, 2))
    elif zoom is TimelineZoom.SIX_MONTHS:
        end = month_end(add_months(today, 5))
    elif zoom is TimelineZoom.ONE_YEAR:
        end = date(today.year, 12, 31)
    elif zoom is TimelineZoom.TWO_YEARS:
        end = date(today.year + 1, 12, 31)
    else:
        raise ValueError(f"Unknown timeline zoom: {zoom!r}")

    return TimelineBounds(start=start, end=end)


def compute_bounds(
    zoom: TimelineZoom,
    candidate_units: Iterable[ProductionUnit],
    today: Optional[date] = None,
) -> TimelineBounds:
    """
    Visible date range for a zoom level.

    Units without a usable start/end are left out of the historical check;
    if none remain, the default forward-looking window is used.
    """
    today = today or date.today()

    starts = []
    ends = []
    for unit in candidate_units:
        if not unit.start_date or not unit.end_date:
            continue
        try:
            start = parse_iso_date(unit.start_date)
            end = parse_iso_date(unit.end_date)
        except ValueError:
            continue
        starts.append(start)
        ends.append(end)

    if ends and max(ends) < today:
        bounds = TimelineBounds(
            start=month_start(add_months(min(starts), -1)),
            end=month_end(add_months(max(ends), 1)),
            historical=True,
        )
        logger.info(
            "All %s dated unit(s) are in the past; window recentred to %s -> %s",
            len(ends),
            bounds.start,
            bounds.end,
        )
        return bounds

    return default_bounds(zoom, today)
