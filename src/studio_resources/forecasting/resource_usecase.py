"""
Resource Forecast Use Case

Purpose:
- Project every filtered unit's daily need and sum it
- Aggregate booked crew once over all commitments
- Pick the visible window, fold to months, summarize peaks

Important:
- Pure function of its inputs; no I/O
- A bad record contributes nothing; it never blanks the forecast
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, List, Mapping, Optional, Sequence

from studio_resources.forecasting.bookings import aggregate_daily_booked
from studio_resources.forecasting.demand import merge_daily, project_daily_need
from studio_resources.forecasting.monthly import fold_monthly
from studio_resources.forecasting.peaks import compute_peaks
from studio_resources.forecasting.resource_models import (
    Commitment,
    DailyMetrics,
    Department,
    DistributionCurve,
    ProductionUnit,
    Project,
    ResourceFilters,
    ResourceForecastResult,
    TimelineZoom,
)
from studio_resources.forecasting.timeline import compute_bounds
from studio_resources.utils.logger import get_logger

logger = get_logger(__name__)


def filter_units(
    units: Iterable[ProductionUnit],
    filters: ResourceFilters,
    projects: Optional[Sequence[Project]] = None,
) -> List[ProductionUnit]:
    """
    Apply the project, unit and (when projects are known) status filters.

    A unit's status is its owning project's status. Units whose project is
    unknown are kept, since their status cannot be judged.
    """
    status_by_project = {p.id: p.status for p in projects} if projects is not None else None

    kept = []
    for unit in units:
        if filters.project_id and unit.project_id != filters.project_id:
            continue
        if filters.unit_id and unit.id != filters.unit_id:
            continue
        if status_by_project is not None and filters.statuses:
            status = status_by_project.get(unit.project_id)
            if status is not None and status not in filters.statuses:
                continue
        kept.append(unit)
    return kept


def run_resource_forecast(
    units: Sequence[ProductionUnit],
    commitments: Sequence[Commitment],
    curve_settings: Mapping[Department, DistributionCurve],
    filters: ResourceFilters,
    zoom: TimelineZoom,
    projects: Optional[Sequence[Project]] = None,
    today: Optional[date] = None,
) -> ResourceForecastResult:
    """
    Full recompute: units + commitments + curves + filters + zoom -> monthly series and peaks.
    """
    logger.info(
        "Running resource forecast | units=%s | commitments=%s | zoom=%s",
        len(units),
        len(commitments),
        zoom.value,
    )

    filtered_units = filter_units(units, filters, projects)

    # ------------------------------------------------------------
    # Need (sum of per-unit projections)
    # ------------------------------------------------------------
    daily_need: DailyMetrics = {}
    projected = 0
    for unit in filtered_units:
        unit_need = project_daily_need(unit, curve_settings)
        if unit_need:
            projected += 1
        merge_daily(daily_need, unit_need)

    if projected < len(filtered_units):
        logger.info(
            "%s of %s unit(s) had no projectable date range",
            len(filtered_units) - projected,
            len(filtered_units),
        )

    # ------------------------------------------------------------
    # Booked
    # ------------------------------------------------------------
    daily_booked = aggregate_daily_booked(commitments, filters)

    # ------------------------------------------------------------
    # Window, months, peaks
    # ------------------------------------------------------------
    bounds = compute_bounds(zoom, filtered_units, today=today)
    points = fold_monthly(daily_need, daily_booked, bounds.start, bounds.end)
    peaks = compute_peaks(points, filters.show_remaining)

    return ResourceForecastResult(
        bounds=bounds,
        points=tuple(points),
        peaks=peaks,
        show_remaining=filters.show_remaining,
        units_considered=len(filtered_units),
        units_projected=projected,
        commitments_considered=len(commitments),
    )
