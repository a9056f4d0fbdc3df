"""
Per-Project Monthly Breakdown

Tabular view of need: one block of department rows per top-level project,
one column per month of the visible window. Child project entries (episodes)
roll up into their parent.

Monthly values are the month's summed daily need divided by the full
working-day count of the month.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List, Mapping, Sequence

import pandas as pd

from studio_resources.forecasting.demand import merge_daily, project_daily_need
from studio_resources.forecasting.resource_models import (
    DEPARTMENTS,
    DailyMetrics,
    Department,
    DistributionCurve,
    ProductionUnit,
    Project,
    ResourceFilters,
    TimelineBounds,
)
from studio_resources.utils.businessdays import get_business_days, get_month_starts, month_end
from studio_resources.utils.logger import get_logger

logger = get_logger(__name__)

BREAKDOWN_INDEX = ["project", "department"]


@dataclass(frozen=True)
class ProjectBreakdown:
    months: List[date]
    table: pd.DataFrame  # index (project, department), columns = months
    totals: pd.DataFrame  # index department, columns = months


def top_level_projects(projects: Sequence[Project], filters: ResourceFilters) -> List[Project]:
    kept = []
    for p in projects:
        if p.parent_id:
            continue
        if filters.statuses and p.status not in filters.statuses:
            continue
        if filters.project_id and p.id != filters.project_id:
            continue
        kept.append(p)
    return kept


def project_family(project_id: str, projects: Sequence[Project]) -> set:
    return {project_id} | {p.id for p in projects if p.parent_id == project_id}


def _empty_frame(months: List[date], index) -> pd.DataFrame:
    return pd.DataFrame(0.0, index=index, columns=months)


def build_project_breakdown(
    projects: Sequence[Project],
    units: Sequence[ProductionUnit],
    curve_settings: Mapping[Department, DistributionCurve],
    filters: ResourceFilters,
    bounds: TimelineBounds,
) -> ProjectBreakdown:
    months = get_month_starts(bounds.start, bounds.end)
    working_days = pd.Series(
        {m: get_business_days(m, month_end(m)) for m in months}, dtype=float
    )
    dept_names = [d.value for d in DEPARTMENTS]

    blocks = []
    for project in top_level_projects(projects, filters):
        family = project_family(project.id, projects)
        family_units = [u for u in units if u.project_id in family]
        if filters.unit_id:
            family_units = [u for u in family_units if u.id == filters.unit_id]

        daily: DailyMetrics = {}
        for unit in family_units:
            merge_daily(daily, project_daily_need(unit, curve_settings))

        index = pd.MultiIndex.from_product([[project.name], dept_names], names=BREAKDOWN_INDEX)
        block = _empty_frame(months, index)

        if daily:
            frame = pd.DataFrame(
                [
                    {"month": day.replace(day=1), **{d.value: v.get(d) for d in DEPARTMENTS}}
                    for day, v in daily.items()
                ]
            )
            monthly = frame.groupby("month")[dept_names].sum()
            monthly = monthly[monthly.index.isin(months)]
            for month, row in monthly.iterrows():
                days = working_days[month]
                for name in dept_names:
                    block.loc[(project.name, name), month] = row[name] / days if days else 0.0

        blocks.append(block)

    if blocks:
        table = pd.concat(blocks)
    else:
        table = _empty_frame(months, pd.MultiIndex.from_arrays([[], []], names=BREAKDOWN_INDEX))

    totals = table.groupby(level="department", sort=False).sum()
    totals = totals.reindex(dept_names, fill_value=0.0)

    logger.info("Project breakdown built | projects=%s | months=%s", len(blocks), len(months))
    return ProjectBreakdown(months=months, table=table, totals=totals)
