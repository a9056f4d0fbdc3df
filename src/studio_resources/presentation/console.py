from __future__ import annotations

import io
from dataclasses import dataclass
from typing import FrozenSet, List, Sequence

from studio_resources.forecasting.peaks import top_departments_by_peak
from studio_resources.forecasting.project_breakdown import ProjectBreakdown
from studio_resources.forecasting.resource_models import (
    DEPARTMENTS,
    Department,
    ResourceForecastResult,
)

DEPARTMENT_LABELS = {
    Department.ANIMATION: "ANM",
    Department.CG: "CG",
    Department.COMPOSITING: "COMP",
    Department.FX: "FX",
}


@dataclass(frozen=True)
class ConsoleView:
    """Display-only toggles. Never passed into the forecast."""

    visible_departments: FrozenSet[Department] = frozenset(DEPARTMENTS)
    show_total_needed: bool = False
    show_total_booked: bool = False


def _format_table(rows: Sequence[Sequence[str]], headers: List[str], max_rows: int | None = None) -> str:
    """Label column left-aligned, FTE columns right-aligned so decimals line up."""
    output = io.StringIO()
    rows = list(rows)
    omitted = 0
    if max_rows is not None and len(rows) > max_rows:
        omitted = len(rows) - max_rows
        rows = rows[:max_rows]

    widths = [max([len(h)] + [len(r[i]) for r in rows]) for i, h in enumerate(headers)]

    def line(cells):
        label, *values = cells
        return "  ".join(
            [label.ljust(widths[0])] + [v.rjust(w) for v, w in zip(values, widths[1:])]
        ).rstrip()

    print(line(headers), file=output)
    print(line(["-" * w for w in widths]), file=output)
    for row in rows:
        print(line(row), file=output)
    if omitted:
        print(f"... {omitted} more month(s) not shown", file=output)

    return output.getvalue()


def _fmt(value: float) -> str:
    return "-" if value == 0 else f"{value:.1f}"


def render_resource_forecast(result: ResourceForecastResult, view: ConsoleView = ConsoleView()) -> str:
    out = io.StringIO()
    departments = [d for d in DEPARTMENTS if d in view.visible_departments]
    mode = "REMAINING NEED" if result.show_remaining else "TOTAL NEED"

    print("=" * 80, file=out)
    print(f"RESOURCE CURVES - {mode}", file=out)
    print("=" * 80, file=out)
    window_note = " (historical)" if result.bounds.historical else ""
    print(f"Window: {result.bounds.start.isoformat()} to {result.bounds.end.isoformat()}{window_note}", file=out)
    print(
        f"Units projected: {result.units_projected} of {result.units_considered}"
        f" | Bookings: {result.commitments_considered}",
        file=out,
    )
    print(file=out)

    if not result.points:
        print("No data", file=out)
        return out.getvalue()

    print("Peaks:", file=out)
    for d in top_departments_by_peak(result.peaks):
        if d in view.visible_departments:
            print(f"  • {DEPARTMENT_LABELS[d]:<5} {result.peaks.get(d):>6.1f}", file=out)
    print(file=out)

    headers = ["month"]
    for d in departments:
        label = DEPARTMENT_LABELS[d]
        headers += [f"{label} need", f"{label} booked"]
        if result.show_remaining:
            headers.append(f"{label} remain")
    if view.show_total_needed:
        headers.append("Σ need")
    if view.show_total_booked:
        headers.append("Σ booked")

    rows = []
    for p in result.points:
        row = [p.month.strftime("%b %y")]
        for d in departments:
            row += [_fmt(p.needed.get(d)), _fmt(p.booked.get(d))]
            if result.show_remaining:
                row.append(_fmt(p.remaining(d)))
        if view.show_total_needed:
            row.append(_fmt(sum(p.needed.get(d) for d in departments)))
        if view.show_total_booked:
            row.append(_fmt(sum(p.booked.get(d) for d in departments)))
        rows.append(row)

    print(_format_table(rows, headers, max_rows=60), file=out, end="")
    return out.getvalue()


def render_project_breakdown(breakdown: ProjectBreakdown) -> str:
    out = io.StringIO()
    headers = ["project / dept"] + [m.strftime("%b %y") for m in breakdown.months]

    print("== TOTALS ==", file=out)
    total_rows = [
        [dept] + [_fmt(v) for v in breakdown.totals.loc[dept]]
        for dept in breakdown.totals.index
    ]
    print(_format_table(total_rows, headers), file=out)

    if breakdown.table.empty:
        print("No projects match the current filters", file=out)
        return out.getvalue()

    for project, block in breakdown.table.groupby(level="project", sort=False):
        print(f"== {project} ==", file=out)
        rows = [
            [dept] + [_fmt(v) for v in values]
            for (_, dept), values in block.iterrows()
        ]
        print(_format_table(rows, headers), file=out)

    return out.getvalue()
