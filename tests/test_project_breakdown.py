from datetime import date

import pytest

from studio_resources.forecasting.project_breakdown import (
    build_project_breakdown,
    project_family,
    top_level_projects,
)
from studio_resources.forecasting.resource_models import (
    Project,
    ProjectStatus,
    ResourceFilters,
    TimelineBounds,
)

from conftest import make_unit

JAN = date(2024, 1, 1)
FEB = date(2024, 2, 1)
BOUNDS = TimelineBounds(start=JAN, end=date(2024, 2, 29))

PROJECTS = [
    Project(id="p1", name="Show A", status=ProjectStatus.ACTIVE),
    Project(id="e1", name="Show A Ep1", status=ProjectStatus.ACTIVE, parent_id="p1"),
    Project(id="p2", name="Show B", status=ProjectStatus.COMPLETED),
    Project(id="p3", name="Show C", status=ProjectStatus.BIDDING),
]


def test_top_level_projects_respect_status_and_parent():
    kept = top_level_projects(PROJECTS, ResourceFilters())
    assert [p.id for p in kept] == ["p1", "p3"]


def test_project_family_includes_children():
    assert project_family("p1", PROJECTS) == {"p1", "e1"}


def test_breakdown_divides_by_full_month_working_days(flat_curves):
    # January 2024 has 23 working days
    units = [make_unit("u1", project_id="e1", animation=20), make_unit("u2", project_id="p3", fx=23)]
    breakdown = build_project_breakdown(PROJECTS, units, flat_curves, ResourceFilters(), BOUNDS)

    assert breakdown.months == [JAN, FEB]
    table = breakdown.table
    assert table.loc[("Show A", "Animation"), JAN] == pytest.approx(20 / 23)
    assert table.loc[("Show A", "Animation"), FEB] == 0
    assert table.loc[("Show C", "FX"), JAN] == pytest.approx(1.0)
    assert "Show B" not in table.index.get_level_values("project")

    assert breakdown.totals.loc["Animation", JAN] == pytest.approx(20 / 23)
    assert breakdown.totals.loc["FX", JAN] == pytest.approx(1.0)
    assert list(breakdown.totals.index) == ["Animation", "CG", "Compositing", "FX"]


def test_breakdown_unit_filter(flat_curves):
    units = [make_unit("u1", project_id="e1", animation=20), make_unit("u2", project_id="p1", animation=40)]
    breakdown = build_project_breakdown(PROJECTS, units, flat_curves, ResourceFilters(unit_id="u1"), BOUNDS)
    assert breakdown.table.loc[("Show A", "Animation"), JAN] == pytest.approx(20 / 23)


def test_breakdown_with_no_matching_projects(flat_curves):
    filters = ResourceFilters(project_id="nope")
    breakdown = build_project_breakdown(PROJECTS, [], flat_curves, filters, BOUNDS)
    assert breakdown.table.empty
    assert (breakdown.totals.to_numpy() == 0).all()
