from dataclasses import replace
from datetime import date

from studio_resources.forecasting.project_breakdown import build_project_breakdown
from studio_resources.forecasting.resource_models import (
    Department,
    Project,
    ProjectStatus,
    ResourceFilters,
    TimelineBounds,
    TimelineZoom,
)
from studio_resources.forecasting.resource_usecase import run_resource_forecast
from studio_resources.presentation.console import (
    _format_table,
    ConsoleView,
    render_project_breakdown,
    render_resource_forecast,
)

from conftest import make_commitment, make_unit

TODAY = date(2024, 1, 15)


def test_render_lists_months_and_peaks(flat_curves):
    result = run_resource_forecast(
        [make_unit(animation=20)],
        [make_commitment(allocation=0.5)],
        flat_curves,
        ResourceFilters(show_remaining=True),
        TimelineZoom.THREE_MONTHS,
        today=TODAY,
    )
    text = render_resource_forecast(result, ConsoleView(show_total_needed=True))
    assert "REMAINING NEED" in text
    assert "Jan 24" in text
    assert "ANM remain" in text
    assert "Σ need" in text
    assert "2.0" in text


def test_render_hides_departments_not_in_view(flat_curves):
    result = run_resource_forecast(
        [make_unit(fx=10)], [], flat_curves, ResourceFilters(), TimelineZoom.THREE_MONTHS, today=TODAY
    )
    text = render_resource_forecast(result, ConsoleView(visible_departments=frozenset({Department.FX})))
    assert "FX need" in text
    assert "ANM need" not in text


def test_render_empty_series_says_no_data():
    result = run_resource_forecast([], [], {}, ResourceFilters(), TimelineZoom.THREE_MONTHS, today=TODAY)
    result = replace(result, points=())
    assert "No data" in render_resource_forecast(result)


def test_render_project_breakdown(flat_curves):
    projects = [Project(id="p1", name="Show A", status=ProjectStatus.ACTIVE)]
    bounds = TimelineBounds(start=date(2024, 1, 1), end=date(2024, 1, 31))
    breakdown = build_project_breakdown(projects, [make_unit(animation=23)], flat_curves, ResourceFilters(), bounds)
    text = render_project_breakdown(breakdown)
    assert "== TOTALS ==" in text
    assert "== Show A ==" in text
    assert "1.0" in text


def test_fte_columns_are_right_aligned():
    text = _format_table([["Jan 24", "12.5", "-"], ["Feb 24", "2.0", "0.5"]], ["month", "ANM need", "CG"])
    header, rule, jan, feb = text.splitlines()
    assert header == "month   ANM need   CG"
    assert jan == "Jan 24      12.5    -"
    assert feb == "Feb 24       2.0  0.5"
    assert len(rule) == len(header)


def test_long_tables_report_hidden_months():
    rows = [[f"m{i}", "1.0"] for i in range(5)]
    text = _format_table(rows, ["month", "FX need"], max_rows=3)
    assert "m2" in text and "m3" not in text
    assert text.rstrip().endswith("... 2 more month(s) not shown")
