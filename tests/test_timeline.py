from datetime import date

import pytest

from studio_resources.forecasting.resource_models import TimelineZoom
from studio_resources.forecasting.timeline import compute_bounds, default_bounds

from conftest import make_unit

TODAY = date(2026, 10, 19)


@pytest.mark.parametrize(
    "zoom,end",
    [
        (TimelineZoom.THREE_MONTHS, date(2026, 12, 31)),
        (TimelineZoom.SIX_MONTHS, date(2027, 3, 31)),
        (TimelineZoom.ONE_YEAR, date(2026, 12, 31)),
        (TimelineZoom.TWO_YEARS, date(2027, 12, 31)),
    ],
)
def test_default_window_by_zoom(zoom, end):
    bounds = default_bounds(zoom, TODAY)
    assert bounds.start == date(2026, 9, 1)
    assert bounds.end == end
    assert not bounds.historical


def test_default_window_crosses_year_start():
    bounds = default_bounds(TimelineZoom.THREE_MONTHS, date(2025, 1, 15))
    assert bounds.start == date(2024, 12, 1)
    assert bounds.end == date(2025, 3, 31)


def test_all_past_units_recentre_the_window():
    unit = make_unit(start="2023-01-01", end="2023-03-31")
    bounds = compute_bounds(TimelineZoom.ONE_YEAR, [unit], today=date(2040, 6, 1))
    assert bounds.historical
    assert bounds.start <= date(2023, 1, 1)
    assert bounds.end >= date(2023, 3, 31)
    assert (bounds.start, bounds.end) == (date(2022, 12, 1), date(2023, 4, 30))


def test_historical_window_spans_all_units():
    units = [
        make_unit("a", start="2022-05-10", end="2022-08-01"),
        make_unit("b", start="2023-01-01", end="2023-11-15"),
    ]
    bounds = compute_bounds(TimelineZoom.THREE_MONTHS, units, today=TODAY)
    assert (bounds.start, bounds.end) == (date(2022, 4, 1), date(2023, 12, 31))


def test_one_current_unit_keeps_default_window():
    units = [
        make_unit("old", start="2023-01-01", end="2023-03-31"),
        make_unit("now", start="2026-09-01", end="2026-12-01"),
    ]
    assert compute_bounds(TimelineZoom.ONE_YEAR, units, today=TODAY) == default_bounds(TimelineZoom.ONE_YEAR, TODAY)


def test_unit_ending_today_is_not_historical():
    unit = make_unit(start="2026-01-01", end="2026-10-19")
    assert not compute_bounds(TimelineZoom.ONE_YEAR, [unit], today=TODAY).historical


def test_dateless_units_do_not_block_historical_view():
    units = [
        make_unit("old", start="2023-01-01", end="2023-03-31"),
        make_unit("tbd", start=None, end=None),
        make_unit("junk", start="soon", end="later"),
    ]
    bounds = compute_bounds(TimelineZoom.ONE_YEAR, units, today=TODAY)
    assert bounds.historical


@pytest.mark.parametrize("units", [[], [make_unit(start=None, end=None)]])
def test_no_dated_units_falls_back_to_default(units):
    assert compute_bounds(TimelineZoom.SIX_MONTHS, units, today=TODAY) == default_bounds(
        TimelineZoom.SIX_MONTHS, TODAY
    )
