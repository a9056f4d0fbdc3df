import argparse
import sys
from datetime import date, datetime
from pathlib import Path
from typing import List, Optional

from studio_resources.data.curve_store import load_curve_settings, save_curve_settings
from studio_resources.data.records import (
    RecordLoadError,
    load_budgets,
    load_commitments,
    load_projects,
    load_units,
    units_from_budgets,
)
from studio_resources.forecasting.curves import CURVE_PRESETS, apply_preset
from studio_resources.forecasting.project_breakdown import build_project_breakdown
from studio_resources.forecasting.resource_models import (
    Department,
    ProjectStatus,
    Region,
    ResourceFilters,
    TimelineZoom,
)
from studio_resources.forecasting.resource_usecase import run_resource_forecast
from studio_resources.presentation.console import (
    ConsoleView,
    render_project_breakdown,
    render_resource_forecast,
)
from studio_resources.utils.config import settings
from studio_resources.utils.logger import enable_file_logging, get_logger

logger = get_logger(__name__)


def _parse_date(value: str) -> date:
    return datetime.strptime(value, "%Y-%m-%d").date()


def _resolve(path: Optional[Path], data_dir: Path) -> Optional[Path]:
    """Relative export names that are not found locally are looked up in the data directory."""
    if path is None or path.is_absolute() or path.exists():
        return path
    return data_dir / path


def _parse_preset(value: str):
    try:
        dept_name, preset = value.split("=", 1)
        department = Department(dept_name)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Expected DEPARTMENT=PRESET (e.g. FX=bell_curve), got {value!r}"
        )
    if preset not in CURVE_PRESETS:
        raise argparse.ArgumentTypeError(
            f"Unknown preset {preset!r}; choose from {', '.join(CURVE_PRESETS)}"
        )
    return department, preset


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Studio resource curves: forecast crew need vs bookings"
    )

    parser.add_argument(
        "--data-dir",
        type=Path,
        default=settings.data_dir,
        help="Where relative export names are looked up. Defaults to RESOURCE_DATA_DIR.",
    )
    parser.add_argument("--projects", type=Path, default=None, help="Projects export (JSON).")
    parser.add_argument("--episodes", type=Path, default=None, help="Episodes export with person-days (JSON).")
    parser.add_argument("--budgets", type=Path, default=None, help="Budgets export; episodes are built from it (JSON).")
    parser.add_argument("--bookings", type=Path, default=None, help="Bookings export (JSON).")
    parser.add_argument(
        "--curves",
        type=Path,
        default=settings.curve_settings_path,
        help="Saved curve settings (JSON). Defaults to RESOURCE_CURVE_SETTINGS_PATH.",
    )
    parser.add_argument(
        "--zoom",
        choices=[z.value for z in TimelineZoom],
        default=None,
        help="Timeline window. Defaults to the saved zoom, then RESOURCE_DEFAULT_ZOOM.",
    )
    parser.add_argument("--project", default=None, help="Only this project id.")
    parser.add_argument("--episode", default=None, help="Only this episode id.")
    parser.add_argument(
        "--status",
        action="append",
        choices=[s.value for s in ProjectStatus],
        default=None,
        help="Accepted project status (repeatable). Defaults to RESOURCE_DEFAULT_STATUSES.",
    )
    parser.add_argument(
        "--region",
        action="append",
        choices=[r.value for r in Region],
        default=None,
        help="Accepted booking region (repeatable). Default: all regions.",
    )
    parser.add_argument("--remaining", action="store_true", help="Show need minus booked.")
    parser.add_argument("--today", type=_parse_date, default=None, help="Pin 'now' (YYYY-MM-DD).")
    parser.add_argument(
        "--preset",
        action="append",
        type=_parse_preset,
        default=[],
        help="Apply a curve preset, e.g. --preset FX=bell_curve (repeatable).",
    )
    parser.add_argument("--save-curves", action="store_true", help="Write the curves back after presets.")
    parser.add_argument("--breakdown", action="store_true", help="Also print the per-project monthly table.")
    parser.add_argument("--totals", action="store_true", help="Add Σ need / Σ booked columns.")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    enable_file_logging()

    curve_settings, saved_zoom = load_curve_settings(args.curves)
    for department, preset in args.preset:
        curve_settings = apply_preset(curve_settings, department, preset)
    if args.save_curves:
        save_curve_settings(args.curves, curve_settings, saved_zoom)

    zoom = TimelineZoom(args.zoom) if args.zoom else saved_zoom or TimelineZoom(settings.default_zoom)
    statuses = args.status or settings.status_list

    filters = ResourceFilters(
        project_id=args.project,
        unit_id=args.episode,
        statuses=frozenset(ProjectStatus(s) for s in statuses),
        regions=frozenset(Region(r) for r in (args.region or [])),
        show_remaining=args.remaining,
    )

    for name in ("projects", "episodes", "budgets", "bookings"):
        setattr(args, name, _resolve(getattr(args, name), args.data_dir))

    try:
        projects = load_projects(args.projects) if args.projects else None
        if args.episodes:
            units = load_units(args.episodes)
        elif args.budgets:
            units = units_from_budgets(load_budgets(args.budgets), projects or [])
        else:
            units = []
        commitments = load_commitments(args.bookings) if args.bookings else []
    except RecordLoadError as e:
        logger.error("Could not load records: %s", e)
        return 1

    result = run_resource_forecast(
        units,
        commitments,
        curve_settings,
        filters,
        zoom,
        projects=projects,
        today=args.today,
    )

    view = ConsoleView(show_total_needed=args.totals, show_total_booked=args.totals)
    print(render_resource_forecast(result, view))

    if args.breakdown:
        if projects is None:
            logger.warning("--breakdown needs --projects; skipped")
        else:
            breakdown = build_project_breakdown(projects, units, curve_settings, filters, result.bounds)
            print(render_project_breakdown(breakdown))

    return 0


if __name__ == "__main__":
    sys.exit(main())
