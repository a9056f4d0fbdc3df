"""
Record loading layer.

Reads JSON exports of the project tracker (projects, budgets, bookings) into
domain records. Keys are the camelCase names the tracker export uses:

- projects:  id, name, status, startDate, endDate, parentId
- budgets:   id, name, projectId, episodeId, episodeIds,
             animationDays, cgDays, compositingDays, fxDays
- bookings:  id, crewMemberId, projectId, department, region,
             startDate, endDate, allocationPercent
- episodes:  id, name, projectId, startDate, endDate, + the four *Days columns
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Sequence

import pandas as pd

from studio_resources.forecasting.resource_models import (
    Commitment,
    Department,
    ProductionUnit,
    Project,
    ProjectStatus,
    Region,
)
from studio_resources.utils.logger import get_logger

logger = get_logger(__name__)

EFFORT_COLUMNS = {
    Department.ANIMATION: "animationDays",
    Department.CG: "cgDays",
    Department.COMPOSITING: "compositingDays",
    Department.FX: "fxDays",
}


class RecordLoadError(RuntimeError):
    """Raised when an export file is missing or not a JSON list of records."""


def _read_records(path: Path) -> pd.DataFrame:
    path = Path(path)
    if not path.exists():
        raise RecordLoadError(f"Export file not found: {path}")
    try:
        df = pd.read_json(path, orient="records", dtype=False, convert_dates=False)
    except ValueError as e:
        raise RecordLoadError(f"Could not read {path}: {e}") from e

    logger.info("Loaded %s record(s) from %s", len(df), path)
    # JSON null -> None (not NaN) so optional fields stay falsy
    return df.astype(object).where(df.notna(), None)


def _text(value) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _number(value) -> float:
    try:
        return float(value) if value is not None else 0.0
    except (TypeError, ValueError):
        return 0.0


# ----------------------------
# Projects
# ----------------------------

def projects_from_frame(df: pd.DataFrame) -> List[Project]:
    projects = []
    for row in df.to_dict("records"):
        try:
            status = ProjectStatus(row.get("status"))
        except ValueError:
            logger.warning("Project %s has unknown status %r; marked Inactive", row.get("id"), row.get("status"))
            status = ProjectStatus.INACTIVE
        projects.append(
            Project(
                id=str(row["id"]),
                name=_text(row.get("name")) or str(row["id"]),
                status=status,
                start_date=_text(row.get("startDate")),
                end_date=_text(row.get("endDate")),
                parent_id=_text(row.get("parentId")),
            )
        )
    return projects


def load_projects(path: Path) -> List[Project]:
    return projects_from_frame(_read_records(path))


# ----------------------------
# Units (episodes)
# ----------------------------

def _effort(row: Dict, scale: float = 1.0) -> Dict[Department, float]:
    return {d: _number(row.get(col)) * scale for d, col in EFFORT_COLUMNS.items()}


def units_from_frame(df: pd.DataFrame) -> List[ProductionUnit]:
    return [
        ProductionUnit(
            id=str(row["id"]),
            name=_text(row.get("name")) or str(row["id"]),
            project_id=_text(row.get("projectId")) or "",
            start_date=_text(row.get("startDate")),
            end_date=_text(row.get("endDate")),
            effort=_effort(row),
        )
        for row in df.to_dict("records")
    ]


def load_units(path: Path) -> List[ProductionUnit]:
    return units_from_frame(_read_records(path))


def units_from_budgets(budgets: Sequence[Dict], projects: Sequence[Project]) -> List[ProductionUnit]:
    """
    Turn bid budgets into episodes.

    Child projects (those with a parent) are episodes. A budget linked to k
    episodes counts k times its person-days; budgets landing on the same
    episode are summed. Dates come from the episode's project record and the
    owning project is the episode's parent.
    """
    episode_parent = {p.id: p.parent_id for p in projects if p.parent_id}
    episode_record = {p.id: p for p in projects if p.parent_id}

    merged: Dict[str, Dict] = {}
    order: List[str] = []

    for budget in budgets:
        linked = [e for e in (budget.get("episodeIds") or []) if e]
        scale = len(linked) or 1
        episode_id = _text(budget.get("episodeId")) or (linked[0] if linked else None)
        key = episode_id or str(budget["id"])
        effort = _effort(budget, scale)

        if key in merged:
            for d, v in effort.items():
                merged[key]["effort"][d] += v
            continue

        episode = episode_record.get(episode_id) if episode_id else None
        project_id = episode_parent.get(episode_id) if episode_id else _text(budget.get("projectId"))
        merged[key] = {
            "id": key,
            "name": episode.name if episode else _text(budget.get("name")) or key,
            "project_id": project_id or "",
            "start_date": episode.start_date if episode else None,
            "end_date": episode.end_date if episode else None,
            "effort": effort,
        }
        order.append(key)

    logger.info("Built %s episode(s) from %s budget(s)", len(order), len(budgets))
    return [ProductionUnit(**merged[k]) for k in order]


def load_budgets(path: Path) -> List[Dict]:
    return _read_records(path).to_dict("records")


# ----------------------------
# Commitments (bookings)
# ----------------------------

def commitments_from_frame(df: pd.DataFrame) -> List[Commitment]:
    commitments = []
    for row in df.to_dict("records"):
        try:
            department = Department(row.get("department"))
            region = Region(row.get("region"))
        except ValueError:
            logger.warning(
                "Booking %s has unknown department/region (%r, %r); skipped",
                row.get("id"),
                row.get("department"),
                row.get("region"),
            )
            continue
        commitments.append(
            Commitment(
                id=str(row["id"]),
                worker_id=_text(row.get("crewMemberId")) or "",
                project_id=_text(row.get("projectId")) or "",
                department=department,
                region=region,
                start_date=_text(row.get("startDate")),
                end_date=_text(row.get("endDate")),
                allocation=_number(row.get("allocationPercent")) or 1.0,
            )
        )
    return commitments


def load_commitments(path: Path) -> List[Commitment]:
    return commitments_from_frame(_read_records(path))
