"""
Resource Forecast Domain Models

Enterprise rules:
- No logic beyond trivial accessors
- No I/O
- No formatting
- Pure data containers
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, FrozenSet, Mapping, Optional, Tuple


class Department(Enum):
    ANIMATION = "Animation"
    CG = "CG"
    COMPOSITING = "Compositing"
    FX = "FX"


DEPARTMENTS: Tuple[Department, ...] = tuple(Department)


class Region(Enum):
    CALIFORNIA = "California"
    OREGON = "Oregon"
    VANCOUVER = "Vancouver"


class ProjectStatus(Enum):
    ACTIVE = "Active"
    PROSPECT = "Prospect"
    BIDDING = "Bidding"
    BOOKED = "Booked"
    COMPLETED = "Completed"
    INACTIVE = "Inactive"


class TimelineZoom(Enum):
    THREE_MONTHS = "3m"
    SIX_MONTHS = "6m"
    ONE_YEAR = "1y"
    TWO_YEARS = "2y"


# Relative intensity at positions 0, .25, .5, .75, 1 of a unit's duration
DistributionCurve = Tuple[float, float, float, float, float]
DepartmentCurveSettings = Dict[Department, DistributionCurve]


# -------------------------------------------------
# Per-department values
# -------------------------------------------------

@dataclass(frozen=True)
class DepartmentValues:
    animation: float = 0.0
    cg: float = 0.0
    compositing: float = 0.0
    fx: float = 0.0

    def get(self, department: Department) -> float:
        return getattr(self, _FIELD_BY_DEPARTMENT[department])

    def add(self, department: Department, amount: float) -> "DepartmentValues":
        name = _FIELD_BY_DEPARTMENT[department]
        values = {n: getattr(self, n) for n in _FIELD_BY_DEPARTMENT.values()}
        values[name] += amount
        return DepartmentValues(**values)

    def __add__(self, other: "DepartmentValues") -> "DepartmentValues":
        return DepartmentValues(
            animation=self.animation + other.animation,
            cg=self.cg + other.cg,
            compositing=self.compositing + other.compositing,
            fx=self.fx + other.fx,
        )


_FIELD_BY_DEPARTMENT = {
    Department.ANIMATION: "animation",
    Department.CG: "cg",
    Department.COMPOSITING: "compositing",
    Department.FX: "fx",
}

# Day -> per-department value (needed or booked). Internal to the forecast.
DailyMetrics = Dict[date, DepartmentValues]


# -------------------------------------------------
# Input records
# -------------------------------------------------

@dataclass(frozen=True)
class Project:
    id: str
    name: str
    status: ProjectStatus
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    parent_id: Optional[str] = None


@dataclass(frozen=True)
class ProductionUnit:
    """An episode: a date range plus a person-day budget per department."""

    id: str
    project_id: str
    start_date: Optional[str]
    end_date: Optional[str]
    effort: Mapping[Department, float] = field(default_factory=dict)
    name: str = ""

    def effort_for(self, department: Department) -> float:
        return float(self.effort.get(department, 0.0) or 0.0)


@dataclass(frozen=True)
class Commitment:
    """A booking of one crew member on a project at a fractional allocation."""

    id: str
    worker_id: str
    project_id: str
    department: Department
    region: Region
    start_date: Optional[str]
    end_date: Optional[str]
    allocation: float = 1.0


@dataclass(frozen=True)
class ResourceFilters:
    project_id: Optional[str] = None
    unit_id: Optional[str] = None
    statuses: FrozenSet[ProjectStatus] = frozenset(
        {
            ProjectStatus.ACTIVE,
            ProjectStatus.PROSPECT,
            ProjectStatus.BIDDING,
            ProjectStatus.BOOKED,
        }
    )
    regions: FrozenSet[Region] = frozenset()
    show_remaining: bool = False


# -------------------------------------------------
# Outputs
# -------------------------------------------------

@dataclass(frozen=True)
class TimelineBounds:
    start: date
    end: date
    historical: bool = False


@dataclass(frozen=True)
class MonthlyDataPoint:
    month: date
    needed: DepartmentValues
    booked: DepartmentValues

    def remaining(self, department: Department) -> float:
        return max(0.0, self.needed.get(department) - self.booked.get(department))


@dataclass(frozen=True)
class Peaks:
    animation: float = 0.0
    cg: float = 0.0
    compositing: float = 0.0
    fx: float = 0.0

    def get(self, department: Department) -> float:
        return getattr(self, _FIELD_BY_DEPARTMENT[department])


@dataclass(frozen=True)
class ResourceForecastResult:
    bounds: TimelineBounds
    points: Tuple[MonthlyDataPoint, ...]
    peaks: Peaks
    show_remaining: bool

    # Metadata (not KPIs)
    units_considered: int = 0
    units_projected: int = 0
    commitments_considered: int = 0
