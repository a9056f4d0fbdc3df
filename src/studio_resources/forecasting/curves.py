"""
Distribution Curve Model

Rules:
- Pure functions only
- Curves are tuples of CURVE_POINT_COUNT values that sum to 1.0
- Every edit renormalizes; a degenerate curve raises InvalidCurve
"""

from __future__ import annotations

import math
from typing import Dict, Mapping, Sequence

from studio_resources.forecasting.resource_models import (
    DEPARTMENTS,
    Department,
    DepartmentCurveSettings,
    DistributionCurve,
)
from studio_resources.utils.logger import get_logger

logger = get_logger(__name__)


# Control positions along a unit's normalized timeline
CURVE_POSITIONS = (0.0, 0.25, 0.5, 0.75, 1.0)
CURVE_POINT_COUNT = len(CURVE_POSITIONS)

# A normalized curve gives each control point a share of 1/CURVE_POINT_COUNT on
# average, so daily values are scaled back up by the point count. This factor
# must follow CURVE_POSITIONS if the point count ever changes.
CURVE_SEGMENTS = CURVE_POINT_COUNT


class InvalidCurve(ValueError):
    """Raised when a curve cannot be normalized (zero, negative or non-finite)."""


CURVE_PRESETS: Dict[str, DistributionCurve] = {
    "flat": (0.2, 0.2, 0.2, 0.2, 0.2),
    "front_loaded": (0.10, 0.30, 0.30, 0.20, 0.10),
    "bell_curve": (0.01, 0.31, 0.36, 0.31, 0.01),
    "back_loaded": (0.10, 0.20, 0.30, 0.30, 0.10),
    "ramp_up": (0.05, 0.15, 0.25, 0.25, 0.30),
}

DEFAULT_CURVES: Dict[Department, DistributionCurve] = {
    Department.ANIMATION: (0.10, 0.30, 0.30, 0.20, 0.10),  # front loaded
    Department.CG: (0.10, 0.30, 0.30, 0.20, 0.10),  # front loaded
    Department.COMPOSITING: (0.10, 0.20, 0.30, 0.30, 0.10),  # back loaded
    Department.FX: (0.01, 0.20, 0.58, 0.20, 0.01),  # pinched bell
}


def default_curve_settings() -> DepartmentCurveSettings:
    return dict(DEFAULT_CURVES)


# ----------------------------
# Interpolation
# ----------------------------

def interpolate(curve: Sequence[float], position: float) -> float:
    """
    Curve value at a normalized position in [0, 1].

    Positions outside the range are clamped. Between two control points the
    value is linear; at 0 and 1 the exact control values are returned.
    """
    pos = max(0.0, min(1.0, position))

    for i in range(CURVE_POINT_COUNT - 1):
        lo, hi = CURVE_POSITIONS[i], CURVE_POSITIONS[i + 1]
        if lo <= pos < hi:
            t = (pos - lo) / (hi - lo)
            return curve[i] * (1 - t) + curve[i + 1] * t

    return curve[CURVE_POINT_COUNT - 1]


# ----------------------------
# Normalization / editing
# ----------------------------

def normalize(curve: Sequence[float]) -> DistributionCurve:
    if len(curve) != CURVE_POINT_COUNT:
        raise InvalidCurve(
            f"Curve needs {CURVE_POINT_COUNT} points, got {len(curve)}"
        )

    values = [float(v) for v in curve]
    if any(not math.isfinite(v) or v < 0 for v in values):
        raise InvalidCurve(f"Curve values must be finite and non-negative: {values}")

    total = math.fsum(values)
    if not math.isfinite(total) or total <= 0:
        raise InvalidCurve(f"Curve sum must be positive, got {total}")

    return tuple(v / total for v in values)


def set_curve_point(curve: Sequence[float], index: int, value: float) -> DistributionCurve:
    """
    Replace one control point and renormalize the whole curve.
    """
    if not 0 <= index < CURVE_POINT_COUNT:
        raise IndexError(f"Curve point index out of range: {index}")

    edited = list(curve)
    edited[index] = value
    return normalize(edited)


def apply_preset(
    curve_settings: Mapping[Department, DistributionCurve],
    department: Department,
    preset: str,
) -> DepartmentCurveSettings:
    """
    Return a copy of curve_settings with one department switched to a named preset.
    """
    try:
        curve = CURVE_PRESETS[preset]
    except KeyError:
        raise KeyError(
            f"Unknown curve preset {preset!r}; choose from {', '.join(CURVE_PRESETS)}"
        ) from None

    updated = dict(curve_settings)
    updated[department] = curve
    logger.info("Curve preset applied | department=%s | preset=%s", department.value, preset)
    return updated


def curve_settings_from_mapping(raw: Mapping[str, Sequence[float]]) -> DepartmentCurveSettings:
    """
    Build curve settings from persisted JSON-like data keyed by department name.

    Unknown departments are ignored, missing ones take the default curve, and a
    curve that cannot be normalized falls back to the default for its department.
    """
    settings = default_curve_settings()
    by_name = {d.value: d for d in DEPARTMENTS}

    for name, values in raw.items():
        department = by_name.get(name)
        if department is None:
            logger.warning("Ignoring curve for unknown department %r", name)
            continue
        try:
            settings[department] = normalize(values)
        except (InvalidCurve, TypeError, ValueError) as e:
            logger.warning(
                "Stored curve for %s is unusable (%s); using default", name, e
            )

    return settings


def curve_settings_to_mapping(curve_settings: Mapping[Department, DistributionCurve]) -> Dict[str, list]:
    return {d.value: list(curve_settings[d]) for d in DEPARTMENTS if d in curve_settings}
