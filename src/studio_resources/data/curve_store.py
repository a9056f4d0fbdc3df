"""
Curve settings persistence (caller side).

Settings are a small JSON document keyed by department name:
{"curves": {"Animation": [0.1, 0.3, 0.3, 0.2, 0.1], ...}, "zoom": "1y"}
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping, Optional, Tuple

from studio_resources.forecasting.curves import (
    curve_settings_from_mapping,
    curve_settings_to_mapping,
    default_curve_settings,
)
from studio_resources.forecasting.resource_models import (
    Department,
    DepartmentCurveSettings,
    DistributionCurve,
    TimelineZoom,
)
from studio_resources.utils.logger import get_logger

logger = get_logger(__name__)


def load_curve_settings(path: Path) -> Tuple[DepartmentCurveSettings, Optional[TimelineZoom]]:
    """
    Load saved curves (and zoom, when stored). A missing or corrupt file gives defaults.
    """
    path = Path(path)
    if not path.exists():
        logger.info("No saved curve settings at %s; using defaults", path)
        return default_curve_settings(), None

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Could not read curve settings %s (%s); using defaults", path, e)
        return default_curve_settings(), None

    if not isinstance(raw, dict):
        logger.warning("Curve settings %s is not a JSON object; using defaults", path)
        return default_curve_settings(), None

    curves = raw.get("curves")
    settings = curve_settings_from_mapping(curves if isinstance(curves, dict) else {})

    zoom = None
    if raw.get("zoom") is not None:
        try:
            zoom = TimelineZoom(raw["zoom"])
        except ValueError:
            logger.warning("Ignoring unknown saved zoom %r", raw["zoom"])

    return settings, zoom


def save_curve_settings(
    path: Path,
    curve_settings: Mapping[Department, DistributionCurve],
    zoom: Optional[TimelineZoom] = None,
) -> None:
    path = Path(path)
    payload = {"curves": curve_settings_to_mapping(curve_settings)}
    if zoom is not None:
        payload["zoom"] = zoom.value

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    logger.info("Saved curve settings to %s", path)
