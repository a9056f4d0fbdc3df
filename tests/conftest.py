from datetime import date

import pytest

from studio_resources.forecasting.curves import CURVE_PRESETS
from studio_resources.forecasting.resource_models import (
    DEPARTMENTS,
    Commitment,
    Department,
    ProductionUnit,
    Region,
)

# 2024-01-01 is a Monday
MONDAY = date(2024, 1, 1)


@pytest.fixture
def flat_curves():
    return {d: CURVE_PRESETS["flat"] for d in DEPARTMENTS}


def make_unit(uid="ep1", project_id="p1", start="2024-01-01", end="2024-01-12", **effort):
    by_name = {
        "animation": Department.ANIMATION,
        "cg": Department.CG,
        "compositing": Department.COMPOSITING,
        "fx": Department.FX,
    }
    return ProductionUnit(
        id=uid,
        project_id=project_id,
        start_date=start,
        end_date=end,
        effort={by_name[k]: v for k, v in effort.items()},
    )


def make_commitment(
    cid="b1",
    department=Department.CG,
    region=Region.CALIFORNIA,
    project_id="p1",
    start="2024-01-01",
    end="2024-01-05",
    allocation=1.0,
):
    return Commitment(
        id=cid,
        worker_id="w-" + cid,
        project_id=project_id,
        department=department,
        region=region,
        start_date=start,
        end_date=end,
        allocation=allocation,
    )
