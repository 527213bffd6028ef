from fastapi import APIRouter, Depends, Query

from optvest.api.deps import get_vesting_policy
from optvest.schemas import GrantRecord, GrantSchedule
from optvest.services.vesting import VestingPolicy, grant_schedule

router = APIRouter(prefix="/api/grants", tags=["grants"])


@router.post("/schedule", response_model=GrantSchedule)
def schedule_for_grant(
    payload: GrantRecord,
    exercise_value: float = Query(...),
    policy: VestingPolicy = Depends(get_vesting_policy),
) -> GrantSchedule:
    return grant_schedule(payload.to_grant(), exercise_value, policy)
