from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from optvest.api.deps import get_vesting_policy
from optvest.core.errors import GrantFileError
from optvest.schemas import PortfolioReport, ReportRequest
from optvest.services.ingest import parse_grants
from optvest.services.vesting import VestingPolicy, build_portfolio_report

router = APIRouter(prefix="/api/report", tags=["report"])


@router.post("", response_model=PortfolioReport)
def create_report(
    payload: ReportRequest,
    policy: VestingPolicy = Depends(get_vesting_policy),
) -> PortfolioReport:
    grants = [record.to_grant() for record in payload.grants]
    return build_portfolio_report(
        grants,
        payload.exercise_value,
        payload.as_of,
        include_schedules=payload.include_schedules,
        policy=policy,
    )


@router.post("/csv", response_model=PortfolioReport)
async def create_report_from_csv(
    request: Request,
    exercise_value: float = Query(...),
    as_of: date = Query(...),
    include_schedules: bool = Query(default=False),
    policy: VestingPolicy = Depends(get_vesting_policy),
) -> PortfolioReport:
    body = await request.body()
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="grants file must be UTF-8 text") from exc

    try:
        grants = parse_grants(text.splitlines())
    except GrantFileError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return build_portfolio_report(grants, exercise_value, as_of, include_schedules=include_schedules, policy=policy)
