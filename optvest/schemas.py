from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from optvest.models import Grant


class GrantRecord(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str
    shares: int = Field(gt=0)
    strike_price: float = Field(ge=0)
    cliff_months: int = Field(default=0, ge=0)
    vesting_months: int = Field(gt=0)
    grant_date: date

    def to_grant(self) -> Grant:
        return Grant(
            name=self.name,
            shares=self.shares,
            strike_price=self.strike_price,
            cliff_months=self.cliff_months,
            vesting_months=self.vesting_months,
            grant_date=self.grant_date,
        )


class GrantVestingStatus(BaseModel):
    name: str
    last_vest_date: date | None
    vested_shares: int
    accumulated_value: float


class ScheduleRow(BaseModel):
    vest_date: date
    vested_shares: int
    cumulative_shares: int
    accumulated_value: float


class GrantSchedule(BaseModel):
    name: str
    rows: list[ScheduleRow]


class PortfolioReport(BaseModel):
    as_of: date
    exercise_value: float
    grants: list[GrantVestingStatus]
    total_vested_shares: int
    total_accumulated_value: float
    schedules: list[GrantSchedule] | None = None


class ReportRequest(BaseModel):
    grants: list[GrantRecord]
    exercise_value: float
    as_of: date
    include_schedules: bool = False
