import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, timedelta
from typing import NamedTuple

from dateutil.relativedelta import relativedelta

from optvest.core.config import Settings
from optvest.core.errors import InvalidGrant
from optvest.models import Grant, VestingEvent
from optvest.schemas import GrantSchedule, GrantVestingStatus, PortfolioReport, ScheduleRow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VestingPolicy:
    """How interval vesting dates are derived from the grant date.

    With ``calendar_months`` off, interval ``i`` lands ``i * interval_days``
    after the grant date while the cliff uses calendar months, rolling a day
    past the end of the target month into the next month. With it on, every
    event uses calendar-month addition clamped to the month end.
    """

    interval_days: int = 30
    calendar_months: bool = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "VestingPolicy":
        return cls(
            interval_days=settings.vesting_interval_days,
            calendar_months=settings.calendar_month_intervals,
        )


DEFAULT_POLICY = VestingPolicy()


class AsOfResult(NamedTuple):
    vested_shares: int
    accumulated_value: float
    last_vest_date: date | None


def add_months(start: date, months: int) -> date:
    # Day of month is clamped to the end of shorter months.
    return start + relativedelta(months=months)


def roll_months(start: date, months: int) -> date:
    # Days past the end of the target month spill into the next one (Jan 31 + 1 month = Mar 2 or 3).
    return start.replace(day=1) + relativedelta(months=months) + timedelta(days=start.day - 1)


def cliff_vest_date(grant_date: date, cliff_months: int, policy: VestingPolicy = DEFAULT_POLICY) -> date:
    if policy.calendar_months:
        return add_months(grant_date, cliff_months)
    return roll_months(grant_date, cliff_months)


def interval_vest_date(grant_date: date, interval: int, policy: VestingPolicy = DEFAULT_POLICY) -> date:
    if policy.calendar_months:
        return add_months(grant_date, interval)
    return grant_date + timedelta(days=interval * policy.interval_days)


def build_vesting_schedule(grant: Grant, policy: VestingPolicy | None = None) -> list[VestingEvent]:
    policy = policy or DEFAULT_POLICY
    if grant.vesting_months <= 0:
        raise InvalidGrant(f"vesting_months must be positive for grant '{grant.name}' (got {grant.vesting_months})")

    per_interval = grant.shares // grant.vesting_months
    schedule: list[VestingEvent] = []

    accumulated = 0
    if grant.cliff_months > 0:
        accumulated = grant.cliff_months * per_interval
        if grant.cliff_months >= grant.vesting_months:
            # No interval follows the cliff to take up the remainder.
            accumulated = grant.shares
        schedule.append(VestingEvent(cliff_vest_date(grant.grant_date, grant.cliff_months, policy), accumulated))

    for interval in range(grant.cliff_months + 1, grant.vesting_months + 1):
        vested = per_interval
        if interval == grant.vesting_months:
            vested = grant.shares - accumulated
        accumulated += vested
        schedule.append(VestingEvent(interval_vest_date(grant.grant_date, interval, policy), vested))

    # A long cliff can outrun fixed-span intervals; keep the schedule chronological.
    schedule.sort(key=lambda event: event.vest_date)
    return schedule


def _spread_value(shares: int, strike_price: float, exercise_value: float) -> float:
    value = shares * (exercise_value - strike_price)
    return max(value, 0.0)


def evaluate_as_of(
    schedule: Sequence[VestingEvent],
    strike_price: float,
    exercise_value: float,
    as_of: date,
) -> AsOfResult:
    """Cumulative vested shares and value for events on or before ``as_of``.

    ``schedule`` must be sorted by date: the scan stops at the first event
    after ``as_of``.
    """
    vested = 0
    last_event: VestingEvent | None = None
    for event in schedule:
        if event.vest_date > as_of:
            break
        vested += event.vested_shares
        last_event = event

    if last_event is None:
        return AsOfResult(0, 0.0, None)

    return AsOfResult(vested, _spread_value(vested, strike_price, exercise_value), last_event.vest_date)


def render_full_schedule(
    schedule: Iterable[VestingEvent],
    strike_price: float,
    exercise_value: float,
) -> list[ScheduleRow]:
    rows: list[ScheduleRow] = []
    cumulative = 0
    for event in schedule:
        cumulative += event.vested_shares
        rows.append(
            ScheduleRow(
                vest_date=event.vest_date,
                vested_shares=event.vested_shares,
                cumulative_shares=cumulative,
                accumulated_value=_spread_value(cumulative, strike_price, exercise_value),
            )
        )
    return rows


def summarize_grant(
    grant: Grant,
    exercise_value: float,
    as_of: date,
    policy: VestingPolicy | None = None,
) -> GrantVestingStatus:
    schedule = build_vesting_schedule(grant, policy)
    result = evaluate_as_of(schedule, grant.strike_price, exercise_value, as_of)
    logger.debug(
        "grant %s: %d shares vested as of %s (last event %s)",
        grant.name,
        result.vested_shares,
        as_of,
        result.last_vest_date,
    )
    return GrantVestingStatus(
        name=grant.name,
        last_vest_date=result.last_vest_date,
        vested_shares=result.vested_shares,
        accumulated_value=result.accumulated_value,
    )


def grant_schedule(grant: Grant, exercise_value: float, policy: VestingPolicy | None = None) -> GrantSchedule:
    schedule = build_vesting_schedule(grant, policy)
    return GrantSchedule(
        name=grant.name,
        rows=render_full_schedule(schedule, grant.strike_price, exercise_value),
    )


def build_portfolio_report(
    grants: Sequence[Grant],
    exercise_value: float,
    as_of: date,
    include_schedules: bool = False,
    policy: VestingPolicy | None = None,
) -> PortfolioReport:
    statuses = [summarize_grant(grant, exercise_value, as_of, policy) for grant in grants]

    total_vested = sum(item.vested_shares for item in statuses)
    total_value = sum(item.accumulated_value for item in statuses)
    logger.info("%d grants: %d shares vested as of %s", len(statuses), total_vested, as_of)

    schedules = None
    if include_schedules:
        schedules = [grant_schedule(grant, exercise_value, policy) for grant in grants]

    return PortfolioReport(
        as_of=as_of,
        exercise_value=exercise_value,
        grants=statuses,
        total_vested_shares=total_vested,
        total_accumulated_value=total_value,
        schedules=schedules,
    )
