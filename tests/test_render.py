from datetime import date

from optvest.schemas import GrantSchedule, GrantVestingStatus, PortfolioReport, ScheduleRow
from optvest.services.render import render_portfolio, render_schedule


def _report() -> PortfolioReport:
    return PortfolioReport(
        as_of=date(2022, 1, 1),
        exercise_value=3.0,
        grants=[
            GrantVestingStatus(
                name="Founding Grant", last_vest_date=date(2021, 12, 20), vested_shares=600, accumulated_value=1200.0
            ),
            GrantVestingStatus(name="Future Grant", last_vest_date=None, vested_shares=0, accumulated_value=0.0),
        ],
        total_vested_shares=600,
        total_accumulated_value=1200.0,
    )


def test_render_portfolio_layout() -> None:
    lines = render_portfolio(_report()).splitlines()

    assert lines[1] == "Vesting Status as of 2022-01-01 (Exercise Value: $3.00):"
    assert lines[3].split() == ["Grant", "Name", "Vesting", "Date", "Total", "Vested", "Accumulated", "Value"]
    assert lines[4] == "-" * 70
    assert lines[5].split() == ["Founding", "Grant", "2021-12-20", "600", "$1200.00"]
    assert lines[5].index("2021-12-20") == 21
    assert lines[6].split() == ["Future", "Grant", "N/A", "0", "$0.00"]
    assert lines[7] == "-" * 70
    assert lines[8].split() == ["Total", "2022-01-01", "600", "$1200.00"]


def test_render_schedule_rows() -> None:
    schedule = GrantSchedule(
        name="Founding Grant",
        rows=[
            ScheduleRow(vest_date=date(2021, 1, 1), vested_shares=300, cumulative_shares=300, accumulated_value=600.0),
            ScheduleRow(vest_date=date(2021, 1, 25), vested_shares=25, cumulative_shares=325, accumulated_value=650.5),
        ],
    )

    lines = render_schedule(schedule).splitlines()

    assert lines[0] == "Founding Grant"
    assert lines[2] == "-" * 46
    assert lines[3] == "2021-01-01   300            $600.00"
    assert lines[4] == "2021-01-25   25             $650.50"
