from optvest.core.config import DATE_FORMAT
from optvest.schemas import GrantSchedule, PortfolioReport

PORTFOLIO_RULE = "-" * 70
SCHEDULE_RULE = "-" * 46


def _status_row(name: str, vest_date: str, vested_shares: int, value: float) -> str:
    return f"{name:<20} {vest_date:<12} {vested_shares:<14d} ${value:<19.2f}"


def render_portfolio(report: PortfolioReport) -> str:
    as_of = report.as_of.strftime(DATE_FORMAT)
    lines = [
        "",
        f"Vesting Status as of {as_of} (Exercise Value: ${report.exercise_value:.2f}):",
        "",
        f"{'Grant Name':<20} {'Vesting Date':<12} {'Total Vested':<14} {'Accumulated Value':<20}",
        PORTFOLIO_RULE,
    ]
    for status in report.grants:
        vest_date = status.last_vest_date.strftime(DATE_FORMAT) if status.last_vest_date else "N/A"
        lines.append(_status_row(status.name, vest_date, status.vested_shares, status.accumulated_value))
    lines.append(PORTFOLIO_RULE)
    lines.append(_status_row("Total", as_of, report.total_vested_shares, report.total_accumulated_value))
    return "\n".join(lines)


def render_schedule(schedule: GrantSchedule) -> str:
    lines = [
        schedule.name,
        f"{'Vesting Date':<12} {'Vested Shares':<14} {'Accumulated Value':<20}",
        SCHEDULE_RULE,
    ]
    for row in schedule.rows:
        lines.append(f"{row.vest_date.strftime(DATE_FORMAT):<12} {row.vested_shares:<14d} ${row.accumulated_value:.2f}")
    return "\n".join(lines)
