from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Optional

import typer

from optvest.core.config import get_settings
from optvest.core.errors import GrantFileError, InvalidGrant
from optvest.core.logging import configure_logging
from optvest.services.ingest import load_grants, parse_date
from optvest.services.render import render_portfolio, render_schedule
from optvest.services.vesting import VestingPolicy, build_portfolio_report

app = typer.Typer(add_completion=False, help="Stock option vesting schedules and as-of reports")

USAGE = "Usage: optvest report --file <path_to_csv> --exercise <value> --end-date <YYYY-MM-DD>"


@app.callback()
def main() -> None:
    """Stock option vesting schedules and as-of reports."""


@app.command("report")
def report(
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="Path to the grants CSV file (required)"),
    exercise: float = typer.Option(0.0, "--exercise", "-e", help="Current exercise value per share (required)"),
    end_date: Optional[str] = typer.Option(
        None, "--end-date", "-d", help="Calculate vesting up to this date (YYYY-MM-DD) (required)"
    ),
    print_schedule: bool = typer.Option(False, "--print-schedule", help="Print the full vesting schedule for each grant"),
    calendar_months: bool = typer.Option(
        False, "--calendar-months", help="Advance every vesting date by calendar months instead of fixed intervals"
    ),
    json_out: bool = typer.Option(False, "--json", help="Machine-readable JSON output"),
) -> None:
    settings = get_settings()
    configure_logging(settings.debug)

    errors: list[str] = []
    if file is None:
        errors.append("--file is required.")
    if exercise == 0.0:
        errors.append("--exercise with a non-zero value is required.")
    if not end_date:
        errors.append("--end-date is required.")

    as_of: date | None = None
    if end_date:
        try:
            as_of = parse_date(end_date)
        except ValueError as exc:
            errors.append(f"Invalid format for --end-date: {exc}. Use YYYY-MM-DD.")

    if errors:
        typer.echo("Errors:")
        for message in errors:
            typer.echo(f"  - {message}")
        typer.echo(f"\n{USAGE}")
        raise typer.Exit(code=2)

    try:
        grants = load_grants(file)
    except GrantFileError as exc:
        typer.echo(f"Error loading grants: {exc}")
        raise typer.Exit(code=1)

    policy = VestingPolicy.from_settings(settings)
    if calendar_months:
        policy = VestingPolicy(interval_days=policy.interval_days, calendar_months=True)

    try:
        result = build_portfolio_report(grants, exercise, as_of, include_schedules=print_schedule, policy=policy)
    except InvalidGrant as exc:
        typer.echo(f"Error: {exc}")
        raise typer.Exit(code=1)

    if json_out:
        typer.echo(result.model_dump_json(indent=2))
        return

    typer.echo(render_portfolio(result))
    if result.schedules:
        typer.echo("")
        for schedule in result.schedules:
            typer.echo(render_schedule(schedule))
            typer.echo("")


if __name__ == "__main__":
    app()
