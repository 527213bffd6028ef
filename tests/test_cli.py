import json

from typer.testing import CliRunner

from optvest.cli import app

runner = CliRunner()


def test_report_prints_portfolio_table(grants_csv) -> None:
    result = runner.invoke(app, ["report", "--file", str(grants_csv), "--exercise", "3.0", "--end-date", "2021-01-01"])

    assert result.exit_code == 0, result.output
    assert "Vesting Status as of 2021-01-01 (Exercise Value: $3.00):" in result.output
    rows = {line.split()[0]: line.split() for line in result.output.splitlines() if line.strip()}
    assert rows["Founding"] == ["Founding", "Grant", "2021-01-01", "300", "$600.00"]
    assert rows["Refresh"] == ["Refresh", "Grant", "N/A", "0", "$0.00"]
    assert rows["Total"] == ["Total", "2021-01-01", "300", "$600.00"]


def test_report_with_schedules(grants_csv) -> None:
    result = runner.invoke(
        app,
        ["report", "-f", str(grants_csv), "-e", "3.0", "-d", "2030-01-01", "--print-schedule", "--calendar-months"],
    )

    assert result.exit_code == 0, result.output
    assert "Vesting Date Vested Shares" in result.output
    assert "2024-01-01   25             $2400.00" in result.output
    assert "2022-06-15   87             $500.00" in result.output


def test_report_json_output(grants_csv) -> None:
    result = runner.invoke(
        app, ["report", "--file", str(grants_csv), "--exercise", "2.0", "--end-date", "2030-01-01", "--json"]
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout[result.stdout.index("{") :])
    assert payload["total_vested_shares"] == 2200
    assert payload["total_accumulated_value"] == 1200.0
    assert payload["grants"][1]["accumulated_value"] == 0.0
    assert payload["schedules"] is None


def test_missing_arguments_are_collected() -> None:
    result = runner.invoke(app, ["report"])

    assert result.exit_code == 2
    assert "Errors:" in result.output
    assert "--file is required." in result.output
    assert "--exercise with a non-zero value is required." in result.output
    assert "--end-date is required." in result.output
    assert "Usage: optvest report" in result.output


def test_bad_end_date_is_reported(grants_csv) -> None:
    result = runner.invoke(app, ["report", "--file", str(grants_csv), "--exercise", "1", "--end-date", "01/02/2021"])

    assert result.exit_code == 2
    assert "Invalid format for --end-date" in result.output


def test_ingestion_error_aborts_run(tmp_path) -> None:
    path = tmp_path / "broken.csv"
    path.write_text("name,shares,strike,cliff,vesting,date\nBroken,lots,1,0,12,2020-01-01\n", encoding="utf-8")

    result = runner.invoke(app, ["report", "--file", str(path), "--exercise", "1", "--end-date", "2021-01-01"])

    assert result.exit_code == 1
    assert "Error loading grants: invalid number of shares on line 2 ('lots')" in result.output
    assert "Vesting Status" not in result.output
