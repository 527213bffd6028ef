import csv
import logging
from collections.abc import Callable, Iterable
from datetime import date, datetime
from pathlib import Path
from typing import TypeVar

from pydantic import ValidationError

from optvest.core.config import DATE_FORMAT
from optvest.core.errors import GrantFileError
from optvest.models import Grant
from optvest.schemas import GrantRecord

logger = logging.getLogger(__name__)

T = TypeVar("T")

COLUMN_COUNT = 6

# Labels used when a column fails schema validation.
_FIELD_LABELS = {
    "shares": "number of shares",
    "strike_price": "strike price",
    "cliff_months": "cliff duration (months)",
}


def parse_date(raw: str) -> date:
    return datetime.strptime(raw, DATE_FORMAT).date()


def _parse_number(raw: str, convert: Callable[[str], T], label: str, line_number: int) -> T:
    # Python accepts digit separators ("1_000"); grant files must not.
    try:
        if "_" in raw:
            raise ValueError(raw)
        return convert(raw)
    except ValueError:
        raise GrantFileError(f"invalid {label} on line {line_number} ('{raw}')", line_number) from None


def _parse_int(raw: str, label: str, line_number: int) -> int:
    return _parse_number(raw, int, label, line_number)


def _parse_row(fields: list[str], line_number: int) -> Grant:
    name, shares, strike_price, cliff_months, vesting_months, grant_date = fields

    share_count = _parse_int(shares, "number of shares", line_number)
    strike = _parse_number(strike_price, float, "strike price", line_number)
    cliff = _parse_int(cliff_months, "cliff duration (months)", line_number)
    vesting = _parse_int(vesting_months, "vesting duration (months)", line_number)
    if vesting <= 0:
        raise GrantFileError(f"vesting duration must be positive on line {line_number} ('{vesting_months}')", line_number)

    try:
        parsed_date = parse_date(grant_date)
    except ValueError:
        raise GrantFileError(
            f"invalid grant date on line {line_number} ('{grant_date}', expected YYYY-MM-DD)", line_number
        ) from None

    try:
        record = GrantRecord(
            name=name,
            shares=share_count,
            strike_price=strike,
            cliff_months=cliff,
            vesting_months=vesting,
            grant_date=parsed_date,
        )
    except ValidationError as exc:
        error = exc.errors()[0]
        field = str(error["loc"][0]) if error["loc"] else ""
        label = _FIELD_LABELS.get(field, field)
        raise GrantFileError(f"invalid {label} on line {line_number}: {error['msg']}", line_number) from None

    return record.to_grant()


def parse_grants(lines: Iterable[str]) -> list[Grant]:
    """Parse grant rows from CSV text; the first row is a header."""
    reader = csv.reader(lines)
    grants: list[Grant] = []
    header_skipped = False

    while True:
        try:
            record = next(reader)
        except StopIteration:
            break
        except csv.Error as exc:
            raise GrantFileError(f"reading csv line {reader.line_num}: {exc}", reader.line_num) from exc

        line_number = reader.line_num
        if not record:
            continue
        if not header_skipped:
            header_skipped = True
            continue

        if len(record) != COLUMN_COUNT:
            raise GrantFileError(
                f"invalid number of columns on line {line_number} (expected {COLUMN_COUNT}): {record}", line_number
            )

        grants.append(_parse_row([field.strip() for field in record], line_number))

    return grants


def load_grants(path: str | Path) -> list[Grant]:
    try:
        with open(path, newline="", encoding="utf-8") as handle:
            grants = parse_grants(handle)
    except OSError as exc:
        raise GrantFileError(f"opening file: {exc}") from exc

    logger.info("loaded %d grants from %s", len(grants), path)
    return grants
