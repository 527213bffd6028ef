from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Grant:
    name: str
    shares: int
    strike_price: float
    cliff_months: int
    vesting_months: int
    grant_date: date


@dataclass(frozen=True)
class VestingEvent:
    vest_date: date
    vested_shares: int
