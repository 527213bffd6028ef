from collections.abc import Generator
from datetime import date
from pathlib import Path
import sys

import pytest
from fastapi.testclient import TestClient

sys.path.append(str(Path(__file__).resolve().parents[1]))

from optvest.api.deps import get_vesting_policy
from optvest.main import app
from optvest.models import Grant
from optvest.services.vesting import VestingPolicy


@pytest.fixture()
def client() -> Generator[TestClient, None, None]:
    app.dependency_overrides[get_vesting_policy] = lambda: VestingPolicy()

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture()
def standard_grant() -> Grant:
    return Grant(
        name="Founding Grant",
        shares=1200,
        strike_price=1.0,
        cliff_months=12,
        vesting_months=48,
        grant_date=date(2020, 1, 1),
    )


@pytest.fixture()
def grants_csv(tmp_path) -> Path:
    path = tmp_path / "grants.csv"
    path.write_text(
        "name,shares,strike_price,cliff_months,vesting_months,grant_date\n"
        "Founding Grant, 1200, 1.00, 12, 48, 2020-01-01\n"
        "Refresh Grant, 1000, 2.50, 0, 12, 2021-06-15\n",
        encoding="utf-8",
    )
    return path
