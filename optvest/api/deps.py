from optvest.core.config import get_settings
from optvest.services.vesting import VestingPolicy


def get_vesting_policy() -> VestingPolicy:
    return VestingPolicy.from_settings(get_settings())
