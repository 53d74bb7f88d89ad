"""Business logic services."""

from valhalla.services.accrual_service import AccrualService
from valhalla.services.faucet_service import FaucetService
from valhalla.services.staking_service import StakingService
from valhalla.services.stats_service import StatsService
from valhalla.services.user_service import UserService

__all__ = [
    "AccrualService",
    "FaucetService",
    "StakingService",
    "StatsService",
    "UserService",
]
