"""Entity models held by the in-memory store."""

from valhalla.models.faucet import FaucetClaim
from valhalla.models.item import Item, ItemCategory, ItemRarity
from valhalla.models.staking import StakingReward
from valhalla.models.user import User

__all__ = [
    "User",
    "Item",
    "ItemRarity",
    "ItemCategory",
    "StakingReward",
    "FaucetClaim",
]
