"""Collection-wide statistics."""

from decimal import Decimal

from valhalla.store import ITEMS, EntityStore

DEFAULT_TOTAL_SUPPLY = 10000
DEFAULT_FLOOR_PRICE = Decimal("0.5")


class StatsService:
    """Derives global counters from the store. Nothing is cached."""

    def __init__(
        self,
        store: EntityStore,
        total_supply: int = DEFAULT_TOTAL_SUPPLY,
        floor_price: Decimal = DEFAULT_FLOOR_PRICE,
    ):
        self.store = store
        self.total_supply = total_supply
        self.floor_price = floor_price

    def global_stats(self) -> dict:
        items = self.store.all(ITEMS)
        holders = {item.owner_id for item in items if item.owner_id}
        total_rewards = sum(
            (reward.rewards_earned for reward in self.store.list_staking_rewards()),
            Decimal("0"),
        )

        return {
            # Theoretical collection size, not the number of minted items
            "total_nfts": self.total_supply,
            "total_staked": sum(1 for item in items if item.is_staked),
            "total_holders": len(holders),
            "floor_price": self.floor_price,
            "total_rewards": total_rewards,
        }
