"""Collectible item ("NFT") model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum

from valhalla.utils.money import format_amount


class ItemRarity(str, Enum):
    """Item rarity tiers."""

    LEGENDARY = "Legendary"
    EPIC = "Epic"
    RARE = "Rare"
    COMMON = "Common"


class ItemCategory(str, Enum):
    """Viking classes an item can belong to."""

    BERSERKER = "Berserker"
    VALKYRIE = "Valkyrie"
    JARL = "Jarl"
    SHAMAN = "Shaman"


@dataclass
class Item:
    """A collectible with static traits and a staking state.

    ``is_staked`` and ``staked_at`` always move together: an item is staked
    exactly when ``staked_at`` is set.
    """

    token_id: int
    name: str
    image_url: str
    rarity: ItemRarity
    category: ItemCategory
    price: Decimal

    # Weak reference to User.id
    owner_id: str | None = None

    is_staked: bool = False
    staked_at: datetime | None = None

    # Trait name -> value, e.g. {"strength": 95}
    attributes: dict = field(default_factory=dict)

    id: str | None = None
    created_at: datetime | None = None

    def days_since_staked(self, now: datetime) -> int:
        """Whole days elapsed since the item was staked (0 if unstaked)."""
        if not self.staked_at:
            return 0
        return max((now - self.staked_at).days, 0)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "token_id": self.token_id,
            "name": self.name,
            "image_url": self.image_url,
            "rarity": self.rarity.value,
            "category": self.category.value,
            "price": format_amount(self.price),
            "owner_id": self.owner_id,
            "is_staked": self.is_staked,
            "staked_at": self.staked_at.isoformat() if self.staked_at else None,
            "attributes": dict(self.attributes),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self) -> str:
        return f"<Item #{self.token_id} {self.name}>"
