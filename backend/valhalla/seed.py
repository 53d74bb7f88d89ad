"""Demo data for the in-memory store."""

import logging
from datetime import timedelta
from decimal import Decimal

from valhalla.models import ItemCategory, ItemRarity
from valhalla.store import EntityStore

logger = logging.getLogger(__name__)

DEMO_USER = {
    "username": "viking_warrior",
    "wallet_address": "0x1234567890abcdef1234567890abcdef12345678",
    "odin_balance": Decimal("450.25"),
}

DEMO_ITEMS = [
    {
        "token_id": 1247,
        "name": "Ragnar the Fierce #1247",
        "image_url": "https://images.unsplash.com/photo-1571019613454-1cb2f99b2d8b?w=600&h=600&fit=crop",
        "rarity": ItemRarity.LEGENDARY,
        "category": ItemCategory.BERSERKER,
        "price": Decimal("2.5"),
        "attributes": {"strength": 95, "wisdom": 45, "magic": 30, "speed": 80},
        "staked_days_ago": 15,
        "rewards_earned": Decimal("78.0"),
    },
    {
        "token_id": 892,
        "name": "Freydis the Bold #892",
        "image_url": "https://images.unsplash.com/photo-1544723795-3fb6469f5b39?w=600&h=600&fit=crop",
        "rarity": ItemRarity.EPIC,
        "category": ItemCategory.VALKYRIE,
        "price": Decimal("1.8"),
        "attributes": {"strength": 85, "wisdom": 70, "magic": 90, "speed": 95},
    },
    {
        "token_id": 456,
        "name": "Olaf the Wise #456",
        "image_url": "https://images.unsplash.com/photo-1566492031773-4f4e44671d66?w=600&h=600&fit=crop",
        "rarity": ItemRarity.RARE,
        "category": ItemCategory.JARL,
        "price": Decimal("3.2"),
        "attributes": {"strength": 70, "wisdom": 95, "magic": 60, "speed": 50},
    },
]


def seed_demo_data(store: EntityStore) -> dict:
    """Create the demo user and their items. Skips if already seeded."""
    existing = store.get_user_by_username(DEMO_USER["username"])
    if existing:
        return {"user": existing, "items": store.get_items_by_owner(existing.id)}

    now = store.now()
    user = store.create_user(
        username=DEMO_USER["username"],
        wallet_address=DEMO_USER["wallet_address"],
        odin_balance=DEMO_USER["odin_balance"],
    )
    # Shown on the profile only; the faucet gate reads the claim log
    user = store.update_user(user.id, last_faucet_claim=now - timedelta(hours=25))

    items = []
    for data in DEMO_ITEMS:
        item = store.create_item(
            token_id=data["token_id"],
            name=data["name"],
            image_url=data["image_url"],
            rarity=data["rarity"],
            category=data["category"],
            price=data["price"],
            attributes=data["attributes"],
            owner_id=user.id,
        )

        if "staked_days_ago" in data:
            item = store.update_item(
                item.id,
                is_staked=True,
                staked_at=now - timedelta(days=data["staked_days_ago"]),
            )
            store.create_staking_reward(user.id, item.id, data["rewards_earned"])

        items.append(item)

    logger.info(f"Demo data seeded: user={user.id}, items={len(items)}")
    return {"user": user, "items": items}
