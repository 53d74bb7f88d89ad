"""In-memory entity store.

Owns the four collections (users, items, staking rewards, faucet claims) and
their secondary indexes. One instance is created per application and handed
to the services; nothing else keeps its own copy of mutable state.
"""

import logging
import threading
import uuid
from dataclasses import replace
from datetime import datetime
from decimal import Decimal

from valhalla.models import (
    FaucetClaim,
    Item,
    ItemCategory,
    ItemRarity,
    StakingReward,
    User,
)
from valhalla.utils.money import to_decimal

logger = logging.getLogger(__name__)

USERS = "users"
ITEMS = "items"
STAKING_REWARDS = "staking_rewards"
FAUCET_CLAIMS = "faucet_claims"

KINDS = (USERS, ITEMS, STAKING_REWARDS, FAUCET_CLAIMS)

_KIND_BY_TYPE = {
    User: USERS,
    Item: ITEMS,
    StakingReward: STAKING_REWARDS,
    FaucetClaim: FAUCET_CLAIMS,
}

# Fields stamped with the store clock on insert
_INSERT_TIMESTAMPS = {
    USERS: ("created_at",),
    ITEMS: ("created_at",),
    STAKING_REWARDS: ("created_at", "last_claim_at"),
    FAUCET_CLAIMS: ("claimed_at",),
}

# (kind, field) pairs with a unique hash index
_UNIQUE_INDEXES = (
    (USERS, "username"),
    (USERS, "wallet_address"),
    (ITEMS, "token_id"),
)

_IMMUTABLE_FIELDS = {
    ITEMS: ("token_id",),
    STAKING_REWARDS: ("user_id", "item_id"),
    FAUCET_CLAIMS: ("user_id", "amount", "wallet_address", "claimed_at"),
}


class StoreError(Exception):
    """Integrity violation inside the store."""


class DuplicateKeyError(StoreError):
    """A unique key is already taken."""


class ImmutableFieldError(StoreError):
    """Attempt to change a field that is fixed after creation."""


class EntityStore:
    """Keyed in-memory collections with hash-based secondary indexes."""

    def __init__(self, clock=None):
        self.clock = clock or datetime.utcnow
        self._lock = threading.RLock()
        self._collections: dict[str, dict] = {kind: {} for kind in KINDS}
        self._indexes: dict[tuple[str, str], dict] = {
            key: {} for key in _UNIQUE_INDEXES
        }
        self._reward_ids: dict[tuple[str, str], str] = {}
        self._claim_ids_by_user: dict[str, list[str]] = {}
        self._user_locks: dict[str, threading.Lock] = {}

    def now(self) -> datetime:
        return self.clock()

    # ============ Generic operations ============

    def get(self, kind: str, entity_id: str):
        """Get an entity by id, or None."""
        return self._collection(kind).get(entity_id)

    def find(self, kind: str, field_name: str, value):
        """Get an entity through a secondary index, or None."""
        index = self._indexes.get((kind, field_name))
        if index is None:
            raise KeyError(f"No index on {kind}.{field_name}")
        entity_id = index.get(value)
        return self.get(kind, entity_id) if entity_id is not None else None

    def all(self, kind: str) -> list:
        """All entities of a kind in insertion order."""
        return list(self._collection(kind).values())

    def insert(self, entity):
        """Store a new entity under a fresh id and return the stored copy."""
        kind = _KIND_BY_TYPE[type(entity)]
        now = self.now()
        stamps = {name: now for name in _INSERT_TIMESTAMPS[kind]}
        stored = replace(entity, id=str(uuid.uuid4()), **stamps)

        with self._lock:
            self._check_unique(kind, stored)
            self._check_consistent(kind, stored)
            self._collection(kind)[stored.id] = stored
            self._index(kind, stored)

        logger.debug(f"Inserted {kind} {stored.id}")
        return stored

    def update(self, kind: str, entity_id: str, **fields):
        """Merge fields into an existing entity.

        Returns the updated entity, or None if the id is unknown. The stored
        object is swapped in one step so readers never see a half-applied
        change.
        """
        if "id" in fields:
            raise ImmutableFieldError("id cannot be changed")

        with self._lock:
            current = self.get(kind, entity_id)
            if current is None:
                return None

            for name in _IMMUTABLE_FIELDS.get(kind, ()):
                if name in fields and fields[name] != getattr(current, name):
                    raise ImmutableFieldError(f"{kind}.{name} cannot be changed")

            updated = replace(current, **fields)
            self._check_unique(kind, updated, exclude_id=entity_id)
            self._check_consistent(kind, updated)

            self._unindex(kind, current)
            self._collection(kind)[entity_id] = updated
            self._index(kind, updated)

        return updated

    def user_lock(self, user_id: str) -> threading.Lock:
        """Lock serializing balance read-modify-write for one user."""
        with self._lock:
            return self._user_locks.setdefault(user_id, threading.Lock())

    # ============ Users ============

    def get_user(self, user_id: str) -> User | None:
        return self.get(USERS, user_id)

    def get_user_by_username(self, username: str) -> User | None:
        return self.find(USERS, "username", username)

    def get_user_by_wallet(self, wallet_address: str) -> User | None:
        return self.find(USERS, "wallet_address", wallet_address)

    def create_user(
        self,
        username: str,
        password_hash: str = "",
        wallet_address: str | None = None,
        odin_balance: Decimal = Decimal("0"),
    ) -> User:
        return self.insert(
            User(
                username=username,
                password_hash=password_hash,
                wallet_address=wallet_address,
                odin_balance=to_decimal(odin_balance),
            )
        )

    def update_user(self, user_id: str, **fields) -> User | None:
        return self.update(USERS, user_id, **fields)

    # ============ Items ============

    def list_items(self, limit: int = 20, offset: int = 0) -> list[Item]:
        return self.all(ITEMS)[offset : offset + limit]

    def get_item(self, item_id: str) -> Item | None:
        return self.get(ITEMS, item_id)

    def get_item_by_token_id(self, token_id: int) -> Item | None:
        return self.find(ITEMS, "token_id", token_id)

    def get_items_by_owner(self, owner_id: str) -> list[Item]:
        return [item for item in self.all(ITEMS) if item.owner_id == owner_id]

    def get_staked_items_by_owner(self, owner_id: str) -> list[Item]:
        return [
            item
            for item in self.all(ITEMS)
            if item.owner_id == owner_id and item.is_staked
        ]

    def create_item(
        self,
        token_id: int,
        name: str,
        image_url: str,
        rarity,
        category,
        price,
        attributes: dict | None = None,
        owner_id: str | None = None,
    ) -> Item:
        return self.insert(
            Item(
                token_id=token_id,
                name=name,
                image_url=image_url,
                rarity=ItemRarity(rarity),
                category=ItemCategory(category),
                price=to_decimal(price),
                attributes=dict(attributes or {}),
                owner_id=owner_id,
            )
        )

    def update_item(self, item_id: str, **fields) -> Item | None:
        return self.update(ITEMS, item_id, **fields)

    # ============ Staking rewards ============

    def get_staking_reward(self, user_id: str, item_id: str) -> StakingReward | None:
        reward_id = self._reward_ids.get((user_id, item_id))
        return self.get(STAKING_REWARDS, reward_id) if reward_id else None

    def list_staking_rewards(self) -> list[StakingReward]:
        return self.all(STAKING_REWARDS)

    def create_staking_reward(
        self, user_id: str, item_id: str, rewards_earned: Decimal = Decimal("0")
    ) -> StakingReward:
        return self.insert(
            StakingReward(
                user_id=user_id,
                item_id=item_id,
                rewards_earned=to_decimal(rewards_earned),
            )
        )

    def update_staking_reward(
        self, user_id: str, item_id: str, **fields
    ) -> StakingReward | None:
        reward_id = self._reward_ids.get((user_id, item_id))
        if reward_id is None:
            return None
        return self.update(STAKING_REWARDS, reward_id, **fields)

    # ============ Faucet claims ============

    def list_faucet_claims(self, user_id: str) -> list[FaucetClaim]:
        claim_ids = self._claim_ids_by_user.get(user_id, [])
        return [self.get(FAUCET_CLAIMS, claim_id) for claim_id in claim_ids]

    def get_last_faucet_claim(self, user_id: str) -> FaucetClaim | None:
        claims = self.list_faucet_claims(user_id)
        if not claims:
            return None
        return max(claims, key=lambda claim: claim.claimed_at)

    def create_faucet_claim(
        self, user_id: str, wallet_address: str, amount: Decimal
    ) -> FaucetClaim:
        return self.insert(
            FaucetClaim(user_id=user_id, amount=amount, wallet_address=wallet_address)
        )

    # ============ Internals ============

    def _collection(self, kind: str) -> dict:
        try:
            return self._collections[kind]
        except KeyError:
            raise KeyError(f"Unknown entity kind: {kind}") from None

    def _check_unique(self, kind: str, entity, exclude_id: str | None = None):
        for index_kind, field_name in _UNIQUE_INDEXES:
            if index_kind != kind:
                continue
            value = getattr(entity, field_name)
            if value is None:
                continue
            owner = self._indexes[(kind, field_name)].get(value)
            if owner is not None and owner != exclude_id:
                raise DuplicateKeyError(f"{kind}.{field_name}={value!r} already exists")

        if kind == STAKING_REWARDS:
            owner = self._reward_ids.get(entity.key)
            if owner is not None and owner != exclude_id:
                raise DuplicateKeyError(
                    f"Staking reward for user={entity.user_id} "
                    f"item={entity.item_id} already exists"
                )

    def _check_consistent(self, kind: str, entity):
        if kind == ITEMS and entity.is_staked != (entity.staked_at is not None):
            raise StoreError(
                f"Item {entity.id}: is_staked={entity.is_staked} "
                f"with staked_at={entity.staked_at}"
            )
        if kind == USERS and entity.odin_balance < 0:
            raise StoreError(f"User {entity.id}: balance cannot be negative")
        if kind == STAKING_REWARDS and entity.rewards_earned < 0:
            raise StoreError(f"Staking reward {entity.id}: negative rewards")

    def _index(self, kind: str, entity):
        for index_kind, field_name in _UNIQUE_INDEXES:
            value = getattr(entity, field_name) if index_kind == kind else None
            if value is not None:
                self._indexes[(kind, field_name)][value] = entity.id

        if kind == STAKING_REWARDS:
            self._reward_ids[entity.key] = entity.id
        elif kind == FAUCET_CLAIMS:
            claim_ids = self._claim_ids_by_user.setdefault(entity.user_id, [])
            if entity.id not in claim_ids:
                claim_ids.append(entity.id)

    def _unindex(self, kind: str, entity):
        for index_kind, field_name in _UNIQUE_INDEXES:
            value = getattr(entity, field_name) if index_kind == kind else None
            if value is not None:
                self._indexes[(kind, field_name)].pop(value, None)
