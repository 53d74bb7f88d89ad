"""Staking ledger: stake/unstake transitions and reward claims."""

import logging
from contextlib import nullcontext
from decimal import Decimal

from valhalla.store import EntityStore
from valhalla.utils.money import ZERO

logger = logging.getLogger(__name__)


class StakingService:
    """Service for item staking and reward bookkeeping."""

    def __init__(self, store: EntityStore):
        self.store = store

    def stake(self, item_id: str) -> dict:
        """Stake an item.

        Staking an already staked item re-stamps ``staked_at``. The owner's
        reward record is created on first stake and kept as-is afterwards, so
        re-staking never resets accrued rewards.
        """
        item = self.store.get_item(item_id)
        if not item:
            return {"success": False, "error": "item_not_found"}

        item = self.store.update_item(
            item_id, is_staked=True, staked_at=self.store.now()
        )

        if item.owner_id:
            existing = self.store.get_staking_reward(item.owner_id, item.id)
            if not existing:
                self.store.create_staking_reward(item.owner_id, item.id)
                logger.info(
                    f"Reward record created: user={item.owner_id}, item={item.id}"
                )

        logger.info(f"Item staked: item={item.id}, token_id={item.token_id}")
        return {"success": True, "item": item}

    def unstake(self, item_id: str) -> dict:
        """Unstake an item. The reward record and its balance are left alone."""
        item = self.store.get_item(item_id)
        if not item:
            return {"success": False, "error": "item_not_found"}

        # Serialized with accrual, which credits only items still staked
        with self._owner_lock(item):
            item = self.store.update_item(item_id, is_staked=False, staked_at=None)

        logger.info(f"Item unstaked: item={item.id}, token_id={item.token_id}")
        return {"success": True, "item": item}

    def _owner_lock(self, item):
        if not item.owner_id:
            return nullcontext()
        return self.store.user_lock(item.owner_id)

    def claim_rewards(self, user_id: str) -> dict:
        """Move all unclaimed rewards of the user's staked items to the balance.

        Every reward record that is drained is reset to zero. A second claim
        with no accrual in between therefore yields zero.
        """
        user = self.store.get_user(user_id)
        if not user:
            logger.warning(f"Reward claim for unknown user={user_id}")
            return {"success": True, "amount": ZERO, "new_balance": ZERO}

        with self.store.user_lock(user_id):
            total = Decimal("0")
            now = self.store.now()

            for item in self.store.get_staked_items_by_owner(user_id):
                reward = self.store.get_staking_reward(user_id, item.id)
                if not reward:
                    continue
                total += reward.rewards_earned
                self.store.update_staking_reward(
                    user_id, item.id, rewards_earned=ZERO, last_claim_at=now
                )

            user = self.store.get_user(user_id)
            new_balance = user.odin_balance + total
            self.store.update_user(user_id, odin_balance=new_balance)

        logger.info(
            f"Rewards claimed: user={user_id}, amount={total}, balance={new_balance}"
        )
        return {"success": True, "amount": total, "new_balance": new_balance}

    def get_staked_items(self, user_id: str) -> list[dict]:
        """Staked items of a user with their pending rewards."""
        now = self.store.now()
        result = []

        for item in self.store.get_staked_items_by_owner(user_id):
            reward = self.store.get_staking_reward(user_id, item.id)
            result.append(
                {
                    "item": item,
                    "earned_rewards": reward.rewards_earned if reward else ZERO,
                    "days_since_staked": item.days_since_staked(now),
                }
            )

        return result
