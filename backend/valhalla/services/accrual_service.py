"""Linear staking reward accrual, driven by the background scheduler."""

import logging
from datetime import datetime, timedelta
from decimal import ROUND_DOWN, Decimal

from valhalla.store import ITEMS, EntityStore
from valhalla.utils.money import quantize_down

logger = logging.getLogger(__name__)

DEFAULT_DAILY_RATE = Decimal("5.2")
MICROSECONDS_PER_DAY = Decimal(86_400_000_000)
ONE_MICROSECOND = timedelta(microseconds=1)


class AccrualService:
    """Credits ``daily_rate`` ODIN per staked item per day to reward records.

    No compounding. Amounts are truncated to whole cents and the checkpoint
    only moves forward by the time those cents pay for, so the truncated
    remainder is carried into the next run. Frequent runs therefore add up
    to the same total as a single run over the whole period.
    """

    def __init__(self, store: EntityStore, daily_rate: Decimal = DEFAULT_DAILY_RATE):
        self.store = store
        self.daily_rate = daily_rate

    @staticmethod
    def accrual_start(item, reward) -> datetime:
        """Later of the stake time and the last checkpoint."""
        start = item.staked_at
        if reward.last_accrued_at and reward.last_accrued_at > start:
            start = reward.last_accrued_at
        return start

    def pending_for(self, item, reward, now) -> Decimal:
        """Accrual owed for one record since its last checkpoint."""
        elapsed_us = (now - self.accrual_start(item, reward)) // ONE_MICROSECOND
        if elapsed_us <= 0:
            return Decimal("0")
        return quantize_down(self.daily_rate * elapsed_us / MICROSECONDS_PER_DAY)

    def paid_until(self, start: datetime, amount: Decimal) -> datetime:
        """Checkpoint after paying ``amount`` from ``start``, rounded down."""
        paid_us = (amount * MICROSECONDS_PER_DAY / self.daily_rate).to_integral_value(
            rounding=ROUND_DOWN
        )
        return start + timedelta(microseconds=int(paid_us))

    def accrue(self) -> dict:
        """Run one accrual pass over every staked, owned item."""
        now = self.store.now()
        records = 0
        total = Decimal("0")

        for item in self.store.all(ITEMS):
            if not item.is_staked or not item.owner_id:
                continue

            with self.store.user_lock(item.owner_id):
                # An unstake may have landed since the listing
                item = self.store.get_item(item.id)
                if not item.is_staked or not item.owner_id:
                    continue

                reward = self.store.get_staking_reward(item.owner_id, item.id)
                if not reward:
                    continue

                amount = self.pending_for(item, reward, now)
                if amount <= 0:
                    continue

                self.store.update_staking_reward(
                    item.owner_id,
                    item.id,
                    rewards_earned=reward.rewards_earned + amount,
                    last_accrued_at=self.paid_until(
                        self.accrual_start(item, reward), amount
                    ),
                )

            records += 1
            total += amount

        logger.info(f"Accrual pass: records={records}, total={total}")
        return {"records": records, "total": total}
