"""Staking reward ledger model."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from valhalla.utils.money import format_amount


@dataclass
class StakingReward:
    """Unclaimed rewards for one (user, item) pair.

    There is at most one record per pair. It is created the first time the
    owner stakes the item and survives unstaking.
    """

    user_id: str
    item_id: str
    rewards_earned: Decimal = Decimal("0")

    last_claim_at: datetime | None = None
    # Set by the accrual job; None until the first accrual run
    last_accrued_at: datetime | None = None

    id: str | None = None
    created_at: datetime | None = None

    @property
    def key(self) -> tuple[str, str]:
        return (self.user_id, self.item_id)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "item_id": self.item_id,
            "rewards_earned": format_amount(self.rewards_earned),
            "last_claim_at": (
                self.last_claim_at.isoformat() if self.last_claim_at else None
            ),
            "last_accrued_at": (
                self.last_accrued_at.isoformat() if self.last_accrued_at else None
            ),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
