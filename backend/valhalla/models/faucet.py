"""Faucet claim audit log model."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from valhalla.utils.money import format_amount


@dataclass
class FaucetClaim:
    """One faucet disbursement. Append-only."""

    user_id: str
    amount: Decimal

    # Echoed from the request, not derived from the user
    wallet_address: str

    id: str | None = None
    claimed_at: datetime | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "amount": format_amount(self.amount),
            "wallet_address": self.wallet_address,
            "claimed_at": self.claimed_at.isoformat() if self.claimed_at else None,
        }
