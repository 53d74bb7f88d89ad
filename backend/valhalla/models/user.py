"""User model."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from werkzeug.security import check_password_hash, generate_password_hash

from valhalla.utils.money import format_amount


@dataclass
class User:
    """Registered user with an ODIN balance."""

    username: str
    password_hash: str = ""
    wallet_address: str | None = None

    # ODIN balance; only staking claims and the faucet change it
    odin_balance: Decimal = Decimal("0")

    # Cached from the newest FaucetClaim, never written on its own
    last_faucet_claim: datetime | None = None

    id: str | None = None
    created_at: datetime | None = None

    @staticmethod
    def hash_password(password: str) -> str:
        """Hash a plain-text password."""
        return generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        """Check password against hash."""
        if not self.password_hash:
            return False
        return check_password_hash(self.password_hash, password)

    def to_dict(self) -> dict:
        """Convert user to dictionary."""
        return {
            "id": self.id,
            "username": self.username,
            "wallet_address": self.wallet_address,
            "odin_balance": format_amount(self.odin_balance),
            "last_faucet_claim": (
                self.last_faucet_claim.isoformat() if self.last_faucet_claim else None
            ),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self) -> str:
        return f"<User {self.id} {self.username}>"
