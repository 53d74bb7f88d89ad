"""Faucet: cooldown-gated ODIN disbursement."""

import logging
from datetime import timedelta
from decimal import Decimal

from valhalla.store import EntityStore
from valhalla.utils.validation import is_valid_wallet_address

logger = logging.getLogger(__name__)

DEFAULT_AMOUNT = Decimal("100")
DEFAULT_COOLDOWN = timedelta(hours=24)


def format_time_left(remaining: timedelta) -> str:
    """Render a remaining cooldown as "{hours}h {minutes}m", rounded down."""
    total_seconds = int(remaining.total_seconds())
    hours, rest = divmod(total_seconds, 3600)
    return f"{hours}h {rest // 60}m"


class FaucetService:
    """Service for faucet claims.

    The FaucetClaim log is the only thing consulted for the cooldown.
    ``User.last_faucet_claim`` is refreshed from the claim just recorded and
    is never read here.
    """

    def __init__(
        self,
        store: EntityStore,
        amount: Decimal = DEFAULT_AMOUNT,
        cooldown: timedelta = DEFAULT_COOLDOWN,
    ):
        self.store = store
        self.amount = amount
        self.cooldown = cooldown

    def get_time_left(self, user_id: str) -> timedelta | None:
        """Remaining cooldown for a user, or None when a claim is allowed."""
        last_claim = self.store.get_last_faucet_claim(user_id)
        if not last_claim:
            return None

        elapsed = self.store.now() - last_claim.claimed_at
        if elapsed >= self.cooldown:
            return None
        return self.cooldown - elapsed

    def claim(self, wallet_address: str) -> dict:
        """Disburse the faucet amount to the user owning ``wallet_address``."""
        if not is_valid_wallet_address(wallet_address):
            return {"success": False, "error": "invalid_wallet"}

        user = self.store.get_user_by_wallet(wallet_address)
        if not user:
            return {"success": False, "error": "user_not_found"}

        with self.store.user_lock(user.id):
            time_left = self.get_time_left(user.id)
            if time_left is not None:
                logger.info(f"Faucet on cooldown: user={user.id}, left={time_left}")
                return {
                    "success": False,
                    "error": "cooldown",
                    "time_left": format_time_left(time_left),
                }

            claim = self.store.create_faucet_claim(
                user.id, wallet_address, self.amount
            )

            user = self.store.get_user(user.id)
            new_balance = user.odin_balance + self.amount
            self.store.update_user(
                user.id,
                odin_balance=new_balance,
                last_faucet_claim=claim.claimed_at,
            )

        logger.info(
            f"Faucet claim: user={user.id}, amount={self.amount}, "
            f"balance={new_balance}"
        )
        return {"success": True, "amount": self.amount, "new_balance": new_balance}
