"""User registration and lookup."""

import logging

from valhalla.models import User
from valhalla.store import DuplicateKeyError, EntityStore

logger = logging.getLogger(__name__)


class UserService:
    """Service for user accounts."""

    def __init__(self, store: EntityStore):
        self.store = store

    def register(
        self, username: str, password: str, wallet_address: str | None = None
    ) -> dict:
        """Create a user with a zero balance."""
        if self.store.get_user_by_username(username):
            return {"success": False, "error": "username_taken"}
        if wallet_address and self.store.get_user_by_wallet(wallet_address):
            return {"success": False, "error": "wallet_taken"}

        try:
            user = self.store.create_user(
                username=username,
                password_hash=User.hash_password(password),
                wallet_address=wallet_address,
            )
        except DuplicateKeyError:
            # Lost a race with a concurrent registration
            return {"success": False, "error": "username_taken"}

        logger.info(f"User registered: id={user.id}, username={username}")
        return {"success": True, "user": user}
