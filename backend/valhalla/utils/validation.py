"""Request payload validation."""

import re

WALLET_ADDRESS_RE = re.compile(r"^0x[a-fA-F0-9]{40}$")


def is_valid_wallet_address(value) -> bool:
    """Check an EVM-style address: 0x followed by 40 hex characters."""
    return isinstance(value, str) and WALLET_ADDRESS_RE.match(value) is not None


def validate_faucet_claim(data: dict) -> dict:
    """Validate a faucet claim body. Returns field -> message for bad fields."""
    errors = {}

    wallet_address = data.get("wallet_address")
    if not wallet_address:
        errors["wallet_address"] = "wallet_address is required"
    elif not is_valid_wallet_address(wallet_address):
        errors["wallet_address"] = "Invalid wallet address format"

    user_id = data.get("user_id")
    if user_id is None or user_id == "":
        errors["user_id"] = "user_id is required"
    elif not isinstance(user_id, str):
        errors["user_id"] = "user_id must be a string"

    return errors


def validate_registration(data: dict) -> dict:
    """Validate a registration body. Returns field -> message for bad fields."""
    errors = {}

    username = data.get("username")
    if not isinstance(username, str) or not 3 <= len(username) <= 50:
        errors["username"] = "Username must be 3-50 characters"

    password = data.get("password")
    if not isinstance(password, str) or len(password) < 8:
        errors["password"] = "Password must be at least 8 characters"

    wallet_address = data.get("wallet_address")
    if wallet_address is not None and not is_valid_wallet_address(wallet_address):
        errors["wallet_address"] = "Invalid wallet address format"

    return errors
