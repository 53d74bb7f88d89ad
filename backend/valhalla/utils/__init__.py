"""Utility functions."""

from valhalla.utils.money import format_amount, to_decimal
from valhalla.utils.response import (
    conflict,
    cooldown,
    error_response,
    not_found,
    server_error,
    success_response,
    validation_error,
)
from valhalla.utils.validation import is_valid_wallet_address

__all__ = [
    "success_response",
    "error_response",
    "not_found",
    "validation_error",
    "conflict",
    "cooldown",
    "server_error",
    "format_amount",
    "to_decimal",
    "is_valid_wallet_address",
]
