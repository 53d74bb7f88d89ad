"""Faucet API endpoint."""

import logging
from datetime import timedelta

from flask import current_app, request

from valhalla.api import api_bp
from valhalla.extensions import get_store, limiter
from valhalla.services.faucet_service import FaucetService
from valhalla.utils.money import to_decimal
from valhalla.utils.response import (
    cooldown,
    not_found,
    success_response,
    validation_error,
)
from valhalla.utils.validation import validate_faucet_claim

logger = logging.getLogger(__name__)


def _faucet_rate_limit() -> str:
    return current_app.config["FAUCET_RATE_LIMIT"]


@api_bp.route("/faucet/claim", methods=["POST"])
@limiter.limit(_faucet_rate_limit)
def claim_faucet():
    """
    Claim free ODIN from the faucet, once per cooldown window.

    Request body:
    {
        "user_id": "...",  # required; the wallet owner is credited
        "wallet_address": "0x + 40 hex chars"
    }
    """
    data = request.get_json(silent=True) or {}

    # Schema check happens before any store lookup
    errors = validate_faucet_claim(data)
    if errors:
        return validation_error(errors)

    service = FaucetService(
        get_store(),
        amount=to_decimal(current_app.config["FAUCET_AMOUNT"]),
        cooldown=timedelta(hours=current_app.config["FAUCET_COOLDOWN_HOURS"]),
    )
    result = service.claim(data["wallet_address"])

    if "error" in result:
        if result["error"] == "cooldown":
            return cooldown("Faucet claim on cooldown", result["time_left"])
        if result["error"] == "invalid_wallet":
            return validation_error({"wallet_address": "Invalid wallet address format"})
        return not_found("User not found for this wallet address")

    owner = get_store().get_user_by_wallet(data["wallet_address"])
    if owner.id != data["user_id"]:
        logger.warning(
            f"Faucet claim user_id={data['user_id']} does not own wallet; "
            f"credited owner={owner.id}"
        )

    return success_response(
        {"amount": result["amount"], "new_balance": result["new_balance"]},
        message="Faucet claim successful",
    )
