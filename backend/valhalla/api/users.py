"""User, holdings and reward-claim API endpoints."""

from flask import request

from valhalla.api import api_bp
from valhalla.extensions import get_store
from valhalla.services.staking_service import StakingService
from valhalla.services.user_service import UserService
from valhalla.utils.response import (
    conflict,
    not_found,
    success_response,
    validation_error,
)
from valhalla.utils.validation import validate_registration


@api_bp.route("/users", methods=["POST"])
def register_user():
    """
    Register a new user.

    Request body:
    {
        "username": "shield_maiden",
        "password": "at-least-8-chars",
        "wallet_address": "0x..."  # optional
    }
    """
    data = request.get_json(silent=True) or {}

    errors = validate_registration(data)
    if errors:
        return validation_error(errors)

    result = UserService(get_store()).register(
        username=data["username"],
        password=data["password"],
        wallet_address=data.get("wallet_address"),
    )

    if "error" in result:
        error_messages = {
            "username_taken": "Username is already taken",
            "wallet_taken": "Wallet address is already linked to another user",
        }
        return conflict(error_messages.get(result["error"], result["error"]))

    return success_response(
        {"user": result["user"]}, message="User registered", status_code=201
    )


@api_bp.route("/users/wallet/<address>", methods=["GET"])
def get_user_by_wallet(address: str):
    """Look up a user by wallet address."""
    user = get_store().get_user_by_wallet(address)
    if not user:
        return not_found("User not found")

    return success_response({"user": user})


@api_bp.route("/users/<user_id>", methods=["GET"])
def get_user(user_id: str):
    """Get a user profile."""
    user = get_store().get_user(user_id)
    if not user:
        return not_found("User not found")

    return success_response({"user": user})


@api_bp.route("/users/<user_id>/nfts", methods=["GET"])
def get_user_nfts(user_id: str):
    """Items owned by a user."""
    items = get_store().get_items_by_owner(user_id)
    return success_response({"nfts": items})


@api_bp.route("/users/<user_id>/staked", methods=["GET"])
def get_user_staked_nfts(user_id: str):
    """Staked items of a user with pending rewards and staking age."""
    staked = StakingService(get_store()).get_staked_items(user_id)

    nfts = [
        {
            **entry["item"].to_dict(),
            "earned_rewards": entry["earned_rewards"],
            "days_since_staked": entry["days_since_staked"],
        }
        for entry in staked
    ]
    return success_response({"nfts": nfts})


@api_bp.route("/users/<user_id>/claim-rewards", methods=["POST"])
def claim_rewards(user_id: str):
    """Move pending staking rewards into the user's balance."""
    result = StakingService(get_store()).claim_rewards(user_id)

    return success_response(
        {"amount": result["amount"], "new_balance": result["new_balance"]},
        message="Rewards claimed successfully",
    )
