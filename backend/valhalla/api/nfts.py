"""Collection and staking API endpoints."""

from flask import request

from valhalla.api import api_bp
from valhalla.extensions import get_store
from valhalla.services.staking_service import StakingService
from valhalla.utils.response import not_found, success_response

MAX_PAGE_SIZE = 100


@api_bp.route("/nfts", methods=["GET"])
def list_nfts():
    """
    List collection items.

    Query params:
    - limit: page size (default 20, max 100)
    - offset: items to skip (default 0)
    """
    limit = request.args.get("limit", 20, type=int)
    offset = request.args.get("offset", 0, type=int)

    # Non-positive or garbage values fall back to the defaults
    limit = min(limit, MAX_PAGE_SIZE) if limit and limit > 0 else 20
    offset = offset if offset and offset > 0 else 0

    items = get_store().list_items(limit=limit, offset=offset)
    return success_response({"nfts": items, "limit": limit, "offset": offset})


@api_bp.route("/nfts/<item_id>", methods=["GET"])
def get_nft(item_id: str):
    """Get a single item."""
    item = get_store().get_item(item_id)
    if not item:
        return not_found("NFT not found")

    return success_response({"nft": item})


@api_bp.route("/nfts/<item_id>/stake", methods=["POST"])
def stake_nft(item_id: str):
    """Stake an item."""
    result = StakingService(get_store()).stake(item_id)
    if "error" in result:
        return not_found("NFT not found")

    return success_response({"nft": result["item"]}, message="NFT staked successfully")


@api_bp.route("/nfts/<item_id>/unstake", methods=["POST"])
def unstake_nft(item_id: str):
    """Unstake an item."""
    result = StakingService(get_store()).unstake(item_id)
    if "error" in result:
        return not_found("NFT not found")

    return success_response(
        {"nft": result["item"]}, message="NFT unstaked successfully"
    )
