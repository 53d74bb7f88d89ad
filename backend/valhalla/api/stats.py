"""Collection stats API endpoint."""

from flask import current_app

from valhalla.api import api_bp
from valhalla.extensions import get_store
from valhalla.services.stats_service import StatsService
from valhalla.utils.money import to_decimal
from valhalla.utils.response import success_response


@api_bp.route("/stats", methods=["GET"])
def get_stats():
    """Get collection-wide stats for the landing page."""
    service = StatsService(
        get_store(),
        total_supply=current_app.config["TOTAL_SUPPLY"],
        floor_price=to_decimal(current_app.config["FLOOR_PRICE"]),
    )
    return success_response(service.global_stats())
