"""API blueprints."""

from flask import Blueprint

api_bp = Blueprint("api", __name__)

from valhalla.api import faucet, nfts, stats, users  # noqa: E402, F401
