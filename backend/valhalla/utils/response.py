"""API response helpers."""

from decimal import Decimal
from typing import Any

from flask import jsonify

from valhalla.utils.money import format_amount


def serialize(value: Any) -> Any:
    """Turn models, Decimals and containers into JSON-ready values."""
    if isinstance(value, Decimal):
        return format_amount(value)
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, dict):
        return {key: serialize(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize(item) for item in value]
    return value


def success_response(
    data: Any = None, message: str | None = None, status_code: int = 200
):
    """Create a success response."""
    response = {"success": True}

    if data is not None:
        response["data"] = serialize(data)

    if message is not None:
        response["message"] = message

    return jsonify(response), status_code


def error_response(
    code: str, message: str, details: dict | None = None, status_code: int = 400
):
    """Create an error response."""
    response = {"success": False, "error": {"code": code, "message": message}}

    if details is not None:
        response["error"]["details"] = details

    return jsonify(response), status_code


# Common error responses
def not_found(message: str = "Resource not found"):
    """404 Not Found response."""
    return error_response("NOT_FOUND", message, status_code=404)


def validation_error(details: dict):
    """400 Validation Error response."""
    return error_response(
        "VALIDATION_ERROR", "Invalid request data", details, status_code=400
    )


def conflict(message: str = "Resource conflict"):
    """409 Conflict response."""
    return error_response("CONFLICT", message, status_code=409)


def cooldown(message: str, time_left: str):
    """429 response for a rate-limited action, with the remaining wait."""
    return error_response(
        "COOLDOWN", message, {"time_left": time_left}, status_code=429
    )


def server_error(message: str = "Internal server error"):
    """500 Internal Server Error response."""
    return error_response("SERVER_ERROR", message, status_code=500)
