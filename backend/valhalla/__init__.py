"""Flask application factory."""

import logging
import os

from flask import Flask
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from valhalla.config import config
from valhalla.extensions import init_sentry, limiter
from valhalla.logging_config import setup_logging
from valhalla.store import EntityStore

logger = logging.getLogger(__name__)


def create_app(
    config_name: str | None = None, store: EntityStore | None = None
) -> Flask:
    """Create and configure the Flask application.

    ``store`` lets callers share or pre-populate the in-memory store; a
    fresh one is created otherwise.
    """
    if config_name is None:
        config_name = os.environ.get("FLASK_ENV", "development")

    app = Flask(__name__)
    app.config.from_object(config[config_name])
    app.config["ENV_NAME"] = config_name

    setup_logging(app)
    init_sentry(app)

    # Initialize extensions
    limiter.init_app(app)

    # CORS
    CORS(app, origins=app.config["CORS_ORIGINS"], supports_credentials=True)

    if store is None:
        store = EntityStore()
    app.extensions["store"] = store

    if app.config["SEED_DEMO_DATA"]:
        from valhalla.seed import seed_demo_data

        seed_demo_data(store)

    # Register blueprints
    from valhalla.api import api_bp

    app.register_blueprint(api_bp, url_prefix="/api")

    register_error_handlers(app)

    # Health check endpoint
    @app.route("/health")
    def health():
        return {"status": "ok"}

    # Shell context
    @app.shell_context_processor
    def make_shell_context():
        return {"store": store}

    return app


def register_error_handlers(app: Flask) -> None:
    """Render every error with the API error envelope."""
    from valhalla.utils.response import error_response, server_error

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        code = (e.name or "error").upper().replace(" ", "_")
        return error_response(code, e.description, status_code=e.code)

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        logger.exception(f"Unhandled error: {e}")
        return server_error()
