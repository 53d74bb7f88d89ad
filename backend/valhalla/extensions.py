"""Flask extensions initialization."""

from flask import current_app
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from valhalla.store import EntityStore

# Rate limiter; limits and storage come from RATELIMIT_* config
limiter = Limiter(key_func=get_remote_address)


def get_store() -> EntityStore:
    """Store instance attached to the current application."""
    return current_app.extensions["store"]


def init_sentry(app):
    """Initialize Sentry error tracking."""
    sentry_dsn = app.config.get("SENTRY_DSN")
    if sentry_dsn:
        import sentry_sdk
        from sentry_sdk.integrations.flask import FlaskIntegration

        sentry_sdk.init(
            dsn=sentry_dsn,
            integrations=[FlaskIntegration()],
            traces_sample_rate=0.1,  # 10% of transactions for performance monitoring
            environment=app.config.get("ENV_NAME", "production"),
            send_default_pii=False,  # Don't send personal data
        )
        app.logger.info("Sentry initialized successfully")
    else:
        app.logger.warning("SENTRY_DSN not set, error tracking disabled")
