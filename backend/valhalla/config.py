"""Application configuration."""

import os


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.lower() in ("1", "true", "yes", "on")


class Config:
    """Base configuration."""

    # Flask
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-production")

    # CORS
    CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "http://localhost:5173").split(",")

    # Faucet
    FAUCET_AMOUNT = os.environ.get("FAUCET_AMOUNT", "100")
    FAUCET_COOLDOWN_HOURS = int(os.environ.get("FAUCET_COOLDOWN_HOURS", 24))

    # Staking
    DAILY_REWARD_RATE = os.environ.get("DAILY_REWARD_RATE", "5.2")

    # Collection-wide constants shown on the landing page
    TOTAL_SUPPLY = int(os.environ.get("TOTAL_SUPPLY", 10000))
    FLOOR_PRICE = os.environ.get("FLOOR_PRICE", "0.5")

    # Populate the in-memory store with the demo user and items on startup
    SEED_DEMO_DATA = _env_bool("SEED_DEMO_DATA", True)

    # Background reward accrual; off unless explicitly enabled
    ACCRUAL_ENABLED = _env_bool("ACCRUAL_ENABLED", False)
    ACCRUAL_INTERVAL_MINUTES = int(os.environ.get("ACCRUAL_INTERVAL_MINUTES", 60))

    # Rate limiting
    RATELIMIT_ENABLED = True
    RATELIMIT_DEFAULT = os.environ.get("RATELIMIT_DEFAULT", "300 per hour")
    RATELIMIT_STORAGE_URI = os.environ.get("RATELIMIT_STORAGE_URI", "memory://")
    FAUCET_RATE_LIMIT = os.environ.get("FAUCET_RATE_LIMIT", "10 per minute")

    # Error tracking
    SENTRY_DSN = os.environ.get("SENTRY_DSN", "")


class DevelopmentConfig(Config):
    """Development configuration."""

    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""

    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""

    TESTING = True
    DEBUG = True
    SEED_DEMO_DATA = False
    ACCRUAL_ENABLED = False
    RATELIMIT_ENABLED = False
    SENTRY_DSN = ""


config = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
    "default": DevelopmentConfig,
}
