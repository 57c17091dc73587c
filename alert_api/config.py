"""API configuration."""

import os
from types import SimpleNamespace

# Loads .env before the settings below are read
from alert_service.config import config as service_config
from alert_service.config import parse_target_webhooks, parse_timeout

NOTIFIER_KEYS = (
    "NOTIFIER",
    "ALERT_TARGET_WEBHOOKS",
    "ALERT_WEBHOOK_URL_TEMPLATE",
    "TEAMS_WEBHOOK_URL",
    "NOTIFIER_TIMEOUT",
)


class Config:
    """Base configuration."""

    # Flask
    SECRET_KEY = os.environ.get("FLASK_SECRET_KEY", "dev-secret-change-in-production")
    DEBUG = os.environ.get("FLASK_DEBUG", "false").lower() == "true"

    # Alert Store
    ALERT_DB_PATH = os.path.expanduser(service_config.ALERT_DB_PATH)
    ALERT_DB_URL = service_config.ALERT_DB_URL or ""

    # Notifier
    NOTIFIER = service_config.NOTIFIER
    ALERT_TARGET_WEBHOOKS = service_config.ALERT_TARGET_WEBHOOKS
    ALERT_WEBHOOK_URL_TEMPLATE = service_config.ALERT_WEBHOOK_URL_TEMPLATE
    TEAMS_WEBHOOK_URL = service_config.TEAMS_WEBHOOK_URL
    NOTIFIER_TIMEOUT = service_config.NOTIFIER_TIMEOUT


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


def get_config():
    """Get configuration based on environment."""
    env = os.environ.get("FLASK_ENV", "development")
    if env == "production":
        return ProductionConfig()
    return DevelopmentConfig()


def notifier_settings(app_config) -> SimpleNamespace:
    """Notifier settings from Flask config, environment for keys it lacks.

    ALERT_TARGET_WEBHOOKS may be a mapping or a "service=url,..." string.
    """
    settings = {
        key: app_config.get(key, getattr(service_config, key))
        for key in NOTIFIER_KEYS
    }
    if isinstance(settings["ALERT_TARGET_WEBHOOKS"], str):
        settings["ALERT_TARGET_WEBHOOKS"] = parse_target_webhooks(settings["ALERT_TARGET_WEBHOOKS"])
    settings["NOTIFIER_TIMEOUT"] = parse_timeout(settings["NOTIFIER_TIMEOUT"])
    return SimpleNamespace(**settings)
