"""Notification channels for the Alert Service."""

import logging

from .base import DispatchResult, Notifier
from .console import LoggingNotifier
from .static import StaticNotifier
from .teams import TeamsNotifier
from .webhook import WebhookNotifier

logger = logging.getLogger(__name__)


def create_notifier_from_config(config=None) -> Notifier:
    """
    Factory function to create the notifier named by configuration.

    NOTIFIER selects "webhook", "teams" or "log". When unset, returns a
    WebhookNotifier if any webhook routing is configured, otherwise a
    LoggingNotifier.

    Raises:
        ValueError: If NOTIFIER names an unknown notifier
    """
    if config is None:
        from ..config import config

    choice = (config.NOTIFIER or "").strip().lower()
    if not choice:
        webhook_configured = bool(config.ALERT_TARGET_WEBHOOKS or config.ALERT_WEBHOOK_URL_TEMPLATE)
        choice = "webhook" if webhook_configured else "log"

    if choice == "webhook":
        return WebhookNotifier(
            webhooks=config.ALERT_TARGET_WEBHOOKS,
            url_template=config.ALERT_WEBHOOK_URL_TEMPLATE,
            timeout=config.NOTIFIER_TIMEOUT,
        )
    if choice == "teams":
        return TeamsNotifier(config.TEAMS_WEBHOOK_URL, timeout=config.NOTIFIER_TIMEOUT)
    if choice == "log":
        logger.info("No notifier configured - alerts will only be logged")
        return LoggingNotifier()

    raise ValueError(f"Unknown notifier: {config.NOTIFIER}")


__all__ = [
    "DispatchResult",
    "Notifier",
    "LoggingNotifier",
    "StaticNotifier",
    "TeamsNotifier",
    "WebhookNotifier",
    "create_notifier_from_config",
]
