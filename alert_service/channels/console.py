"""Logging notifier for development."""

import logging

from .base import DispatchResult, Notifier

logger = logging.getLogger(__name__)


class LoggingNotifier(Notifier):
    """Logs each dispatch instead of delivering it. Always succeeds."""

    def send(self, target_service: str, title: str, severity: str) -> DispatchResult:
        logger.info(
            f"Sending alert to service: {target_service} - "
            f"Title: {title}, Severity: {severity}"
        )
        return DispatchResult.ok()
