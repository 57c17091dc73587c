"""Microsoft Teams notifier (Workflows / Power Automate webhook).

Posts every alert to a single Teams channel as an Adaptive Card, naming
the target service in the card. Useful when target services do not expose
their own notification endpoint.

Setup:
1. In Teams channel, click ... > Workflows
2. Search "Post to a channel when a webhook request is received"
3. Select team/channel and create
4. Copy the webhook URL into TEAMS_WEBHOOK_URL
"""

import logging
from datetime import datetime

import requests

from .base import DispatchResult, Notifier

logger = logging.getLogger(__name__)

SEVERITY_COLORS = {
    "CRITICAL": "Attention",
    "ERROR": "Attention",
    "WARNING": "Warning",
    "INFO": "Accent",
}


class TeamsNotifier(Notifier):
    """Send alerts to Microsoft Teams via Workflows webhook."""

    def __init__(self, webhook_url: str | None, timeout: float | None = 30.0):
        """
        Initialize Teams notifier.

        Args:
            webhook_url: The Workflows webhook URL from Teams
            timeout: Seconds to wait for Teams, None to wait indefinitely
        """
        self.webhook_url = webhook_url
        self.timeout = timeout

    def is_configured(self) -> bool:
        return bool(self.webhook_url)

    def _build_adaptive_card(self, target_service: str, title: str, severity: str) -> dict:
        """Build an Adaptive Card payload for Teams Workflows."""
        return {
            "type": "AdaptiveCard",
            "$schema": "http://adaptivecards.io/schemas/adaptive-card.json",
            "version": "1.4",
            "body": [
                {
                    "type": "TextBlock",
                    "text": title,
                    "weight": "Bolder",
                    "size": "Large",
                    "color": SEVERITY_COLORS.get(severity, "Default"),
                    "wrap": True,
                },
                {
                    "type": "FactSet",
                    "facts": [
                        {"title": "Target service", "value": target_service},
                        {"title": "Severity", "value": severity},
                    ],
                },
                {
                    "type": "TextBlock",
                    "text": f"Sent: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
                    "size": "Small",
                    "isSubtle": True,
                    "wrap": True,
                },
            ],
        }

    def _build_wrapped_payload(self, card: dict) -> dict:
        """Wrap Adaptive Card in message/attachments format for Workflows."""
        return {
            "type": "message",
            "attachments": [
                {
                    "contentType": "application/vnd.microsoft.card.adaptive",
                    "contentUrl": None,
                    "content": card,
                }
            ],
        }

    def _post(self, payload: dict) -> tuple[bool, str]:
        """POST payload and return (accepted, failure_reason)."""
        try:
            response = requests.post(self.webhook_url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            return False, str(e)

        if response.status_code in (200, 202):
            return True, ""
        return False, f"HTTP {response.status_code}: {response.text[:200]}"

    def send(self, target_service: str, title: str, severity: str) -> DispatchResult:
        if not self.webhook_url:
            logger.warning("Teams webhook not configured")
            return DispatchResult.failed("Teams webhook not configured")

        card = self._build_adaptive_card(target_service, title, severity)

        # Try wrapped format first (works with most Workflows setups)
        accepted, reason = self._post(self._build_wrapped_payload(card))
        if accepted:
            logger.info(f"Teams message sent for {target_service}")
            return DispatchResult.ok()

        # Try unwrapped Adaptive Card format as fallback
        logger.debug(f"Teams wrapped format failed ({reason}), trying direct card")
        accepted, reason = self._post(card)
        if accepted:
            logger.info(f"Teams message sent for {target_service} (direct card)")
            return DispatchResult.ok()

        logger.error(f"Teams failed: {reason}")
        return DispatchResult.failed(reason)
