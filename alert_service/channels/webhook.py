"""HTTP webhook notifier.

POSTs each alert as JSON to the target service's notification endpoint.
Endpoints come from an explicit service-to-URL mapping, falling back to a
URL template such as ``http://{target_service}.internal/alerts``.
"""

import logging
from datetime import datetime
from urllib.parse import quote

import requests

from .base import DispatchResult, Notifier

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class WebhookNotifier(Notifier):
    """Deliver alerts to target services over HTTP."""

    def __init__(
        self,
        webhooks: dict[str, str] | None = None,
        url_template: str | None = None,
        timeout: float | None = DEFAULT_TIMEOUT,
        headers: dict[str, str] | None = None,
    ):
        """
        Initialize webhook notifier.

        Args:
            webhooks: Mapping of target service to webhook URL
            url_template: URL with a {target_service} placeholder, used for
                services not in ``webhooks``
            timeout: Seconds to wait for the target, None to wait indefinitely
            headers: Extra HTTP headers sent with each request
        """
        self.webhooks = dict(webhooks or {})
        self.url_template = url_template
        self.timeout = timeout
        self.headers = {"Content-Type": "application/json", **(headers or {})}

    def is_configured(self) -> bool:
        return bool(self.webhooks or self.url_template)

    def resolve_url(self, target_service: str) -> str | None:
        """Find the webhook URL for a target service."""
        if target_service in self.webhooks:
            return self.webhooks[target_service]
        if self.url_template:
            # Service name must not alter host or path
            return self.url_template.format(target_service=quote(target_service, safe=""))
        return None

    def _build_payload(self, target_service: str, title: str, severity: str) -> dict:
        return {
            "title": title,
            "severity": severity,
            "targetService": target_service,
            "sentAt": datetime.now().isoformat(),
        }

    def send(self, target_service: str, title: str, severity: str) -> DispatchResult:
        url = self.resolve_url(target_service)
        if not url:
            logger.warning(f"No webhook configured for {target_service}")
            return DispatchResult.failed(
                f"No webhook configured for target service '{target_service}'"
            )

        payload = self._build_payload(target_service, title, severity)

        try:
            response = requests.post(
                url,
                json=payload,
                headers=self.headers,
                timeout=self.timeout,
            )
        except requests.Timeout:
            logger.error(f"Webhook to {target_service} timed out after {self.timeout}s")
            return DispatchResult.failed(f"timed out after {self.timeout}s")
        except requests.ConnectionError as e:
            logger.error(f"Webhook to {target_service} could not connect: {e}")
            return DispatchResult.failed(f"connection error: {e}")
        except requests.RequestException as e:
            logger.error(f"Webhook to {target_service} failed: {e}")
            return DispatchResult.failed(str(e))

        if not response.ok:
            logger.error(f"Webhook to {target_service} returned {response.status_code}")
            return DispatchResult.failed(
                f"HTTP {response.status_code}: {response.text[:200]}"
            )

        logger.debug(f"Webhook to {target_service} accepted ({response.status_code})")
        return DispatchResult.ok()
