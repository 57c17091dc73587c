"""Alert lifecycle engine.

Creates alerts, dispatches them once through a notifier, and records the
outcome. An alert is stored as PENDING before dispatch and updated to SENT
or FAILED afterwards. The two writes are separate, so a concurrent reader
can see the PENDING record in between.
"""

import logging
from typing import Any, Mapping

from .alert_store import Alert, AlertRequest, AlertSeverity
from .channels import DispatchResult, Notifier

logger = logging.getLogger(__name__)


class AlertLifecycleEngine:
    """Orchestrates alert creation, dispatch and queries."""

    def __init__(self, store, notifier: Notifier):
        """
        Args:
            store: AlertStore or SQLAlchemyAlertStore
            notifier: Delivery capability used for every new alert
        """
        self.store = store
        self.notifier = notifier

    def create_alert(self, request: AlertRequest | Mapping[str, Any]) -> Alert:
        """Store a new alert, dispatch it, and record the outcome.

        Dispatch failures are captured on the returned alert (status FAILED
        with error_message) and never raised. Store errors propagate; if the
        final update fails the stored alert stays PENDING.

        Args:
            request: AlertRequest or a mapping with title, message, severity
                and targetService

        Returns:
            The alert after the dispatch attempt, status SENT or FAILED

        Raises:
            AlertValidationError: If a mapping request is incomplete or the
                message is too long
        """
        if isinstance(request, AlertRequest):
            request.validate()
        else:
            request = AlertRequest.from_dict(request)

        if not AlertSeverity.is_known(request.severity):
            logger.warning(
                f"Alert for {request.target_service} has unrecognized severity "
                f"{request.severity!r}; storing as-is"
            )

        alert = self.store.insert(Alert.from_request(request))
        logger.info(f"Created alert: {alert.id} for service: {alert.target_service}")

        result = self._dispatch(alert)
        if result.success:
            alert.mark_sent()
        else:
            logger.error(f"Failed to send alert {alert.id}: {result.error}")
            alert.mark_failed(result.error)

        self.store.update(alert)
        return alert

    def _dispatch(self, alert: Alert) -> DispatchResult:
        """Run the notifier once, turning any exception into a failed result."""
        try:
            result = self.notifier.send(alert.target_service, alert.title, alert.severity)
        except Exception as e:
            logger.exception(f"Notifier raised while sending alert {alert.id}")
            return DispatchResult.failed(str(e) or e.__class__.__name__)

        if result is None:
            return DispatchResult.failed("Notifier returned no result")
        return result

    # Queries

    def get_all_alerts(self) -> list[Alert]:
        return self.store.find_all()

    def get_alert(self, alert_id: int) -> Alert | None:
        return self.store.get(alert_id)

    def get_alerts_by_status(self, status: str) -> list[Alert]:
        return self.store.find_by_status(status)

    def get_alerts_by_service(self, target_service: str) -> list[Alert]:
        return self.store.find_by_target_service(target_service)

    def get_alerts_by_severity(self, severity: str) -> list[Alert]:
        return self.store.find_by_severity(severity)

    def get_stats(self) -> dict[str, Any]:
        """Count alerts per status."""
        by_status = self.store.count_by_status()
        return {
            "total": sum(by_status.values()),
            "by_status": by_status,
        }
