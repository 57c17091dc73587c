"""Exceptions raised by the alert service."""


class AlertServiceError(Exception):
    """Base class for alert service errors."""


class AlertValidationError(AlertServiceError):
    """An alert request is missing fields or has malformed values."""


class AlertNotFoundError(AlertServiceError):
    """No stored alert has the requested id."""

    def __init__(self, alert_id):
        super().__init__(f"Alert {alert_id} not found")
        self.alert_id = alert_id


class InvalidTransitionError(AlertServiceError):
    """An alert was asked to leave a terminal status."""
