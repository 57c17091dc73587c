"""Alert Service: records alerts and dispatches them to target services."""

from .alert_store import (
    Alert,
    AlertRequest,
    AlertSeverity,
    AlertStatus,
    AlertStore,
    SQLAlchemyAlertStore,
    get_alert_store,
)
from .channels import (
    DispatchResult,
    Notifier,
    LoggingNotifier,
    StaticNotifier,
    TeamsNotifier,
    WebhookNotifier,
    create_notifier_from_config,
)
from .exceptions import (
    AlertServiceError,
    AlertValidationError,
    AlertNotFoundError,
    InvalidTransitionError,
)
from .lifecycle import AlertLifecycleEngine

__all__ = [
    # Alert Store
    "Alert",
    "AlertRequest",
    "AlertSeverity",
    "AlertStatus",
    "AlertStore",
    "SQLAlchemyAlertStore",
    "get_alert_store",
    # Channels
    "DispatchResult",
    "Notifier",
    "LoggingNotifier",
    "StaticNotifier",
    "TeamsNotifier",
    "WebhookNotifier",
    "create_notifier_from_config",
    # Errors
    "AlertServiceError",
    "AlertValidationError",
    "AlertNotFoundError",
    "InvalidTransitionError",
    # Engine
    "AlertLifecycleEngine",
]
