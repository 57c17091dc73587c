"""Alert storage module for persistent alert tracking.

Provides storage for the alert lifecycle:
- Insert new alerts as PENDING with an assigned id
- Record dispatch outcome (sent or failed)
- Exact-match lookup by status, target service and severity
"""

import os

from .models import (
    MAX_ERROR_LENGTH,
    MAX_MESSAGE_LENGTH,
    Alert,
    AlertRequest,
    AlertSeverity,
    AlertStatus,
)
from .store import AlertStore
from .sql_store import SQLAlchemyAlertStore


def get_alert_store(db_path: str | None = None, db_url: str | None = None):
    """Get the configured alert store.

    Uses SQLAlchemy when a database URL is given (or ALERT_DB_URL is set),
    otherwise the local SQLite store.
    """
    db_url = db_url or os.environ.get("ALERT_DB_URL")
    if db_url:
        return SQLAlchemyAlertStore(url=db_url)
    return AlertStore(db_path=db_path)


__all__ = [
    "MAX_ERROR_LENGTH",
    "MAX_MESSAGE_LENGTH",
    "Alert",
    "AlertRequest",
    "AlertSeverity",
    "AlertStatus",
    "AlertStore",
    "SQLAlchemyAlertStore",
    "get_alert_store",
]
