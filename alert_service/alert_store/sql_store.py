"""SQLAlchemy-backed alert storage for shared databases (PostgreSQL, MySQL, ...)."""

import logging
from datetime import datetime

from sqlalchemy import (
    Column,
    DateTime,
    Integer,
    MetaData,
    String,
    Table,
    create_engine,
    func,
    select,
)
from sqlalchemy.engine import Engine

from ..exceptions import AlertNotFoundError
from .models import MAX_ERROR_LENGTH, MAX_MESSAGE_LENGTH, Alert, AlertStatus

logger = logging.getLogger(__name__)

metadata = MetaData()

alerts_table = Table(
    "alerts",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", String(255), nullable=False),
    Column("message", String(MAX_MESSAGE_LENGTH), nullable=False),
    Column("severity", String(255), nullable=False, index=True),
    Column("target_service", String(255), nullable=False, index=True),
    Column("status", String(255), nullable=False, index=True),
    Column("created_at", DateTime, nullable=False),
    Column("sent_at", DateTime),
    Column("error_message", String(MAX_ERROR_LENGTH)),
)

_COLUMNS = [
    alerts_table.c.id,
    alerts_table.c.title,
    alerts_table.c.message,
    alerts_table.c.severity,
    alerts_table.c.target_service,
    alerts_table.c.status,
    alerts_table.c.created_at,
    alerts_table.c.sent_at,
    alerts_table.c.error_message,
]


class SQLAlchemyAlertStore:
    """Alert storage on any database SQLAlchemy can reach.

    Same contract as AlertStore. Connections come from the engine's pool
    and each operation runs in its own transaction.
    """

    def __init__(self, url: str | None = None, engine: Engine | None = None):
        """Initialize the store.

        Args:
            url: SQLAlchemy database URL, e.g. postgresql://user@host/alerts
            engine: Pre-built engine, takes precedence over url
        """
        if engine is None:
            if not url:
                raise ValueError(
                    "No database configured. Pass a URL or set ALERT_DB_URL."
                )
            engine = create_engine(url)

        self.engine = engine
        metadata.create_all(self.engine)

    def insert(self, alert: Alert) -> Alert:
        """Persist a new alert, assigning its id and creation time."""
        now = datetime.now()

        with self.engine.begin() as conn:
            result = conn.execute(
                alerts_table.insert().values(
                    title=alert.title,
                    message=alert.message,
                    severity=alert.severity,
                    target_service=alert.target_service,
                    status=alert.status,
                    created_at=now,
                    sent_at=alert.sent_at,
                    error_message=alert.error_message,
                )
            )
            alert.id = result.inserted_primary_key[0]

        alert.created_at = now
        logger.info(f"Stored alert {alert.id} for {alert.target_service}")
        return alert

    def update(self, alert: Alert) -> None:
        """Write an existing alert's mutable fields back to storage."""
        if alert.id is None:
            raise ValueError("Cannot update an alert without an id")

        with self.engine.begin() as conn:
            result = conn.execute(
                alerts_table.update()
                .where(alerts_table.c.id == alert.id)
                .values(
                    title=alert.title,
                    message=alert.message,
                    severity=alert.severity,
                    target_service=alert.target_service,
                    status=alert.status,
                    sent_at=alert.sent_at,
                    error_message=alert.error_message,
                )
            )
            if result.rowcount == 0:
                raise AlertNotFoundError(alert.id)

    def _select(self, *conditions) -> list[Alert]:
        query = select(*_COLUMNS).where(*conditions).order_by(alerts_table.c.id)
        with self.engine.connect() as conn:
            return [Alert.from_row(tuple(row)) for row in conn.execute(query)]

    def get(self, alert_id: int) -> Alert | None:
        alerts = self._select(alerts_table.c.id == alert_id)
        return alerts[0] if alerts else None

    def find_all(self) -> list[Alert]:
        return self._select()

    def find_by_status(self, status: str) -> list[Alert]:
        return self._select(alerts_table.c.status == status)

    def find_by_target_service(self, target_service: str) -> list[Alert]:
        return self._select(alerts_table.c.target_service == target_service)

    def find_by_severity(self, severity: str) -> list[Alert]:
        return self._select(alerts_table.c.severity == severity)

    def count_by_status(self) -> dict[str, int]:
        stats = {status.value: 0 for status in AlertStatus}
        query = select(alerts_table.c.status, func.count()).group_by(alerts_table.c.status)
        with self.engine.connect() as conn:
            for status, count in conn.execute(query):
                stats[status] = count
        return stats
