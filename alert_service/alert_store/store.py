"""SQLite-backed alert storage."""

import logging
import os
import sqlite3
from datetime import datetime
from pathlib import Path

from ..exceptions import AlertNotFoundError
from .models import ALERT_COLUMNS, Alert, AlertStatus

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = "~/.alert-service/alerts.db"

_SELECT_COLUMNS = ", ".join(ALERT_COLUMNS)


class AlertStore:
    """SQLite-backed storage for alert records.

    Every call opens its own connection, so readers never wait on a
    create in progress and may observe its PENDING checkpoint.
    """

    def __init__(self, db_path: str | None = None):
        """Initialize alert store.

        Args:
            db_path: Path to SQLite database. Defaults to ALERT_DB_PATH env var
                     or ~/.alert-service/alerts.db
        """
        if db_path:
            self.db_path = os.path.expanduser(db_path)
        else:
            self.db_path = os.path.expanduser(
                os.environ.get("ALERT_DB_PATH", DEFAULT_DB_PATH)
            )

        db_dir = os.path.dirname(self.db_path)
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)

        self._init_db()

    def _init_db(self) -> None:
        """Initialize database schema."""
        schema_path = Path(__file__).parent / "schema.sql"
        with open(schema_path) as f:
            schema = f.read()

        with self._connect() as conn:
            conn.executescript(schema)

    def _connect(self) -> sqlite3.Connection:
        """Get database connection with row factory."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    # Writes

    def insert(self, alert: Alert) -> Alert:
        """Persist a new alert, assigning its id and creation time.

        Any id or created_at already on the alert is overwritten.

        Returns:
            The same Alert, now carrying its assigned id
        """
        now = datetime.now()

        with self._connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO alerts (
                    title, message, severity, target_service,
                    status, created_at, sent_at, error_message
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    alert.title, alert.message, alert.severity, alert.target_service,
                    alert.status, now.isoformat(),
                    alert.sent_at.isoformat() if alert.sent_at else None,
                    alert.error_message,
                )
            )
            conn.commit()
            alert.id = cursor.lastrowid

        alert.created_at = now
        logger.info(f"Stored alert {alert.id} for {alert.target_service}")
        return alert

    def update(self, alert: Alert) -> None:
        """Write an existing alert's mutable fields back to storage.

        created_at is never rewritten.

        Raises:
            ValueError: If the alert has not been inserted
            AlertNotFoundError: If no row has the alert's id
        """
        if alert.id is None:
            raise ValueError("Cannot update an alert without an id")

        with self._connect() as conn:
            cursor = conn.execute(
                """
                UPDATE alerts
                SET title = ?, message = ?, severity = ?, target_service = ?,
                    status = ?, sent_at = ?, error_message = ?
                WHERE id = ?
                """,
                (
                    alert.title, alert.message, alert.severity, alert.target_service,
                    alert.status,
                    alert.sent_at.isoformat() if alert.sent_at else None,
                    alert.error_message,
                    alert.id,
                )
            )
            conn.commit()

            if cursor.rowcount == 0:
                raise AlertNotFoundError(alert.id)

    # Query methods

    def _select(self, where: str = "", params: tuple = ()) -> list[Alert]:
        query = f"SELECT {_SELECT_COLUMNS} FROM alerts"
        if where:
            query += f" WHERE {where}"
        query += " ORDER BY id ASC"

        with self._connect() as conn:
            cursor = conn.execute(query, params)
            return [Alert.from_row(tuple(row)) for row in cursor.fetchall()]

    def get(self, alert_id: int) -> Alert | None:
        """Get an alert by ID."""
        alerts = self._select("id = ?", (alert_id,))
        return alerts[0] if alerts else None

    def find_all(self) -> list[Alert]:
        """List every alert in insertion order."""
        return self._select()

    def find_by_status(self, status: str) -> list[Alert]:
        """List alerts whose status exactly equals ``status``."""
        return self._select("status = ?", (status,))

    def find_by_target_service(self, target_service: str) -> list[Alert]:
        """List alerts addressed to exactly ``target_service``."""
        return self._select("target_service = ?", (target_service,))

    def find_by_severity(self, severity: str) -> list[Alert]:
        """List alerts whose severity exactly equals ``severity``."""
        return self._select("severity = ?", (severity,))

    # Statistics

    def count_by_status(self) -> dict[str, int]:
        """Count alerts per status. Known statuses are always present."""
        stats = {status.value: 0 for status in AlertStatus}

        with self._connect() as conn:
            cursor = conn.execute(
                "SELECT status, COUNT(*) FROM alerts GROUP BY status"
            )
            for row in cursor:
                stats[row[0]] = row[1]

        return stats
