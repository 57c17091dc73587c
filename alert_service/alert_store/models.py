"""Data models for persistent alert storage."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Mapping

from ..exceptions import AlertValidationError, InvalidTransitionError

MAX_MESSAGE_LENGTH = 1000
MAX_ERROR_LENGTH = 500


class AlertSeverity(str, Enum):
    """Severity levels callers are expected to use."""
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @classmethod
    def is_known(cls, value: str) -> bool:
        """Check if a raw severity string is one of the enumerated levels."""
        return value in cls._value2member_map_


class AlertStatus(str, Enum):
    """Alert lifecycle status."""
    PENDING = "PENDING"  # Stored, dispatch not yet attempted
    SENT = "SENT"        # Notifier accepted the alert
    FAILED = "FAILED"    # Notifier reported an error


def _parse_datetime(val):
    if val is None:
        return None
    if isinstance(val, datetime):
        return val
    return datetime.fromisoformat(val)


def _format_datetime(val: datetime | None) -> str | None:
    return val.isoformat() if val else None


@dataclass
class AlertRequest:
    """Caller-supplied fields for a new alert.

    Anything else a caller sends (status, timestamps, id) is ignored.
    """
    title: str
    message: str
    severity: str
    target_service: str

    REQUIRED_FIELDS = (
        ("title", "title"),
        ("message", "message"),
        ("severity", "severity"),
        ("target_service", "targetService"),
    )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AlertRequest":
        """Build a request from a JSON-style mapping.

        Accepts both ``targetService`` and ``target_service``.

        Raises:
            AlertValidationError: If a field is missing, not a string, or the
                message exceeds MAX_MESSAGE_LENGTH.
        """
        if not isinstance(data, Mapping):
            raise AlertValidationError("Alert request must be a JSON object")

        values = {}
        for attr, json_key in cls.REQUIRED_FIELDS:
            value = data.get(json_key, data.get(attr))
            if value is None:
                raise AlertValidationError(f"{json_key} field required")
            if not isinstance(value, str):
                raise AlertValidationError(f"{json_key} must be a string")
            values[attr] = value

        request = cls(**values)
        request.validate()
        return request

    def validate(self) -> None:
        """Reject messages that cannot be stored."""
        if len(self.message) > MAX_MESSAGE_LENGTH:
            raise AlertValidationError(
                f"message exceeds {MAX_MESSAGE_LENGTH} characters ({len(self.message)})"
            )


@dataclass
class Alert:
    """A stored alert and its dispatch outcome."""
    title: str
    message: str
    severity: str
    target_service: str
    status: str = AlertStatus.PENDING.value

    # Assigned by the store on insert
    id: int | None = None
    created_at: datetime | None = None

    # Dispatch outcome, at most one is set
    sent_at: datetime | None = None
    error_message: str | None = None

    @classmethod
    def from_request(cls, request: AlertRequest) -> "Alert":
        """Create a new PENDING alert from a request."""
        return cls(
            title=request.title,
            message=request.message,
            severity=request.severity,
            target_service=request.target_service,
            status=AlertStatus.PENDING.value,
        )

    def is_pending(self) -> bool:
        return self.status == AlertStatus.PENDING.value

    def _check_pending(self, target: AlertStatus) -> None:
        if not self.is_pending():
            raise InvalidTransitionError(
                f"Alert {self.id} cannot move from {self.status} to {target.value}"
            )

    def mark_sent(self, sent_at: datetime | None = None) -> None:
        """Record a successful dispatch."""
        self._check_pending(AlertStatus.SENT)
        self.status = AlertStatus.SENT.value
        self.sent_at = sent_at or datetime.now()
        self.error_message = None

    def mark_failed(self, reason: str | None) -> None:
        """Record a failed dispatch, truncating the reason to fit storage."""
        self._check_pending(AlertStatus.FAILED)
        self.status = AlertStatus.FAILED.value
        self.sent_at = None
        if reason is None:
            reason = "Unknown error"
        self.error_message = reason[:MAX_ERROR_LENGTH]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "title": self.title,
            "message": self.message,
            "severity": self.severity,
            "targetService": self.target_service,
            "status": self.status,
            "createdAt": _format_datetime(self.created_at),
            "sentAt": _format_datetime(self.sent_at),
            "errorMessage": self.error_message,
        }

    @classmethod
    def from_row(cls, row: tuple) -> "Alert":
        """Create from database row tuple.

        Row order matches ALERT_COLUMNS: id, title, message, severity,
        target_service, status, created_at, sent_at, error_message
        """
        return cls(
            id=row[0],
            title=row[1],
            message=row[2],
            severity=row[3],
            target_service=row[4],
            status=row[5],
            created_at=_parse_datetime(row[6]),
            sent_at=_parse_datetime(row[7]),
            error_message=row[8],
        )


ALERT_COLUMNS = (
    "id",
    "title",
    "message",
    "severity",
    "target_service",
    "status",
    "created_at",
    "sent_at",
    "error_message",
)
