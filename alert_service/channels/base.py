"""Base notifier interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of one delivery attempt."""
    success: bool
    error: str | None = None

    @classmethod
    def ok(cls) -> "DispatchResult":
        return cls(success=True)

    @classmethod
    def failed(cls, reason: str) -> "DispatchResult":
        return cls(success=False, error=reason)


class Notifier(ABC):
    """Abstract base class for notifiers."""

    @abstractmethod
    def send(
        self,
        target_service: str,
        title: str,
        severity: str,
    ) -> DispatchResult:
        """
        Deliver an alert to its target service.

        Args:
            target_service: Identifier of the receiving service
            title: Alert title
            severity: Alert severity as stored

        Returns:
            DispatchResult.ok() if delivered, otherwise a failed result
            carrying a short human-readable reason
        """
        pass

    def is_configured(self) -> bool:
        """Check if notifier has what it needs to deliver."""
        return True
