"""Deterministic notifier for tests and demos."""

from .base import DispatchResult, Notifier


class StaticNotifier(Notifier):
    """Always succeeds, or always fails with a fixed reason.

    Records every call in ``calls`` as (target_service, title, severity).
    """

    def __init__(self, failure_reason: str | None = None):
        self.failure_reason = failure_reason
        self.calls: list[tuple[str, str, str]] = []

    @classmethod
    def succeeding(cls) -> "StaticNotifier":
        return cls()

    @classmethod
    def failing(cls, reason: str) -> "StaticNotifier":
        return cls(failure_reason=reason)

    def send(self, target_service: str, title: str, severity: str) -> DispatchResult:
        self.calls.append((target_service, title, severity))
        if self.failure_reason is not None:
            return DispatchResult.failed(self.failure_reason)
        return DispatchResult.ok()

    def get_send_count(self) -> int:
        """Return the number of dispatch attempts."""
        return len(self.calls)
