"""Tests for the alert lifecycle engine."""

import sqlite3
import pytest
from datetime import datetime
from unittest.mock import patch

from alert_service import (
    AlertLifecycleEngine,
    AlertRequest,
    DispatchResult,
    Notifier,
    StaticNotifier,
)
from alert_service.alert_store import MAX_ERROR_LENGTH
from alert_service.exceptions import AlertValidationError


class RaisingNotifier(Notifier):
    """Notifier that raises instead of returning a result."""

    def __init__(self, exc: Exception):
        self.exc = exc

    def send(self, target_service, title, severity):
        raise self.exc


class PeekingNotifier(Notifier):
    """Reads the store mid-dispatch, as a concurrent reader would."""

    def __init__(self, store):
        self.store = store
        self.seen = []

    def send(self, target_service, title, severity):
        self.seen = self.store.find_all()
        return DispatchResult.ok()


class TestCreateAlert:
    """Tests for create_alert."""

    def test_failed_dispatch_scenario(self, make_engine, db_down_request):
        engine = make_engine(StaticNotifier.failing("connection refused"))

        alert = engine.create_alert(db_down_request)

        assert alert.status == "FAILED"
        assert alert.error_message == "connection refused"
        assert alert.sent_at is None

    def test_successful_dispatch_scenario(self, make_engine, db_down_request):
        engine = make_engine(StaticNotifier.succeeding())

        alert = engine.create_alert(db_down_request)

        assert alert.status == "SENT"
        assert alert.sent_at is not None
        assert alert.error_message is None

    def test_returned_alert_is_persisted_and_final(self, make_engine, store, db_down_request):
        engine = make_engine()
        start = datetime.now()

        alert = engine.create_alert(db_down_request)

        assert alert.id is not None
        assert alert.created_at >= start
        assert alert.status in ("SENT", "FAILED")

        stored = store.get(alert.id)
        assert stored.to_dict() == alert.to_dict()

    @pytest.mark.parametrize("notifier", [
        StaticNotifier.succeeding(),
        StaticNotifier.failing("timeout"),
    ])
    def test_exactly_one_outcome_field_stored(self, make_engine, store, db_down_request, notifier):
        alert = make_engine(notifier).create_alert(db_down_request)
        stored = store.get(alert.id)

        assert (stored.sent_at is not None) != (stored.error_message is not None)
        assert (stored.status == "SENT") == (stored.sent_at is not None)
        assert (stored.status == "FAILED") == (stored.error_message is not None)

    def test_notifier_receives_target_title_severity(self, make_engine, db_down_request):
        notifier = StaticNotifier()
        make_engine(notifier).create_alert(db_down_request)

        assert notifier.calls == [("billing", "DB down", "CRITICAL")]

    def test_caller_status_is_ignored(self, make_engine, db_down_request):
        notifier = StaticNotifier.failing("down")
        alert = make_engine(notifier).create_alert({
            **db_down_request, "status": "SENT", "sentAt": "2020-01-01T00:00:00", "id": 42,
        })

        assert alert.status == "FAILED"
        assert alert.sent_at is None
        assert alert.id == 1

    def test_accepts_alert_request(self, make_engine):
        alert = make_engine().create_alert(AlertRequest(
            title="t", message="m", severity="INFO", target_service="svc",
        ))
        assert alert.status == "SENT"

    def test_notifier_exception_becomes_failed(self, make_engine, db_down_request):
        engine = make_engine(RaisingNotifier(ConnectionError("connection refused")))

        alert = engine.create_alert(db_down_request)

        assert alert.status == "FAILED"
        assert alert.error_message == "connection refused"

    def test_notifier_exception_without_message(self, make_engine, db_down_request):
        alert = make_engine(RaisingNotifier(TimeoutError())).create_alert(db_down_request)
        assert alert.error_message == "TimeoutError"

    def test_long_failure_reason_truncated(self, make_engine, store, db_down_request):
        alert = make_engine(StaticNotifier.failing("x" * 2000)).create_alert(db_down_request)

        assert len(alert.error_message) == MAX_ERROR_LENGTH
        assert store.get(alert.id).error_message == alert.error_message

    def test_pending_checkpoint_visible_during_dispatch(self, store, db_down_request):
        notifier = PeekingNotifier(store)
        engine = AlertLifecycleEngine(store=store, notifier=notifier)

        alert = engine.create_alert(db_down_request)

        assert [a.id for a in notifier.seen] == [alert.id]
        assert notifier.seen[0].status == "PENDING"
        assert store.get(alert.id).status == "SENT"

    def test_unknown_severity_stored_as_is(self, make_engine, store, db_down_request):
        alert = make_engine().create_alert({**db_down_request, "severity": "catastrophic"})
        assert store.get(alert.id).severity == "catastrophic"

    def test_invalid_request_raises_before_storing(self, make_engine, store):
        notifier = StaticNotifier()
        with pytest.raises(AlertValidationError):
            make_engine(notifier).create_alert({"title": "t"})

        assert store.find_all() == []
        assert notifier.calls == []

    def test_update_failure_propagates_and_leaves_pending(self, make_engine, store, db_down_request):
        engine = make_engine()

        with patch.object(store, "update", side_effect=sqlite3.OperationalError("disk I/O error")):
            with pytest.raises(sqlite3.OperationalError):
                engine.create_alert(db_down_request)

        [alert] = store.find_all()
        assert alert.status == "PENDING"

    def test_insert_failure_skips_dispatch(self, make_engine, store, db_down_request):
        notifier = StaticNotifier()
        engine = make_engine(notifier)

        with patch.object(store, "insert", side_effect=sqlite3.OperationalError("locked")):
            with pytest.raises(sqlite3.OperationalError):
                engine.create_alert(db_down_request)

        assert notifier.calls == []


class TestQueries:
    """Tests for the query operations."""

    def test_three_severities_scenario(self, make_engine):
        engine = make_engine()
        for severity in ("INFO", "WARNING", "CRITICAL"):
            engine.create_alert({
                "title": f"{severity} alert",
                "message": "m",
                "severity": severity,
                "targetService": "billing",
            })

        critical = engine.get_alerts_by_severity("CRITICAL")

        assert len(critical) == 1
        assert critical[0].title == "CRITICAL alert"

    def test_empty_store_status_query(self, make_engine):
        assert make_engine().get_alerts_by_status("FAILED") == []

    def test_reads_are_repeatable(self, make_engine, db_down_request):
        engine = make_engine()
        engine.create_alert(db_down_request)
        engine.create_alert({**db_down_request, "targetService": "orders"})

        first = [a.to_dict() for a in engine.get_all_alerts()]
        second = [a.to_dict() for a in engine.get_all_alerts()]

        assert first == second

    def test_filters_match_subset_of_all(self, store, db_down_request):
        ok = AlertLifecycleEngine(store, StaticNotifier.succeeding())
        bad = AlertLifecycleEngine(store, StaticNotifier.failing("refused"))
        ok.create_alert(db_down_request)
        bad.create_alert({**db_down_request, "targetService": "orders", "severity": "INFO"})
        bad.create_alert({**db_down_request, "severity": "WARNING"})

        everything = ok.get_all_alerts()

        for status in ("SENT", "FAILED", "PENDING"):
            expected = [a.id for a in everything if a.status == status]
            assert [a.id for a in ok.get_alerts_by_status(status)] == expected
        for service in ("billing", "orders"):
            expected = [a.id for a in everything if a.target_service == service]
            assert [a.id for a in ok.get_alerts_by_service(service)] == expected
        for severity in ("INFO", "WARNING", "CRITICAL", "ERROR"):
            expected = [a.id for a in everything if a.severity == severity]
            assert [a.id for a in ok.get_alerts_by_severity(severity)] == expected

    def test_get_alert(self, make_engine, db_down_request):
        engine = make_engine()
        created = engine.create_alert(db_down_request)

        assert engine.get_alert(created.id).title == "DB down"
        assert engine.get_alert(created.id + 100) is None

    def test_get_stats(self, store, db_down_request):
        AlertLifecycleEngine(store, StaticNotifier()).create_alert(db_down_request)
        AlertLifecycleEngine(store, StaticNotifier.failing("x")).create_alert(db_down_request)

        stats = AlertLifecycleEngine(store, StaticNotifier()).get_stats()

        assert stats == {"total": 2, "by_status": {"PENDING": 0, "SENT": 1, "FAILED": 1}}
