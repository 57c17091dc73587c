"""Pytest fixtures for Alert Service tests."""

import pytest

from alert_service import (
    AlertLifecycleEngine,
    AlertStore,
    SQLAlchemyAlertStore,
    StaticNotifier,
)


@pytest.fixture
def store(tmp_path) -> AlertStore:
    """Empty SQLite alert store in a temp directory."""
    return AlertStore(db_path=str(tmp_path / "alerts.db"))


@pytest.fixture(params=["sqlite3", "sqlalchemy"])
def any_store(request, tmp_path):
    """Each store implementation, backed by a fresh SQLite file."""
    if request.param == "sqlite3":
        return AlertStore(db_path=str(tmp_path / "alerts.db"))
    return SQLAlchemyAlertStore(url=f"sqlite:///{tmp_path / 'alerts_sa.db'}")


@pytest.fixture
def make_engine(store):
    """Factory for engines sharing the test store."""
    def _make(notifier=None) -> AlertLifecycleEngine:
        return AlertLifecycleEngine(store=store, notifier=notifier or StaticNotifier())
    return _make


@pytest.fixture
def db_down_request() -> dict:
    return {
        "title": "DB down",
        "message": "primary db unreachable",
        "severity": "CRITICAL",
        "targetService": "billing",
    }
