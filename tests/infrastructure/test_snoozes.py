"""Tests for SqlSnoozeStore — tenant-scoped upserts."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from sqlalchemy.engine import Engine

from haccpctl.infrastructure.snoozes import SqlSnoozeStore

NOW = datetime(2026, 10, 19, 9, 0, tzinfo=UTC)


class TestSqlSnoozeStore:
    def test_get_missing(self, db_engine: Engine) -> None:
        assert SqlSnoozeStore(db_engine).get("kitchen-1", "cleaning") is None

    def test_set_then_get(self, db_engine: Engine) -> None:
        store = SqlSnoozeStore(db_engine)
        assert store.set("kitchen-1", "cleaning", NOW + timedelta(hours=24), 1) is True
        state = store.get("kitchen-1", "cleaning")
        assert state.count == 1
        assert state.until == NOW + timedelta(hours=24)
        assert state.until.tzinfo is not None

    def test_upsert_replaces(self, db_engine: Engine) -> None:
        store = SqlSnoozeStore(db_engine)
        store.set("kitchen-1", "cleaning", NOW, 1)
        store.set("kitchen-1", "cleaning", NOW + timedelta(hours=72), 2)
        assert store.get("kitchen-1", "cleaning").count == 2

    def test_same_write_is_idempotent(self, db_engine: Engine) -> None:
        store = SqlSnoozeStore(db_engine)
        store.set("kitchen-1", "team", NOW, 1)
        assert store.set("kitchen-1", "team", NOW, 1) is True
        assert store.get("kitchen-1", "team").count == 1

    def test_stale_write_ignored(self, db_engine: Engine) -> None:
        store = SqlSnoozeStore(db_engine)
        store.set("kitchen-1", "cleaning", NOW + timedelta(hours=168), 3)
        assert store.set("kitchen-1", "cleaning", NOW + timedelta(hours=24), 1) is False
        assert store.get("kitchen-1", "cleaning").count == 3

    def test_tenants_are_isolated(self, db_engine: Engine) -> None:
        store = SqlSnoozeStore(db_engine)
        store.set("kitchen-1", "cleaning", NOW, 2)
        assert store.get("kitchen-2", "cleaning") is None

    def test_naive_datetime_stored_as_utc(self, db_engine: Engine) -> None:
        store = SqlSnoozeStore(db_engine)
        store.set("kitchen-1", "team", datetime(2026, 10, 20, 9, 0), 1)
        assert store.get("kitchen-1", "team").until == datetime(2026, 10, 20, 9, 0, tzinfo=UTC)

    def test_clear(self, db_engine: Engine) -> None:
        store = SqlSnoozeStore(db_engine)
        store.set("kitchen-1", "cleaning", NOW, 1)
        store.clear("kitchen-1", "cleaning")
        assert store.get("kitchen-1", "cleaning") is None
        store.clear("kitchen-1", "cleaning")
