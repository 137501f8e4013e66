"""Shared pytest fixtures and collaborator stubs for haccpctl tests."""

from __future__ import annotations

import json
from datetime import date, datetime
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner
from sqlalchemy.engine import Engine

from haccpctl.config.settings import HaccpSettings
from haccpctl.domain.advisory import SnoozeState
from haccpctl.infrastructure.database.engine import init_database
from haccpctl.infrastructure.workspace import Workspace

# Review window used throughout: 2026-10-01 .. 2026-10-28 (28 days).
REVIEW_END = date(2026, 10, 28)

SAMPLE_EVIDENCE: dict[str, Any] = {
    "tenants": {
        "kitchen-1": {
            "started_on": "2026-08-01",
            "steps": {"locations": True, "routines": True},
            "signals": {
                "temperature": {"sample_count": 10, "fail_count": 0},
                "task_completion": {"sample_count": 3, "due_count": 5, "done_count": 5},
                "credential_expiry": {"sample_count": 4},
                "review_cadence": {"sample_count": 1},
            },
            "events": [
                {"domain": "temperature", "key": "Walk-in|Chicken", "outcome": "fail",
                 "on": "2026-10-05"},
                {"domain": "temperature", "key": "Walk-in|Chicken", "outcome": "fail",
                 "on": "2026-10-12"},
                {"domain": "temperature", "key": "Walk-in|Chicken", "outcome": "fail",
                 "on": "2026-10-20"},
                {"domain": "temperature", "key": "Freezer|Fish", "outcome": "fail",
                 "on": "2026-10-15"},
                {"domain": "temperature", "key": "Freezer|Fish", "outcome": "pass",
                 "on": "2026-10-01"},
                {"domain": "credential_expiry", "key": "s1|Level 2", "label": "Sam (Level 2)",
                 "outcome": "fail", "on": "2026-10-10", "expires_on": "2026-10-01"},
                {"domain": "credential_expiry", "key": "s2|Allergens", "label": "Alex (Allergens)",
                 "outcome": "pass", "on": "2026-10-02", "expires_on": "2026-11-05"},
            ],
            "cleaning": {
                "tasks": [
                    {"id": "mop", "task": "Mop floors", "area": "Kitchen", "frequency": "daily"},
                ],
                "runs": [
                    {"task_id": "mop", "run_on": "2026-10-01"},
                    {"task_id": "mop", "run_on": "2026-10-02"},
                ],
            },
        },
        "new-site": {
            "started_on": "2026-10-10",
        },
    }
}


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def db_engine(tmp_path: Path) -> Engine:
    """Initialized SQLite engine with all tables created."""
    engine = init_database(tmp_path)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def workspace_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temporary workspace directory, isolated from any ambient config."""
    monkeypatch.delenv("HACCPCTL_CONFIG", raising=False)
    return tmp_path


@pytest.fixture
def evidence_path(workspace_root: Path) -> Path:
    """Sample evidence document at the default location."""
    path = workspace_root / "evidence.json"
    path.write_text(json.dumps(SAMPLE_EVIDENCE, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def workspace(workspace_root: Path, evidence_path: Path) -> Workspace:
    """Workspace on a temp directory with sample evidence."""
    settings = HaccpSettings.from_cli(root=workspace_root)
    ws = Workspace(settings)
    try:
        yield ws
    finally:
        ws.close()


@pytest.fixture
def _isolated_workspace(
    workspace_root: Path, evidence_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Change CWD to a temp workspace so the CLI picks up the sample evidence.

    Use via ``@pytest.mark.usefixtures("_isolated_workspace")`` on command
    test classes.
    """
    monkeypatch.chdir(workspace_root)


# ---------------------------------------------------------------------------
# Collaborator stubs
# ---------------------------------------------------------------------------


class MemorySnoozeStore:
    """In-memory snooze store with the same conditional upsert rule."""

    def __init__(self) -> None:
        self.rows: dict[tuple[str, str], SnoozeState] = {}

    def get(self, tenant: str, step_key: str) -> SnoozeState | None:
        return self.rows.get((tenant, step_key))

    def set(self, tenant: str, step_key: str, until: datetime | None, count: int) -> bool:
        current = self.rows.get((tenant, step_key))
        if current is not None and current.count > count:
            return False
        self.rows[(tenant, step_key)] = SnoozeState(until=until, count=count)
        return True

    def clear(self, tenant: str, step_key: str) -> None:
        self.rows.pop((tenant, step_key), None)


class BrokenSnoozeStore:
    """Every call fails, as an unreachable database would."""

    def get(self, tenant: str, step_key: str) -> SnoozeState | None:
        raise ConnectionError("snooze store offline")

    def set(self, tenant: str, step_key: str, until: datetime | None, count: int) -> bool:
        raise ConnectionError("snooze store offline")

    def clear(self, tenant: str, step_key: str) -> None:
        raise ConnectionError("snooze store offline")


class BrokenEvidence:
    """Every fetch fails."""

    def fetch_domain_signal(self, tenant, domain, window):
        raise TimeoutError("evidence backend timed out")

    def fetch_step_completion_facts(self, tenant):
        raise TimeoutError("evidence backend timed out")

    def fetch_events(self, tenant, window, domain):
        raise TimeoutError("evidence backend timed out")

    def tenant_started_on(self, tenant):
        raise TimeoutError("evidence backend timed out")


@pytest.fixture
def memory_snoozes() -> MemorySnoozeStore:
    return MemorySnoozeStore()


@pytest.fixture
def broken_snoozes() -> BrokenSnoozeStore:
    return BrokenSnoozeStore()


@pytest.fixture
def broken_evidence() -> BrokenEvidence:
    return BrokenEvidence()
