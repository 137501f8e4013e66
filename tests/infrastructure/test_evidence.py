"""Tests for the JSON evidence collaborator."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from haccpctl.domain.aggregate import EvaluationWindow
from haccpctl.domain.types import DomainKind, Outcome, StepKind
from haccpctl.infrastructure.evidence import EvidenceError, EvidenceFile, UnknownTenantError

WINDOW = EvaluationWindow.ending(date(2026, 10, 28), 28)


class TestEvidenceFile:
    def test_tenants(self, evidence_path: Path) -> None:
        assert EvidenceFile(evidence_path).tenants() == ["kitchen-1", "new-site"]

    def test_explicit_signal(self, evidence_path: Path) -> None:
        signal = EvidenceFile(evidence_path).fetch_domain_signal(
            "kitchen-1", DomainKind.TEMPERATURE, WINDOW
        )
        assert signal.domain is DomainKind.TEMPERATURE
        assert signal.sample_count == 10

    def test_missing_signal_raises(self, evidence_path: Path) -> None:
        with pytest.raises(EvidenceError):
            EvidenceFile(evidence_path).fetch_domain_signal(
                "new-site", DomainKind.TEMPERATURE, WINDOW
            )

    def test_unknown_tenant(self, evidence_path: Path) -> None:
        with pytest.raises(UnknownTenantError):
            EvidenceFile(evidence_path).fetch_step_completion_facts("nobody")

    def test_step_facts_default_false(self, evidence_path: Path) -> None:
        facts = EvidenceFile(evidence_path).fetch_step_completion_facts("kitchen-1")
        assert facts[StepKind.LOCATIONS] is True
        assert facts[StepKind.TEAM] is False
        assert set(facts) == set(StepKind)

    def test_events_filtered_by_domain_and_window(self, evidence_path: Path) -> None:
        source = EvidenceFile(evidence_path)
        temps = source.fetch_events("kitchen-1", WINDOW, DomainKind.TEMPERATURE)
        assert len(temps) == 5
        narrow = EvaluationWindow.ending(date(2026, 10, 5), 5)
        assert len(source.fetch_events("kitchen-1", narrow, DomainKind.TEMPERATURE)) == 2

    def test_cleaning_events_from_rota(self, evidence_path: Path) -> None:
        events = EvidenceFile(evidence_path).fetch_events(
            "kitchen-1", WINDOW, DomainKind.TASK_COMPLETION
        )
        assert len(events) == 28
        assert sum(1 for e in events if e.outcome is Outcome.MET) == 2

    def test_rota_signal_when_no_explicit_counts(self, tmp_path: Path) -> None:
        path = tmp_path / "evidence.json"
        path.write_text(
            '{"tenants": {"t": {"cleaning": {"tasks": [{"id": "a", "task": "Wipe"}],'
            ' "runs": [{"task_id": "a", "run_on": "2026-10-28"}]}}}}'
        )
        signal = EvidenceFile(path).fetch_domain_signal("t", DomainKind.TASK_COMPLETION, WINDOW)
        assert (signal.sample_count, signal.due_count, signal.done_count) == (1, 28, 1)

    def test_started_on(self, evidence_path: Path) -> None:
        assert EvidenceFile(evidence_path).tenant_started_on("new-site") == date(2026, 10, 10)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(EvidenceError, match="Cannot read"):
            EvidenceFile(tmp_path / "absent.json").tenants()

    def test_invalid_document(self, tmp_path: Path) -> None:
        path = tmp_path / "evidence.json"
        path.write_text('{"tenants": {"t": {"signals": {"temperature": {"fail_count": -1}}}}}')
        with pytest.raises(EvidenceError, match="Invalid evidence"):
            EvidenceFile(path).tenants()

    def test_refresh_rereads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "evidence.json"
        path.write_text(
            '{"tenants": {"t": {"signals": {"temperature": {"sample_count": 5}}}}}'
        )
        source = EvidenceFile(path)
        assert source.fetch_domain_signal("t", DomainKind.TEMPERATURE, WINDOW).fail_count == 0
        path.write_text(
            '{"tenants": {"t": {"signals": {"temperature": '
            '{"sample_count": 5, "fail_count": 2}}}}}'
        )
        assert source.fetch_domain_signal("t", DomainKind.TEMPERATURE, WINDOW).fail_count == 0
        source.refresh()
        assert source.fetch_domain_signal("t", DomainKind.TEMPERATURE, WINDOW).fail_count == 2
