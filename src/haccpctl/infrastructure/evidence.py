"""File-backed evidence collaborator.

Reads a JSON evidence document with one section per tenant::

    {
      "tenants": {
        "kitchen-1": {
          "started_on": "2026-08-01",
          "steps": {"locations": true, "routines": true},
          "signals": {"temperature": {"sample_count": 42, "fail_count": 1}},
          "events": [
            {"domain": "temperature", "key": "Walk-in|Chicken",
             "outcome": "fail", "on": "2026-10-02"}
          ],
          "cleaning": {
            "tasks": [{"id": "t1", "task": "Mop floors", "frequency": "daily"}],
            "runs": [{"task_id": "t1", "run_on": "2026-10-02"}]
          }
        }
      }
    }

Task-completion evidence may be given directly or derived from the
cleaning rota. The document is loaded lazily and validated once.
"""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from haccpctl.domain.aggregate import EvaluationWindow, Event
from haccpctl.domain.schedule import CleaningTask, expand_rota, rota_signal
from haccpctl.domain.scoring import DomainSignal
from haccpctl.domain.types import DomainKind, StepKind

logger = logging.getLogger(__name__)


class EvidenceError(Exception):
    """Evidence could not be read for a tenant or domain."""


class UnknownTenantError(EvidenceError):
    pass


# ---------------------------------------------------------------------------
# Document schema
# ---------------------------------------------------------------------------


class SignalCounts(BaseModel):
    sample_count: int = Field(default=0, ge=0)
    fail_count: int = Field(default=0, ge=0)
    due_count: int = Field(default=0, ge=0)
    done_count: int = Field(default=0, ge=0)
    overdue_count: int = Field(default=0, ge=0)
    due_soon_count: int = Field(default=0, ge=0)


class CleaningRun(BaseModel):
    task_id: str
    run_on: date


class CleaningRota(BaseModel):
    tasks: list[CleaningTask] = Field(default_factory=list)
    runs: list[CleaningRun] = Field(default_factory=list)


class TenantEvidence(BaseModel):
    started_on: date | None = None
    steps: dict[StepKind, bool] = Field(default_factory=dict)
    signals: dict[DomainKind, SignalCounts] = Field(default_factory=dict)
    events: list[Event] = Field(default_factory=list)
    cleaning: CleaningRota | None = None


class EvidenceDocument(BaseModel):
    tenants: dict[str, TenantEvidence] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Collaborator
# ---------------------------------------------------------------------------


class EvidenceFile:
    """Evidence source backed by a JSON document on disk."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self._document: EvidenceDocument | None = None

    def _load(self) -> EvidenceDocument:
        if self._document is None:
            try:
                raw = self.path.read_text(encoding="utf-8")
            except OSError as exc:
                msg = f"Cannot read evidence file {self.path}: {exc}"
                raise EvidenceError(msg) from exc
            try:
                self._document = EvidenceDocument.model_validate_json(raw)
            except ValidationError as exc:
                msg = f"Invalid evidence file {self.path}: {exc.error_count()} error(s)"
                raise EvidenceError(msg) from exc
            logger.debug("Loaded evidence for %d tenant(s)", len(self._document.tenants))
        return self._document

    def refresh(self) -> None:
        """Drop the parsed document so the next fetch re-reads the file."""
        self._document = None

    def _tenant(self, tenant: str) -> TenantEvidence:
        evidence = self._load().tenants.get(tenant)
        if evidence is None:
            msg = f"No evidence for tenant {tenant!r}"
            raise UnknownTenantError(msg)
        return evidence

    def tenants(self) -> list[str]:
        return sorted(self._load().tenants)

    def _rota_events(self, evidence: TenantEvidence, window: EvaluationWindow) -> list[Event]:
        rota = evidence.cleaning
        if rota is None:
            return []
        runs = [(r.task_id, r.run_on) for r in rota.runs]
        return expand_rota(rota.tasks, runs, window)

    def fetch_domain_signal(
        self, tenant: str, domain: DomainKind, window: EvaluationWindow
    ) -> DomainSignal:
        evidence = self._tenant(tenant)
        counts = evidence.signals.get(domain)
        if counts is not None:
            return DomainSignal(domain=domain, **counts.model_dump())
        if domain is DomainKind.TASK_COMPLETION and evidence.cleaning is not None:
            return rota_signal(evidence.cleaning.tasks, self._rota_events(evidence, window))
        msg = f"No {domain} signal for tenant {tenant!r}"
        raise EvidenceError(msg)

    def fetch_step_completion_facts(self, tenant: str) -> dict[StepKind, bool]:
        steps = self._tenant(tenant).steps
        return {step: bool(steps.get(step, False)) for step in StepKind}

    def fetch_events(
        self, tenant: str, window: EvaluationWindow, domain: DomainKind
    ) -> list[Event]:
        evidence = self._tenant(tenant)
        events = [e for e in evidence.events if e.domain is domain and window.contains(e.on)]
        if domain is DomainKind.TASK_COMPLETION and not events:
            events = self._rota_events(evidence, window)
        return events

    def tenant_started_on(self, tenant: str) -> date | None:
        return self._tenant(tenant).started_on
