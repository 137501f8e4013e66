"""Collaborator contracts the services depend on.

Implementations live in the infrastructure layer (or in a host
application). Any method may raise; services degrade per operation.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Protocol

from haccpctl.domain.advisory import SnoozeState
from haccpctl.domain.aggregate import EvaluationWindow, Event
from haccpctl.domain.scoring import DomainSignal
from haccpctl.domain.types import DomainKind, StepKind


class EvidenceSource(Protocol):
    def fetch_domain_signal(
        self, tenant: str, domain: DomainKind, window: EvaluationWindow
    ) -> DomainSignal: ...

    def fetch_step_completion_facts(self, tenant: str) -> dict[StepKind, bool]: ...

    def fetch_events(
        self, tenant: str, window: EvaluationWindow, domain: DomainKind
    ) -> list[Event]: ...

    def tenant_started_on(self, tenant: str) -> date | None: ...


class SnoozeStore(Protocol):
    def get(self, tenant: str, step_key: str) -> SnoozeState | None: ...

    def set(self, tenant: str, step_key: str, until: datetime | None, count: int) -> bool: ...

    def clear(self, tenant: str, step_key: str) -> None: ...
