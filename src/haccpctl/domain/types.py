"""Closed enums shared by every domain component.

Declaration order is meaningful: ``DomainKind`` order is the order domains
are reported in, and ``StepKind`` order is the canonical setup ordering.
"""

from __future__ import annotations

from enum import StrEnum


class DomainKind(StrEnum):
    """Independently evaluated categories of operational evidence."""

    TEMPERATURE = "temperature"
    TASK_COMPLETION = "task_completion"
    CREDENTIAL_EXPIRY = "credential_expiry"
    REVIEW_CADENCE = "review_cadence"


class Classification(StrEnum):
    """Overall severity label. Precedence: FAIL > SETUP > WARN > OK."""

    FAIL = "fail"
    SETUP = "setup"
    WARN = "warn"
    OK = "ok"

    @property
    def precedence(self) -> int:
        """Higher wins when more than one condition holds."""
        return _PRECEDENCE[self]


_PRECEDENCE: dict[Classification, int] = {
    Classification.FAIL: 3,
    Classification.SETUP: 2,
    Classification.WARN: 1,
    Classification.OK: 0,
}


class StepKind(StrEnum):
    """Onboarding steps in canonical order."""

    LOCATIONS = "locations"
    ROUTINES = "routines"
    CLEANING = "cleaning"
    ALLERGENS = "allergens"
    TEAM = "team"


class Outcome(StrEnum):
    """Outcome of a single raw event."""

    PASS = "pass"
    FAIL = "fail"
    MISSED = "missed"
    MET = "met"

    @property
    def is_failure(self) -> bool:
        return self in (Outcome.FAIL, Outcome.MISSED)


DOMAIN_ORDER: tuple[DomainKind, ...] = tuple(DomainKind)
STEP_ORDER: tuple[StepKind, ...] = tuple(StepKind)
