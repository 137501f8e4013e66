"""Rolling aggregate reporter — totals and repeat offenders over a window.

A repeat group is a natural key (``area|item``, ``task_id``,
``staff_id|credential_type``) with two or more failing events inside the
window. Isolated incidents are counted in totals but never reported as
repeat groups.

Ordering is total and deterministic: occurrences desc, last seen desc,
key asc. Running :func:`summarize` twice on the same input yields the
same summary.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from datetime import date, timedelta
from typing import Literal

from pydantic import BaseModel, Field, model_validator

from haccpctl.domain.scoring import round_half_up
from haccpctl.domain.types import DomainKind, Outcome

REPORTED_DOMAINS: tuple[DomainKind, ...] = (
    DomainKind.TEMPERATURE,
    DomainKind.TASK_COMPLETION,
    DomainKind.CREDENTIAL_EXPIRY,
)

REPEAT_THRESHOLD = 2
DEFAULT_WINDOW_DAYS = 28
DEFAULT_MAX_GROUPS = 8
DEFAULT_DUE_SOON_DAYS = 30
MAX_DRIFT_ITEMS = 15


# ---------------------------------------------------------------------------
# Value models
# ---------------------------------------------------------------------------


class EvaluationWindow(BaseModel):
    """Inclusive date range. Serialized as ``{"from": ..., "to": ...}``."""

    model_config = {"frozen": True, "populate_by_name": True}

    start: date = Field(alias="from")
    end: date = Field(alias="to")

    @model_validator(mode="after")
    def _ordered(self) -> EvaluationWindow:
        if self.start > self.end:
            msg = f"window start {self.start} is after end {self.end}"
            raise ValueError(msg)
        return self

    @classmethod
    def ending(cls, end: date, days: int = DEFAULT_WINDOW_DAYS) -> EvaluationWindow:
        """Window of *days* days finishing on *end* (inclusive)."""
        if days < 1:
            msg = f"days must be >= 1, got {days}"
            raise ValueError(msg)
        return cls(start=end - timedelta(days=days - 1), end=end)

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


class Event(BaseModel):
    """One raw pass/fail/missed/met record."""

    model_config = {"frozen": True}

    domain: DomainKind
    key: str
    outcome: Outcome
    on: date
    label: str | None = None
    expires_on: date | None = None

    @property
    def description(self) -> str:
        return self.label or " | ".join(part.strip() for part in self.key.split("|"))


class RepeatGroup(BaseModel):
    model_config = {"frozen": True}

    domain: DomainKind
    key: str
    description: str
    occurrences: int
    last_seen: date


class DomainTotals(BaseModel):
    """Headline counts for one domain. Computed before any truncation.

    For credentials, ``failures`` (expired) and ``due_soon`` count each key
    once, from its latest record in the window.
    """

    model_config = {"frozen": True}

    domain: DomainKind
    total: int = 0
    failures: int = 0
    passes: int = 0
    rate_pct: int = 0
    due_soon: int = 0
    repeat_groups: int = 0


class DriftItem(BaseModel):
    """A credential that has expired or expires soon."""

    model_config = {"frozen": True}

    key: str
    description: str
    expires_on: date | None
    days_left: int | None
    status: Literal["expired", "due_soon"]


class AggregateSummary(BaseModel):
    model_config = {"frozen": True}

    window: EvaluationWindow
    totals: dict[DomainKind, DomainTotals]
    repeat_groups: list[RepeatGroup] = Field(default_factory=list)
    drift: list[DriftItem] = Field(default_factory=list)
    due_soon_days: int = DEFAULT_DUE_SOON_DAYS
    headline: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)

    def groups_for(self, domain: DomainKind) -> list[RepeatGroup]:
        return [g for g in self.repeat_groups if g.domain is domain]


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------


def _sort_key(group: RepeatGroup) -> tuple[int, int, str]:
    return (-group.occurrences, -group.last_seen.toordinal(), group.key)


def repeat_groups(events: Iterable[Event], domain: DomainKind) -> list[RepeatGroup]:
    """All groups of *domain* with at least two failing events, sorted."""
    buckets: dict[str, list[Event]] = defaultdict(list)
    for event in events:
        if event.domain is domain and event.outcome.is_failure:
            buckets[event.key].append(event)

    groups = []
    for key, bucket in buckets.items():
        if len(bucket) < REPEAT_THRESHOLD:
            continue
        latest = max(bucket, key=lambda e: e.on)
        groups.append(
            RepeatGroup(
                domain=domain,
                key=key,
                description=latest.description,
                occurrences=len(bucket),
                last_seen=latest.on,
            )
        )
    return sorted(groups, key=_sort_key)


def _is_due_soon(event: Event, window: EvaluationWindow, due_soon_days: int) -> bool:
    if event.outcome.is_failure or event.expires_on is None:
        return False
    return window.end <= event.expires_on <= window.end + timedelta(days=due_soon_days)


def _credential_states(
    events: Iterable[Event],
    window: EvaluationWindow,
    due_soon_days: int,
) -> list[DriftItem]:
    latest: dict[str, Event] = {}
    for event in events:
        if event.domain is not DomainKind.CREDENTIAL_EXPIRY:
            continue
        current = latest.get(event.key)
        if current is None or event.on >= current.on:
            latest[event.key] = event

    items: list[DriftItem] = []
    for key, event in latest.items():
        days_left = (event.expires_on - window.end).days if event.expires_on else None
        if event.outcome.is_failure:
            status: Literal["expired", "due_soon"] = "expired"
        elif _is_due_soon(event, window, due_soon_days):
            status = "due_soon"
        else:
            continue
        items.append(
            DriftItem(
                key=key,
                description=event.description,
                expires_on=event.expires_on,
                days_left=days_left,
                status=status,
            )
        )

    items.sort(
        key=lambda d: (
            d.status != "expired",
            d.days_left if d.days_left is not None else 0,
            d.key,
        )
    )
    return items


def _totals(
    events: list[Event],
    domain: DomainKind,
    window: EvaluationWindow,
    due_soon_days: int,
    group_count: int,
) -> DomainTotals:
    total = len(events)
    failures = sum(1 for e in events if e.outcome.is_failure)
    due_soon = 0
    if domain is DomainKind.CREDENTIAL_EXPIRY:
        # One count per credential, taken from its latest record.
        states = _credential_states(events, window, due_soon_days)
        failures = sum(1 for s in states if s.status == "expired")
        due_soon = len(states) - failures
    return DomainTotals(
        domain=domain,
        total=total,
        failures=failures,
        passes=total - failures,
        rate_pct=round_half_up(failures * 100, total) if total else 0,
        due_soon=due_soon,
        repeat_groups=group_count,
    )


def credential_drift(
    events: Iterable[Event],
    window: EvaluationWindow,
    *,
    due_soon_days: int = DEFAULT_DUE_SOON_DAYS,
) -> list[DriftItem]:
    """Latest state per credential key, expired first then soonest expiry."""
    return _credential_states(events, window, due_soon_days)[:MAX_DRIFT_ITEMS]


def _headline(
    window: EvaluationWindow,
    totals: dict[DomainKind, DomainTotals],
    due_soon_days: int,
) -> list[str]:
    temps = totals[DomainKind.TEMPERATURE]
    cleaning = totals[DomainKind.TASK_COMPLETION]
    training = totals[DomainKind.CREDENTIAL_EXPIRY]
    return [
        f"Period: {window.start.isoformat()} to {window.end.isoformat()} ({window.days} days)",
        f"Temperature checks: {temps.total} logged, {temps.failures} fails ({temps.rate_pct}%).",
        f"Cleaning tasks: {cleaning.total} due, {cleaning.passes} completed, "
        f"{cleaning.failures} missed.",
        f"Training: {training.failures} expired, "
        f"{training.due_soon} due within {due_soon_days} days.",
    ]


def _recommendations(totals: dict[DomainKind, DomainTotals]) -> list[str]:
    recs: list[str] = []
    if totals[DomainKind.TEMPERATURE].repeat_groups:
        recs.append(
            "Investigate repeat temperature failures and document corrective actions "
            "(equipment, process, retraining)."
        )
    if totals[DomainKind.TASK_COMPLETION].repeat_groups:
        recs.append(
            "Fix the cleaning rota bottlenecks: reduce task load, reassign ownership, "
            "or add reminders."
        )
    training = totals[DomainKind.CREDENTIAL_EXPIRY]
    if training.failures or training.due_soon:
        recs.append(
            "Schedule training refreshers now to avoid avoidable non-compliance at inspection."
        )
    if not recs:
        recs.append("No major recurring issues detected. Keep doing the basics consistently.")
    return recs


def summarize(
    window: EvaluationWindow,
    events: Iterable[Event] | None,
    *,
    max_groups: int = DEFAULT_MAX_GROUPS,
    due_soon_days: int = DEFAULT_DUE_SOON_DAYS,
) -> AggregateSummary:
    """Aggregate *events* inside *window* into an :class:`AggregateSummary`.

    Missing or empty *events* means no activity: zero totals and no groups.
    Only the first *max_groups* groups per domain are kept for display;
    totals are computed from the full set.
    """
    if max_groups < 1:
        msg = f"max_groups must be >= 1, got {max_groups}"
        raise ValueError(msg)
    in_window = [
        e for e in (events or ()) if e.domain in REPORTED_DOMAINS and window.contains(e.on)
    ]

    totals: dict[DomainKind, DomainTotals] = {}
    displayed: list[RepeatGroup] = []
    for domain in REPORTED_DOMAINS:
        domain_events = [e for e in in_window if e.domain is domain]
        groups = repeat_groups(domain_events, domain)
        totals[domain] = _totals(domain_events, domain, window, due_soon_days, len(groups))
        displayed.extend(groups[:max_groups])

    return AggregateSummary(
        window=window,
        totals=totals,
        repeat_groups=displayed,
        drift=credential_drift(in_window, window, due_soon_days=due_soon_days),
        due_soon_days=due_soon_days,
        headline=_headline(window, totals, due_soon_days),
        recommendations=_recommendations(totals),
    )
