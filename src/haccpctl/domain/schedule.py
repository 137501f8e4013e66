"""Cleaning rota calendar rule.

Decides which cleaning tasks fall due on a given day, and expands a rota
plus its completion runs into per-day ``met``/``missed`` events.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, timedelta
from enum import StrEnum

from pydantic import BaseModel, Field

from haccpctl.domain.aggregate import EvaluationWindow, Event
from haccpctl.domain.scoring import DomainSignal
from haccpctl.domain.types import DomainKind, Outcome


class Frequency(StrEnum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class CleaningTask(BaseModel):
    """A rota entry. ``weekday`` is ISO (Mon=1..Sun=7)."""

    model_config = {"frozen": True}

    id: str
    task: str
    area: str | None = None
    category: str | None = None
    frequency: Frequency = Frequency.DAILY
    weekday: int | None = Field(default=None, ge=1, le=7)
    month_day: int | None = Field(default=None, ge=1, le=31)

    @property
    def description(self) -> str:
        where = " | ".join(p for p in (self.area, self.category) if p)
        return f"{self.task} ({where})" if where else self.task


def is_due_on(task: CleaningTask, day: date) -> bool:
    match task.frequency:
        case Frequency.DAILY:
            return True
        case Frequency.WEEKLY:
            return task.weekday == day.isoweekday()
        case Frequency.MONTHLY:
            return task.month_day == day.day
    return False


def iter_days(window: EvaluationWindow) -> Iterable[date]:
    day = window.start
    while day <= window.end:
        yield day
        day += timedelta(days=1)


def expand_rota(
    tasks: Iterable[CleaningTask],
    runs: Iterable[tuple[str, date]],
    window: EvaluationWindow,
) -> list[Event]:
    """One event per due task-day: ``met`` if a run exists, else ``missed``."""
    tasks = list(tasks)
    done = {(task_id, day) for task_id, day in runs}
    events: list[Event] = []
    for day in iter_days(window):
        for task in tasks:
            if not is_due_on(task, day):
                continue
            outcome = Outcome.MET if (task.id, day) in done else Outcome.MISSED
            events.append(
                Event(
                    domain=DomainKind.TASK_COMPLETION,
                    key=task.id,
                    label=task.description,
                    outcome=outcome,
                    on=day,
                )
            )
    return events


def rota_signal(tasks: Iterable[CleaningTask], events: Iterable[Event]) -> DomainSignal:
    """TaskCompletion signal: configured task count plus due/done counts."""
    tasks = list(tasks)
    events = list(events)
    return DomainSignal(
        domain=DomainKind.TASK_COMPLETION,
        sample_count=len(tasks),
        due_count=len(events),
        done_count=sum(1 for e in events if e.outcome is Outcome.MET),
    )
