"""Advisory engine — pick the next setup step and manage snoozes.

Completion is an external fact. A snooze only hides a step for a while;
it never marks the step complete. Snoozes escalate 24h → 72h → 168h and
stay at the cap until the external fact flips to complete.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime, timedelta

from pydantic import BaseModel, Field

from haccpctl.domain.scoring import round_half_up
from haccpctl.domain.types import STEP_ORDER, StepKind

BACKOFF_HOURS: tuple[int, ...] = (24, 72, 168)


class StepDefinition(BaseModel):
    """Presentation copy for a setup step."""

    model_config = {"frozen": True}

    title: str
    body: str
    cta_label: str
    href: str


STEP_CATALOG: dict[StepKind, StepDefinition] = {
    StepKind.LOCATIONS: StepDefinition(
        title="Add your site",
        body="Create your first location so records, cleaning and routines "
        "attach to the right place.",
        cta_label="Set up locations",
        href="/locations",
    ),
    StepKind.ROUTINES: StepDefinition(
        title="Build temp routines",
        body="Add your fridges, freezers and hot-hold points so the team can log in seconds.",
        cta_label="Set up routines",
        href="/routines",
    ),
    StepKind.CLEANING: StepDefinition(
        title="Add the cleaning rota",
        body="Create daily, weekly and monthly tasks so the rota reflects what really happens.",
        cta_label="Set up cleaning",
        href="/cleaning-rota",
    ),
    StepKind.ALLERGENS: StepDefinition(
        title="Add allergen review",
        body="Track when the allergen matrix was last reviewed, and when it is due again.",
        cta_label="Set up allergens",
        href="/allergens",
    ),
    StepKind.TEAM: StepDefinition(
        title="Add training expiry dates",
        body="Add your team, then enter training expiry dates so nothing quietly expires.",
        cta_label="Set up team & training",
        href="/team",
    ),
}


class OnboardingStep(BaseModel):
    """One setup step with its snooze state."""

    model_config = {"frozen": True}

    key: StepKind
    completed_externally: bool = False
    snooze_until: datetime | None = None
    snooze_count: int = Field(default=0, ge=0)

    def is_snoozed(self, now: datetime) -> bool:
        return self.snooze_until is not None and self.snooze_until > now

    @property
    def definition(self) -> StepDefinition:
        return STEP_CATALOG[self.key]


def backoff(snooze_count: int) -> timedelta:
    """Snooze length after the *snooze_count*-th dismissal.

    Monotonically non-decreasing, capped at 168 hours.
    """
    if snooze_count < 1:
        msg = f"snooze_count must be >= 1, got {snooze_count}"
        raise ValueError(msg)
    index = min(snooze_count, len(BACKOFF_HOURS)) - 1
    return timedelta(hours=BACKOFF_HOURS[index])


def reconcile(step: OnboardingStep, completed: bool) -> OnboardingStep:
    """Apply the external completion fact. A complete step has no snooze."""
    if not completed:
        return step.model_copy(update={"completed_externally": False})
    return step.model_copy(
        update={"completed_externally": True, "snooze_until": None, "snooze_count": 0}
    )


def dismiss(step: OnboardingStep, now: datetime) -> OnboardingStep:
    """Snooze *step* with escalating backoff. Completed steps are returned as-is."""
    if step.completed_externally:
        return step
    count = step.snooze_count + 1
    return step.model_copy(update={"snooze_count": count, "snooze_until": now + backoff(count)})


def _ordered(steps: Iterable[OnboardingStep]) -> list[OnboardingStep]:
    by_key = {s.key: s for s in steps}
    return [by_key[k] for k in STEP_ORDER if k in by_key]


def next_step(
    steps: Iterable[OnboardingStep],
    current_context: StepKind | None = None,
    *,
    now: datetime | None = None,
) -> OnboardingStep | None:
    """Return the most relevant step to surface, or None to show nothing.

    With *current_context* set, prefers the first eligible step after it
    in canonical order, falling back to the first eligible step overall.
    """
    now = now or datetime.now(UTC)
    eligible = [
        s for s in _ordered(steps) if not s.completed_externally and not s.is_snoozed(now)
    ]
    if not eligible:
        return None

    if current_context is not None and current_context in STEP_ORDER:
        position = STEP_ORDER.index(current_context)
        for step in eligible:
            if STEP_ORDER.index(step.key) > position:
                return step

    return eligible[0]


def setup_progress(steps: Iterable[OnboardingStep]) -> tuple[int, int]:
    """Return ``(percent_complete, remaining)`` across *steps*."""
    ordered = _ordered(steps)
    if not ordered:
        return 0, 0
    done = sum(1 for s in ordered if s.completed_externally)
    return round_half_up(done * 100, len(ordered)), len(ordered) - done


class SnoozeState(BaseModel):
    """Durable part of a step: when its snooze ends and how often it was dismissed."""

    model_config = {"frozen": True}

    until: datetime | None = None
    count: int = Field(default=0, ge=0)

    def apply(self, step: OnboardingStep) -> OnboardingStep:
        return step.model_copy(update={"snooze_until": self.until, "snooze_count": self.count})
