"""AdvisoryService — "what to set up next" with escalating snoozes.

Completion facts come from the evidence collaborator and always win:
a step reported complete has its stored snooze cleared. Snooze storage
failures are reported as warnings, never as errors, because the worst
case is a suggestion reappearing early.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

import structlog

from haccpctl.domain import advisory
from haccpctl.domain.advisory import OnboardingStep
from haccpctl.domain.types import StepKind
from haccpctl.services._helpers import utc_now
from haccpctl.services.base import BaseService
from haccpctl.services.result import ServiceResult

log = structlog.get_logger(__name__)


def _parse_step(value: StepKind | str | None) -> StepKind | None:
    if value is None or isinstance(value, StepKind):
        return value
    try:
        return StepKind(value.strip().lower())
    except ValueError:
        return None


def step_payload(step: OnboardingStep | None) -> dict[str, Any] | None:
    """JSON-ready view of *step* with its presentation copy."""
    if step is None:
        return None
    definition = step.definition
    return {
        "key": step.key.value,
        "title": definition.title,
        "body": definition.body,
        "cta_label": definition.cta_label,
        "href": definition.href,
        "completed": step.completed_externally,
        "snooze_until": step.snooze_until.isoformat() if step.snooze_until else None,
        "snooze_count": step.snooze_count,
    }


class AdvisoryService(BaseService):
    """Chooses the next onboarding step and records dismissals."""

    def _load_steps(self, tenant: str, warnings: list[str]) -> list[OnboardingStep]:
        try:
            facts = self._evidence.fetch_step_completion_facts(tenant)
        except Exception as exc:
            self._degrade(warnings, "step_facts_unavailable", exc, tenant=tenant)
            facts = {}

        steps: list[OnboardingStep] = []
        for key in StepKind:
            step = OnboardingStep(key=key)
            try:
                state = self._snoozes.get(tenant, key.value)
            except Exception as exc:
                self._degrade(warnings, "snooze_unavailable", exc, step=key.value)
                state = None

            completed = bool(facts.get(key, False))
            if completed:
                if state is not None:
                    self._clear_snooze(tenant, key, warnings)
                step = advisory.reconcile(step, True)
            elif state is not None:
                step = state.apply(step)
            steps.append(step)
        return steps

    def _clear_snooze(self, tenant: str, key: StepKind, warnings: list[str]) -> None:
        try:
            self._snoozes.clear(tenant, key.value)
        except Exception as exc:
            self._degrade(warnings, "snooze_not_cleared", exc, step=key.value)
        else:
            log.debug("snooze.cleared", tenant=tenant, step=key.value)

    def next_step(
        self,
        tenant: str,
        current_context: StepKind | str | None = None,
        *,
        now: datetime | None = None,
    ) -> ServiceResult:
        """Suggest the single most relevant incomplete, un-snoozed step."""
        now = now or utc_now()
        warnings: list[str] = []
        steps = self._load_steps(tenant, warnings)
        chosen = advisory.next_step(steps, _parse_step(current_context), now=now)
        progress, remaining = advisory.setup_progress(steps)

        return ServiceResult(
            ok=True,
            op="next_step",
            data={
                "tenant": tenant,
                "step": step_payload(chosen),
                "progress": progress,
                "remaining": remaining,
                "steps": [
                    {
                        "key": s.key.value,
                        "completed": s.completed_externally,
                        "snoozed": s.is_snoozed(now),
                    }
                    for s in steps
                ],
            },
            warnings=warnings,
        )

    def dismiss(
        self,
        tenant: str,
        step_key: StepKind | str,
        *,
        now: datetime | None = None,
    ) -> ServiceResult:
        """Snooze *step_key* and return the dismissed step plus the next suggestion."""
        key = _parse_step(step_key)
        if key is None:
            return ServiceResult.failure(
                "dismiss",
                "UNKNOWN_STEP",
                f"Unknown setup step: {step_key}",
                valid=[k.value for k in StepKind],
            )

        now = now or utc_now()
        warnings: list[str] = []
        steps = self._load_steps(tenant, warnings)
        current = next(s for s in steps if s.key is key)
        dismissed = advisory.dismiss(current, now)

        persisted = False
        if not dismissed.completed_externally:
            try:
                persisted = self._snoozes.set(
                    tenant, key.value, dismissed.snooze_until, dismissed.snooze_count
                )
            except Exception as exc:
                self._degrade(warnings, "snooze_not_persisted", exc, step=key.value)
            else:
                log.info(
                    "snooze.recorded",
                    tenant=tenant,
                    step=key.value,
                    count=dismissed.snooze_count,
                    applied=persisted,
                )

        updated = [dismissed if s.key is key else s for s in steps]
        following = advisory.next_step(updated, None, now=now)

        return ServiceResult(
            ok=True,
            op="dismiss",
            data={
                "tenant": tenant,
                "dismissed": step_payload(dismissed),
                "persisted": persisted,
                "next": step_payload(following),
            },
            warnings=warnings,
        )
