"""ReviewService — four-weekly rolling review for one tenant.

Fetches events per reported domain over the window, aggregates them,
and renders the line report. An event fetch failure for one domain is
treated as no activity for that domain and reported as a warning.
"""

from __future__ import annotations

from datetime import date, timedelta

import structlog

from haccpctl.domain.aggregate import REPORTED_DOMAINS, AggregateSummary, EvaluationWindow, Event
from haccpctl.domain.aggregate import summarize as summarize_events
from haccpctl.domain.report import summary_to_lines
from haccpctl.domain.types import DomainKind
from haccpctl.services._helpers import today
from haccpctl.services.base import BaseService
from haccpctl.services.result import ServiceResult

log = structlog.get_logger(__name__)


def count_issues(summary: AggregateSummary) -> int:
    """Repeat temperature and cleaning groups plus expired and due-soon training."""
    totals = summary.totals
    training = totals[DomainKind.CREDENTIAL_EXPIRY]
    return (
        totals[DomainKind.TEMPERATURE].repeat_groups
        + totals[DomainKind.TASK_COMPLETION].repeat_groups
        + training.failures
        + training.due_soon
    )


class ReviewService(BaseService):
    """Builds the rolling repeat-offender review."""

    def summarize(
        self,
        tenant: str,
        *,
        to: date | None = None,
        days: int | None = None,
    ) -> ServiceResult:
        """Aggregate the window ending on *to* (default: today)."""
        cfg = self._settings.review
        if days is not None and days < 1:
            return ServiceResult.failure(
                "review",
                "INVALID_WINDOW",
                f"Review window must span at least one day, got {days}",
                days=days,
            )
        window = EvaluationWindow.ending(to or today(), days or cfg.window_days)
        warnings: list[str] = []

        events: list[Event] = []
        for domain in REPORTED_DOMAINS:
            try:
                events.extend(self._evidence.fetch_events(tenant, window, domain))
            except Exception as exc:
                self._degrade(warnings, "events_unavailable", exc, domain=domain.value)

        summary = summarize_events(
            window,
            events,
            max_groups=cfg.max_repeat_groups,
            due_soon_days=cfg.due_soon_days,
        )

        try:
            started_on = self._evidence.tenant_started_on(tenant)
        except Exception as exc:
            self._degrade(warnings, "start_date_unavailable", exc, tenant=tenant)
            started_on = None

        # Unknown start date: never block the review indefinitely.
        eligible = started_on is None or (window.end - started_on).days >= cfg.eligibility_days
        next_due_on = (
            (started_on + timedelta(days=cfg.eligibility_days)).isoformat() if started_on else None
        )
        issues = count_issues(summary) if eligible else 0

        log.debug(
            "review.complete",
            tenant=tenant,
            events=len(events),
            repeat_groups=len(summary.repeat_groups),
            issues=issues,
        )

        return ServiceResult(
            ok=True,
            op="review",
            data={
                "tenant": tenant,
                "summary": summary.model_dump(mode="json", by_alias=True),
                "lines": summary_to_lines(summary, title=cfg.title),
                "issues": issues,
                "eligible": eligible,
                "next_due_on": next_due_on,
            },
            warnings=warnings,
        )
