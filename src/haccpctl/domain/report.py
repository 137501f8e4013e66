"""Line-oriented text rendering of an :class:`AggregateSummary`.

The line structure is a compatibility contract for downstream document
renderers (PDF, email, terminal): title, period, blank line, three
numbered sections, then ``Recommendations``.
"""

from __future__ import annotations

from haccpctl.domain.aggregate import AggregateSummary, RepeatGroup
from haccpctl.domain.types import DomainKind

DEFAULT_TITLE = "Four-Weekly Review (SFBB)"


def _repeat_lines(noun: str, groups: list[RepeatGroup]) -> list[str]:
    if not groups:
        return [f"- Repeat {noun}: none detected"]
    lines = [f"- Repeat {noun} (2+):"]
    for g in groups:
        lines.append(f"  • {g.description} → {g.occurrences} (last {g.last_seen.isoformat()})")
    return lines


def summary_to_lines(summary: AggregateSummary, *, title: str = DEFAULT_TITLE) -> list[str]:
    """Render *summary* as report lines. Pure and deterministic."""
    window = summary.window
    temps = summary.totals[DomainKind.TEMPERATURE]
    cleaning = summary.totals[DomainKind.TASK_COMPLETION]
    training = summary.totals[DomainKind.CREDENTIAL_EXPIRY]

    lines = [
        title,
        f"Period: {window.start.isoformat()} to {window.end.isoformat()} ({window.days} days)",
        "",
        "1) Temperature checks",
        f"- Total logged: {temps.total}",
        f"- Failures: {temps.failures} ({temps.rate_pct}%)",
        *_repeat_lines("failures", summary.groups_for(DomainKind.TEMPERATURE)),
        "",
        "2) Cleaning",
        f"- Due: {cleaning.total}",
        f"- Completed: {cleaning.passes}",
        f"- Missed: {cleaning.failures}",
        *_repeat_lines("misses", summary.groups_for(DomainKind.TASK_COMPLETION)),
        "",
        "3) Training drift",
        f"- Records: {training.total}",
        f"- Expired: {training.failures}",
        f"- Due soon ({summary.due_soon_days}d): {training.due_soon}",
        *_repeat_lines("expiries", summary.groups_for(DomainKind.CREDENTIAL_EXPIRY)),
        "",
        "Recommendations",
    ]
    lines.extend(f"- {rec}" for rec in summary.recommendations)
    return lines


def summary_to_text(summary: AggregateSummary, *, title: str = DEFAULT_TITLE) -> str:
    return "\n".join(summary_to_lines(summary, title=title))
