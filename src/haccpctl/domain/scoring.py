"""Domain scorers and the composite scorer.

Each domain reduces a :class:`DomainSignal` to a bounded sub-score.
The composite sums sub-scores into a 0-100 score and picks exactly one
:class:`Classification` with strict precedence FAIL > SETUP > WARN > OK.

INVARIANT: absence of evidence (``sample_count == 0``) is never read as
passing. Such a domain scores 0 and is flagged ``needs_setup``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from pydantic import BaseModel, Field

from haccpctl.domain.types import DOMAIN_ORDER, Classification, DomainKind

DEFAULT_WEIGHTS: dict[DomainKind, int] = {
    DomainKind.TEMPERATURE: 40,
    DomainKind.TASK_COMPLETION: 20,
    DomainKind.CREDENTIAL_EXPIRY: 20,
    DomainKind.REVIEW_CADENCE: 20,
}

DUE_SOON_PERCENT = 60
MAX_SCORE = 100

# (upper bound inclusive, label)
SCORE_BANDS: tuple[tuple[int, str], ...] = (
    (24, "High risk"),
    (49, "At risk"),
    (74, "Mostly compliant"),
    (MAX_SCORE, "Inspection-ready"),
)


# ---------------------------------------------------------------------------
# Value models
# ---------------------------------------------------------------------------


class DomainSignal(BaseModel):
    """Raw counts for one domain over one evaluation window."""

    model_config = {"frozen": True}

    domain: DomainKind
    sample_count: int = Field(default=0, ge=0)
    fail_count: int = Field(default=0, ge=0)
    due_count: int = Field(default=0, ge=0)
    done_count: int = Field(default=0, ge=0)
    overdue_count: int = Field(default=0, ge=0)
    due_soon_count: int = Field(default=0, ge=0)

    @classmethod
    def empty(cls, domain: DomainKind) -> DomainSignal:
        """A signal with no evidence at all (reads as needs-setup)."""
        return cls(domain=domain)


class DomainResult(BaseModel):
    """Scored outcome for one domain.

    ``hard_fail`` and ``warn`` are derived from the raw signal rather than
    the sub-score, so a domain already floored at 0 still drives severity.
    """

    model_config = {"frozen": True}

    domain: DomainKind
    sub_score: int
    needs_setup: bool
    hard_fail: bool = False
    warn: bool = False


class CompositeResult(BaseModel):
    """Combined 0-100 score with a single classification."""

    model_config = {"frozen": True}

    score: int = Field(ge=0, le=MAX_SCORE)
    classification: Classification
    per_domain: list[DomainResult] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Arithmetic helpers
# ---------------------------------------------------------------------------


def round_half_up(numerator: int, denominator: int) -> int:
    """Round ``numerator / denominator`` half-up using integer arithmetic.

    Examples:
        >>> round_half_up(5, 2)
        3
        >>> round_half_up(20 * 2, 3)
        13
    """
    if denominator <= 0:
        msg = f"denominator must be positive, got {denominator}"
        raise ValueError(msg)
    return (2 * numerator + denominator) // (2 * denominator)


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


# ---------------------------------------------------------------------------
# Domain scorers
# ---------------------------------------------------------------------------


def _score_temperature(signal: DomainSignal, weight: int) -> int:
    # Any failing reading fails the whole domain: no partial credit.
    return 0 if signal.fail_count > 0 else weight


def _score_task_completion(signal: DomainSignal, weight: int) -> int:
    if signal.due_count == 0:
        return weight
    done = clamp(signal.done_count, 0, signal.due_count)
    return round_half_up(weight * done, signal.due_count)


def _score_expiry(signal: DomainSignal, weight: int, due_soon_percent: int) -> int:
    if signal.overdue_count > 0:
        return 0
    if signal.due_soon_count > 0:
        return round_half_up(weight * due_soon_percent, 100)
    return weight


def _is_hard_fail(signal: DomainSignal) -> bool:
    if signal.domain is DomainKind.TEMPERATURE:
        return signal.fail_count > 0
    if signal.domain in (DomainKind.CREDENTIAL_EXPIRY, DomainKind.REVIEW_CADENCE):
        return signal.overdue_count > 0
    return False


def _is_warn(signal: DomainSignal) -> bool:
    if signal.domain is DomainKind.TASK_COMPLETION:
        return signal.due_count > 0 and signal.done_count < signal.due_count
    if signal.domain in (DomainKind.CREDENTIAL_EXPIRY, DomainKind.REVIEW_CADENCE):
        return signal.due_soon_count > 0
    return False


def score_domain(
    signal: DomainSignal,
    weight: int,
    *,
    due_soon_percent: int = DUE_SOON_PERCENT,
) -> DomainResult:
    """Reduce one domain's raw counts to a sub-score in ``[0, weight]``."""
    weight = max(0, weight)
    hard_fail = _is_hard_fail(signal)
    warn = _is_warn(signal)

    if signal.sample_count == 0:
        return DomainResult(
            domain=signal.domain,
            sub_score=0,
            needs_setup=True,
            hard_fail=hard_fail,
            warn=warn,
        )

    match signal.domain:
        case DomainKind.TEMPERATURE:
            sub_score = _score_temperature(signal, weight)
        case DomainKind.TASK_COMPLETION:
            sub_score = _score_task_completion(signal, weight)
        case DomainKind.CREDENTIAL_EXPIRY | DomainKind.REVIEW_CADENCE:
            sub_score = _score_expiry(signal, weight, due_soon_percent)

    return DomainResult(
        domain=signal.domain,
        sub_score=clamp(sub_score, 0, weight),
        needs_setup=False,
        hard_fail=hard_fail,
        warn=warn,
    )


# ---------------------------------------------------------------------------
# Composite scorer
# ---------------------------------------------------------------------------


def classify(*, hard_fail: bool, needs_setup: bool, warn: bool) -> Classification:
    """Apply the fixed precedence FAIL > SETUP > WARN > OK."""
    if hard_fail:
        return Classification.FAIL
    if needs_setup:
        return Classification.SETUP
    if warn:
        return Classification.WARN
    return Classification.OK


def combine(
    results: Iterable[DomainResult],
    weights: Mapping[DomainKind, int] | None = None,
) -> CompositeResult:
    """Combine per-domain results into one :class:`CompositeResult`.

    Never raises. A weighted domain with no result is treated as
    needing setup, so missing inputs degrade toward SETUP, never OK.
    """
    weights = dict(DEFAULT_WEIGHTS if weights is None else weights)
    by_domain: dict[DomainKind, DomainResult] = {}
    for result in results:
        weight = max(0, weights.get(result.domain, 0))
        by_domain[result.domain] = result.model_copy(
            update={"sub_score": clamp(result.sub_score, 0, weight)}
        )

    for domain in weights:
        if domain not in by_domain:
            by_domain[domain] = DomainResult(domain=domain, sub_score=0, needs_setup=True)

    ordered = [by_domain[d] for d in DOMAIN_ORDER if d in by_domain]
    score = clamp(sum(r.sub_score for r in ordered), 0, MAX_SCORE)
    hard_fail = any(r.hard_fail for r in ordered)
    needs_setup = any(r.needs_setup for r in ordered)
    warn = not hard_fail and not needs_setup and any(r.warn for r in ordered)

    return CompositeResult(
        score=score,
        classification=classify(hard_fail=hard_fail, needs_setup=needs_setup, warn=warn),
        per_domain=ordered,
    )


def evaluate(
    signals: Iterable[DomainSignal],
    weights: Mapping[DomainKind, int] | None = None,
    *,
    due_soon_percent: int = DUE_SOON_PERCENT,
) -> CompositeResult:
    """Score every signal and combine. Convenience for callers and tests."""
    weights = dict(DEFAULT_WEIGHTS if weights is None else weights)
    results = [
        score_domain(s, weights.get(s.domain, 0), due_soon_percent=due_soon_percent)
        for s in signals
    ]
    return combine(results, weights)


def score_band(score: int) -> str:
    """Human label for a composite score."""
    for upper, label in SCORE_BANDS:
        if score <= upper:
            return label
    return SCORE_BANDS[-1][1]
