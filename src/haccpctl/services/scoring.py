"""ScoringService — composite compliance score for one tenant.

Each domain signal is fetched independently. A failed fetch is scored as
an empty signal, so the domain reads as needing setup: the evaluation
degrades toward SETUP, never toward OK, and never raises.
"""

from __future__ import annotations

from datetime import date

import structlog

from haccpctl.domain.aggregate import EvaluationWindow
from haccpctl.domain.scoring import DomainSignal, combine, score_band, score_domain
from haccpctl.domain.types import DOMAIN_ORDER
from haccpctl.services._helpers import today
from haccpctl.services.base import BaseService
from haccpctl.services.result import ServiceResult

log = structlog.get_logger(__name__)


class ScoringService(BaseService):
    """Evaluates the composite score and classification."""

    def evaluate(self, tenant: str, *, as_of: date | None = None) -> ServiceResult:
        """Fetch every domain signal for *tenant*, score, and combine."""
        cfg = self._settings.scoring
        window = EvaluationWindow.ending(as_of or today(), cfg.window_days)
        warnings: list[str] = []

        results = []
        for domain in DOMAIN_ORDER:
            try:
                signal = self._evidence.fetch_domain_signal(tenant, domain, window)
            except Exception as exc:
                self._degrade(warnings, "signal_unavailable", exc, domain=domain.value)
                signal = DomainSignal.empty(domain)
            weight = cfg.weights.get(domain, 0)
            results.append(score_domain(signal, weight, due_soon_percent=cfg.due_soon_percent))

        composite = combine(results, cfg.weights)
        log.debug(
            "evaluate.complete",
            tenant=tenant,
            score=composite.score,
            classification=composite.classification.value,
        )

        return ServiceResult(
            ok=True,
            op="evaluate",
            data={
                "tenant": tenant,
                "window": window.model_dump(mode="json", by_alias=True),
                "band": score_band(composite.score),
                **composite.model_dump(mode="json"),
            },
            warnings=warnings,
        )
