"""BaseService — abstract foundation for all haccpctl services.

Every service receives a :class:`Workspace` at construction time. The
workspace provides the evidence collaborator, the snooze store, and the
settings. Either collaborator can be overridden, which is how host
applications plug in their own storage.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from haccpctl.services._helpers import describe_failure

if TYPE_CHECKING:
    from haccpctl.config.settings import HaccpSettings
    from haccpctl.infrastructure.workspace import Workspace
    from haccpctl.services.collaborators import EvidenceSource, SnoozeStore

log = structlog.get_logger("haccpctl.services")


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class ScoringService(BaseService):
            def evaluate(self, tenant: str) -> ServiceResult:
                signal = self._evidence.fetch_domain_signal(...)
                ...
    """

    def __init__(
        self,
        workspace: Workspace,
        *,
        evidence: EvidenceSource | None = None,
        snoozes: SnoozeStore | None = None,
    ) -> None:
        self._workspace = workspace
        self._evidence_override = evidence
        self._snoozes_override = snoozes

    @property
    def _settings(self) -> HaccpSettings:
        return self._workspace.settings

    @property
    def _evidence(self) -> EvidenceSource:
        return self._evidence_override or self._workspace.evidence

    @property
    def _snoozes(self) -> SnoozeStore:
        return self._snoozes_override or self._workspace.snoozes

    def _degrade(
        self,
        warnings: list[str],
        event: str,
        exc: Exception,
        **context: object,
    ) -> None:
        """Record a collaborator failure as a warning instead of raising.

        INVARIANT: collaborator failures degrade the result, never crash it.
        """
        reason = describe_failure(exc)
        log.warning(event, reason=reason, **context)
        detail = " ".join(f"{k}={v}" for k, v in context.items())
        warnings.append(f"{event}: {detail} ({reason})" if detail else f"{event}: {reason}")
