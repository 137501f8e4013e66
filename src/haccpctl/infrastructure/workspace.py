"""Workspace — the single dependency injected into every service.

Owns the snooze database engine and the evidence collaborator for one
working directory. Both are created lazily so ``--help`` and pure
scoring never touch the disk.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from haccpctl.infrastructure.database.engine import init_database
from haccpctl.infrastructure.evidence import EvidenceFile
from haccpctl.infrastructure.snoozes import SqlSnoozeStore

if TYPE_CHECKING:
    from pathlib import Path

    from sqlalchemy.engine import Engine

    from haccpctl.config.settings import HaccpSettings

logger = logging.getLogger(__name__)


class Workspace:
    """Collaborators for one haccpctl working directory."""

    def __init__(self, settings: HaccpSettings) -> None:
        self.settings = settings
        self._engine: Engine | None = None
        self._snoozes: SqlSnoozeStore | None = None
        self._evidence: EvidenceFile | None = None

    @property
    def root(self) -> Path:
        return self.settings.root

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            self._engine = init_database(self.root)
            logger.debug("Opened snooze database under %s", self.root)
        return self._engine

    @property
    def snoozes(self) -> SqlSnoozeStore:
        if self._snoozes is None:
            self._snoozes = SqlSnoozeStore(self.engine)
        return self._snoozes

    @property
    def evidence(self) -> EvidenceFile:
        if self._evidence is None:
            self._evidence = EvidenceFile(self.settings.evidence_path)
        return self._evidence

    def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self._snoozes = None
