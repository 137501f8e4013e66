"""SQLite-backed snooze storage keyed by ``(tenant, step_key)``.

Writes are an idempotent upsert. The conflict branch only applies when
the incoming ``snooze_count`` is at least the stored one, so of two
concurrent dismissals the lower count can never overwrite the higher.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import delete, select
from sqlalchemy.dialects.sqlite import insert

from haccpctl.domain.advisory import SnoozeState
from haccpctl.infrastructure.database.schema import step_snoozes

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)


def _parse_ts(raw: str | None) -> datetime | None:
    if not raw:
        return None
    value = datetime.fromisoformat(raw)
    return value if value.tzinfo else value.replace(tzinfo=UTC)


def _format_ts(value: datetime | None) -> str | None:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat()


class SqlSnoozeStore:
    """Snooze store over the ``step_snoozes`` table."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def get(self, tenant: str, step_key: str) -> SnoozeState | None:
        with self._engine.connect() as conn:
            row = conn.execute(
                select(step_snoozes.c.snooze_until, step_snoozes.c.snooze_count).where(
                    step_snoozes.c.tenant == tenant,
                    step_snoozes.c.step_key == step_key,
                )
            ).first()
        if row is None:
            return None
        return SnoozeState(until=_parse_ts(row.snooze_until), count=row.snooze_count)

    def set(self, tenant: str, step_key: str, until: datetime | None, count: int) -> bool:
        """Upsert snooze state. Returns False if a higher count was already stored."""
        stmt = insert(step_snoozes).values(
            tenant=tenant,
            step_key=step_key,
            snooze_until=_format_ts(until),
            snooze_count=count,
            updated=datetime.now(UTC).isoformat(),
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[step_snoozes.c.tenant, step_snoozes.c.step_key],
            set_={
                "snooze_until": stmt.excluded.snooze_until,
                "snooze_count": stmt.excluded.snooze_count,
                "updated": stmt.excluded.updated,
            },
            where=step_snoozes.c.snooze_count <= stmt.excluded.snooze_count,
        )
        with self._engine.begin() as conn:
            result = conn.execute(stmt)
        applied = result.rowcount != 0
        if not applied:
            logger.debug("Stale snooze write ignored for %s/%s", tenant, step_key)
        return applied

    def clear(self, tenant: str, step_key: str) -> None:
        with self._engine.begin() as conn:
            conn.execute(
                delete(step_snoozes).where(
                    step_snoozes.c.tenant == tenant,
                    step_snoozes.c.step_key == step_key,
                )
            )
