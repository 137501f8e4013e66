"""Command: composite compliance score."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

import click

from haccpctl.commands._base import HaccpCommand

if TYPE_CHECKING:
    from haccpctl.commands._context import AppContext


@click.command(
    cls=HaccpCommand,
    examples="""\
  haccpctl score
  haccpctl --tenant kitchen-1 score
  haccpctl score --as-of 2026-10-01
  haccpctl -q score
  haccpctl --json score""",
)
@click.option(
    "--as-of",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Score the window ending on this date (default: today).",
)
@click.pass_obj
def score(app: AppContext, as_of: datetime | None) -> None:
    """Score the tenant across all compliance domains."""
    from haccpctl.services.scoring import ScoringService

    svc = ScoringService(app.workspace)
    app.emit(svc.evaluate(app.tenant, as_of=as_of.date() if as_of else None))
