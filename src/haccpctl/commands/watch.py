"""Command: re-run the score on a fixed interval."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

import click
import structlog

from haccpctl.commands._base import HaccpCommand

if TYPE_CHECKING:
    from haccpctl.commands._context import AppContext

log = structlog.get_logger(__name__)


@click.command(
    cls=HaccpCommand,
    examples="""\
  haccpctl watch
  haccpctl watch --interval 30
  haccpctl -q watch --count 10""",
)
@click.option(
    "--interval",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Seconds between evaluations (default: watch.interval_seconds).",
)
@click.option(
    "--count",
    type=click.IntRange(min=1),
    default=None,
    help="Stop after this many evaluations (default: run until interrupted).",
)
@click.pass_obj
def watch(app: AppContext, interval: float | None, count: int | None) -> None:
    """Print a fresh score every INTERVAL seconds."""
    from haccpctl.services.scoring import ScoringService

    interval = interval or app.settings.watch.interval_seconds
    svc = ScoringService(app.workspace)
    runs = 0
    try:
        while True:
            app.workspace.evidence.refresh()
            app.emit(svc.evaluate(app.tenant))
            runs += 1
            if count is not None and runs >= count:
                break
            log.debug("watch.sleep", seconds=interval, runs=runs)
            time.sleep(interval)
    except KeyboardInterrupt:
        log.debug("watch.stopped", runs=runs)
