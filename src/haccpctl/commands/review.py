"""Command: four-weekly repeat-offender review."""

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
  haccpctl review
  haccpctl review --to 2026-10-28
  haccpctl review --days 14
  haccpctl review --text > review.txt
  haccpctl --json review""",
)
@click.option(
    "--to",
    "to_date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Last day of the window (default: today).",
)
@click.option("--days", type=int, default=None, help="Window length in days (default: 28).")
@click.option("--text", "text_only", is_flag=True, help="Print only the plain line report.")
@click.pass_obj
def review(app: AppContext, to_date: datetime | None, days: int | None, text_only: bool) -> None:
    """Summarize repeat failures, misses and training drift."""
    from haccpctl.services.review import ReviewService

    result = ReviewService(app.workspace).summarize(
        app.tenant,
        to=to_date.date() if to_date else None,
        days=days,
    )
    if text_only and result.ok:
        click.echo("\n".join(result.data["lines"]))
        for warning in result.warnings:
            click.echo(f"WARNING: {warning}", err=True)
        return
    app.emit(result)
