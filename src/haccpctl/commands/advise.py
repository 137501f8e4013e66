"""Command group: setup suggestions and dismissals."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from haccpctl.commands._base import HaccpGroup
from haccpctl.domain.types import StepKind
from haccpctl.services.advisory import AdvisoryService

if TYPE_CHECKING:
    from haccpctl.commands._context import AppContext

_STEP_CHOICE = click.Choice([k.value for k in StepKind], case_sensitive=False)

_ADVISE_EXAMPLES = """\
  haccpctl advise next
  haccpctl advise next --context routines
  haccpctl advise dismiss cleaning
  haccpctl --json advise next"""


@click.group(cls=HaccpGroup, examples=_ADVISE_EXAMPLES)
@click.pass_obj
def advise(app: AppContext) -> None:
    """Suggest the next setup step."""


@advise.command(
    "next",
    examples="""\
  haccpctl advise next
  haccpctl advise next --context locations
  haccpctl -q advise next""",
)
@click.option(
    "--context",
    "current_context",
    type=_STEP_CHOICE,
    default=None,
    help="Step the user is looking at; prefers the step after it.",
)
@click.pass_obj
def next_cmd(app: AppContext, current_context: str | None) -> None:
    """Show the single most relevant incomplete step."""
    app.emit(AdvisoryService(app.workspace).next_step(app.tenant, current_context))


@advise.command(
    examples="""\
  haccpctl advise dismiss cleaning
  haccpctl --tenant kitchen-1 advise dismiss team"""
)
@click.argument("step")
@click.pass_obj
def dismiss(app: AppContext, step: str) -> None:
    """Snooze STEP with escalating backoff (24h, 72h, then 168h)."""
    app.emit(AdvisoryService(app.workspace).dismiss(app.tenant, step))
