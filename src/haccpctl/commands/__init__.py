"""Subcommand modules for haccpctl.

Provides register_commands() which uses deferred imports to keep
``haccpctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the command group and standalone commands on the root CLI group."""
    # --- Groups ---
    from haccpctl.commands.advise import advise

    cli.add_command(advise)

    # --- Standalone commands ---
    from haccpctl.commands.review import review
    from haccpctl.commands.score import score
    from haccpctl.commands.watch import watch

    cli.add_command(score)
    cli.add_command(review)
    cli.add_command(watch)
