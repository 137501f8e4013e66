"""Click base classes for haccpctl commands.

Every command and group accepts an ``examples`` string. When set, an eager
``--examples`` flag prints it under a heading naming the full command path
and exits, so ``--help`` stays short.
"""

from __future__ import annotations

from typing import Any

import click


def _show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    click.echo(f"Examples for '{ctx.command_path}':\n")
    click.echo(ctx.command.examples)
    ctx.exit(0)


class _ExamplesMixin:
    """Adds the ``examples`` keyword and the ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=_show_examples,
                    help="Show usage examples.",
                )
            )


class HaccpCommand(_ExamplesMixin, click.Command):
    """A leaf command such as ``score`` or ``review``."""


class HaccpGroup(_ExamplesMixin, click.Group):
    """A command group whose subcommands are HaccpCommands by default."""

    command_class = HaccpCommand
