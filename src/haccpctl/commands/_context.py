"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. Provides the lazily opened Workspace and the
single place where results are printed and exit codes decided.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from haccpctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from haccpctl.config.settings import HaccpSettings
    from haccpctl.infrastructure.workspace import Workspace
    from haccpctl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The workspace is created on first use so ``--help`` and ``--version``
    never open the snooze database or read evidence.
    """

    def __init__(self, settings: HaccpSettings) -> None:
        self.settings = settings
        self._workspace: Workspace | None = None

        from haccpctl.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose, log_json=settings.log_json, tenant=settings.tenant
        )

    @property
    def workspace(self) -> Workspace:
        if self._workspace is None:
            from haccpctl.infrastructure.workspace import Workspace

            self._workspace = Workspace(self.settings)
        return self._workspace

    @property
    def tenant(self) -> str:
        return self.settings.tenant

    def close(self) -> None:
        if self._workspace is not None:
            self._workspace.close()

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: stdout. Warnings go to stderr in human and quiet modes;
          in JSON mode they are part of the payload.
        * Failure: stderr, exit code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
