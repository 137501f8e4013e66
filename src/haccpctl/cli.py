"""Root CLI group for haccpctl with global flags and command registration."""

from __future__ import annotations

import click

from haccpctl import __version__
from haccpctl.commands import register_commands
from haccpctl.commands._context import AppContext
from haccpctl.config.settings import HaccpSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="haccpctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option("--tenant", default=None, help="Tenant to evaluate (default: workspace.tenant).")
@click.option("--evidence", default=None, help="Evidence JSON file (default: evidence.path).")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    tenant: str | None,
    evidence: str | None,
) -> None:
    """haccpctl — food-safety compliance scoring and review CLI."""
    ctx.ensure_object(dict)
    settings = HaccpSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        tenant_override=tenant,
        evidence_override=evidence,
    )
    ctx.obj = AppContext(settings)
    ctx.call_on_close(ctx.obj.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
