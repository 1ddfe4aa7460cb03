"""Root CLI group for aacboard with global flags and command registration."""

from __future__ import annotations

from typing import Any

import click

from aacboard import __version__
from aacboard.commands import register_commands
from aacboard.commands._context import AppContext
from aacboard.config.settings import AacSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="aacboard")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Show telemetry spans and debug logs.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--threshold",
    type=click.FloatRange(0.0, 1.0),
    default=None,
    help="Catalog match confidence threshold (overrides [interpret]).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    threshold: float | None,
) -> None:
    """aacboard — context boards for AAC users from promotional phrases."""
    ctx.ensure_object(dict)
    # Only the given keys are passed; the rest of [interpret] still comes from env or TOML.
    overrides: dict[str, Any] = {}
    if threshold is not None:
        overrides["interpret"] = {"confidence_threshold": threshold}
    settings = AacSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        **overrides,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
