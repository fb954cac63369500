"""Root CLI group for chainvertex with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from chainvertex import __version__
from chainvertex.commands import register_commands
from chainvertex.commands._context import AppContext
from chainvertex.config.settings import ChainSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="chainvertex")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--state",
    "state_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Snapshot file to restore from and save to.",
)
@click.option("--caller", default=None, help="Caller identity for ownership checks.")
@click.option("--sync", is_flag=True, help="Force synchronous event dispatch.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    state_file: Path | None,
    caller: str | None,
    sync: bool,
) -> None:
    """chainvertex — owned vertices and typed, weighted edges."""
    ctx.ensure_object(dict)
    settings = ChainSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    store_overrides: dict[str, object] = {}
    if state_file is not None:
        store_overrides["state_file"] = state_file.resolve()
    if caller is not None:
        store_overrides["caller"] = caller
    overrides: dict[str, dict[str, object]] = {}
    if store_overrides:
        overrides["store"] = store_overrides
    if sync:
        overrides["events"] = {"sync": True}
    if overrides:
        settings = settings.with_overrides(**overrides)

    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
