"""Root CLI group for passhash with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from passhash import __version__
from passhash.commands import register_commands
from passhash.commands._context import AppContext
from passhash.config.settings import PassHashSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="passhash")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug logs.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for the stored key and tag options.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    data_dir: Path | None,
) -> None:
    """passhash — site passwords from a master key and a site tag."""
    ctx.ensure_object(dict)
    # Unset flags are left out so env vars and passhash.toml still apply.
    flags = {"json_output": json_output, "verbose": verbose, "log_json": log_json}
    settings = PassHashSettings.from_cli(
        config_path=config_path,
        data_dir=data_dir,
        **{name: True for name, value in flags.items() if value},
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
