"""CLI entry point for landgate.

Commands:
  check    : decide whether a PR is ready to land
  metadata : print the PR-URL / Fixes / Refs / Reviewed-By trailer block
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
import yaml
from rich.console import Console
from rich.logging import RichHandler

from landgate_cli.commands.check import check_cmd
from landgate_cli.commands.metadata import metadata_cmd


def _configure_logging(verbose: bool) -> None:
    """Send library debug traces to stderr when --verbose is given."""
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


@click.group()
@click.version_option(
    version=importlib.metadata.version("landgate"),
    prog_name="landgate",
)
@click.option(
    "--config",
    "config_path",
    default=".landgate.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="LANDGATE_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Pre-merge gate and commit metadata generator for pull requests."""
    from landgate_core.config import load_config

    ctx.ensure_object(dict)
    _configure_logging(verbose)

    try:
        ctx.obj["config"] = load_config(config_path)
    except (ValueError, yaml.YAMLError) as e:
        raise click.UsageError(f"Could not load {config_path}: {e}") from e


main.add_command(check_cmd)
main.add_command(metadata_cmd)
