"""metadata command: print the commit trailer block for a PR."""

from __future__ import annotations

import click
from rich.console import Console

from landgate_cli.commands.check import run_checks
from landgate_cli.data import load_pr_data, parse_now, resolve_config, snapshot_options
from landgate_core.metadata import SCISSORS, MetadataGenerator

# stdout carries only the trailers, so check output goes to stderr.
console = Console(stderr=True)


@click.command("metadata")
@snapshot_options
@click.option(
    "--scissors",
    is_flag=True,
    help="Frame the metadata with scissors lines for pasting into a commit message template.",
)
@click.option(
    "--check/--no-check",
    "run_check",
    default=True,
    show_default=True,
    help="Also run the landability checks and exit 1 if they fail.",
)
@click.pass_context
def metadata_cmd(
    ctx,
    snapshot_path: str,
    readme_path: str | None,
    owner: str | None,
    repo: str | None,
    scissors: bool,
    run_check: bool,
):
    """Generate PR-URL, Fixes, Refs and Reviewed-By trailers for a PR."""
    config = resolve_config(ctx, readme=readme_path, owner=owner, repo=repo)
    data = load_pr_data(config, snapshot_path)

    metadata = MetadataGenerator(data).get_metadata()
    if scissors:
        click.echo(SCISSORS[0])
        click.echo(metadata)
        click.echo(SCISSORS[1])
    else:
        click.echo(metadata)

    if run_check and not run_checks(config, data, parse_now(None), console):
        ctx.exit(1)
