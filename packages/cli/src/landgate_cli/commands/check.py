"""check command: decide whether a PR is ready to land."""

from __future__ import annotations

import click
from rich.console import Console

from landgate_cli.console_logger import ConsoleLogger
from landgate_cli.data import load_pr_data, parse_now, resolve_config, snapshot_options
from landgate_core.checker import PRChecker

console = Console()


def run_checks(config: dict, data, now, console: Console = console) -> bool:
    console.print(f"\n[bold]Checking {data.pr.url}[/bold]")
    landable = PRChecker(ConsoleLogger(console), data, config).check_all(now)
    if landable:
        console.print("[green]This PR is ready to land.[/green]")
    else:
        console.print("[red]This PR is not ready to land.[/red]")
    return landable


@click.command("check")
@snapshot_options
@click.option(
    "--now",
    "now_str",
    default=None,
    help="Evaluate as of this ISO-8601 instant instead of the current time.",
)
@click.pass_context
def check_cmd(
    ctx,
    snapshot_path: str,
    readme_path: str | None,
    owner: str | None,
    repo: str | None,
    now_str: str | None,
):
    """Check reviews, wait time, CI runs and commit authors of a PR.

    Exits with status 1 when any check fails.
    """
    config = resolve_config(ctx, readme=readme_path, owner=owner, repo=repo)
    now = parse_now(now_str)
    data = load_pr_data(config, snapshot_path)

    if not run_checks(config, data, now):
        ctx.exit(1)
