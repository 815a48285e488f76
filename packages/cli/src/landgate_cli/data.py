"""Shared option handling for commands that load a PR snapshot."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import click

from landgate_core.gh.collaborators import parse_collaborators
from landgate_core.gh.snapshot import SnapshotError, build_pr_data, load_snapshot
from landgate_core.models import PRData


def snapshot_options(fn):
    """Options every snapshot-driven command accepts."""
    fn = click.option("--repo", default=None, help="Repository name. Overrides config file.")(fn)
    fn = click.option("--owner", default=None, help="Repository owner. Overrides config file.")(fn)
    fn = click.option(
        "--readme",
        "readme_path",
        default=None,
        help="README listing TSC members and collaborators. Overrides config file.",
    )(fn)
    fn = click.option(
        "--snapshot",
        "snapshot_path",
        required=True,
        help="JSON file with the PR, its comments, reviews and commits.",
    )(fn)
    return fn


def resolve_config(ctx: click.Context, **overrides) -> dict:
    """Apply non-None command options on top of the config loaded by the group."""
    config = dict(ctx.obj["config"]) if ctx.obj and "config" in ctx.obj else {}
    for key, value in overrides.items():
        if value is not None:
            config[key] = value
    return config


def load_pr_data(config: dict, snapshot_path: str) -> PRData:
    """Read the README and snapshot from disk. Raises ClickException on bad input."""
    readme_path = Path(config["readme"])
    if not readme_path.exists():
        raise click.ClickException(f"README not found: {readme_path}")
    try:
        collaborators = parse_collaborators(readme_path.read_text())
        payload = load_snapshot(snapshot_path)
        return build_pr_data(payload, collaborators, config["owner"], config["repo"])
    except (SnapshotError, ValueError, FileNotFoundError) as e:
        raise click.ClickException(str(e)) from e


def parse_now(value: str | None) -> datetime:
    if value is None:
        return datetime.now(timezone.utc)
    try:
        now = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as e:
        raise click.BadParameter(f"{value!r} is not an ISO-8601 timestamp.", param_hint="--now") from e
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now
