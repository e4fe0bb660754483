"""pull command — fetch pull requests."""

from __future__ import annotations

import click
from rich.console import Console

from sgclient_cli.params import REPO_SPEC, api_errors
from sgclient_core.specs import PullRequestSpec, RepoSpec

console = Console()


@click.group("pull")
def pull_cmd():
    """Work with pull requests."""


@pull_cmd.command("get")
@click.option("--repo", required=True, type=REPO_SPEC, help="Repository URI (host/owner/name).")
@click.option("--number", required=True, type=click.IntRange(min=1), help="Pull request number.")
@click.pass_context
def get_cmd(ctx, repo: RepoSpec, number: int):
    """Show a pull request."""
    client = ctx.obj["client"]
    with api_errors():
        pull = client.pull_requests.get(PullRequestSpec(repo=repo, number=number))
    console.print_json(data=pull)
