"""repo command — fetch repositories and repository data."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from sgclient_cli.params import REPO_SPEC, api_errors
from sgclient_core.specs import RepoRevSpec, RepoSpec

console = Console()


@click.group("repo")
def repo_cmd():
    """Fetch repositories, commits, branches and badges."""


@repo_cmd.command("get")
@click.option("--repo", required=True, type=REPO_SPEC, help="Repository URI (host/owner/name).")
@click.pass_context
def get_cmd(ctx, repo: RepoSpec):
    """Show a repository."""
    client = ctx.obj["client"]
    with api_errors():
        repository = client.repositories.get(repo)
    console.print_json(data=repository.data)


@repo_cmd.command("commit")
@click.option("--repo", required=True, type=REPO_SPEC, help="Repository URI (host/owner/name).")
@click.option("--rev", default="", help="Revision: branch, tag or commit ID. Defaults to the default branch.")
@click.option("--commit", "commit_id", default="", help="Full commit ID that --rev resolved to.")
@click.pass_context
def commit_cmd(ctx, repo: RepoSpec, rev: str, commit_id: str):
    """Show the commit a revision points to.

    Passing --commit pins the request to that commit, so the result does not
    change if the branch named by --rev moves.
    """
    if commit_id and not rev:
        raise click.UsageError("--commit requires --rev (the name the commit ID was resolved from).")
    client = ctx.obj["client"]
    with api_errors():
        commit = client.repositories.get_commit(RepoRevSpec(repo=repo, rev=rev, commit_id=commit_id))
    console.print_json(data=commit)


@repo_cmd.command("branches")
@click.option("--repo", required=True, type=REPO_SPEC, help="Repository URI (host/owner/name).")
@click.pass_context
def branches_cmd(ctx, repo: RepoSpec):
    """List branches of a repository."""
    client = ctx.obj["client"]
    with api_errors():
        branches = client.repositories.list_branches(repo)
    if not branches:
        console.print("[yellow]No branches found.[/yellow]")
        return

    table = Table(title=f"Branches — {repo.uri}", show_header=True, header_style="bold cyan")
    table.add_column("Name", style="bold")
    table.add_column("Head")
    for b in branches:
        table.add_row(b.get("Name", ""), (b.get("Head") or "")[:12])
    console.print(table)


@repo_cmd.command("badges")
@click.option("--repo", required=True, type=REPO_SPEC, help="Repository URI (host/owner/name).")
@click.option("--html", "as_html", is_flag=True, help="Print embeddable HTML instead of a table.")
@click.pass_context
def badges_cmd(ctx, repo: RepoSpec, as_html: bool):
    """List badges of a repository."""
    client = ctx.obj["client"]
    with api_errors():
        badges = client.repositories.list_badges(repo)
    if not badges:
        console.print("[yellow]No badges found.[/yellow]")
        return

    if as_html:
        for badge in badges:
            click.echo(badge.html())
        return

    table = Table(title=f"Badges — {repo.uri}", show_header=True, header_style="bold cyan")
    table.add_column("Name", style="bold")
    table.add_column("Description", max_width=50)
    table.add_column("Image URL")
    for badge in badges:
        table.add_row(badge.name, badge.description, badge.image_url)
    console.print(table)
