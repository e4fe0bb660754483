"""review command — list code review tasks."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from sgclient_cli.params import REPO_SPEC, api_errors
from sgclient_core.services.reviews import ReviewListTasksOptions
from sgclient_core.specs import RepoSpec, ReviewSpec

console = Console()


@click.group("review")
def review_cmd():
    """Work with code reviews."""


@review_cmd.command("tasks")
@click.option("--repo", required=True, type=REPO_SPEC, help="Repository URI (host/owner/name).")
@click.option("--number", required=True, type=click.IntRange(min=1), help="Code review number.")
@click.option(
    "--state",
    type=click.Choice(["open", "closed", "all"]),
    default=None,
    help="Only show tasks in this state.",
)
@click.pass_context
def tasks_cmd(ctx, repo: RepoSpec, number: int, state: str | None):
    """List the tasks of a code review."""
    client = ctx.obj["client"]
    review = ReviewSpec(repo=repo, number=number)
    with api_errors():
        tasks = client.reviews.list_tasks(review, ReviewListTasksOptions(state=state or ""))
    if not tasks:
        console.print("[yellow]No review tasks found.[/yellow]")
        return

    table = Table(title=f"Review #{number} — {repo.uri}", show_header=True, header_style="bold cyan")
    table.add_column("Type", style="bold")
    table.add_column("State", width=8)
    table.add_column("Assignee", justify="right")
    table.add_column("Created At", width=20)

    for task in tasks:
        task_type = getattr(task.type, "value", task.type)
        state_label = "[dim]closed[/dim]" if task.closed else "[green]open[/green]"
        assignee = str(task.assignee_uid) if task.assignee_uid else "-"
        created = task.created_at.strftime("%Y-%m-%d %H:%M:%S") if task.created_at else ""
        table.add_row(task_type, state_label, assignee, created)

    console.print(table)
