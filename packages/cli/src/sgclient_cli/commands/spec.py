"""spec command — encode specs into route variables and decode API paths."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from sgclient_cli.params import REPO_SPEC, api_errors
from sgclient_core import router
from sgclient_core.specs import (
    PullRequestSpec,
    RepoRevSpec,
    RepoSpec,
    ReviewSpec,
    parse_person_spec,
    parse_user_spec,
    unmarshal_pull_request_spec,
    unmarshal_repo_rev_spec,
    unmarshal_review_spec,
)

console = Console()


def _vars_table(title: str, route_vars: dict[str, str]) -> Table:
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Variable", style="bold")
    table.add_column("Value")
    for key, value in route_vars.items():
        table.add_row(key, value)
    return table


def _repo_label(repo: RepoSpec) -> str:
    return repo.uri or f"ID {repo.rid}"


@click.group("spec")
def spec_cmd():
    """Encode and decode resource specs."""


@spec_cmd.command("encode")
@click.option("--repo", required=True, type=REPO_SPEC, help="Repository URI (host/owner/name).")
@click.option("--rev", default="", help="Revision: branch, tag or commit ID.")
@click.option("--commit", "commit_id", default="", help="Full commit ID that --rev resolved to.")
@click.option("--review", type=click.IntRange(min=1), default=None, help="Code review number.")
@click.option("--pull", type=click.IntRange(min=1), default=None, help="Pull request number.")
@click.option("--route", "route_name", default=None, help="Also render the path of this route.")
def encode_cmd(
    repo: RepoSpec,
    rev: str,
    commit_id: str,
    review: int | None,
    pull: int | None,
    route_name: str | None,
):
    """Print the route variables (and optionally the path) for a spec."""
    if commit_id and not rev:
        raise click.UsageError("--commit requires --rev (the name the commit ID was resolved from).")
    if review is not None and pull is not None:
        raise click.UsageError("--review and --pull are mutually exclusive.")
    if (review is not None or pull is not None) and rev:
        raise click.UsageError("--rev cannot be combined with --review or --pull.")

    if review is not None:
        spec = ReviewSpec(repo=repo, number=review)
    elif pull is not None:
        spec = PullRequestSpec(repo=repo, number=pull)
    elif rev:
        spec = RepoRevSpec(repo=repo, rev=rev, commit_id=commit_id)
    else:
        spec = repo

    route_vars = spec.route_vars()
    console.print(_vars_table(type(spec).__name__, route_vars))

    if route_name:
        try:
            path = router.url_path(route_name, route_vars)
        except router.UnknownRouteError:
            names = ", ".join(r.name for r in router.ROUTES)
            raise click.BadParameter(f"unknown route {route_name!r}. Known routes: {names}", param_hint="--route")
        except ValueError as e:
            raise click.UsageError(str(e))
        console.print(f"[bold]Path:[/bold] /{path}")


@spec_cmd.command("decode")
@click.argument("path")
@click.option("--method", default="GET", show_default=True, help="HTTP method of the request.")
def decode_cmd(path: str, method: str):
    """Match an API path against the route table and decode its specs."""
    result = router.match(method, path)
    if result is None:
        raise click.ClickException(f"no {method.upper()} route matches {path!r}")
    route_name, route_vars = result

    console.print(_vars_table(f"Route {route_name}", route_vars))

    rows: list[tuple[str, str]] = []
    with api_errors():
        if "Review" in route_vars:
            review = unmarshal_review_spec(route_vars)
            rows += [("Repository", _repo_label(review.repo)), ("Review", str(review.number))]
        elif "Pull" in route_vars:
            pull = unmarshal_pull_request_spec(route_vars)
            rows += [("Repository", _repo_label(pull.repo)), ("Pull request", str(pull.number))]
        elif "RepoSpec" in route_vars:
            repo_rev = unmarshal_repo_rev_spec(route_vars)
            rows.append(("Repository", _repo_label(repo_rev.repo)))
            if repo_rev.rev:
                rows.append(("Rev", repo_rev.rev))
            if repo_rev.commit_id:
                rows.append(("Commit", repo_rev.commit_id))
        if "UserSpec" in route_vars:
            user = parse_user_spec(route_vars["UserSpec"])
            rows.append(("User", user.login or f"UID {user.uid}"))
            if user.domain:
                rows.append(("Domain", user.domain))
        if "PersonSpec" in route_vars:
            person = parse_person_spec(route_vars["PersonSpec"])
            rows.append(("Person", person.email or person.login or f"UID {person.uid}"))

    table = Table(title="Decoded", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    for name, value in rows:
        table.add_row(name, value)
    console.print(table)
