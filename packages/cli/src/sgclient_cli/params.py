"""Shared click parameter types and error handling for commands."""

from __future__ import annotations

from contextlib import contextmanager

import click

from sgclient_core.client import APIError
from sgclient_core.specs import RepoSpec, SpecDecodeError, parse_repo_spec


class RepoSpecParamType(click.ParamType):
    """Parses a repository path component (``host/owner/name``) into a RepoSpec.

    Numeric IDs (``R$123``) are rejected because routes only carry URIs.
    """

    name = "repo"

    def convert(self, value, param, ctx) -> RepoSpec:
        if isinstance(value, RepoSpec):
            return value
        try:
            repo = parse_repo_spec(value)
        except SpecDecodeError as e:
            self.fail(str(e), param, ctx)
        if not repo.uri:
            self.fail(f"{value!r}: numeric repository IDs are not supported, use the repository URI", param, ctx)
        return repo


REPO_SPEC = RepoSpecParamType()


@contextmanager
def api_errors():
    """Convert API and decode errors into click errors at the command boundary."""
    try:
        yield
    except APIError as e:
        raise click.ClickException(f"API error {e.status_code}: {e.message}") from e
    except SpecDecodeError as e:
        raise click.ClickException(str(e)) from e
