"""Pull request endpoints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from sgclient_core import router
from sgclient_core.options import ListOptions

if TYPE_CHECKING:
    from sgclient_core.client import Client
    from sgclient_core.specs import PullRequestSpec, RepoSpec


@dataclass
class PullRequestListOptions(ListOptions):
    state: str = ""  # "open", "closed", or "all"


@dataclass
class PullRequestListCommentsOptions(ListOptions):
    pass


class PullRequestsService:
    def __init__(self, client: Client):
        self.client = client

    def get(self, pull: PullRequestSpec) -> dict[str, Any]:
        return self.client.call(router.REPO_PULL_REQUEST, pull.route_vars())

    def list_by_repository(self, repo: RepoSpec, opt: PullRequestListOptions | None = None) -> list[dict]:
        return self.client.call(router.REPO_PULL_REQUESTS, repo.route_vars(), opt) or []

    def list_comments(
        self, pull: PullRequestSpec, opt: PullRequestListCommentsOptions | None = None
    ) -> list[dict]:
        """List the review comments on a pull request."""
        return self.client.call(router.REPO_PULL_REQUEST_COMMENTS, pull.route_vars(), opt) or []
