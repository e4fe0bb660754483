"""Repository-related endpoints."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from sgclient_core import router
from sgclient_core.models import Badge, Counter, NewRepositorySpec, Repository
from sgclient_core.options import ListOptions

if TYPE_CHECKING:
    from sgclient_core.client import Client
    from sgclient_core.specs import PersonSpec, RepoRevSpec, RepoSpec


@dataclass
class RepositoryListOptions(ListOptions):
    name: str = ""
    # Search query. When set, sort and direction are ignored by the server.
    query: str = ""
    uris: list[str] = field(default_factory=list, metadata={"query": "URIs", "comma": True})
    built_only: bool = False
    sort: str = ""
    direction: str = ""
    no_fork: bool = False
    owner: str = ""


@dataclass
class RepositoryListCommitsOptions(ListOptions):
    head: str = ""


@dataclass
class RepositoryCompareCommitsOptions:
    head_rev: str = ""


class RepositoriesService:
    """Communicates with the repository-related endpoints of the API.

    Methods taking a RepoRevSpec send both the rev and, when set, its
    resolved commit ID. Pass an empty rev to use the default branch.
    """

    def __init__(self, client: Client):
        self.client = client

    def get(self, repo: RepoSpec) -> Repository:
        return Repository.from_dict(self.client.call(router.REPOSITORY, repo.route_vars()))

    def get_stats(self, repo_rev: RepoRevSpec) -> dict[str, Any]:
        """Return statistics about a repository at a commit.

        Some statistics are per-commit and some are global to the repository.
        """
        return self.client.call(router.REPOSITORY_STATS, repo_rev.route_vars())

    def get_or_create(self, repo: RepoSpec) -> Repository:
        """Fetch a repository, creating it from its external host if it is not known yet."""
        return Repository.from_dict(self.client.call(router.REPOSITORIES_GET_OR_CREATE, repo.route_vars()))

    def get_settings(self, repo: RepoSpec) -> dict[str, Any]:
        return self.client.call(router.REPOSITORY_SETTINGS, repo.route_vars())

    def update_settings(self, repo: RepoSpec, settings: dict[str, Any]) -> None:
        self.client.call(router.REPOSITORY_SETTINGS_UPDATE, repo.route_vars(), body=settings)

    def refresh_profile(self, repo: RepoSpec) -> None:
        """Update repository metadata from its external host (such as GitHub)."""
        self.client.call(router.REPOSITORY_REFRESH_PROFILE, repo.route_vars())

    def refresh_vcs_data(self, repo: RepoSpec) -> None:
        """Fetch the latest VCS data for the repository from its origin."""
        self.client.call(router.REPOSITORY_REFRESH_VCS_DATA, repo.route_vars())

    def compute_stats(self, repo: RepoSpec) -> None:
        self.client.call(router.REPOSITORY_COMPUTE_STATS, repo.route_vars())

    def create(self, new_repo: NewRepositorySpec) -> Repository:
        return Repository.from_dict(self.client.call(router.REPOSITORIES_CREATE, body=new_repo.to_dict()))

    def get_readme(self, repo_rev: RepoRevSpec) -> dict[str, Any]:
        return self.client.call(router.REPOSITORY_README, repo_rev.route_vars())

    def list(self, opt: RepositoryListOptions | None = None) -> list[Repository]:
        return [Repository.from_dict(r) for r in self.client.call(router.REPOSITORIES, opt=opt) or []]

    def list_commits(self, repo: RepoSpec, opt: RepositoryListCommitsOptions | None = None) -> list[dict]:
        return self.client.call(router.REPO_COMMITS, repo.route_vars(), opt) or []

    def get_commit(self, repo_rev: RepoRevSpec) -> dict[str, Any]:
        return self.client.call(router.REPO_COMMIT, repo_rev.route_vars())

    def compare_commits(self, base: RepoRevSpec, opt: RepositoryCompareCommitsOptions | None = None) -> dict[str, Any]:
        return self.client.call(router.REPO_COMPARE_COMMITS, base.route_vars(), opt)

    def list_branches(self, repo: RepoSpec, opt: ListOptions | None = None) -> list[dict]:
        return self.client.call(router.REPO_BRANCHES, repo.route_vars(), opt) or []

    def list_tags(self, repo: RepoSpec, opt: ListOptions | None = None) -> list[dict]:
        return self.client.call(router.REPO_TAGS, repo.route_vars(), opt) or []

    def list_badges(self, repo: RepoSpec) -> list[Badge]:
        return [Badge.from_dict(b) for b in self.client.call(router.REPOSITORY_BADGES, repo.route_vars()) or []]

    def list_counters(self, repo: RepoSpec) -> list[Counter]:
        return [Counter.from_dict(c) for c in self.client.call(router.REPOSITORY_COUNTERS, repo.route_vars()) or []]

    def list_authors(self, repo_rev: RepoRevSpec, opt: ListOptions | None = None) -> list[dict]:
        """List people who authored code in the repository at the given revision."""
        return self.client.call(router.REPOSITORY_AUTHORS, repo_rev.route_vars(), opt) or []

    def list_clients(self, repo: RepoSpec, opt: ListOptions | None = None) -> list[dict]:
        """List people who use code from the repository."""
        return self.client.call(router.REPOSITORY_CLIENTS, repo.route_vars(), opt) or []

    def list_dependencies(self, repo_rev: RepoRevSpec, opt: ListOptions | None = None) -> list[dict]:
        return self.client.call(router.REPOSITORY_DEPENDENCIES, repo_rev.route_vars(), opt) or []

    def list_dependents(self, repo: RepoSpec, opt: ListOptions | None = None) -> list[dict]:
        return self.client.call(router.REPOSITORY_DEPENDENTS, repo.route_vars(), opt) or []

    def list_by_contributor(self, person: PersonSpec, opt: ListOptions | None = None) -> list[dict]:
        """List repositories that a person has contributed to."""
        return self.client.call(router.PERSON_REPOSITORY_CONTRIBUTIONS, person.route_vars(), opt) or []

    def list_by_client(self, person: PersonSpec, opt: ListOptions | None = None) -> list[dict]:
        """List repositories whose code a person uses."""
        return self.client.call(router.PERSON_REPOSITORY_DEPENDENCIES, person.route_vars(), opt) or []

    def list_by_refd_author(self, person: PersonSpec, opt: ListOptions | None = None) -> list[dict]:
        """List repositories that use code written by a person."""
        return self.client.call(router.PERSON_REPOSITORY_DEPENDENTS, person.route_vars(), opt) or []
