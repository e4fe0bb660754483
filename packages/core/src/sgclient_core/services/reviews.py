"""Code review endpoints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from sgclient_core import router
from sgclient_core.models import ReviewTask
from sgclient_core.options import ListOptions

if TYPE_CHECKING:
    from sgclient_core.client import Client
    from sgclient_core.specs import RepoSpec, ReviewSpec, UserSpec


@dataclass
class ReviewListTasksOptions(ListOptions):
    state: str = ""  # "open", "closed", or "all"


@dataclass
class ReviewListTasksByRepoOptions(ReviewListTasksOptions):
    # Login of the user whose tasks to fetch (usually the authenticated user).
    user: str = ""


class ReviewsService:
    def __init__(self, client: Client):
        self.client = client

    def _tasks(self, route: str, route_vars: dict[str, str], opt) -> list[ReviewTask]:
        return [ReviewTask.from_dict(t) for t in self.client.call(route, route_vars, opt) or []]

    def list_tasks(self, review: ReviewSpec, opt: ReviewListTasksOptions | None = None) -> list[ReviewTask]:
        return self._tasks(router.REVIEW_TASKS, review.route_vars(), opt)

    def list_tasks_by_repo(self, repo: RepoSpec, opt: ReviewListTasksByRepoOptions | None = None) -> list[ReviewTask]:
        return self._tasks(router.REPO_REVIEW_TASKS, repo.route_vars(), opt)

    def list_tasks_by_user(self, user: UserSpec, opt: ReviewListTasksOptions | None = None) -> list[ReviewTask]:
        return self._tasks(router.USER_REVIEW_TASKS, user.route_vars(), opt)
