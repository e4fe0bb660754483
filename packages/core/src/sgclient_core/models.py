"""Typed views of the API payloads that carry derived behaviour.

Most response bodies are returned as decoded JSON (dicts and lists). The
types here wrap the few payloads the client itself reasons about. JSON keys
follow the API's capitalised field names (``URI``, ``RID``, ...), and the
full decoded object is kept in ``data``.
"""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from sgclient_core.specs import RepoSpec, ReviewSpec

logger = logging.getLogger(__name__)


@dataclass
class Repository:
    uri: str
    rid: int = 0
    data: dict[str, Any] = field(default_factory=dict, repr=False)

    def repo_spec(self) -> RepoSpec:
        """Return the RepoSpec that specifies this repository."""
        return RepoSpec(uri=self.uri, rid=self.rid)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Repository:
        return cls(uri=d.get("URI") or "", rid=d.get("RID") or 0, data=d)


@dataclass(frozen=True)
class NewRepositorySpec:
    """Request body for creating a repository from a clone URL."""

    type: str  # VCS type, e.g. "git" or "hg"
    clone_url: str

    def to_dict(self) -> dict[str, str]:
        return {"Type": self.type, "CloneURL": self.clone_url}


@dataclass
class _ImageEmbed:
    name: str
    description: str = ""
    image_url: str = ""
    uncounted_image_url: str = ""
    markdown: str = ""

    def html(self) -> str:
        """Return an <img> tag for embedding the image in a web page."""
        return f'<img src="{html.escape(self.image_url)}" alt="{html.escape(self.name)}">'

    @classmethod
    def from_dict(cls, d: dict[str, Any]):
        return cls(
            name=d.get("Name", ""),
            description=d.get("Description", ""),
            image_url=d.get("ImageURL", ""),
            uncounted_image_url=d.get("UncountedImageURL", ""),
            markdown=d.get("Markdown", ""),
        )


@dataclass
class Badge(_ImageEmbed):
    """A repository badge (e.g. build or docs status)."""


@dataclass
class Counter(_ImageEmbed):
    """A repository counter (e.g. number of views)."""


class ReviewTaskType(str, Enum):
    DIFF_HUNK = "diff-hunk"  # approving diff hunks
    DEF = "def"  # approving added/changed/deleted defs
    COMMENT = "comment"  # resolving comments
    CHECKLIST_ITEM = "checklist-item"  # resolving checklist items
    AFFECTED_REF = "affected-ref"  # approving usages of changed/deleted defs
    EXTERNAL = "external"  # from external services (e.g. CI, coverage)


def _parse_time(value: str | None) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@dataclass
class ReviewTask:
    """A task associated with a code review.

    ``type`` is a ReviewTaskType, or the raw string for types this client
    does not know about yet.
    """

    review_spec: ReviewSpec
    type: ReviewTaskType | str
    assignee_uid: int = 0  # 0 when unassigned
    closed: bool = False
    created_at: datetime | None = None
    data: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> ReviewTask:
        spec = d.get("ReviewSpec") or {}
        repo = spec.get("Repo") or {}
        raw_type = d.get("Type", "")
        try:
            task_type: ReviewTaskType | str = ReviewTaskType(raw_type)
        except ValueError:
            logger.debug("Unknown review task type %r", raw_type)
            task_type = raw_type
        return cls(
            review_spec=ReviewSpec(
                repo=RepoSpec(uri=repo.get("URI") or "", rid=repo.get("RID") or 0),
                number=spec.get("Number") or 0,
            ),
            type=task_type,
            assignee_uid=d.get("AssigneeUID") or 0,
            closed=bool(d.get("Closed", False)),
            created_at=_parse_time(d.get("CreatedAt")),
            data=d,
        )
