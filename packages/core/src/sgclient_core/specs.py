"""Spec values that identify API resources and their route-variable encoding.

A spec identifies a resource (a repository, a repository at a revision, a
code review, a user) without carrying its data. Every spec encodes into a
flat ``dict[str, str]`` of route variables that the router substitutes into
a URL path, and decodes back from the variables parsed out of a path.

Two failure classes are kept apart:
  SpecPreconditionError — the caller tried to encode a spec that can never
                          be valid (e.g. an empty RepoSpec). A bug.
  SpecDecodeError       — route variables or a path component received from
                          outside are malformed. Recoverable.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace

# Prefix of a repository path component that carries a numeric ID instead of a URI.
REPO_ID_PREFIX = "R$"

# Prefix of a user/person path component that carries a numeric UID.
UID_PREFIX = "$"

# Separates the unresolved rev from its resolved commit ID in the "Rev" variable.
REV_COMMIT_SEP = "==="

_DECIMAL_RE = re.compile(r"[0-9]+")


class SpecPreconditionError(AssertionError):
    """Raised when a spec that violates its own invariants is encoded.

    Signals a bug in the calling code. Library code never catches it.
    """


class SpecDecodeError(ValueError):
    """Raised when route variables or a path component cannot be decoded."""

    def __init__(self, message: str, value: str = ""):
        super().__init__(message)
        self.value = value


def _parse_positive_int(value: str, what: str) -> int:
    if not _DECIMAL_RE.fullmatch(value):
        raise SpecDecodeError(f"invalid {what} {value!r}: not a decimal number", value)
    n = int(value)
    if n <= 0:
        raise SpecDecodeError(f"invalid {what} {value!r}: must be positive", value)
    return n


# --------------------------------------------------------------------------- #
# Repositories                                                                #
# --------------------------------------------------------------------------- #


@dataclass(frozen=True)
class RepoSpec:
    """Specifies a repository by URI (e.g. ``github.com/owner/name``) or numeric ID.

    If ``uri`` is non-empty it takes precedence over ``rid``.
    """

    uri: str = ""
    rid: int = 0

    def path_component(self) -> str:
        """Return the single URL path component that specifies the repository."""
        if self.uri:
            return self.uri
        if self.rid > 0:
            return f"{REPO_ID_PREFIX}{self.rid}"
        raise SpecPreconditionError("empty RepoSpec")

    def route_vars(self) -> dict[str, str]:
        """Return route variables for constructing repository routes.

        Only the URI form is routable; a spec holding just a numeric ID is
        rejected rather than silently encoded as an empty variable.
        """
        if not self.uri:
            if self.rid:
                raise SpecPreconditionError(
                    f"RepoSpec with RID {self.rid} and no URI: numeric repository IDs are not supported in routes"
                )
            raise SpecPreconditionError("empty RepoSpec")
        return {"RepoSpec": self.uri}


def parse_repo_spec(path_component: str) -> RepoSpec:
    """Parse a string produced by RepoSpec.path_component()."""
    if not path_component:
        raise SpecDecodeError("empty repository spec", path_component)
    if path_component.startswith(REPO_ID_PREFIX):
        rid = _parse_positive_int(path_component[len(REPO_ID_PREFIX) :], "repository ID")
        return RepoSpec(rid=rid)
    return RepoSpec(uri=path_component)


def unmarshal_repo_spec(route_vars: dict[str, str]) -> RepoSpec:
    """Build a RepoSpec from route variables produced by RepoSpec.route_vars()."""
    return parse_repo_spec(route_vars.get("RepoSpec", ""))


@dataclass(frozen=True)
class RepoRevSpec:
    """Specifies a repository at a revision.

    ``rev`` is the unresolved revision (branch, tag, abbreviated commit ID;
    empty means the default branch). ``commit_id`` is the full commit ID that
    ``rev`` resolved to, and may only be set together with ``rev``.

    When both are set the "Rev" route variable becomes ``rev===commit_id``
    (e.g. ``master===af4cd6``). Handlers keep the readable name for building
    URLs while serving every call of one operation from the same commit, even
    if the branch moves in the meantime.
    """

    repo: RepoSpec
    rev: str = ""
    commit_id: str = ""

    def route_vars(self) -> dict[str, str]:
        """Return route variables for constructing routes to a repository revision."""
        if self.commit_id and not self.rev:
            raise SpecPreconditionError(f"invalid empty Rev but non-empty CommitID ({self.commit_id})")
        v = self.repo.route_vars()
        if self.rev:
            v["Rev"] = self.rev
            if self.commit_id:
                v["Rev"] += REV_COMMIT_SEP + self.commit_id
        return v

    def resolved(self, commit_id: str) -> RepoRevSpec:
        """Return a copy of this spec pinned to ``commit_id``."""
        return replace(self, commit_id=commit_id)

    def unpinned(self) -> RepoRevSpec:
        """Return a copy of this spec that only names the unresolved rev."""
        return replace(self, commit_id="")


def unmarshal_repo_rev_spec(route_vars: dict[str, str]) -> RepoRevSpec:
    """Build a RepoRevSpec from route variables produced by RepoRevSpec.route_vars()."""
    repo = unmarshal_repo_spec(route_vars)

    rev, _, commit_id = route_vars.get("Rev", "").partition(REV_COMMIT_SEP)
    if not rev and commit_id:
        raise SpecDecodeError(f"invalid empty Rev but non-empty CommitID ({commit_id!r})", commit_id)

    return RepoRevSpec(repo=repo, rev=rev, commit_id=commit_id)


# --------------------------------------------------------------------------- #
# Numbered resources within a repository                                      #
# --------------------------------------------------------------------------- #


def _numbered_route_vars(repo: RepoSpec, key: str, number: int) -> dict[str, str]:
    if number <= 0:
        raise SpecPreconditionError(f"invalid {key} number {number}: must be positive")
    v = repo.route_vars()
    v[key] = str(number)
    return v


def _unmarshal_numbered(route_vars: dict[str, str], key: str) -> tuple[RepoSpec, int]:
    repo = unmarshal_repo_spec(route_vars)
    number = _parse_positive_int(route_vars.get(key, ""), f"{key} number")
    return repo, number


@dataclass(frozen=True)
class IssueSpec:
    """Specifies an issue by repository and sequence number."""

    repo: RepoSpec
    number: int

    def route_vars(self) -> dict[str, str]:
        return _numbered_route_vars(self.repo, "Issue", self.number)


def unmarshal_issue_spec(route_vars: dict[str, str]) -> IssueSpec:
    repo, number = _unmarshal_numbered(route_vars, "Issue")
    return IssueSpec(repo=repo, number=number)


@dataclass(frozen=True)
class ReviewSpec:
    """Specifies a code review.

    Reviews and issues share a numbering space within a repository.
    """

    repo: RepoSpec  # base repository of the code review
    number: int  # sequence number, unique within the repository

    def route_vars(self) -> dict[str, str]:
        """Return route variables for generating code review URLs."""
        return _numbered_route_vars(self.repo, "Review", self.number)

    def issue_spec(self) -> IssueSpec:
        """Return the spec of the issue associated with this review (same repo, same number)."""
        return IssueSpec(repo=self.repo, number=self.number)


def unmarshal_review_spec(route_vars: dict[str, str]) -> ReviewSpec:
    """Build a ReviewSpec from route variables produced by ReviewSpec.route_vars()."""
    repo, number = _unmarshal_numbered(route_vars, "Review")
    return ReviewSpec(repo=repo, number=number)


@dataclass(frozen=True)
class PullRequestSpec:
    """Specifies a pull request by repository and number."""

    repo: RepoSpec
    number: int

    def route_vars(self) -> dict[str, str]:
        return _numbered_route_vars(self.repo, "Pull", self.number)

    def issue_spec(self) -> IssueSpec:
        return IssueSpec(repo=self.repo, number=self.number)


def unmarshal_pull_request_spec(route_vars: dict[str, str]) -> PullRequestSpec:
    repo, number = _unmarshal_numbered(route_vars, "Pull")
    return PullRequestSpec(repo=repo, number=number)


# --------------------------------------------------------------------------- #
# Users and people                                                            #
# --------------------------------------------------------------------------- #


def _check_login(login: str, kind: str) -> None:
    # A leading UID_PREFIX would decode as a UID.
    if login.startswith(UID_PREFIX):
        raise SpecPreconditionError(f"invalid {kind} login {login!r}: must not start with {UID_PREFIX!r}")


@dataclass(frozen=True)
class UserSpec:
    """Specifies a registered user by login (optionally qualified by domain) or UID."""

    login: str = ""
    uid: int = 0
    domain: str = ""

    def path_component(self) -> str:
        if self.login:
            _check_login(self.login, "UserSpec")
            if self.domain:
                return f"{self.login}@{self.domain}"
            return self.login
        if self.uid > 0:
            return f"{UID_PREFIX}{self.uid}"
        raise SpecPreconditionError("empty UserSpec")

    def route_vars(self) -> dict[str, str]:
        return {"UserSpec": self.path_component()}


def parse_user_spec(path_component: str) -> UserSpec:
    """Parse a string produced by UserSpec.path_component()."""
    if not path_component:
        raise SpecDecodeError("empty user spec", path_component)
    if path_component.startswith(UID_PREFIX):
        return UserSpec(uid=_parse_positive_int(path_component[len(UID_PREFIX) :], "user ID"))
    login, _, domain = path_component.partition("@")
    if not login:
        raise SpecDecodeError(f"invalid user spec {path_component!r}: empty login", path_component)
    return UserSpec(login=login, domain=domain)


def unmarshal_user_spec(route_vars: dict[str, str]) -> UserSpec:
    return parse_user_spec(route_vars.get("UserSpec", ""))


@dataclass(frozen=True)
class PersonSpec:
    """Specifies a person, who may or may not be a registered user.

    Email is preferred, then login, then UID.
    """

    email: str = ""
    login: str = ""
    uid: int = 0

    def path_component(self) -> str:
        if self.email:
            return self.email
        if self.login:
            _check_login(self.login, "PersonSpec")
            return self.login
        if self.uid > 0:
            return f"{UID_PREFIX}{self.uid}"
        raise SpecPreconditionError("empty PersonSpec")

    def route_vars(self) -> dict[str, str]:
        return {"PersonSpec": self.path_component()}


def parse_person_spec(path_component: str) -> PersonSpec:
    """Parse a string produced by PersonSpec.path_component()."""
    if not path_component:
        raise SpecDecodeError("empty person spec", path_component)
    if path_component.startswith(UID_PREFIX):
        return PersonSpec(uid=_parse_positive_int(path_component[len(UID_PREFIX) :], "person ID"))
    if "@" in path_component:
        return PersonSpec(email=path_component)
    return PersonSpec(login=path_component)


def unmarshal_person_spec(route_vars: dict[str, str]) -> PersonSpec:
    return parse_person_spec(route_vars.get("PersonSpec", ""))
