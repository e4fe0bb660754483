"""Named API routes and the mapping between route variables and URL paths.

Each route has a path template with ``{Var}`` placeholders. ``{Rev}`` is
special: it renders as ``@<rev>`` when a revision is given and disappears
otherwise, so the same route serves both "repo at default branch" and
"repo at rev" requests:

    repos/{RepoSpec}{Rev}/.readme
      {"RepoSpec": "r.com/x"}                          → repos/r.com/x/.readme
      {"RepoSpec": "r.com/x", "Rev": "master===af4cd6"} → repos/r.com/x@master===af4cd6/.readme
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import quote, unquote

_PLACEHOLDER_RE = re.compile(r"\{(\w+)\}")

# Characters left unescaped in route variable values so paths stay readable.
_SAFE_CHARS = "/@$=:+"

# RepoSpec and Rev are split into segments by the path pattern below. "@" ends a
# RepoSpec and a leading "." marks an endpoint suffix, so both are escaped in
# their values.
_SEGMENTED_SAFE_CHARS = {"RepoSpec": "/$=:+", "Rev": _SAFE_CHARS}

# Path segments of a repository URI or rev. A segment starting with "." ends
# them, which is how "/.readme" and friends are told apart from the URI.
_SEGMENTS = r"[^/.@][^/@]*(?:/[^/.@][^/@]*)*"

_VAR_PATTERNS = {
    "RepoSpec": _SEGMENTS,
    "Rev": r"[^/.][^/]*(?:/[^/.][^/]*)*",
    "Review": r"[0-9]+",
    "Issue": r"[0-9]+",
    "Pull": r"[0-9]+",
    "UserSpec": r"[^/]+",
    "PersonSpec": r"[^/]+",
}

# Variables that are optional in a path and rendered with a prefix when present.
_OPTIONAL_PREFIX = {"Rev": "@"}


class UnknownRouteError(KeyError):
    """Raised when a route name is not in the route table."""


@dataclass(frozen=True)
class Route:
    name: str
    method: str
    template: str

    @property
    def variables(self) -> list[str]:
        return _PLACEHOLDER_RE.findall(self.template)


# Route names
REPOSITORIES = "repos"
REPOSITORIES_CREATE = "repos.create"
REPOSITORY = "repo"
REPOSITORIES_GET_OR_CREATE = "repo.get-or-create"
REPOSITORY_SETTINGS = "repo.settings"
REPOSITORY_SETTINGS_UPDATE = "repo.settings.update"
REPOSITORY_REFRESH_PROFILE = "repo.refresh-profile"
REPOSITORY_REFRESH_VCS_DATA = "repo.refresh-vcs-data"
REPOSITORY_STATS = "repo.stats"
REPOSITORY_COMPUTE_STATS = "repo.compute-stats"
REPOSITORY_README = "repo.readme"
REPO_COMMITS = "repo.commits"
REPO_COMMIT = "repo.commit"
REPO_COMPARE_COMMITS = "repo.compare-commits"
REPO_BRANCHES = "repo.branches"
REPO_TAGS = "repo.tags"
REPOSITORY_BADGES = "repo.badges"
REPOSITORY_COUNTERS = "repo.counters"
REPOSITORY_AUTHORS = "repo.authors"
REPOSITORY_CLIENTS = "repo.clients"
REPOSITORY_DEPENDENCIES = "repo.dependencies"
REPOSITORY_DEPENDENTS = "repo.dependents"
REPO_PULL_REQUESTS = "repo.pulls"
REPO_PULL_REQUEST = "repo.pull"
REPO_PULL_REQUEST_COMMENTS = "repo.pull.comments"
REPO_REVIEW_TASKS = "repo.review-tasks"
REVIEW_TASKS = "review.tasks"
PERSON_REPOSITORY_CONTRIBUTIONS = "person.repo-contributions"
PERSON_REPOSITORY_DEPENDENCIES = "person.repo-dependencies"
PERSON_REPOSITORY_DEPENDENTS = "person.repo-dependents"
USER_REVIEW_TASKS = "user.review-tasks"

ROUTES: list[Route] = [
    Route(REPOSITORIES, "GET", "repos"),
    Route(REPOSITORIES_CREATE, "POST", "repos"),
    Route(REPOSITORY, "GET", "repos/{RepoSpec}"),
    Route(REPOSITORIES_GET_OR_CREATE, "PUT", "repos/{RepoSpec}"),
    Route(REPOSITORY_SETTINGS, "GET", "repos/{RepoSpec}/.settings"),
    Route(REPOSITORY_SETTINGS_UPDATE, "PUT", "repos/{RepoSpec}/.settings"),
    Route(REPOSITORY_REFRESH_PROFILE, "PUT", "repos/{RepoSpec}/.externalprofile"),
    Route(REPOSITORY_REFRESH_VCS_DATA, "PUT", "repos/{RepoSpec}/.vcsdata"),
    Route(REPOSITORY_STATS, "GET", "repos/{RepoSpec}{Rev}/.stats"),
    Route(REPOSITORY_COMPUTE_STATS, "PUT", "repos/{RepoSpec}/.stats"),
    Route(REPOSITORY_README, "GET", "repos/{RepoSpec}{Rev}/.readme"),
    Route(REPO_COMMITS, "GET", "repos/{RepoSpec}/.commits"),
    Route(REPO_COMMIT, "GET", "repos/{RepoSpec}{Rev}/.commit"),
    Route(REPO_COMPARE_COMMITS, "GET", "repos/{RepoSpec}{Rev}/.compare"),
    Route(REPO_BRANCHES, "GET", "repos/{RepoSpec}/.branches"),
    Route(REPO_TAGS, "GET", "repos/{RepoSpec}/.tags"),
    Route(REPOSITORY_BADGES, "GET", "repos/{RepoSpec}/.badges"),
    Route(REPOSITORY_COUNTERS, "GET", "repos/{RepoSpec}/.counters"),
    Route(REPOSITORY_AUTHORS, "GET", "repos/{RepoSpec}{Rev}/.authors"),
    Route(REPOSITORY_CLIENTS, "GET", "repos/{RepoSpec}/.clients"),
    Route(REPOSITORY_DEPENDENCIES, "GET", "repos/{RepoSpec}{Rev}/.dependencies"),
    Route(REPOSITORY_DEPENDENTS, "GET", "repos/{RepoSpec}/.dependents"),
    Route(REPO_PULL_REQUESTS, "GET", "repos/{RepoSpec}/.pulls"),
    Route(REPO_PULL_REQUEST, "GET", "repos/{RepoSpec}/.pulls/{Pull}"),
    Route(REPO_PULL_REQUEST_COMMENTS, "GET", "repos/{RepoSpec}/.pulls/{Pull}/.comments"),
    Route(REPO_REVIEW_TASKS, "GET", "repos/{RepoSpec}/.review-tasks"),
    Route(REVIEW_TASKS, "GET", "repos/{RepoSpec}/.reviews/{Review}/.tasks"),
    Route(PERSON_REPOSITORY_CONTRIBUTIONS, "GET", "people/{PersonSpec}/.repo-contributions"),
    Route(PERSON_REPOSITORY_DEPENDENCIES, "GET", "people/{PersonSpec}/.repo-dependencies"),
    Route(PERSON_REPOSITORY_DEPENDENTS, "GET", "people/{PersonSpec}/.repo-dependents"),
    Route(USER_REVIEW_TASKS, "GET", "users/{UserSpec}/.review-tasks"),
]

_BY_NAME = {r.name: r for r in ROUTES}


def get_route(name: str) -> Route:
    try:
        return _BY_NAME[name]
    except KeyError:
        raise UnknownRouteError(name) from None


def _quote_value(var: str, value: str) -> str:
    if var not in _SEGMENTED_SAFE_CHARS:
        return quote(value, safe=_SAFE_CHARS)
    segments = quote(value, safe=_SEGMENTED_SAFE_CHARS[var]).split("/")
    return "/".join("%2E" + s[1:] if s.startswith(".") else s for s in segments)


def url_path(name: str, route_vars: dict[str, str] | None = None) -> str:
    """Substitute route variables into the named route's template.

    Returns a relative path (no leading slash) suitable for joining onto the
    API base URL. A repository URI like ``github.com/org/.github`` is encoded
    as ``github.com/org/%2Egithub`` so that match() reads it back unchanged.
    """
    route = get_route(name)
    route_vars = route_vars or {}

    def _sub(m: re.Match) -> str:
        var = m.group(1)
        value = route_vars.get(var, "")
        if var in _OPTIONAL_PREFIX:
            return _OPTIONAL_PREFIX[var] + _quote_value(var, value) if value else ""
        if not value:
            raise ValueError(f"route {name!r} requires variable {var!r}")
        return _quote_value(var, value)

    return _PLACEHOLDER_RE.sub(_sub, route.template)


def _compile(route: Route) -> re.Pattern:
    parts = []
    pos = 0
    for m in _PLACEHOLDER_RE.finditer(route.template):
        parts.append(re.escape(route.template[pos : m.start()]))
        var = m.group(1)
        group = f"(?P<{var}>{_VAR_PATTERNS[var]})"
        if var in _OPTIONAL_PREFIX:
            group = f"(?:{re.escape(_OPTIONAL_PREFIX[var])}{group})?"
        parts.append(group)
        pos = m.end()
    parts.append(re.escape(route.template[pos:]))
    return re.compile("".join(parts))


_COMPILED = [(route, _compile(route)) for route in ROUTES]


def match(method: str, path: str) -> tuple[str, dict[str, str]] | None:
    """Match a request path against the route table.

    Returns ``(route_name, route_vars)`` for the first route whose method and
    template match, or None. Route variable values are unquoted; optional
    variables that are absent from the path are omitted from the result.
    """
    path = path.lstrip("/")
    method = method.upper()
    for route, pattern in _COMPILED:
        if route.method != method:
            continue
        m = pattern.fullmatch(path)
        if m:
            return route.name, {k: unquote(v) for k, v in m.groupdict().items() if v is not None}
    return None
