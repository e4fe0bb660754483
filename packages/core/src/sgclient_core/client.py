"""HTTP client for the API.

The client owns the transport concerns only: base URL, auth header, query
string encoding and JSON decoding. Per-endpoint methods live in the service
classes under sgclient_core.services, which turn spec values into route
variables and hand them to Client.call().
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urlencode

import requests

from sgclient_core import router
from sgclient_core.options import query_params
from sgclient_core.services.pull_requests import PullRequestsService
from sgclient_core.services.repositories import RepositoriesService
from sgclient_core.services.reviews import ReviewsService

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://sourcegraph.com/.api/"
DEFAULT_USER_AGENT = "sgclient"
DEFAULT_TIMEOUT = 30


class APIError(Exception):
    """Raised when the API responds with an error status."""

    def __init__(self, status_code: int, method: str, url: str, message: str):
        super().__init__(f"{method} {url}: {status_code} {message}")
        self.status_code = status_code
        self.method = method
        self.url = url
        self.message = message


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text.strip()
    if isinstance(body, dict):
        for key in ("Error", "error", "message"):
            if body.get(key):
                return str(body[key])
    return response.text.strip()


class Client:
    """Client for the API.

    Services are exposed as attributes::

        client = Client(token="...")
        repo = client.repositories.get(RepoSpec(uri="github.com/owner/name"))
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        token: str | None = None,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ):
        if not base_url.endswith("/"):
            base_url += "/"
        self.base_url = base_url
        self.token = token
        self.user_agent = user_agent
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()

        self.repositories = RepositoriesService(self)
        self.reviews = ReviewsService(self)
        self.pull_requests = PullRequestsService(self)

    def __enter__(self) -> Client:
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def url(self, route: str, route_vars: dict[str, str] | None = None, opt: Any = None) -> str:
        """Return the absolute URL of a route, with ``opt`` encoded as the query string."""
        url = self.base_url + router.url_path(route, route_vars)
        params = query_params(opt)
        if params:
            url += "?" + urlencode(params)
        return url

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json", "User-Agent": self.user_agent}
        if self.token:
            headers["Authorization"] = f"token {self.token}"
        return headers

    def do(self, method: str, url: str, body: Any = None) -> Any:
        """Send a request and return the decoded JSON body (None for empty responses).

        Raises APIError for 4xx/5xx responses. Transport errors raised by
        requests propagate unchanged.
        """
        logger.debug("%s %s", method, url)
        response = self.session.request(method, url, headers=self._headers(), json=body, timeout=self.timeout)
        logger.debug("%s %s -> %d", method, url, response.status_code)

        if response.status_code >= 400:
            raise APIError(response.status_code, method, url, _error_message(response))
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    def call(
        self,
        route: str,
        route_vars: dict[str, str] | None = None,
        opt: Any = None,
        body: Any = None,
    ) -> Any:
        """Build the URL for ``route`` and send a request with the route's method."""
        method = router.get_route(route).method
        return self.do(method, self.url(route, route_vars, opt), body)
