# =============================================================================
# core/github.py  —  Minimal GitHub REST client
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Wraps the six GitHub REST endpoints the triage tools need behind plain
#   methods that return decoded JSON.  No projection happens here; that is
#   core/triage.py's job.
#
# ENDPOINTS:
#   GET   /user/repos                          list_repos_for_authenticated_user
#   GET   /search/issues                       search_issues
#   GET   /repos/{owner}/{repo}/pulls/{n}      get_pull
#   GET   /repos/{owner}/{repo}/pulls/{n}/files list_pull_files
#   POST  /repos/{owner}/{repo}/issues/{n}/labels add_labels
#   PATCH /repos/{owner}/{repo}/issues/{n}     update_issue
#
# ERRORS:
#   Every HTTP or transport failure is raised as UpstreamError.  Nothing is
#   retried.  Timeouts are httpx's defaults.
# =============================================================================

import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx

from core.config import DEFAULT_GITHUB_API_URL
from core.exceptions import UpstreamError

logger = logging.getLogger(__name__)

API_VERSION = "2022-11-28"
USER_AGENT = "github-triage-mcp"


def _segment(value: str) -> str:
    return quote(str(value), safe="")


def _error_message(response: httpx.Response) -> str:
    """GitHub puts a human-readable reason in the ``message`` field."""
    try:
        payload = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return response.reason_phrase


class GitHubClient:
    """Synchronous GitHub REST client authenticated with a bearer token."""

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: str = DEFAULT_GITHUB_API_URL,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": API_VERSION,
            "User-Agent": USER_AGENT,
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._http = httpx.Client(base_url=base_url, headers=headers, transport=transport)

    def close(self) -> None:
        self._http.close()

    @property
    def closed(self) -> bool:
        return self._http.is_closed

    def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = self._http.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            message = _error_message(e.response)
            logger.warning("GitHub %s %s -> %s: %s", method, path, status, message)
            raise UpstreamError(
                f"GitHub API {method} {path} failed ({status}): {message}",
                status_code=status,
            ) from e
        except httpx.HTTPError as e:
            logger.warning("GitHub %s %s failed: %s", method, path, e)
            raise UpstreamError(f"GitHub API {method} {path} failed: {e}") from e
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(f"GitHub API {method} {path} returned invalid JSON") from e

    # ---- repositories -------------------------------------------------------

    def list_repos_for_authenticated_user(self, per_page: int, sort: str = "updated") -> list[dict]:
        return self._request(
            "GET",
            "/user/repos",
            params={"per_page": per_page, "sort": sort, "direction": "desc"},
        )

    # ---- search -------------------------------------------------------------

    def search_issues(self, q: str, per_page: int) -> dict:
        return self._request("GET", "/search/issues", params={"q": q, "per_page": per_page})

    # ---- pull requests ------------------------------------------------------

    def get_pull(self, owner: str, repo: str, number: int) -> dict:
        return self._request("GET", f"/repos/{_segment(owner)}/{_segment(repo)}/pulls/{number}")

    def list_pull_files(self, owner: str, repo: str, number: int, per_page: int = 50) -> list[dict]:
        return self._request(
            "GET",
            f"/repos/{_segment(owner)}/{_segment(repo)}/pulls/{number}/files",
            params={"per_page": per_page},
        )

    # ---- issues -------------------------------------------------------------

    def add_labels(self, owner: str, repo: str, number: int, labels: list[str]) -> list[dict]:
        """Add labels to an issue.  GitHub returns the issue's full label list."""
        return self._request(
            "POST",
            f"/repos/{_segment(owner)}/{_segment(repo)}/issues/{number}/labels",
            json={"labels": labels},
        )

    def update_issue(self, owner: str, repo: str, number: int, **fields: Any) -> dict:
        return self._request(
            "PATCH",
            f"/repos/{_segment(owner)}/{_segment(repo)}/issues/{number}",
            json=fields,
        )
