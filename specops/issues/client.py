"""GitHub REST client for issues and milestones."""

import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from specops.issues.exceptions import IssueError
from specops.issues.models import CreatedIssue

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"


class GitHubClient:
    """Minimal client for the GitHub issues API of one repository."""

    def __init__(
        self,
        token: str,
        repository: str,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 20.0,
    ):
        if not token:
            raise IssueError("A GitHub token is required to create issues")
        if "/" not in repository:
            raise IssueError(f"Repository must be in owner/repo form, got '{repository}'")
        self.token = token
        self.repository = repository
        self.base_url = api_url.rstrip("/")
        self.timeout = timeout

    def _get_headers(self) -> dict[str, str]:
        return {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self.token}",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self.base_url}/repos/{self.repository}/{path.lstrip('/')}"
        try:
            with httpx.Client(timeout=self.timeout) as client:
                response = client.request(method, url, headers=self._get_headers(), **kwargs)
        except httpx.HTTPError as e:
            raise IssueError(f"Request to {url} failed: {e}") from e

        if response.is_error:
            try:
                message = response.json().get("message", response.text)
            except (ValueError, AttributeError):
                message = response.text
            raise IssueError(f"GitHub API returned {response.status_code}: {message}")
        try:
            return response.json()
        except ValueError as e:
            raise IssueError(f"GitHub API returned a non-JSON response ({response.status_code}): {e}") from e

    def create_issue(
        self,
        title: str,
        body: str,
        labels: Optional[list[str]] = None,
        assignees: Optional[list[str]] = None,
        milestone: Optional[int] = None,
    ) -> CreatedIssue:
        """Create an issue and return its number, URL and title."""
        payload: dict[str, Any] = {"title": title, "body": body, "labels": labels or []}
        if assignees:
            payload["assignees"] = assignees
        if milestone:
            payload["milestone"] = milestone

        data = self._request("POST", "issues", json=payload)
        try:
            return CreatedIssue(number=data["number"], url=data["html_url"], title=data["title"])
        except (KeyError, TypeError, ValidationError) as e:
            raise IssueError(f"Unexpected issue payload from GitHub API: {e}") from e

    def list_open_milestones(self) -> list[dict[str, Any]]:
        """List the repository's open milestones."""
        milestones = self._request("GET", "milestones", params={"state": "open", "per_page": 100})
        if not isinstance(milestones, list):
            raise IssueError("Unexpected milestone payload from GitHub API: expected a list")
        return milestones
