"""Issue creation for specops.

This package provides:
- exceptions: IssueError
- models: IssueOptions, IssueRequest, CreatedIssue, IssueCreationResult
- client: GitHubClient
- creator: create_issues, resolve_milestone, parse_comma_separated_list
"""

from specops.issues.exceptions import IssueError
from specops.issues.models import (
    CreatedIssue,
    IssueCreationResult,
    IssueOptions,
    IssueRequest,
)
from specops.issues.client import DEFAULT_API_URL, GitHubClient
from specops.issues.creator import (
    DRY_RUN_URL,
    create_issues,
    parse_comma_separated_list,
    resolve_milestone,
)


__all__ = [
    "IssueError",
    "CreatedIssue",
    "IssueCreationResult",
    "IssueOptions",
    "IssueRequest",
    "DEFAULT_API_URL",
    "GitHubClient",
    "DRY_RUN_URL",
    "create_issues",
    "parse_comma_separated_list",
    "resolve_milestone",
]
