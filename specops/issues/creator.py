"""Issue creation.

Contains:
- create_issues: Create one issue per rendered file, collecting per-item results
- resolve_milestone: Turn a milestone name or number into a milestone number
- parse_comma_separated_list: Split a comma-separated input into values
"""

import logging
from typing import Optional

from specops.issues.client import GitHubClient
from specops.issues.exceptions import IssueError
from specops.issues.models import (
    CreatedIssue,
    IssueCreationResult,
    IssueOptions,
    IssueRequest,
)

logger = logging.getLogger(__name__)

DRY_RUN_URL = "(dry run)"


def _log_dry_run(request: IssueRequest, options: IssueOptions) -> None:
    # The body is never logged, it may contain sensitive diff content
    logger.info("Would create issue for: %s", request.file_path)
    logger.info("   Title: %s", request.rendered.title)
    logger.info("   Labels: %s", ", ".join(options.labels))
    if options.assignees:
        logger.info("   Assignees: %s", ", ".join(options.assignees))
    if options.milestone:
        logger.info("   Milestone: %s", options.milestone)


def create_issues(
    client: Optional[GitHubClient],
    requests: list[IssueRequest],
    options: IssueOptions,
    dry_run: bool = False,
) -> list[IssueCreationResult]:
    """Create an issue for each request.

    A failure for one file is recorded in its result and does not stop the
    remaining files. In dry-run mode the client is never used.

    Args:
        client: GitHub client (may be None in dry-run mode).
        requests: Rendered issues in file order.
        options: Labels, assignees and milestone.
        dry_run: Log the would-be requests instead of creating issues.

    Returns:
        One result per request, in order.
    """
    results: list[IssueCreationResult] = []

    if dry_run:
        logger.info("Dry run mode - no issues will be created")
        for request in requests:
            _log_dry_run(request, options)
            results.append(IssueCreationResult(
                file_path=request.file_path,
                success=True,
                issue=CreatedIssue(number=0, url=DRY_RUN_URL, title=request.rendered.title),
            ))
        return results

    for request in requests:
        try:
            if client is None:
                raise IssueError("No GitHub client configured")
            logger.info("Creating issue for: %s", request.file_path)
            issue = client.create_issue(
                title=request.rendered.title,
                body=request.rendered.body,
                labels=options.labels,
                assignees=options.assignees,
                milestone=options.milestone,
            )
            logger.info("Created issue #%d: %s", issue.number, issue.url)
            results.append(IssueCreationResult(file_path=request.file_path, success=True, issue=issue))
        except IssueError as e:
            logger.warning("Failed to create issue for %s: %s", request.file_path, e)
            results.append(IssueCreationResult(file_path=request.file_path, success=False, error=str(e)))

    return results


def resolve_milestone(client: Optional[GitHubClient], milestone: Optional[str]) -> Optional[int]:
    """Resolve a milestone input to its number.

    Numeric values are used as-is. Names are matched case-insensitively
    against the titles of open milestones.

    Args:
        client: GitHub client used for name lookups.
        milestone: Milestone number or title.

    Returns:
        The milestone number, or None if empty or not found.
    """
    if not milestone or not milestone.strip():
        return None

    value = milestone.strip()
    if value.isdigit():
        return int(value)

    if client is None:
        logger.warning("Cannot resolve milestone '%s' without a GitHub client", value)
        return None

    try:
        milestones = client.list_open_milestones()
    except IssueError as e:
        logger.warning("Failed to resolve milestone: %s", e)
        return None

    for item in milestones:
        if str(item.get("title", "")).lower() == value.lower():
            logger.debug("Resolved milestone '%s' to number %s", value, item["number"])
            return int(item["number"])

    logger.warning("Milestone '%s' not found", value)
    return None


def parse_comma_separated_list(value: Optional[str]) -> list[str]:
    """Split a comma-separated string into trimmed, non-empty items."""
    if not value or not value.strip():
        return []
    return [item.strip() for item in value.split(",") if item.strip()]
