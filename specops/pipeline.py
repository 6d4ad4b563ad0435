"""End-to-end specops run.

Contains:
- RunResult: Aggregate outcome of a run
- build_client: Create the GitHub client for a run
- run_pipeline: detect -> match -> diff -> render -> create
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from specops.config import EventKind, RepositoryContext, Settings
from specops.git import (
    ChangedFile,
    generate_diffs,
    get_changed_files,
    get_commit_info,
    resolve_base,
)
from specops.issues import (
    GitHubClient,
    IssueCreationResult,
    IssueOptions,
    IssueRequest,
    create_issues,
    resolve_milestone,
)
from specops.matching import filter_changed_files
from specops.templates import JinjaTemplateEngine, TemplateEngine, render_issue

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """What a run detected and created."""

    files: list[ChangedFile] = field(default_factory=list)
    results: list[IssueCreationResult] = field(default_factory=list)
    dry_run: bool = False
    skipped: bool = False

    @property
    def successes(self) -> list[IssueCreationResult]:
        return [r for r in self.results if r.success and r.issue]

    @property
    def failures(self) -> list[IssueCreationResult]:
        return [r for r in self.results if not r.success]

    @property
    def created_numbers(self) -> list[int]:
        return [r.issue.number for r in self.successes]

    @property
    def is_total_failure(self) -> bool:
        """True when files were found but not a single issue was created."""
        return bool(self.files) and not self.successes and not self.dry_run

    def outputs(self) -> dict[str, str]:
        """Run outputs, keyed by output name."""
        return {
            "files-detected": json.dumps([f.path for f in self.files]),
            "files-count": str(len(self.files)),
            "issues-created": json.dumps(self.created_numbers),
            "issues-count": str(len(self.successes)),
        }


def build_client(context: RepositoryContext, dry_run: bool) -> Optional[GitHubClient]:
    """Create the GitHub client for the run.

    Dry runs without a token get no client.

    Raises:
        IssueError: If a real run lacks a token or repository.
    """
    token = context.token.get_secret_value()
    if dry_run and not token:
        return None
    return GitHubClient(token=token, repository=context.repository, api_url=context.api_url)


def run_pipeline(
    settings: Settings,
    context: RepositoryContext,
    repo_root: Path,
    client: Optional[GitHubClient] = None,
    engine: Optional[TemplateEngine] = None,
) -> RunResult:
    """Run the full pipeline for one trigger.

    Args:
        settings: Operator options.
        context: Trigger and repository identity.
        repo_root: Repository root directory.
        client: GitHub client; built from the context when omitted.
        engine: Template engine; JinjaTemplateEngine when omitted.

    Returns:
        The RunResult. Callers decide whether a total failure is fatal.

    Raises:
        GitError: If changed files cannot be enumerated at all.
        TemplateError: If a template is invalid.
        IssueError: If a GitHub client is needed but cannot be built.
    """
    kind = context.event_kind
    if kind == EventKind.UNSUPPORTED:
        logger.warning(
            "specops is designed for 'push' and 'pull_request' events. "
            "Current event: '%s'. Exiting gracefully.",
            context.event_name,
        )
        return RunResult(dry_run=settings.dry_run, skipped=True)

    logger.info("specops running on '%s' event", context.event_name)
    match_options = settings.match_options()
    logger.info("Looking for files matching: %s", ", ".join(match_options.patterns))
    if match_options.exclude_patterns:
        logger.info("   Excluding: %s", ", ".join(match_options.exclude_patterns))

    base = resolve_base(context.base_ref if kind == EventKind.PULL_REQUEST else None, cwd=repo_root)
    files = filter_changed_files(get_changed_files(base, cwd=repo_root), match_options)

    if not files:
        logger.info("No specification files changed. Nothing to do.")
        return RunResult(dry_run=settings.dry_run)

    logger.info("Found %d changed specification file(s):", len(files))
    for f in files:
        logger.info("   - %s (%s)", f.path, f.change_type.value)

    diffs = generate_diffs(files, base, settings.diff_options(), cwd=repo_root)

    commit = get_commit_info(cwd=repo_root)
    metadata = context.to_metadata(
        commit_message=commit.message,
        commit_date=commit.date or datetime.now(timezone.utc).isoformat(),
        author=commit.author,
    )

    engine = engine or JinjaTemplateEngine()
    render_options = settings.render_options()
    requests = [
        IssueRequest(
            rendered=render_issue(d, render_options, metadata, repo_root, engine=engine),
            file_path=d.file.path,
        )
        for d in diffs
    ]

    if client is None:
        client = build_client(context, settings.dry_run)

    issue_options = IssueOptions(
        labels=settings.labels,
        assignees=settings.assignees,
        milestone=resolve_milestone(client, settings.milestone),
    )
    results = create_issues(client, requests, issue_options, dry_run=settings.dry_run)
    result = RunResult(files=files, results=results, dry_run=settings.dry_run)

    logger.info("Summary:")
    logger.info("   Files detected: %d", len(result.files))
    logger.info("   Issues created: %d", len(result.successes))
    if result.failures:
        logger.warning("   Failed to create: %d", len(result.failures))
        for failure in result.failures:
            logger.warning("      - %s: %s", failure.file_path, failure.error)
    if settings.dry_run:
        logger.info("   (Dry run mode - no actual issues were created)")

    return result
