"""Template context assembly.

Contains:
- build_link: Join a repository URL with a link kind and path parts
- build_template_context: Build the TemplateContext for one FileDiff
"""

from datetime import datetime, timezone
from pathlib import PurePosixPath

from specops.git.diff import format_diff_as_code_block
from specops.git.models import FileDiff
from specops.templates.models import RenderOptions, RunMetadata, TemplateContext


def build_link(repo_url: str, kind: str, *parts: str) -> str:
    """Build a repository web link such as `{repo_url}/commit/{sha}`.

    Args:
        repo_url: Repository web URL.
        kind: Link kind (blob, commit, pull).
        parts: Remaining path parts.

    Returns:
        The link, or an empty string if any piece is missing.
    """
    if not repo_url or not all(parts):
        return ""
    return "/".join([repo_url, kind, *parts])


def build_template_context(
    file_diff: FileDiff,
    metadata: RunMetadata,
    options: RenderOptions,
) -> TemplateContext:
    """Build the template variables for one changed file.

    Args:
        file_diff: The file's diff.
        metadata: Run-level commit, pull request and repository data.
        options: Inclusion toggles.

    Returns:
        A frozen TemplateContext.
    """
    file = file_diff.file
    repo_url = metadata.repo_url
    sha = metadata.commit_sha
    pr_number = metadata.pr_number

    file_link = build_link(repo_url, "blob", sha, file.path) if options.include_file_link else ""
    commit_link = build_link(repo_url, "commit", sha) if options.include_commit_link else ""
    pr_link = build_link(repo_url, "pull", pr_number) if options.include_pr_link else ""

    return TemplateContext(
        filename=PurePosixPath(file.path).name,
        file_path=file.path,
        file_link=file_link,
        diff=format_diff_as_code_block(file_diff.diff) if options.include_diff else "",
        diff_raw=file_diff.diff if options.include_diff else "",
        commit_sha=sha,
        commit_sha_short=sha[:7],
        commit_link=commit_link,
        commit_message=metadata.commit_message,
        commit_date=metadata.commit_date or datetime.now(timezone.utc).isoformat(),
        author=metadata.author,
        pull_request=bool(pr_number),
        pr_number=pr_number,
        pr_link=pr_link,
        pr_title=metadata.pr_title,
        branch=metadata.branch,
        change_type=file.change_type.value,
        previous_path=file.previous_path or "",
    )
