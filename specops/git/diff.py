"""Git diff utilities.

Contains:
- truncate_diff: Bound diff text to a maximum line count
- generate_diff: Build the diff for a single changed file
- generate_diffs: Build diffs for a list of changed files
- format_diff_as_code_block: Wrap diff text in a markdown code fence
- UNAVAILABLE_DIFF: Placeholder used when a diff cannot be generated
"""

import logging
from pathlib import Path
from typing import Optional

from specops.git.exceptions import GitError
from specops.git.models import ChangedFile, ChangeType, ComparisonBase, DiffOptions, FileDiff
from specops.git.runner import _run_git_command

logger = logging.getLogger(__name__)

UNAVAILABLE_DIFF = "Unable to generate diff for this file."

NO_CHANGES_BLOCK = "```\nNo changes detected.\n```"


def truncate_diff(file: ChangedFile, raw_diff: str, max_lines: int) -> FileDiff:
    """Bound a diff to max_lines lines.

    When the diff is longer, the first max_lines lines are kept, followed by a
    blank line and a note with the number of omitted lines. line_count always
    reports the original length.

    Args:
        file: The changed file the diff belongs to.
        raw_diff: The full diff text.
        max_lines: Maximum number of lines to keep.

    Returns:
        The resulting FileDiff.
    """
    lines = raw_diff.split("\n") if raw_diff else []
    line_count = len(lines)

    if line_count <= max_lines:
        return FileDiff(file=file, diff=raw_diff, truncated=False, line_count=line_count)

    omitted = line_count - max_lines
    kept = lines[:max_lines] + ["", f"... (diff truncated, {omitted} more lines)"]
    logger.debug("Diff for %s truncated from %d to %d lines", file.path, line_count, max_lines)
    return FileDiff(file=file, diff="\n".join(kept), truncated=True, line_count=line_count)


def _diff_paths(file: ChangedFile) -> list[str]:
    """Paths the diff of a file is scoped to."""
    if file.change_type == ChangeType.RENAMED and file.previous_path:
        return [file.previous_path, file.path]
    return [file.path]


def generate_diff(
    file: ChangedFile,
    base: ComparisonBase,
    options: DiffOptions,
    cwd: Optional[Path] = None,
) -> FileDiff:
    """Generate the diff of one file against the base reference.

    Deleted files diff as all-removed since the path still exists at the base.
    Renamed files are scoped to both paths so the rename and any content
    change show up together. A failure never propagates; the file gets a
    placeholder diff instead.

    Args:
        file: The changed file.
        base: The comparison base.
        options: Context and size limits.
        cwd: Repository directory.

    Returns:
        The FileDiff for the file.
    """
    args = ["diff", f"-U{options.context_lines}"] + base.range_args() + ["--"] + _diff_paths(file)
    try:
        raw_diff = _run_git_command(args, cwd=cwd, strip=False)
    except GitError as e:
        logger.warning("Failed to generate diff for %s: %s", file.path, e)
        return FileDiff(file=file, diff=UNAVAILABLE_DIFF, truncated=False, line_count=0)

    # A blank context line is a lone space; only the final newline goes
    if raw_diff.endswith("\n"):
        raw_diff = raw_diff[:-1]
    return truncate_diff(file, raw_diff, options.max_lines)


def generate_diffs(
    files: list[ChangedFile],
    base: ComparisonBase,
    options: DiffOptions,
    cwd: Optional[Path] = None,
) -> list[FileDiff]:
    """Generate diffs for each file, one at a time, in input order."""
    return [generate_diff(f, base, options, cwd=cwd) for f in files]


def format_diff_as_code_block(diff: str) -> str:
    """Format a diff as a markdown code block.

    Args:
        diff: Diff text.

    Returns:
        A ```diff fenced block, or a "No changes detected." block for empty input.
    """
    if not diff or not diff.strip():
        return NO_CHANGES_BLOCK
    return f"```diff\n{diff}\n```"
