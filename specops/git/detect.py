"""Changed-file detection.

Contains:
- resolve_base: Pick the base reference for the current trigger
- parse_name_status: Parse `git diff --name-status -z` output into ChangedFile entries
- list_tracked_files: List every tracked file in the repository
- get_changed_files: Enumerate changed files, falling back to all tracked files
"""

import logging
from pathlib import Path
from typing import Optional

from specops.git.exceptions import GitError
from specops.git.models import ChangedFile, ChangeType, ComparisonBase
from specops.git.runner import _run_git_command

logger = logging.getLogger(__name__)

# Parent of HEAD, used for push triggers
PREVIOUS_COMMIT = "HEAD~1"


def resolve_base(base_branch: Optional[str] = None, cwd: Optional[Path] = None) -> ComparisonBase:
    """Resolve the reference HEAD should be compared against.

    For pull requests the base branch is fetched shallowly (if possible) and
    compared through its merge base. Push triggers use the parent commit.

    Args:
        base_branch: Pull request base branch name, None for push triggers.
        cwd: Repository directory.

    Returns:
        The comparison base.
    """
    if not base_branch:
        return ComparisonBase(PREVIOUS_COMMIT)

    try:
        _run_git_command(["fetch", "origin", base_branch, "--depth=1"], cwd=cwd)
    except GitError as e:
        logger.debug("Could not fetch base ref, continuing with existing refs: %s", e)
    return ComparisonBase(f"origin/{base_branch}", merge_base=True)


def parse_name_status(output: str) -> list[ChangedFile]:
    """Parse the output of `git diff --name-status -z`.

    Entries are NUL-separated tokens: `<status>\\0<path>\\0`, or
    `<status>\\0<old path>\\0<new path>\\0` for renames and copies. Paths are
    verbatim, with no C-style quoting of non-ASCII or special characters.
    Renames produce one entry for the new path; copies are reported as
    modifications of the copy. Unrecognised statuses are treated as
    modifications.

    Args:
        output: Raw name-status output.

    Returns:
        List of changed files in output order.
    """
    files: list[ChangedFile] = []
    tokens = output.split("\0")
    i = 0

    while i < len(tokens):
        status = tokens[i].strip()
        i += 1
        if not status:
            continue

        code = status[0]
        path = tokens[i] if i < len(tokens) else ""
        i += 1
        if not path:
            continue

        if code in ("R", "C"):
            new_path = tokens[i] if i < len(tokens) else ""
            i += 1
            if not new_path:
                logger.debug("Dropping %s entry without a new path: %s", status, path)
                continue
            if code == "R":
                files.append(ChangedFile(new_path, ChangeType.RENAMED, previous_path=path))
            else:
                # Copy: the destination is the path that changed
                files.append(ChangedFile(new_path, ChangeType.MODIFIED))
            continue

        if code == "A":
            change_type = ChangeType.ADDED
        elif code == "D":
            change_type = ChangeType.DELETED
        else:
            if code != "M":
                logger.warning("Unexpected git status '%s' for %s, treating as modified", status, path)
            change_type = ChangeType.MODIFIED

        files.append(ChangedFile(path, change_type))

    return files


def list_tracked_files(cwd: Optional[Path] = None) -> list[str]:
    """List all files tracked by git.

    Returns:
        List of repository-relative paths.
    """
    output = _run_git_command(["ls-files", "-z"], cwd=cwd, strip=False)
    return [path for path in output.split("\0") if path]


def get_changed_files(base: ComparisonBase, cwd: Optional[Path] = None) -> list[ChangedFile]:
    """Enumerate files changed between the base reference and HEAD.

    If the comparison itself fails (for example on an initial commit with no
    parent), every tracked file is reported as added.

    Args:
        base: The comparison base.
        cwd: Repository directory.

    Returns:
        List of changed files.

    Raises:
        GitError: If even the tracked-file listing fails.
    """
    try:
        output = _run_git_command(
            ["diff", "--name-status", "-z", "-M"] + base.range_args(), cwd=cwd, strip=False
        )
    except GitError as e:
        logger.warning("Diff command failed, listing all tracked files instead: %s", e)
        return [ChangedFile(path, ChangeType.ADDED) for path in list_tracked_files(cwd)]

    files = parse_name_status(output)
    logger.debug("Found %d changed files in git", len(files))
    for f in files:
        logger.debug("  %s: %s", f.change_type.value, f.path)
    return files
