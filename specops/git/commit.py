"""Commit metadata utilities.

Contains:
- CommitInfo: Message, date and author of the HEAD commit
- get_commit_info: Read HEAD commit metadata from git
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from specops.git.exceptions import GitError
from specops.git.runner import _run_git_command

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommitInfo:
    """Metadata of a single commit. Empty strings when unknown."""

    message: str = ""
    date: str = ""
    author: str = ""


def get_commit_info(cwd: Optional[Path] = None) -> CommitInfo:
    """Get subject, committer date and author name of HEAD.

    Returns:
        CommitInfo, with empty fields if git cannot provide them.
    """
    try:
        message = _run_git_command(["log", "-1", "--format=%s"], cwd=cwd)
        date = _run_git_command(["log", "-1", "--format=%ci"], cwd=cwd)
        author = _run_git_command(["log", "-1", "--format=%an"], cwd=cwd)
    except GitError as e:
        logger.debug("Could not get commit info: %s", e)
        return CommitInfo()
    return CommitInfo(message=message, date=date, author=author)
