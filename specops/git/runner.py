"""Git command runner and repository utilities.

Contains:
- _run_git_command: Run a git command and return its output
- get_repo_root: Get the root directory of the current git repository
- DEFAULT_MAX_OUTPUT: Largest stdout (in characters) a command may produce
"""

import logging
import subprocess
from pathlib import Path
from typing import Optional

from specops.git.exceptions import GitError, GitOutputTooLargeError

logger = logging.getLogger(__name__)

# 10 MiB, large enough for any reasonable single-file diff
DEFAULT_MAX_OUTPUT = 10 * 1024 * 1024


def _run_git_command(
    args: list[str],
    cwd: Optional[Path] = None,
    max_output: int = DEFAULT_MAX_OUTPUT,
    strip: bool = True,
) -> str:
    """Run a git command and return its output.

    Output is decoded as UTF-8; undecodable bytes (e.g. a Latin-1 file in a
    diff) become U+FFFD instead of failing the command.

    Args:
        args: List of arguments to pass to git.
        cwd: Directory to run the command in (defaults to the process cwd).
        max_output: Maximum number of characters accepted on stdout.
        strip: Strip surrounding whitespace. Pass False where leading or
            trailing whitespace is content (diffs, NUL-separated listings).

    Returns:
        The stdout of the git command.

    Raises:
        GitOutputTooLargeError: If stdout exceeds max_output.
        GitError: If the command fails.
    """
    logger.debug("Running: git %s", " ".join(args))
    try:
        result = subprocess.run(
            ["git"] + args,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=True,
            cwd=cwd,
        )
    except subprocess.CalledProcessError as e:
        stderr = (e.stderr or "").strip()
        raise GitError(f"Git command failed: git {' '.join(args)}\n{stderr}")
    except FileNotFoundError:
        raise GitError("Git is not installed or not in PATH.")

    if len(result.stdout) > max_output:
        raise GitOutputTooLargeError(
            f"Output of git {' '.join(args)} exceeds {max_output} characters"
        )
    return result.stdout.strip() if strip else result.stdout


def get_repo_root(cwd: Optional[Path] = None) -> Path:
    """Get the root directory of the current git repository.

    Returns:
        Path to the repository root.

    Raises:
        GitError: If not in a git repository.
    """
    try:
        root = _run_git_command(["rev-parse", "--show-toplevel"], cwd=cwd)
        return Path(root)
    except GitError:
        raise GitError("Not in a git repository. Please run this command from within a git repo.")
