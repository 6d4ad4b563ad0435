"""Git-related exception classes.

Contains all exception classes for Git operations:
- GitError: Base exception for git-related errors
- GitOutputTooLargeError: Raised when a command's output exceeds the buffer
"""


class GitError(Exception):
    """Custom exception for git-related errors."""

    pass


class GitOutputTooLargeError(GitError):
    """Raised when git writes more output than the runner will buffer."""

    pass
