"""Git access for specops.

This package provides modular git handling with:
- exceptions: GitError, GitOutputTooLargeError
- runner: _run_git_command, get_repo_root
- models: ChangeType, ChangedFile, DiffOptions, FileDiff, ComparisonBase
- detect: resolve_base, parse_name_status, list_tracked_files, get_changed_files
- diff: truncate_diff, generate_diff, generate_diffs, format_diff_as_code_block
- commit: CommitInfo, get_commit_info
"""

# Exceptions
from specops.git.exceptions import (
    GitError,
    GitOutputTooLargeError,
)

# Runner utilities
from specops.git.runner import (
    DEFAULT_MAX_OUTPUT,
    _run_git_command,
    get_repo_root,
)

# Models
from specops.git.models import (
    ChangedFile,
    ChangeType,
    ComparisonBase,
    DiffOptions,
    FileDiff,
)

# Change detection
from specops.git.detect import (
    PREVIOUS_COMMIT,
    get_changed_files,
    list_tracked_files,
    parse_name_status,
    resolve_base,
)

# Diff extraction
from specops.git.diff import (
    NO_CHANGES_BLOCK,
    UNAVAILABLE_DIFF,
    format_diff_as_code_block,
    generate_diff,
    generate_diffs,
    truncate_diff,
)

# Commit metadata
from specops.git.commit import (
    CommitInfo,
    get_commit_info,
)


__all__ = [
    # Exceptions
    "GitError",
    "GitOutputTooLargeError",
    # Runner
    "DEFAULT_MAX_OUTPUT",
    "_run_git_command",
    "get_repo_root",
    # Models
    "ChangedFile",
    "ChangeType",
    "ComparisonBase",
    "DiffOptions",
    "FileDiff",
    # Detection
    "PREVIOUS_COMMIT",
    "get_changed_files",
    "list_tracked_files",
    "parse_name_status",
    "resolve_base",
    # Diff
    "NO_CHANGES_BLOCK",
    "UNAVAILABLE_DIFF",
    "format_diff_as_code_block",
    "generate_diff",
    "generate_diffs",
    "truncate_diff",
    # Commit
    "CommitInfo",
    "get_commit_info",
]
