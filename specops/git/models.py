"""Data models for the git package.

Contains:
- ChangeType: Classification of a changed path
- ChangedFile: A changed path with its classification
- DiffOptions: Context and size limits for diff extraction
- FileDiff: The (possibly truncated) diff of one changed file
- ComparisonBase: The base reference a change set is compared against
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ChangeType(Enum):
    """How a path changed between the base reference and HEAD."""

    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"


@dataclass(frozen=True)
class ChangedFile:
    """A repository-relative path and how it changed.

    Attributes:
        path: Forward-slash path relative to the repository root.
        change_type: The change classification.
        previous_path: The old path; set only for renames.
    """

    path: str
    change_type: ChangeType
    previous_path: Optional[str] = None

    def __post_init__(self):
        if (self.change_type == ChangeType.RENAMED) != (self.previous_path is not None):
            raise ValueError("previous_path must be set if and only if the file was renamed")


@dataclass(frozen=True)
class DiffOptions:
    """Options for diff extraction.

    Attributes:
        context_lines: Lines of unified context around each hunk.
        max_lines: Maximum diff lines kept before truncating.
    """

    context_lines: int = 3
    max_lines: int = 500

    def __post_init__(self):
        if self.context_lines < 0:
            raise ValueError("context_lines must be non-negative")
        if self.max_lines < 1:
            raise ValueError("max_lines must be positive")


@dataclass(frozen=True)
class FileDiff:
    """Diff text for a single changed file.

    Attributes:
        file: The changed file.
        diff: Diff text, possibly truncated with an omitted-lines note.
        truncated: Whether the diff was cut down to max_lines.
        line_count: Line count of the diff before truncation.
    """

    file: ChangedFile
    diff: str
    truncated: bool = False
    line_count: int = 0


@dataclass(frozen=True)
class ComparisonBase:
    """The reference HEAD is compared against.

    Attributes:
        ref: The base revision (e.g. origin/main or HEAD~1).
        merge_base: Compare from the merge base of ref and HEAD (three-dot range).
    """

    ref: str
    merge_base: bool = False

    def range_args(self) -> list[str]:
        """Return the git diff revision arguments for this base."""
        if self.merge_base:
            return [f"{self.ref}...HEAD"]
        return [self.ref, "HEAD"]
