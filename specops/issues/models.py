"""Data models for the specops issues package.

Contains:
- IssueOptions: Labels, assignees and milestone applied to every issue
- IssueRequest: A rendered issue paired with the file it was rendered for
- CreatedIssue: Identity of an issue returned by the tracker
- IssueCreationResult: Per-file success or failure
"""

from dataclasses import dataclass, field
from typing import Optional

from pydantic import BaseModel

from specops.templates.models import RenderedIssue


@dataclass(frozen=True)
class IssueOptions:
    """Metadata applied to every created issue."""

    labels: list[str] = field(default_factory=list)
    assignees: list[str] = field(default_factory=list)
    milestone: Optional[int] = None


@dataclass(frozen=True)
class IssueRequest:
    """A rendered issue waiting to be created."""

    rendered: RenderedIssue
    file_path: str


class CreatedIssue(BaseModel):
    """An issue as reported by the tracker."""

    number: int
    url: str
    title: str


class IssueCreationResult(BaseModel):
    """Outcome of creating the issue for one file."""

    file_path: str
    success: bool
    issue: Optional[CreatedIssue] = None
    error: Optional[str] = None
