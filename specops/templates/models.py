"""Data models for the specops templates package.

Contains:
- RunMetadata: Commit, pull request and repository data shared by every file
- RenderOptions: Template strings and inclusion toggles for rendering
- TemplateContext: The flat variable set available to templates for one file
- RenderedIssue: Rendered title and body
"""

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict

from specops.templates.constants import DEFAULT_TITLE_TEMPLATE


class RunMetadata(BaseModel):
    """Run-level data used to build each file's template context.

    Missing values are empty strings; they degrade the rendered output rather
    than failing it.
    """

    model_config = ConfigDict(frozen=True)

    commit_sha: str = ""
    commit_message: str = ""
    commit_date: str = ""
    author: str = ""
    branch: str = ""
    pr_number: str = ""
    pr_title: str = ""
    server_url: str = "https://github.com"
    repository: str = ""  # owner/repo

    @property
    def repo_url(self) -> str:
        """Web URL of the repository, or empty if the repository is unknown."""
        if not self.repository:
            return ""
        return f"{self.server_url.rstrip('/')}/{self.repository}"


@dataclass(frozen=True)
class RenderOptions:
    """Options controlling what goes into a rendered issue."""

    title_template: str = DEFAULT_TITLE_TEMPLATE
    body_template: str = ""
    include_diff: bool = True
    include_file_link: bool = True
    include_commit_link: bool = True
    include_pr_link: bool = True


class TemplateContext(BaseModel):
    """Variables available to title and body templates.

    Adding fields is backward compatible for existing templates; renaming or
    removing one is not.
    """

    model_config = ConfigDict(frozen=True)

    # File information
    filename: str
    file_path: str
    file_link: str = ""

    # Diff information
    diff: str = ""
    diff_raw: str = ""

    # Commit information
    commit_sha: str = ""
    commit_sha_short: str = ""
    commit_link: str = ""
    commit_message: str = ""
    commit_date: str = ""
    author: str = ""

    # Pull request information
    pull_request: bool = False
    pr_number: str = ""
    pr_link: str = ""
    pr_title: str = ""

    # Branch information
    branch: str = ""

    # Change information
    change_type: str = ""
    previous_path: str = ""


@dataclass(frozen=True)
class RenderedIssue:
    """A rendered issue title and body."""

    title: str
    body: str
