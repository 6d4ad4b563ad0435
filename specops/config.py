"""Run configuration for specops.

Everything specops needs from its surroundings is read here, once, and passed
on explicitly:
- RepositoryContext: trigger event and repository identity from the environment
- Settings: operator options, layered defaults < .specops/config.yaml < action inputs
"""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from pydantic import BaseModel, Field, SecretStr, ValidationError

from specops.git.models import DiffOptions
from specops.issues.creator import parse_comma_separated_list
from specops.matching import DEFAULT_PATTERNS, MatchOptions, parse_patterns
from specops.templates.constants import DEFAULT_TITLE_TEMPLATE
from specops.templates.models import RenderOptions, RunMetadata

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = ".specops"
CONFIG_FILE_NAME = "config.yaml"

_TRUE_VALUES = {"true", "yes", "y", "on", "1"}
_FALSE_VALUES = {"false", "no", "n", "off", "0"}


class ConfigError(Exception):
    """Raised when configuration input is invalid."""

    pass


class EventKind(Enum):
    """Trigger kinds specops knows how to handle."""

    PUSH = "push"
    PULL_REQUEST = "pull_request"
    UNSUPPORTED = "unsupported"

    @classmethod
    def from_event_name(cls, event_name: str) -> "EventKind":
        if event_name == "push":
            return cls.PUSH
        if event_name in ("pull_request", "pull_request_target"):
            return cls.PULL_REQUEST
        return cls.UNSUPPORTED


class RepositoryContext(BaseModel):
    """Trigger and repository identity for one run."""

    event_name: str = ""
    sha: str = ""
    ref_name: str = ""
    base_ref: str = ""
    repository: str = ""
    server_url: str = "https://github.com"
    api_url: str = "https://api.github.com"
    actor: str = ""
    workspace: Optional[Path] = None
    pr_number: str = ""
    pr_title: str = ""
    token: SecretStr = SecretStr("")

    @property
    def event_kind(self) -> EventKind:
        return EventKind.from_event_name(self.event_name)

    @classmethod
    def from_environ(cls, environ: Mapping[str, str]) -> "RepositoryContext":
        """Build the context from a GitHub Actions style environment mapping."""
        ref = environ.get("GITHUB_REF", "")
        pr_number, pr_title = _read_pull_request(environ.get("GITHUB_EVENT_PATH", ""))
        workspace = environ.get("GITHUB_WORKSPACE")

        return cls(
            event_name=environ.get("GITHUB_EVENT_NAME", ""),
            sha=environ.get("GITHUB_SHA", ""),
            ref_name=environ.get("GITHUB_REF_NAME") or ref.replace("refs/heads/", ""),
            base_ref=environ.get("GITHUB_BASE_REF", ""),
            repository=environ.get("GITHUB_REPOSITORY", ""),
            server_url=environ.get("GITHUB_SERVER_URL") or "https://github.com",
            api_url=environ.get("GITHUB_API_URL") or "https://api.github.com",
            actor=environ.get("GITHUB_ACTOR", ""),
            workspace=Path(workspace) if workspace else None,
            pr_number=pr_number,
            pr_title=pr_title,
            token=SecretStr(get_input(environ, "github-token") or environ.get("GITHUB_TOKEN", "")),
        )

    def to_metadata(self, commit_message: str = "", commit_date: str = "", author: str = "") -> RunMetadata:
        """Combine the context with commit data into template metadata.

        The actor, when known, takes precedence over the commit author name.
        """
        return RunMetadata(
            commit_sha=self.sha,
            commit_message=commit_message,
            commit_date=commit_date,
            author=self.actor or author,
            branch=self.ref_name,
            pr_number=self.pr_number if self.event_kind == EventKind.PULL_REQUEST else "",
            pr_title=self.pr_title if self.event_kind == EventKind.PULL_REQUEST else "",
            server_url=self.server_url,
            repository=self.repository,
        )


def _read_pull_request(event_path: str) -> tuple[str, str]:
    """Read the pull request number and title from the event payload file."""
    if not event_path:
        return "", ""
    try:
        with open(event_path, "r", encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, ValueError) as e:
        logger.debug("Could not read event payload %s: %s", event_path, e)
        return "", ""

    pull_request = payload.get("pull_request") or {}
    number = pull_request.get("number")
    return (str(number) if number else ""), (pull_request.get("title") or "")


class Settings(BaseModel):
    """Operator options for a run."""

    # File detection
    patterns: list[str] = Field(default_factory=lambda: DEFAULT_PATTERNS.copy())
    exclude_patterns: list[str] = Field(default_factory=list)
    case_sensitive: bool = False

    # Issue content
    title_template: str = DEFAULT_TITLE_TEMPLATE
    body_template: str = ""
    include_diff: bool = True
    diff_context_lines: int = Field(default=3, ge=0)
    max_diff_lines: int = Field(default=500, gt=0)
    include_file_link: bool = True
    include_commit_link: bool = True
    include_pr_link: bool = True

    # Issue metadata
    labels: list[str] = Field(default_factory=lambda: ["spec-change"])
    assignees: list[str] = Field(default_factory=list)
    milestone: str = ""

    # Behavior
    create_on_new_files: bool = True
    create_on_deleted_files: bool = False
    dry_run: bool = False

    def match_options(self) -> MatchOptions:
        return MatchOptions(
            patterns=self.patterns or DEFAULT_PATTERNS.copy(),
            exclude_patterns=self.exclude_patterns,
            case_sensitive=self.case_sensitive,
            include_added=self.create_on_new_files,
            include_deleted=self.create_on_deleted_files,
        )

    def diff_options(self) -> DiffOptions:
        return DiffOptions(context_lines=self.diff_context_lines, max_lines=self.max_diff_lines)

    def render_options(self) -> RenderOptions:
        return RenderOptions(
            title_template=self.title_template or DEFAULT_TITLE_TEMPLATE,
            body_template=self.body_template,
            include_diff=self.include_diff,
            include_file_link=self.include_file_link,
            include_commit_link=self.include_commit_link,
            include_pr_link=self.include_pr_link,
        )


def get_config_file(repo_root: Path) -> Path:
    """Return path to the repository's .specops/config.yaml file."""
    return repo_root / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def load_repo_config(repo_root: Path) -> dict:
    """Load settings overrides from .specops/config.yaml.

    Args:
        repo_root: The root directory of the git repository.

    Returns:
        Dictionary of overrides. Empty if the file is missing or unreadable.
    """
    config_file = get_config_file(repo_root)
    if not config_file.exists():
        return {}

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Ignoring unreadable config file %s: %s", config_file, e)
        return {}

    if not isinstance(config, dict):
        logger.warning("Ignoring config file %s: expected a mapping", config_file)
        return {}
    return config


def get_input(environ: Mapping[str, str], name: str) -> str:
    """Get an action input the way GitHub Actions exposes it (INPUT_<NAME>)."""
    key = f"INPUT_{name.replace(' ', '_').upper()}"
    return environ.get(key, "").strip()


def parse_bool(name: str, value: str) -> bool:
    """Parse a boolean input value.

    Raises:
        ConfigError: If the value is not a recognised boolean.
    """
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigError(f"Input '{name}' must be a boolean (true/false), got '{value}'")


def parse_int(name: str, value: str) -> int:
    """Parse an integer input value.

    Raises:
        ConfigError: If the value is not an integer.
    """
    try:
        return int(value.strip())
    except ValueError:
        raise ConfigError(f"Input '{name}' must be an integer, got '{value}'")


_BOOL_INPUTS = {
    "case-sensitive": "case_sensitive",
    "include-diff": "include_diff",
    "include-file-link": "include_file_link",
    "include-commit-link": "include_commit_link",
    "include-pr-link": "include_pr_link",
    "create-on-new-files": "create_on_new_files",
    "create-on-deleted-files": "create_on_deleted_files",
    "dry-run": "dry_run",
}

_INT_INPUTS = {
    "diff-context-lines": "diff_context_lines",
    "max-diff-lines": "max_diff_lines",
}

_STR_INPUTS = {
    "issue-title-template": "title_template",
    "issue-body-template": "body_template",
    "milestone": "milestone",
}

_LIST_INPUTS = {
    "labels": "labels",
    "assignees": "assignees",
}


def inputs_to_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    """Collect the non-empty action inputs as settings overrides."""
    overrides: dict[str, Any] = {}

    patterns = parse_patterns(get_input(environ, "file-pattern"), get_input(environ, "file-patterns"))
    if patterns:
        overrides["patterns"] = patterns
    exclude = parse_patterns(None, get_input(environ, "exclude-pattern"))
    if exclude:
        overrides["exclude_patterns"] = exclude

    for name, field_name in _BOOL_INPUTS.items():
        value = get_input(environ, name)
        if value:
            overrides[field_name] = parse_bool(name, value)
    for name, field_name in _INT_INPUTS.items():
        value = get_input(environ, name)
        if value:
            overrides[field_name] = parse_int(name, value)
    for name, field_name in _STR_INPUTS.items():
        value = get_input(environ, name)
        if value:
            overrides[field_name] = value
    for name, field_name in _LIST_INPUTS.items():
        value = get_input(environ, name)
        if value:
            overrides[field_name] = parse_comma_separated_list(value)

    return overrides


def load_settings(repo_root: Optional[Path], environ: Mapping[str, str]) -> Settings:
    """Build settings from defaults, the repository config file and action inputs.

    Args:
        repo_root: Repository root holding .specops/config.yaml (optional).
        environ: Environment mapping with INPUT_* variables.

    Returns:
        The validated Settings.

    Raises:
        ConfigError: If any value is invalid.
    """
    values: dict[str, Any] = {}
    if repo_root is not None:
        values.update(load_repo_config(repo_root))
    values.update(inputs_to_overrides(environ))

    try:
        return Settings.model_validate(values)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
