"""Shared helpers for CLI commands."""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from specops.config import RepositoryContext
from specops.git import get_repo_root
from specops.log import setup_logging


def prepare_environment(debug: bool = False) -> dict[str, str]:
    """Load .env, configure logging and snapshot the environment.

    Returns:
        A copy of the process environment; nothing downstream reads os.environ.
    """
    load_dotenv()
    environ = dict(os.environ)
    setup_logging(debug=debug, github_actions=environ.get("GITHUB_ACTIONS") == "true")
    return environ


def resolve_repo_root(explicit: Optional[Path], context: RepositoryContext) -> Path:
    """Pick the repository root: --repo-root, then the workspace, then git.

    Raises:
        GitError: If git has to be asked and we are not in a repository.
    """
    if explicit is not None:
        return explicit
    if context.workspace is not None:
        return context.workspace
    return get_repo_root()
