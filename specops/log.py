"""Logging setup for specops."""

import logging
import sys
from typing import Optional, TextIO

_ANNOTATIONS = {
    logging.DEBUG: "::debug::",
    logging.WARNING: "::warning::",
    logging.ERROR: "::error::",
    logging.CRITICAL: "::error::",
}


class WorkflowCommandFormatter(logging.Formatter):
    """Format records as GitHub Actions workflow commands.

    Debug, warning and error records get their `::level::` prefix so the
    runner shows them as annotations; info records are printed as-is.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        prefix = _ANNOTATIONS.get(record.levelno, "")
        if not prefix:
            return message
        # Workflow commands are single-line; newlines must be escaped
        message = message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
        return f"{prefix}{message}"


def setup_logging(
    debug: bool = False,
    github_actions: bool = False,
    stream: Optional[TextIO] = None,
) -> None:
    """Configure the root logger for a CLI run.

    Args:
        debug: Emit debug records.
        github_actions: Format records as workflow commands.
        stream: Output stream (defaults to stdout).
    """
    handler = logging.StreamHandler(stream or sys.stdout)
    if github_actions:
        handler.setFormatter(WorkflowCommandFormatter("%(message)s"))
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(logging.INFO)
    # Actions hides ::debug:: lines unless step debugging is on, so always emit them
    logging.getLogger("specops").setLevel(logging.DEBUG if debug or github_actions else logging.INFO)
