"""Issue rendering.

Contains:
- get_default_template: Return the built-in body template
- resolve_body_template: Pick the inline, file-based or default body template
- render_issue: Render the title and body for one FileDiff
"""

import logging
from pathlib import Path
from typing import Optional

from specops.git.models import FileDiff
from specops.templates.constants import DEFAULT_BODY_TEMPLATE, TEMPLATE_FILE_SUFFIXES
from specops.templates.context import build_template_context
from specops.templates.engine import JinjaTemplateEngine, TemplateEngine
from specops.templates.models import RenderedIssue, RenderOptions, RunMetadata

logger = logging.getLogger(__name__)


def get_default_template() -> str:
    """Get the built-in issue body template."""
    return DEFAULT_BODY_TEMPLATE


def _looks_like_path(value: str) -> bool:
    """Check if a body template value refers to a file rather than inline text."""
    if "\n" in value or "{{" in value:
        return False
    return value.endswith(TEMPLATE_FILE_SUFFIXES) or "/" in value or "\\" in value


def resolve_body_template(template_input: Optional[str], repo_root: Path) -> str:
    """Resolve the body template.

    Priority: inline template text, then a template file inside the
    repository, then the built-in default. A path escaping the repository
    root is never read.

    Args:
        template_input: Inline template text or a repository-relative path.
        repo_root: The repository root directory.

    Returns:
        The template text to compile.
    """
    if not template_input or not template_input.strip():
        return DEFAULT_BODY_TEMPLATE

    value = template_input.strip()
    if not _looks_like_path(value):
        return template_input

    root = repo_root.resolve()
    template_path = (root / value).resolve()
    try:
        template_path.relative_to(root)
    except ValueError:
        logger.warning(
            "Template path resolves outside repo root: %s. Using default template.", template_path
        )
        return DEFAULT_BODY_TEMPLATE

    if not template_path.is_file():
        logger.warning("Template file not found: %s, using default template", template_path)
        return DEFAULT_BODY_TEMPLATE

    try:
        content = template_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Error reading template file %s: %s, using default template", template_path, e)
        return DEFAULT_BODY_TEMPLATE

    logger.debug("Loading template from file: %s", template_path)
    return content


def render_issue(
    file_diff: FileDiff,
    options: RenderOptions,
    metadata: RunMetadata,
    repo_root: Path,
    engine: Optional[TemplateEngine] = None,
) -> RenderedIssue:
    """Render issue title and body for a changed file.

    The title and body are compiled and rendered independently against the
    same context.

    Args:
        file_diff: The file's diff.
        options: Templates and inclusion toggles.
        metadata: Run-level commit, pull request and repository data.
        repo_root: Repository root used to resolve template files.
        engine: Template engine (defaults to JinjaTemplateEngine).

    Returns:
        The rendered issue.

    Raises:
        TemplateError: If a template cannot be compiled or rendered.
    """
    engine = engine or JinjaTemplateEngine()
    context = build_template_context(file_diff, metadata, options).model_dump()

    title = engine.render(engine.compile(options.title_template), context)
    body_template = resolve_body_template(options.body_template, repo_root)
    body = engine.render(engine.compile(body_template), context)

    return RenderedIssue(title=title.strip(), body=body)
