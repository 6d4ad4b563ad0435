"""Issue templates for specops.

This package provides template handling with:
- constants: DEFAULT_TITLE_TEMPLATE, DEFAULT_BODY_TEMPLATE, RAW_FIELDS
- exceptions: TemplateError
- models: RunMetadata, RenderOptions, TemplateContext, RenderedIssue
- engine: TemplateEngine, JinjaTemplateEngine, translate_template
- context: build_link, build_template_context
- renderer: get_default_template, resolve_body_template, render_issue
"""

# Constants
from specops.templates.constants import (
    DEFAULT_BODY_TEMPLATE,
    DEFAULT_TITLE_TEMPLATE,
    RAW_FIELDS,
)

# Exceptions
from specops.templates.exceptions import TemplateError

# Models
from specops.templates.models import (
    RenderedIssue,
    RenderOptions,
    RunMetadata,
    TemplateContext,
)

# Engine
from specops.templates.engine import (
    JinjaTemplateEngine,
    TemplateEngine,
    translate_template,
)

# Context
from specops.templates.context import (
    build_link,
    build_template_context,
)

# Rendering
from specops.templates.renderer import (
    get_default_template,
    render_issue,
    resolve_body_template,
)


__all__ = [
    # Constants
    "DEFAULT_BODY_TEMPLATE",
    "DEFAULT_TITLE_TEMPLATE",
    "RAW_FIELDS",
    # Exceptions
    "TemplateError",
    # Models
    "RenderedIssue",
    "RenderOptions",
    "RunMetadata",
    "TemplateContext",
    # Engine
    "JinjaTemplateEngine",
    "TemplateEngine",
    "translate_template",
    # Context
    "build_link",
    "build_template_context",
    # Rendering
    "get_default_template",
    "render_issue",
    "resolve_body_template",
]
