"""Template engine for issue titles and bodies.

Templates use the mustache/handlebars style that operators write in workflow files:

    {{ name }}              escaped substitution
    {{{ name }}}            unescaped substitution
    {{#if name}} ... {{else}} ... {{/if}}
    {{#unless name}} ... {{/unless}}
    {{! comment }}

They are translated to Jinja2 and rendered with autoescaping enabled. Any
other brace is literal text, so markdown such as `{#anchor}` or a stray `{%`
renders as written. Fields listed in the engine's raw_fields are treated as
trusted markup whatever delimiter the template uses.
"""

import re
from abc import ABC, abstractmethod
from typing import Any, Iterable, Mapping

from jinja2 import Environment, BaseLoader, Template
from jinja2 import TemplateError as JinjaTemplateError
from markupsafe import Markup

from specops.templates.constants import RAW_FIELDS
from specops.templates.exceptions import TemplateError

_NAME = r"[A-Za-z_][\w.]*"

# Alternatives are tried left to right; a lone brace is matched last
_MARKER = re.compile(
    r"(?P<comment>\{\{!--.*?--\}\}|\{\{!.*?\}\})"
    r"|\{\{\{\s*(?P<raw>" + _NAME + r")\s*\}\}\}"
    r"|\{\{#if\s+(?P<if>" + _NAME + r")\s*\}\}"
    r"|\{\{#unless\s+(?P<unless>" + _NAME + r")\s*\}\}"
    r"|(?P<else>\{\{\s*else\s*\}\})"
    r"|(?P<end>\{\{/(?:if|unless)\s*\}\})"
    r"|\{\{\s*(?P<var>" + _NAME + r")\s*\}\}"
    r"|(?P<brace>\{)",
    re.DOTALL,
)

_REPLACEMENTS = {
    "comment": "",
    "raw": "{{{{ {}|safe }}}}",
    "if": "{{% if {} %}}",
    "unless": "{{% if not {} %}}",
    "else": "{% else %}",
    "end": "{% endif %}",
    "var": "{{{{ {} }}}}",
    "brace": '{{ "{" }}',
}


def _translate_marker(match: re.Match) -> str:
    kind = match.lastgroup
    if kind in ("raw", "if", "unless", "var"):
        return _REPLACEMENTS[kind].format(match.group(kind))
    return _REPLACEMENTS[kind]


def translate_template(template_text: str) -> str:
    """Translate handlebars-style markers into Jinja2 syntax.

    Every `{` outside a recognised marker is emitted as a literal, so no
    Jinja2 syntax can reach the compiler from the operator's text.

    Args:
        template_text: Template as written by the operator.

    Returns:
        Equivalent Jinja2 template source.
    """
    return _MARKER.sub(_translate_marker, template_text)


def _finalize(value: Any) -> Any:
    # Render like handlebars: booleans lowercase, missing values empty
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


class TemplateEngine(ABC):
    """Compile and render templates against a flat context."""

    @abstractmethod
    def compile(self, template_text: str) -> Any:
        """Compile template text into a renderable object."""
        pass

    @abstractmethod
    def render(self, compiled: Any, context: Mapping[str, Any]) -> str:
        """Render a compiled template with the given context."""
        pass


class JinjaTemplateEngine(TemplateEngine):
    """Template engine backed by Jinja2 with escaping on by default."""

    def __init__(self, raw_fields: Iterable[str] = RAW_FIELDS):
        self.raw_fields = frozenset(raw_fields)
        self.env = Environment(
            loader=BaseLoader(),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            finalize=_finalize,
        )

    def compile(self, template_text: str) -> Template:
        try:
            return self.env.from_string(translate_template(template_text))
        except JinjaTemplateError as e:
            raise TemplateError(f"Invalid template: {e}") from e

    def render(self, compiled: Template, context: Mapping[str, Any]) -> str:
        values = {
            key: Markup(value) if key in self.raw_fields and isinstance(value, str) else value
            for key, value in context.items()
        }
        try:
            return compiled.render(**values)
        except JinjaTemplateError as e:
            raise TemplateError(f"Failed to render template: {e}") from e
